import io
import json
import time
import traceback
from collections import Counter
from datetime import date
from typing import Optional

import discord
from redbot.core import Config, commands, data_manager

from .decorators import is_cog_ready, is_not_locked
from .helpers import (
    TimeHelper,
    LockHelper,
    UserLockedError,
    LoggingHelper,
    DataHelper,
    ImageHelper,
    GardenHelper,
    GameStateHelper,
    GenerationHelper,
    PremiumHelper,
    StreakHelper,
    PIL_AVAILABLE,
)
from .models import GardenElement, GardenProfileView, Position


class KiraKira(commands.Cog):
    """KiraKira - A mood garden. Check in once a day and a new element grows on your shelves."""

    _FOOTER = "KiraKira - Garden Keeper"

    def __init__(self, bot: commands.Bot):
        self._initialized = False

        self.bot = bot
        self.config = Config.get_conf(self, identifier=734915068241790977)
        self.config.register_global(game_state={})

        self.cog_data_path = data_manager.bundled_data_path(self)
        self.lock_helper = LockHelper()
        self.logger = LoggingHelper(bot)
        self.data_loader = DataHelper(self.cog_data_path, self.logger)
        self.data_loader.load_all_data()

        self.game_state_helper = GameStateHelper(self.config, self.logger)
        self.premium_helper = PremiumHelper(self.data_loader.premium_features)

        self.generation_helper: Optional[GenerationHelper] = None
        self.garden_helper: Optional[GardenHelper] = None
        self.image_helper: Optional[ImageHelper] = None

        self.startup_task = self.bot.loop.create_task(self.startup())

    def cog_unload(self):
        """Cog cleanup method."""

        if self.startup_task:
            self.startup_task.cancel()

        self.lock_helper.clear_all_locks()
        self.logger.init_log("KiraKira garden systems are now offline.", "INFO")

    @property
    def timezone(self):
        return TimeHelper.get_timezone(self.game_state_helper.get_global_state("timezone"))

    def _build_helpers(self):
        """(Re)builds every helper that depends on the configured timezone, layout or log channel."""

        self.logger.log_channel_id = self.game_state_helper.get_global_state("log_channel_id")
        self.generation_helper = GenerationHelper.from_data(
            self.data_loader,
            slots_per_shelf=self.game_state_helper.get_global_state("slots_per_shelf", 4),
            shelves_per_room=self.game_state_helper.get_global_state("shelves_per_room", 4),
            timezone=self.timezone,
            logger=self.logger,
        )
        position_helper = self.generation_helper.position_helper

        if self.garden_helper is None:
            self.garden_helper = GardenHelper(self.game_state_helper, position_helper)
        else:
            self.garden_helper.position_helper = position_helper

        self.image_helper = ImageHelper(position_helper, self.logger)

    async def startup(self):
        await self.bot.wait_until_ready()
        await self.game_state_helper.load_game_state()
        self._build_helpers()

        await self.logger.flush_init_log_queue()

        self._initialized = True
        await self.logger.log_to_discord(
            f"Startup complete. {len(self.garden_helper.get_all_user_ids())} garden(s) loaded.", "INFO")

    # ---- display helpers ----

    def _rarity_label(self, rarity: str) -> str:
        rarity_def = next((r for r in self.data_loader.rarities if r.id == rarity), None)
        return rarity_def.label if rarity_def else rarity.capitalize()

    def _mood_label(self, mood: str) -> str:
        mood_def = next((m for m in self.data_loader.moods if m.id == mood), None)
        return f"{mood_def.emoji} {mood_def.label}" if mood_def else mood

    def _describe_location(self, position: Position) -> str:
        position_helper = self.generation_helper.position_helper
        room_index = position_helper.get_room_for_position(position)
        start_shelf, _ = position_helper.get_shelf_range(room_index)
        return (f"{position_helper.get_room_name(room_index)}, shelf {position.y - start_shelf + 1}, "
                f"slot {position.x + 1}")

    def _element_embed(self, element: GardenElement, title: str) -> discord.Embed:
        embed = discord.Embed(
            title=title,
            description=f"{element.emoji} **{element.name}**\n*{element.description}*",
            color=discord.Color(int(element.color.lstrip("#"), 16)),
        )
        embed.add_field(name="Rarity", value=self._rarity_label(element.rarity), inline=True)
        embed.add_field(name="Mood", value=self._mood_label(element.mood_influence), inline=True)
        embed.add_field(name="Season", value=element.seasonal_variant.capitalize(), inline=True)
        embed.add_field(name="Location", value=self._describe_location(element.position), inline=False)
        embed.add_field(name="Color / Size", value=f"`{element.color}` • ×{element.scale:.2f}", inline=True)
        embed.add_field(name="ID", value=f"`{element.id}`", inline=True)
        return embed

    def _room_file(self, room_index: int, profile: GardenProfileView) -> Optional[discord.File]:
        if not PIL_AVAILABLE or self.image_helper is None:
            return None
        return self.image_helper.generate_room_file(room_index, profile.elements)

    @staticmethod
    def _parse_day(value: str) -> Optional[date]:
        try:
            return date.fromisoformat(value)
        except ValueError:
            return None

    # ---- player commands ----

    @commands.command(name="checkin")
    @is_cog_ready()
    @is_not_locked()
    async def checkin_command(self, ctx: commands.Context, mood: str):
        """Log today's mood and unlock today's garden element."""

        mood = mood.lower()
        known_moods = [m.id for m in self.data_loader.moods]

        if mood not in known_moods:
            embed = discord.Embed(
                title="❓ Unknown Mood",
                description=f"{ctx.author.mention}, `{mood}` is not a mood I know.\n"
                            f"Choose one of: {', '.join(f'`{m}`' for m in known_moods)}",
                color=discord.Color.orange()
            )
            embed.set_footer(text=f"See {ctx.prefix}moods for details.")
            await ctx.send(embed=embed)
            return

        tz = self.timezone
        today = TimeHelper.get_local_date(tz)

        try:
            with self.lock_helper.hold(ctx.author.id, LockHelper.CHECKIN, "Growing today's garden element..."):
                profile = self.garden_helper.get_user_profile_view(ctx.author.id)
                registration_date = profile.registration_date or today
                latest = self.garden_helper.get_latest_element(profile)
                last_unlock = latest.unlock_date if latest else None

                if not StreakHelper.can_unlock_todays_element(last_unlock, today, tz):
                    next_unlock = StreakHelper.get_next_unlock_time(last_unlock, tz)
                    embed = discord.Embed(
                        title="🌙 Already Checked In Today",
                        description=f"{ctx.author.mention}, today's element has already grown.\n"
                                    f"Your next element can be unlocked <t:{int(next_unlock.timestamp())}:R>.",
                        color=discord.Color.blue()
                    )
                    embed.set_footer(text=self._FOOTER)
                    await ctx.send(embed=embed)
                    return

                premium_access = self.premium_helper.has_rare_elements(profile.premium_features)
                element = self.generation_helper.generate_daily_element(
                    str(ctx.author.id),
                    registration_date,
                    today,
                    mood,
                    self.garden_helper.get_existing_positions(profile),
                    premium_access,
                )

                success, message = self.garden_helper.record_check_in(ctx.author.id, element, mood, today)
                if not success:
                    embed = discord.Embed(title="❌ Check-in Failed", description=message, color=discord.Color.red())
                    embed.set_footer(text=self._FOOTER)
                    await ctx.send(embed=embed)
                    return

                await self.game_state_helper.commit_to_disk()
        except UserLockedError as e:
            await ctx.send(embed=discord.Embed(title="⏳ Garden Busy", description=str(e),
                                               color=discord.Color.orange()))
            return
        except Exception as e:
            await self.logger.log_to_discord(
                f"Check-in: CRITICAL failure for user {ctx.author.id} ({mood}): {e}\n{traceback.format_exc()}",
                "CRITICAL")
            embed = discord.Embed(
                title="❌ Something Went Wrong",
                description=f"{ctx.author.mention}, your element could not be grown. Please try again.",
                color=discord.Color.red()
            )
            embed.set_footer(text=self._FOOTER)
            await ctx.send(embed=embed)
            return

        profile = self.garden_helper.get_user_profile_view(ctx.author.id)
        streak = StreakHelper.calculate_streak(self.garden_helper.get_unlock_dates(profile), today, tz)

        embed = self._element_embed(element, "✨ A New Element Has Grown")
        embed.add_field(name="Streak", value=f"🔥 {streak.current} day(s)", inline=True)
        embed.set_footer(text=f"{self._FOOTER} • Element #{len(profile.elements)}")

        room_index = self.generation_helper.position_helper.get_room_for_position(element.position)
        room_file = self._room_file(room_index, profile)
        if room_file:
            embed.set_image(url=f"attachment://{room_file.filename}")
            await ctx.send(embed=embed, file=room_file)
        else:
            await ctx.send(embed=embed)

    @commands.command(name="garden", aliases=["room"])
    @is_cog_ready()
    async def garden_command(self, ctx: commands.Context, user: Optional[discord.Member] = None,
                             room: Optional[int] = None):
        """View a room of your garden (or someone else's)."""

        target_user = user or ctx.author
        profile = self.garden_helper.get_user_profile_view(target_user.id)
        position_helper = self.generation_helper.position_helper

        rooms = position_helper.build_rooms(profile.elements)

        if room is None:
            room_index = min(position_helper.get_current_room(len(profile.elements)), len(rooms) - 1)
        else:
            room_index = room - 1

        if not (0 <= room_index < len(rooms)):
            embed = discord.Embed(
                title="❌ No Such Room",
                description=f"{target_user.display_name}'s garden has {len(rooms)} room(s). "
                            f"Pick a number between 1 and {len(rooms)}.",
                color=discord.Color.red()
            )
            await ctx.send(embed=embed)
            return

        current_room = rooms[room_index]
        navigation = position_helper.get_room_navigation(room_index, len(rooms))

        lines = self.garden_helper.get_text_room_display(profile, room_index)
        if not profile.elements:
            lines.append(f"\n*Nothing has grown yet. Use `{ctx.prefix}checkin <mood>` to plant your first element.*")

        embed = discord.Embed(
            title=f"🪴 {target_user.display_name}'s Garden - {current_room.name}",
            description="\n".join(lines),
            color=discord.Color.green()
        )
        embed.add_field(name="Room", value=f"{len(current_room.elements)}/{current_room.capacity} slots filled",
                        inline=True)
        embed.add_field(name="Garden", value=f"{len(profile.elements)} element(s)", inline=True)

        hints = []
        if navigation.can_navigate_prev:
            hints.append(f"◀ {ctx.prefix}garden {room_index}")
        if navigation.can_navigate_next:
            hints.append(f"{ctx.prefix}garden {room_index + 2} ▶")
        footer_text = f"Room {room_index + 1}/{navigation.total_rooms}"
        if hints:
            footer_text += "  •  " + "  |  ".join(hints)
        embed.set_footer(text=footer_text)

        room_file = self._room_file(room_index, profile)
        if room_file:
            embed.set_image(url=f"attachment://{room_file.filename}")
            await ctx.send(embed=embed, file=room_file)
        else:
            await ctx.send(embed=embed)

    @commands.command(name="element")
    @is_cog_ready()
    async def element_command(self, ctx: commands.Context, element_ref: str, user: Optional[discord.Member] = None):
        """Inspect one element by its unlock date (YYYY-MM-DD) or full id."""

        target_user = user or ctx.author
        profile = self.garden_helper.get_user_profile_view(target_user.id)

        day = self._parse_day(element_ref)
        element_id = GenerationHelper.build_element_id(str(target_user.id), day) if day else element_ref
        element = self.garden_helper.find_element(profile, element_id)

        if element is None:
            embed = discord.Embed(
                title="❌ Element Not Found",
                description=f"No element `{element_ref}` in {target_user.display_name}'s garden.",
                color=discord.Color.red()
            )
            await ctx.send(embed=embed)
            return

        embed = self._element_embed(element, f"🔎 {target_user.display_name}'s Element")
        embed.add_field(name="Unlocked", value=element.unlock_date.isoformat(), inline=True)
        embed.set_footer(text=self._FOOTER)
        await ctx.send(embed=embed)

    @commands.command(name="move")
    @is_cog_ready()
    @is_not_locked()
    async def move_command(self, ctx: commands.Context, element_ref: str, room: int, shelf: int, slot: int):
        """Move an element to another slot. Room, shelf and slot numbers start at 1."""

        position_helper = self.generation_helper.position_helper

        if room < 1 or not (1 <= shelf <= position_helper.shelves_per_room):
            embed = discord.Embed(
                title="⚠️ Invalid Location",
                description=f"Rooms start at 1 and each room has shelves 1-{position_helper.shelves_per_room}.\n"
                            f"Syntax: `{ctx.prefix}move <date|id> <room> <shelf> <slot>`",
                color=discord.Color.orange()
            )
            embed.set_footer(text=self._FOOTER)
            await ctx.send(embed=embed)
            return

        day = self._parse_day(element_ref)
        element_id = GenerationHelper.build_element_id(str(ctx.author.id), day) if day else element_ref

        start_shelf, _ = position_helper.get_shelf_range(room - 1)
        target = Position(x=slot - 1, y=start_shelf + shelf - 1)

        try:
            with self.lock_helper.hold(ctx.author.id, LockHelper.MOVE, "Rearranging your shelves..."):
                success, message = self.garden_helper.move_element(ctx.author.id, element_id, target)
                if success:
                    await self.game_state_helper.commit_to_disk()
        except UserLockedError as e:
            await ctx.send(embed=discord.Embed(title="⏳ Garden Busy", description=str(e),
                                               color=discord.Color.orange()))
            return

        embed = discord.Embed(
            title="📦 Element Moved" if success else "❌ Move Failed",
            description=message,
            color=discord.Color.green() if success else discord.Color.red()
        )
        embed.set_footer(text=self._FOOTER)
        await ctx.send(embed=embed)

    @commands.command(name="streak")
    @is_cog_ready()
    async def streak_command(self, ctx: commands.Context, user: Optional[discord.Member] = None):
        """Show check-in streaks, mood history and when the next element can be unlocked."""

        target_user = user or ctx.author
        profile = self.garden_helper.get_user_profile_view(target_user.id)
        tz = self.timezone

        streak = StreakHelper.calculate_streak(self.garden_helper.get_unlock_dates(profile), tz=tz)
        hours, minutes, can_unlock = StreakHelper.get_time_until_next_unlock(streak.last_unlock, tz=tz)

        embed = discord.Embed(title=f"🔥 {target_user.display_name}'s Streak", color=discord.Color.gold())
        embed.add_field(name="Current", value=f"{streak.current} day(s)", inline=True)
        embed.add_field(name="Longest", value=f"{streak.longest} day(s)", inline=True)
        embed.add_field(
            name="Next Element",
            value="Ready now!" if can_unlock else f"in {hours}h {minutes}m",
            inline=True
        )

        if profile.registration_date:
            embed.add_field(name="Gardening Since", value=profile.registration_date.isoformat(), inline=True)

        if profile.mood_history:
            mood_counts = Counter(profile.mood_history.values())
            embed.add_field(
                name="Moods",
                value="\n".join(f"{self._mood_label(m)}: {c}" for m, c in mood_counts.most_common()),
                inline=False
            )

        features = self.premium_helper.resolve_features(profile.premium_features)
        if features:
            names = [f.name for f in self.premium_helper.get_all_features() if f.id in features]
            embed.add_field(name="Premium", value=", ".join(names), inline=False)

        embed.set_footer(text=self._FOOTER)
        await ctx.send(embed=embed)

    @commands.command(name="preview")
    @is_cog_ready()
    async def preview_command(self, ctx: commands.Context, mood: str):
        """See what today's check-in with a given mood would grow. Nothing is saved."""

        mood = mood.lower()
        template_helper = self.generation_helper.template_helper

        if mood not in template_helper.moods_by_id:
            await ctx.send(embed=discord.Embed(
                title="❓ Unknown Mood",
                description=f"Choose one of: {', '.join(f'`{m}`' for m in template_helper.moods_by_id)}",
                color=discord.Color.orange()
            ))
            return

        tz = self.timezone
        today = TimeHelper.get_local_date(tz)
        profile = self.garden_helper.get_user_profile_view(ctx.author.id)
        registration_date = profile.registration_date or today

        element = self.generation_helper.preview_element(
            str(ctx.author.id),
            registration_date,
            mood,
            self.garden_helper.get_existing_positions(profile),
            self.premium_helper.has_rare_elements(profile.premium_features),
            now=today,
        )

        probabilities = template_helper.get_rarity_probabilities(template_helper.get_mood_config(mood).rarity_bonus)

        embed = self._element_embed(element, f"🔮 Preview: {self._mood_label(mood)}")
        embed.add_field(
            name="Rarity Odds",
            value="\n".join(f"{self._rarity_label(r)}: {p:.1f}%" for r, p in probabilities.items()),
            inline=False
        )
        embed.set_footer(text=f"Preview only • Use {ctx.prefix}checkin {mood} to grow it.")
        await ctx.send(embed=embed)

    @commands.command(name="moods")
    @is_cog_ready()
    async def moods_command(self, ctx: commands.Context):
        """List the moods you can check in with."""

        embed = discord.Embed(title="🎨 Moods", color=discord.Color.purple())
        type_labels = {t.id: t for t in self.data_loader.element_types}

        for mood in self.data_loader.moods:
            kinds = [f"{type_labels[t].emoji}" for t in mood.element_types
                     if t in type_labels and not type_labels[t].premium]
            embed.add_field(
                name=f"{mood.emoji} {mood.label} (`{mood.id}`)",
                value=f"{mood.description}\nGrows: {' '.join(kinds)} • Rarity bonus: +{mood.rarity_bonus:.0%}",
                inline=False
            )

        embed.set_footer(text=f"Use {ctx.prefix}checkin <mood> once a day.")
        await ctx.send(embed=embed)

    @commands.command(name="gardenhelp")
    async def gardenhelp_command(self, ctx: commands.Context):
        """Displays help information for the KiraKira garden."""

        p = ctx.prefix
        embed = discord.Embed(
            title="🌸 KiraKira Garden Guide",
            description="Check in with how you feel once a day. Each check-in grows one element "
                        "on your shelves, shaped by your mood.",
            color=discord.Color.teal()
        )
        embed.add_field(
            name="Daily",
            value=f"`{p}checkin <mood>` - Log your mood and grow today's element\n"
                  f"`{p}preview <mood>` - See what a mood would grow today\n"
                  f"`{p}moods` - List all moods",
            inline=False
        )
        embed.add_field(
            name="Your Garden",
            value=f"`{p}garden [@user] [room]` - View a garden room\n"
                  f"`{p}element <date|id> [@user]` - Inspect an element\n"
                  f"`{p}move <date|id> <room> <shelf> <slot>` - Rearrange your shelves\n"
                  f"`{p}streak [@user]` - Streaks and mood history",
            inline=False
        )
        position_helper = self.generation_helper.position_helper if self.generation_helper else None
        if position_helper:
            embed.set_footer(text=f"Each room holds {position_helper.shelves_per_room} shelves of "
                                  f"{position_helper.slots_per_shelf} slots.")
        await ctx.send(embed=embed)

    # ---- admin commands ----

    @commands.group(name="gardenadmin")
    @is_cog_ready()
    @commands.is_owner()
    async def cmd_admin_group(self, ctx: commands.Context):
        """Base command for owner-only KiraKira utilities."""
        pass

    @cmd_admin_group.command(name="grant")
    async def admin_grant_command(self, ctx: commands.Context, target_user: discord.Member, feature_id: str):
        """Grants a premium feature to a user."""

        feature = self.premium_helper.get_feature(feature_id)
        if feature is None:
            known = ", ".join(f"`{f.id}`" for f in self.premium_helper.get_all_features())
            await ctx.send(embed=discord.Embed(title="❌ Unknown Feature", description=f"Known features: {known}",
                                               color=discord.Color.red()))
            return

        if not self.garden_helper.add_premium_feature(target_user.id, feature.id):
            await ctx.send(embed=discord.Embed(
                title="ℹ️ Already Granted",
                description=f"{target_user.mention} already has **{feature.name}**.",
                color=discord.Color.blue()
            ))
            return

        await self.game_state_helper.commit_to_disk()
        embed = discord.Embed(title="✅ Feature Granted",
                              description=f"Granted **{feature.name}** to {target_user.mention}.",
                              color=discord.Color.green())
        embed.set_footer(text="KiraKira - Administrative Override")
        await ctx.send(embed=embed)

    @cmd_admin_group.command(name="revoke")
    async def admin_revoke_command(self, ctx: commands.Context, target_user: discord.Member, feature_id: str):
        """Revokes a premium feature from a user."""

        if not self.garden_helper.remove_premium_feature(target_user.id, feature_id):
            await ctx.send(embed=discord.Embed(
                title="ℹ️ Nothing To Revoke",
                description=f"{target_user.mention} does not have `{feature_id}`.",
                color=discord.Color.blue()
            ))
            return

        await self.game_state_helper.commit_to_disk()
        embed = discord.Embed(title="✅ Feature Revoked",
                              description=f"Revoked `{feature_id}` from {target_user.mention}.",
                              color=discord.Color.green())
        embed.set_footer(text="KiraKira - Administrative Override")
        await ctx.send(embed=embed)

    @cmd_admin_group.command(name="timezone")
    async def admin_timezone_command(self, ctx: commands.Context, tz_name: str):
        """Sets the timezone that defines a calendar day, e.g. `Europe/Moscow`."""

        if TimeHelper.get_timezone(tz_name).zone != tz_name:
            await ctx.send(embed=discord.Embed(title="❌ Unknown Timezone",
                                               description=f"`{tz_name}` is not a known timezone name.",
                                               color=discord.Color.red()))
            return

        self.game_state_helper.set_global_state("timezone", tz_name)
        await self.game_state_helper.commit_to_disk()
        self._build_helpers()

        await self.logger.log_to_discord(f"Admin: timezone set to {tz_name} by {ctx.author.id}.", "INFO")
        await ctx.send(embed=discord.Embed(title="✅ Timezone Updated",
                                           description=f"Calendar days now follow `{tz_name}`.",
                                           color=discord.Color.green()))

    @cmd_admin_group.command(name="layout")
    async def admin_layout_command(self, ctx: commands.Context, slots_per_shelf: int, shelves_per_room: int):
        """Changes the shelf layout. Only allowed while every garden is empty."""

        if slots_per_shelf <= 0 or shelves_per_room <= 0:
            await ctx.send(embed=discord.Embed(title="❌ Invalid Layout",
                                               description="Both values must be positive.",
                                               color=discord.Color.red()))
            return

        if self.garden_helper.any_garden_has_elements():
            await ctx.send(embed=discord.Embed(
                title="❌ Layout Locked",
                description="Gardens already hold elements; changing the layout would move them.",
                color=discord.Color.red()
            ))
            return

        self.game_state_helper.set_global_state("slots_per_shelf", slots_per_shelf)
        self.game_state_helper.set_global_state("shelves_per_room", shelves_per_room)
        await self.game_state_helper.commit_to_disk()
        self._build_helpers()

        await ctx.send(embed=discord.Embed(
            title="✅ Layout Updated",
            description=f"Rooms now hold {shelves_per_room} shelves of {slots_per_shelf} slots.",
            color=discord.Color.green()
        ))

    @cmd_admin_group.command(name="logchannel")
    async def admin_logchannel_command(self, ctx: commands.Context, channel: Optional[discord.TextChannel] = None):
        """Sets (or clears) the channel that receives garden logs."""

        self.game_state_helper.set_global_state("log_channel_id", channel.id if channel else None)
        await self.game_state_helper.commit_to_disk()
        self.logger.log_channel_id = channel.id if channel else None

        await ctx.send(embed=discord.Embed(
            title="✅ Log Channel Updated",
            description=f"Logs now go to {channel.mention}." if channel else "Logs now go to the console only.",
            color=discord.Color.green()
        ))

    @cmd_admin_group.command(name="setregistration")
    async def admin_setregistration_command(self, ctx: commands.Context, target_user: discord.Member, day: str):
        """Overrides a user's registration date (YYYY-MM-DD)."""

        registration_date = self._parse_day(day)
        if registration_date is None:
            await ctx.send(embed=discord.Embed(title="❌ Invalid Date", description="Use the `YYYY-MM-DD` format.",
                                               color=discord.Color.red()))
            return

        self.garden_helper.set_registration_date(target_user.id, registration_date)
        await self.game_state_helper.commit_to_disk()
        await ctx.send(embed=discord.Embed(
            title="✅ Registration Date Set",
            description=f"{target_user.mention} is now registered since {registration_date.isoformat()}.",
            color=discord.Color.green()
        ))

    @cmd_admin_group.command(name="regenerate")
    async def admin_regenerate_command(self, ctx: commands.Context, target_user: discord.Member, day: str,
                                       mood: str):
        """Shows the element a user would have grown on a past day, as if the garden had been empty."""

        target_day = self._parse_day(day)
        profile = self.garden_helper.get_user_profile_view(target_user.id)

        if target_day is None or profile.registration_date is None:
            await ctx.send(embed=discord.Embed(
                title="❌ Cannot Regenerate",
                description="Use the `YYYY-MM-DD` format for a user who has checked in at least once.",
                color=discord.Color.red()
            ))
            return

        element = self.generation_helper.generate_element_for_date(
            str(target_user.id),
            profile.registration_date,
            target_day,
            mood.lower(),
            self.premium_helper.has_rare_elements(profile.premium_features),
        )

        embed = self._element_embed(element, f"🧪 Regenerated: {target_day.isoformat()}")
        stored = self.garden_helper.find_element(profile, element.id)
        if stored:
            matches = (stored.type, stored.rarity, stored.name) == (element.type, element.rarity, element.name)
            embed.add_field(name="Stored Element", value="matches" if matches else f"differs: {stored.name}",
                            inline=False)
        embed.set_footer(text="KiraKira - Administrative Diagnostics")
        await ctx.send(embed=embed)

    @cmd_admin_group.command(name="reset")
    async def admin_reset_command(self, ctx: commands.Context, target_user: discord.Member):
        """Removes every element from a user's garden. Registration and premium features are kept."""

        self.garden_helper.reset_garden(target_user.id)
        await self.game_state_helper.commit_to_disk()

        await self.logger.log_to_discord(f"Admin: garden of {target_user.id} reset by {ctx.author.id}.", "WARNING")
        await ctx.send(embed=discord.Embed(title="✅ Garden Reset",
                                           description=f"{target_user.mention}'s garden is empty again.",
                                           color=discord.Color.green()))

    @cmd_admin_group.command(name="dumpdata")
    async def admin_dumpdata_command(self, ctx: commands.Context):
        """Dumps the entire current game state into a JSON file."""

        try:
            json_bytes = json.dumps(self.game_state_helper.game_state, indent=4).encode('utf-8')
            buffer = io.BytesIO(json_bytes)
            file = discord.File(buffer, filename=f"kirakira_data_{int(time.time())}.json")

            embed = discord.Embed(
                title="⚙️ Game State Dump",
                description="The current in-memory game state has been serialized.",
                color=discord.Color.green()
            )
            embed.set_footer(text="KiraKira - Administrative Data Systems")
            await ctx.send(embed=embed, file=file)
        except (TypeError, ValueError) as e:
            embed = discord.Embed(
                title="❌ Error During Data Dump",
                description=f"The game state could not be serialized:\n`{e}`",
                color=discord.Color.red()
            )
            embed.set_footer(text="KiraKira - Administrative Data Systems")
            await ctx.send(embed=embed)
