import discord
from redbot.core import commands


def is_not_locked():
    """
    A commands.check decorator that fails while the author's garden is busy,
    e.g. a check-in that is still generating.
    """

    async def predicate(ctx: commands.Context):
        lock_helper = getattr(ctx.cog, 'lock_helper', None)
        if lock_helper is None:
            return True

        lock = lock_helper.get_user_lock(ctx.author.id)
        if lock:
            embed = discord.Embed(
                title=f"⏳ Garden Busy: {lock.get('type', 'action').capitalize()} in progress",
                description=f"{ctx.author.mention}, please wait a moment.\n\n"
                            f"*{lock.get('message', 'Your garden is busy with another action.')}*",
                color=discord.Color.orange()
            )
            embed.set_footer(text="KiraKira - Garden Keeper")
            await ctx.send(embed=embed)
            return False
        return True

    return commands.check(predicate)


def is_cog_ready():
    """A commands.check decorator that fails until the garden state has been loaded."""

    async def predicate(ctx: commands.Context):
        if not getattr(ctx.cog, '_initialized', False):
            embed = discord.Embed(
                title="🌱 Garden Waking Up",
                description="The garden is still loading. Please try again in a moment.",
                color=discord.Color.orange()
            )
            await ctx.send(embed=embed, delete_after=10)
            return False
        return True

    return commands.check(predicate)
