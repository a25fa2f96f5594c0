from datetime import datetime, timezone
from typing import Any, List, Optional, Tuple

import discord


class LoggingHelper:
    """Handles all logging operations, including Discord channel and console output."""

    LEVELS = {"DEBUG": 10, "INFO": 20, "WARNING": 30, "ERROR": 40, "CRITICAL": 50}

    def __init__(self, bot: Optional[Any] = None, log_channel_id: Optional[int] = None, min_level: str = "INFO"):
        self.bot = bot
        self.log_channel_id = log_channel_id
        self.min_level = min_level.upper()
        self._init_log_queue: List[Tuple[str, str]] = []

    def is_enabled_for(self, level: str) -> bool:
        return self.LEVELS.get(level.upper(), 20) >= self.LEVELS.get(self.min_level, 20)

    async def log_to_discord(self, message: str, level: str = "INFO", embed: Optional[discord.Embed] = None):
        """Sends a formatted log message to the designated Discord log channel."""

        if self.bot is None or self.log_channel_id is None:
            print(f"[LOG|{level.upper()}] {message}")
            return

        if not self.bot.is_ready():
            self._init_log_queue.append((message, level))
            print(f"[LOG_QUEUE|{level.upper()}] Bot not ready. Queued: {message}")
            return

        log_channel = self.bot.get_channel(self.log_channel_id)

        if not isinstance(log_channel, discord.TextChannel):
            print(
                f"[LOG_ERROR|{level.upper()}] Log channel {self.log_channel_id} not found or not a TextChannel. "
                f"Message: {message}")
            return

        timestamp = datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M:%S UTC')
        log_prefix = f"`[{timestamp}] [{level.upper()}]` "

        try:
            full_message = log_prefix + message

            if len(full_message) <= 2000:
                await log_channel.send(content=full_message, embed=embed,
                                       allowed_mentions=discord.AllowedMentions.none())
            else:
                await log_channel.send(content=f"{log_prefix}Log message exceeds 2000 characters. See chunks below.",
                                       embed=embed, allowed_mentions=discord.AllowedMentions.none())

                for i in range(0, len(message), 1900):
                    await log_channel.send(f"```{level.upper()} Chunk {i // 1900 + 1}```\n{message[i:i + 1900]}")
        except discord.Forbidden:
            print(f"[LOG_FORBIDDEN] No permission to send to log channel {self.log_channel_id}.")
        except discord.HTTPException as e:
            print(f"[LOG_HTTP_ERROR] Failed to send to log channel {self.log_channel_id}: {e}")

    def init_log(self, message: str, level: str = "INFO"):
        """
        Synchronous logger for use outside the event loop (cog initialization, pure helpers).
        Prints to console immediately and forwards to the log channel when a bot is attached.
        """

        timestamp = datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M:%S UTC')
        print(f"[INIT_LOG|{level.upper()}|{timestamp}] {message}")

        if self.bot is None or self.log_channel_id is None:
            return

        if hasattr(self.bot, 'loop') and self.bot.loop.is_running() and self.bot.is_ready():
            self.bot.loop.create_task(self.log_to_discord(message, level=level))
        else:
            self._init_log_queue.append((message, level))

    def trace(self, event: str, level: str = "DEBUG", **fields: Any):
        """Emits a structured trace event as ``event key=value ...``. Filtered by ``min_level``."""

        if not self.is_enabled_for(level):
            return

        details = " ".join(f"{key}={value!r}" for key, value in fields.items())
        self.init_log(f"{event} {details}".rstrip(), level)

    async def flush_init_log_queue(self):
        """Sends any queued logs generated before the bot was ready."""

        if self._init_log_queue:
            queued = list(self._init_log_queue)
            self._init_log_queue.clear()
            self.init_log(f"Flushing {len(queued)} queued startup logs...", "DEBUG")
            for msg, level in queued:
                await self.log_to_discord(msg, level)
