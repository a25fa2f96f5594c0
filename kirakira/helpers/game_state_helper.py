from typing import TYPE_CHECKING, Any, Dict

from .logging_helper import LoggingHelper

if TYPE_CHECKING:
    from redbot.core import Config


class GameStateHelper:
    """
    The single source of truth for all persistent garden data.
    Manages the in-memory state and is the sole gatekeeper for disk I/O with Red's Config.
    """

    DEFAULT_GLOBAL_STATE = {
        "timezone": "UTC",
        "slots_per_shelf": 4,
        "shelves_per_room": 4,
        "log_channel_id": None,
    }

    def __init__(self, config_object: "Config", logger: LoggingHelper):
        self.config = config_object
        self.logger = logger
        self.game_state: Dict[str, Any] = {}
        self.apply_defaults()

    def apply_defaults(self):
        self.game_state.setdefault("users", {})
        self.game_state.setdefault("global_state", {})

        settings = self.game_state["global_state"]
        for key, value in self.DEFAULT_GLOBAL_STATE.items():
            settings.setdefault(key, value)

    async def load_game_state(self):
        """Loads the entire game state from disk into memory and initializes defaults."""

        self.game_state = await self.config.game_state()
        self.apply_defaults()

        await self.logger.log_to_discord("System Startup: Garden state loaded into memory.", "INFO")

    def get_all_user_data(self) -> Dict[str, Dict]:
        return self.game_state.get("users", {})

    def get_user_data(self, user_id: int) -> Dict[str, Any]:
        return self.game_state.get("users", {}).get(str(user_id), {})

    def set_user_data(self, user_id: int, user_dict: Dict[str, Any]):
        self.game_state["users"][str(user_id)] = user_dict

    def get_global_state(self, key: str, default: Any = None) -> Any:
        return self.game_state.get("global_state", {}).get(key, default)

    def set_global_state(self, key: str, value: Any):
        self.game_state["global_state"][key] = value

    async def commit_to_disk(self):
        await self.config.game_state.set(self.game_state)
