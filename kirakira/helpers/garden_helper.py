import dataclasses
from datetime import date
from types import MappingProxyType
from typing import Any, Dict, List, Optional, Tuple

from .game_state_helper import GameStateHelper
from .position_helper import PositionHelper

from ..models import (
    GardenElement,
    GardenProfile,
    GardenProfileView,
    Position,
)


class GardenHelper:
    """
    Manages user gardens. Enforces encapsulation by using an internal mutable GardenProfile
    and exposing an immutable GardenProfileView.
    """

    def __init__(self, game_state_helper: GameStateHelper, position_helper: PositionHelper):
        self.game_state_helper = game_state_helper
        self.position_helper = position_helper
        self._user_cache: Dict[int, GardenProfile] = {}

    @staticmethod
    def _dict_to_element(element_dict: Dict[str, Any]) -> Optional[GardenElement]:
        if not isinstance(element_dict, dict):
            return None

        values = dict(element_dict)
        position = values.get("position") or {}
        values["position"] = Position(x=int(position.get("x", 0)), y=int(position.get("y", 0)))
        values["unlock_date"] = date.fromisoformat(values["unlock_date"])

        known_fields = {f.name for f in dataclasses.fields(GardenElement)}
        return GardenElement(**{k: v for k, v in values.items() if k in known_fields})

    @staticmethod
    def _element_to_dict(element: GardenElement) -> Dict[str, Any]:
        element_dict = dataclasses.asdict(element)
        element_dict["unlock_date"] = element.unlock_date.isoformat()
        return element_dict

    def _deserialize_user(self, user_id: int, user_dict: Dict[str, Any]) -> GardenProfile:
        defaults = {"registration_date": None, "elements": [], "premium_features": [], "mood_history": {}}

        for key, value in defaults.items():
            user_dict.setdefault(key, value)

        registration = user_dict["registration_date"]
        elements = [self._dict_to_element(e) for e in user_dict["elements"]]

        return GardenProfile(
            user_id=user_id,
            registration_date=date.fromisoformat(registration) if registration else None,
            elements=[e for e in elements if e is not None],
            premium_features=list(user_dict["premium_features"]),
            mood_history=dict(user_dict["mood_history"]),
        )

    def _save_user_profile(self, profile: GardenProfile):
        """Converts a GardenProfile back to a dict and saves it to the IN-MEMORY state."""

        serializable_data = {
            "registration_date": profile.registration_date.isoformat() if profile.registration_date else None,
            "elements": [self._element_to_dict(e) for e in profile.elements],
            "premium_features": list(profile.premium_features),
            "mood_history": dict(profile.mood_history),
        }
        self.game_state_helper.set_user_data(profile.user_id, serializable_data)

    def _get_or_create_user_profile(self, user_id: int) -> GardenProfile:
        if user_id in self._user_cache:
            return self._user_cache[user_id]

        raw_data = self.game_state_helper.get_user_data(user_id)

        profile = self._deserialize_user(user_id, dict(raw_data))
        self._user_cache[user_id] = profile

        return profile

    def clear_cache(self):
        self._user_cache.clear()

    def get_user_profile_view(self, user_id: int) -> GardenProfileView:
        profile = self._get_or_create_user_profile(user_id)
        return GardenProfileView(
            user_id=profile.user_id,
            registration_date=profile.registration_date,
            elements=tuple(profile.elements),
            premium_features=tuple(profile.premium_features),
            mood_history=MappingProxyType(profile.mood_history),
        )

    def get_all_user_ids(self) -> List[int]:
        all_users = self.game_state_helper.get_all_user_data()
        return [int(uid) for uid in all_users.keys()]

    def any_garden_has_elements(self) -> bool:
        return any(self.get_user_profile_view(uid).elements for uid in self.get_all_user_ids())

    @staticmethod
    def get_existing_positions(profile: GardenProfileView) -> List[Position]:
        return [e.position for e in profile.elements]

    @staticmethod
    def get_latest_element(profile: GardenProfileView) -> Optional[GardenElement]:
        if not profile.elements:
            return None
        return max(profile.elements, key=lambda e: e.unlock_date)

    @staticmethod
    def get_unlock_dates(profile: GardenProfileView) -> List[date]:
        return [e.unlock_date for e in profile.elements]

    @staticmethod
    def find_element(profile: GardenProfileView, element_id: str) -> Optional[GardenElement]:
        return next((e for e in profile.elements if e.id == element_id), None)

    def find_element_at(self, profile: GardenProfileView, position: Position) -> Optional[GardenElement]:
        return next((e for e in profile.elements if e.position == position), None)

    def add_element(self, user_id: int, element: GardenElement, mood: str) -> Tuple[bool, str]:
        profile = self._get_or_create_user_profile(user_id)

        if any(e.id == element.id for e in profile.elements):
            return False, f"An element for {element.unlock_date.isoformat()} already exists."

        if any(e.position == element.position for e in profile.elements):
            return False, "Internal Error: The generated slot is already occupied."

        profile.elements.append(element)
        profile.mood_history[element.unlock_date.isoformat()] = mood
        self._save_user_profile(profile)
        return True, f"**{element.name}** -> shelf {element.position.y + 1}, slot {element.position.x + 1}"

    def record_check_in(self, user_id: int, element: GardenElement, mood: str, today: date) -> Tuple[bool, str]:
        """Adds the day's element and registers a first-time user. Nothing is written if the add fails."""

        profile = self._get_or_create_user_profile(user_id)

        success, message = self.add_element(user_id, element, mood)
        if success and profile.registration_date is None:
            profile.registration_date = today
            self._save_user_profile(profile)

        return success, message

    def move_element(self, user_id: int, element_id: str, target: Position) -> Tuple[bool, str]:
        profile = self._get_or_create_user_profile(user_id)

        index = next((i for i, e in enumerate(profile.elements) if e.id == element_id), -1)
        if index == -1:
            return False, f"No element with id `{element_id}` in this garden."

        element = profile.elements[index]
        others = [e.position for e in profile.elements if e.id != element_id]
        is_valid, reason = self.position_helper.validate_move(target, others)
        if not is_valid:
            return False, reason

        profile.elements[index] = dataclasses.replace(element, position=target)
        self._save_user_profile(profile)
        return True, f"**{element.name}** -> shelf {target.y + 1}, slot {target.x + 1}"

    def add_premium_feature(self, user_id: int, feature_id: str) -> bool:
        profile = self._get_or_create_user_profile(user_id)

        if feature_id in profile.premium_features:
            return False

        profile.premium_features.append(feature_id)
        self._save_user_profile(profile)
        return True

    def remove_premium_feature(self, user_id: int, feature_id: str) -> bool:
        profile = self._get_or_create_user_profile(user_id)

        if feature_id not in profile.premium_features:
            return False

        profile.premium_features.remove(feature_id)
        self._save_user_profile(profile)
        return True

    def set_registration_date(self, user_id: int, registration_date: date):
        profile = self._get_or_create_user_profile(user_id)
        profile.registration_date = registration_date
        self._save_user_profile(profile)

    def reset_garden(self, user_id: int):
        profile = self._get_or_create_user_profile(user_id)
        profile.elements = []
        profile.mood_history = {}
        self._save_user_profile(profile)

    def get_text_room_display(self, profile: GardenProfileView, room_index: int) -> List[str]:
        """One line per shelf of the room, slots rendered as emoji or an empty marker."""

        start_shelf, end_shelf = self.position_helper.get_shelf_range(room_index)
        by_position = {(e.position.x, e.position.y): e for e in profile.elements}

        lines = []
        for y in range(start_shelf, end_shelf):
            slots = []
            for x in range(self.position_helper.slots_per_shelf):
                element = by_position.get((x, y))
                slots.append(element.emoji if element else "▫️")
            lines.append(f"**Shelf {y - start_shelf + 1}:** " + " ".join(slots))
        return lines
