from typing import Iterable, List, Optional, Sequence, Set, Tuple

from ..models import GardenElement, GardenRoom, Position, RoomNavigation
from .logging_helper import LoggingHelper
from .random_helper import SeededRandom


class PositionHelper:
    """
    Grid arithmetic for the garden. The garden is paged into rooms; each room holds
    ``shelves_per_room`` shelves and each shelf holds ``slots_per_shelf`` slots.
    ``Position.y`` is the global shelf index, so room ``r`` owns shelves
    ``[r * shelves_per_room, (r + 1) * shelves_per_room)``.
    """

    MAX_RANDOM_ATTEMPTS = 100
    MAX_SCAN_ROOMS = 200
    ROOM_NAMES = [
        "First Room", "Second Room", "Third Room", "Fourth Room", "Fifth Room",
        "Sixth Room", "Seventh Room", "Eighth Room", "Ninth Room", "Tenth Room",
    ]

    def __init__(self, slots_per_shelf: int = 4, shelves_per_room: int = 4, logger: Optional[LoggingHelper] = None):
        if slots_per_shelf <= 0 or shelves_per_room <= 0:
            raise ValueError("Garden layout needs at least one slot per shelf and one shelf per room.")

        self.slots_per_shelf = slots_per_shelf
        self.shelves_per_room = shelves_per_room
        self.logger = logger

    @property
    def elements_per_room(self) -> int:
        return self.slots_per_shelf * self.shelves_per_room

    def get_current_room(self, occupied_count: int) -> int:
        return occupied_count // self.elements_per_room

    def get_shelf_range(self, room_index: int) -> Tuple[int, int]:
        """Returns ``(start_shelf, end_shelf)`` for a room, end exclusive."""

        start_shelf = room_index * self.shelves_per_room
        return start_shelf, start_shelf + self.shelves_per_room

    def get_room_for_position(self, position: Position) -> int:
        return position.y // self.shelves_per_room

    @staticmethod
    def _occupied_set(existing_positions: Iterable[Position]) -> Set[Tuple[int, int]]:
        return {(p.x, p.y) for p in existing_positions}

    def generate_position(self, random: SeededRandom, existing_positions: Sequence[Position]) -> Position:
        """
        Picks a free slot in the current room with up to MAX_RANDOM_ATTEMPTS random draws, then
        scans rooms in order for the first free slot. Never returns an occupied slot.
        """

        occupied = self._occupied_set(existing_positions)
        current_room = self.get_current_room(len(existing_positions))
        start_shelf, end_shelf = self.get_shelf_range(current_room)

        for _ in range(self.MAX_RANDOM_ATTEMPTS):
            x = random.next_int(0, self.slots_per_shelf - 1)
            y = random.next_int(start_shelf, end_shelf - 1)

            if (x, y) not in occupied:
                return Position(x=x, y=y)

        if self.logger:
            self.logger.trace("position_fallback_scan", "INFO", room=current_room, occupied=len(occupied))

        free_position = self.find_first_free_position(occupied, current_room)
        if free_position is not None:
            return free_position

        fallback = Position(x=0, y=(current_room + 1) * self.shelves_per_room)
        if self.logger:
            self.logger.trace("position_absolute_fallback", "WARNING", room=current_room, x=fallback.x, y=fallback.y)
        return fallback

    def find_first_free_position(self, occupied: Set[Tuple[int, int]], from_room: int = 0) -> Optional[Position]:
        """Scans rooms from ``from_room`` (bounded by MAX_SCAN_ROOMS) shelf by shelf, slot by slot."""

        for room_index in range(from_room, from_room + self.MAX_SCAN_ROOMS):
            start_shelf, end_shelf = self.get_shelf_range(room_index)

            for y in range(start_shelf, end_shelf):
                for x in range(self.slots_per_shelf):
                    if (x, y) not in occupied:
                        return Position(x=x, y=y)

        return None

    def validate_move(self, target: Position, existing_positions: Iterable[Position]) -> Tuple[bool, str]:
        """
        Checks that ``target`` is a real, unoccupied slot no further than one room past the
        furthest occupied room (the second room at most for an otherwise empty garden).
        """

        existing_positions = list(existing_positions)

        if not (0 <= target.x < self.slots_per_shelf):
            return False, f"Slot must be between 1 and {self.slots_per_shelf}."

        if target.y < 0:
            return False, "Shelf must not be negative."

        furthest_room = max((self.get_room_for_position(p) for p in existing_positions), default=0)
        if self.get_room_for_position(target) > furthest_room + 1:
            return False, f"Room must be {furthest_room + 2} or lower."

        if (target.x, target.y) in self._occupied_set(existing_positions):
            return False, "That slot is already occupied."

        return True, ""

    def get_elements_in_room(self, elements: Iterable[GardenElement], room_index: int) -> List[GardenElement]:
        start_shelf, end_shelf = self.get_shelf_range(room_index)
        return [e for e in elements if start_shelf <= e.position.y < end_shelf]

    def is_room_full(self, elements: Iterable[GardenElement], room_index: int) -> bool:
        return len(self.get_elements_in_room(elements, room_index)) >= self.elements_per_room

    def get_room_name(self, room_index: int) -> str:
        if 0 <= room_index < len(self.ROOM_NAMES):
            return self.ROOM_NAMES[room_index]
        return f"Room {room_index + 1}"

    def build_rooms(self, elements: Sequence[GardenElement]) -> List[GardenRoom]:
        """
        Groups elements into rooms 0..max_room+1, so there is always an empty room ahead.
        An empty garden has exactly one room.
        """

        if not elements:
            return [GardenRoom(index=0, name=self.get_room_name(0), elements=(), capacity=self.elements_per_room)]

        max_room_index = max(self.get_room_for_position(e.position) for e in elements)
        total_rooms = max_room_index + 2

        return [
            GardenRoom(
                index=room_index,
                name=self.get_room_name(room_index),
                elements=tuple(self.get_elements_in_room(elements, room_index)),
                capacity=self.elements_per_room,
            )
            for room_index in range(total_rooms)
        ]

    @staticmethod
    def get_room_navigation(current_room_index: int, total_rooms: int) -> RoomNavigation:
        return RoomNavigation(
            current_room_index=current_room_index,
            total_rooms=total_rooms,
            can_navigate_prev=current_room_index > 0,
            can_navigate_next=current_room_index < total_rooms - 1,
        )
