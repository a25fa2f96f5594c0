from dataclasses import dataclass, field
from types import MappingProxyType
from datetime import date
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class Position:
    """A slot on a shelf. ``x`` is the slot index, ``y`` the global shelf index."""
    x: int
    y: int

@dataclass(frozen=True)
class GardenElement:
    """A generated garden element. Never mutated after creation, except for its position."""
    id: str
    type: str
    rarity: str
    position: Position
    unlock_date: date
    mood_influence: str
    seasonal_variant: str
    name: str
    description: str
    emoji: str
    color: str
    scale: float = 1.0

@dataclass(frozen=True)
class StreakInfo:
    current: int
    longest: int
    last_unlock: Optional[date]

@dataclass(frozen=True)
class GardenRoom:
    """One page of the garden: a fixed number of shelves."""
    index: int
    name: str
    elements: Tuple[GardenElement, ...]
    capacity: int

    @property
    def id(self) -> str:
        return f"room-{self.index}"

    @property
    def is_full(self) -> bool:
        return len(self.elements) >= self.capacity

@dataclass(frozen=True)
class RoomNavigation:
    current_room_index: int
    total_rooms: int
    can_navigate_prev: bool
    can_navigate_next: bool

@dataclass
class GardenProfile:
    """The internal representation of a user's garden."""
    user_id: int
    registration_date: Optional[date] = None
    elements: List[GardenElement] = field(default_factory=list)
    premium_features: List[str] = field(default_factory=list)
    mood_history: Dict[str, str] = field(default_factory=dict)


# --- External Immutable View ---

@dataclass(frozen=True)
class GardenProfileView:
    """The external read-only view of a user's garden."""
    user_id: int
    registration_date: Optional[date]
    elements: Tuple[GardenElement, ...]
    premium_features: Tuple[str, ...]
    mood_history: MappingProxyType[str, str]
