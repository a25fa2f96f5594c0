from .assets import (
    ElementTypeDefinition,
    RarityDefinition,
    MoodConfig,
    ElementTemplate,
    PremiumFeature,
)
from .garden import (
    Position,
    GardenElement,
    StreakInfo,
    GardenRoom,
    RoomNavigation,
    GardenProfile,
    GardenProfileView,
)

__all__ = [
    "ElementTypeDefinition",
    "RarityDefinition",
    "MoodConfig",
    "ElementTemplate",
    "PremiumFeature",
    "Position",
    "GardenElement",
    "StreakInfo",
    "GardenRoom",
    "RoomNavigation",
    "GardenProfile",
    "GardenProfileView",
]
