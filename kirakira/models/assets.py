from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class ElementTypeDefinition:
    """Represents a single element kind from element_types.json."""
    id: str
    label: str
    emoji: str
    premium: bool = False
    names: Tuple[str, ...] = field(default_factory=tuple)

@dataclass(frozen=True)
class RarityDefinition:
    """Represents a rarity tier from rarities.json. Tiers are kept in declaration order."""
    id: str
    weight: float
    label: str
    prefixes: Tuple[str, ...] = field(default_factory=tuple)

@dataclass(frozen=True)
class MoodConfig:
    """Represents a mood definition from moods.json."""
    id: str
    label: str
    emoji: str
    color: str
    description: str = ""
    element_types: Tuple[str, ...] = field(default_factory=tuple)
    rarity_bonus: float = 0.0

@dataclass(frozen=True)
class ElementTemplate:
    """A (type, rarity) pairing from element_templates.json; the unit of random selection."""
    type: str
    rarity: str

@dataclass(frozen=True)
class PremiumFeature:
    """A premium feature from premium_features.json."""
    id: str
    name: str
    description: str = ""
    grants: Tuple[str, ...] = field(default_factory=tuple)
