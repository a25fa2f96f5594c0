import math
from typing import Dict, List

from ..models import ElementTypeDefinition, RarityDefinition
from .random_helper import string_hash


class CosmeticHelper:
    """
    Derives the display attributes of an element (name, description, emoji, color, scale).
    Every choice is keyed by a hash of the element id plus a fixed salt, so a stored id
    always renders the same way.
    """

    DEFAULT_COLOR = "#22c55e"
    DEFAULT_EMOJI = "🌿"
    FALLBACK_COLOR_TYPE = "flower"
    COLOR_ADJUSTMENTS = (-0.2, -0.1, 0.0, 0.1, 0.2)
    SCALE_VARIANTS = (0.85, 0.92, 1.0, 1.08, 1.15)

    def __init__(
            self,
            element_types: List[ElementTypeDefinition],
            rarities: List[RarityDefinition],
            element_colors: Dict[str, Dict[str, List[str]]],
    ):
        self.element_types_by_id: Dict[str, ElementTypeDefinition] = {t.id: t for t in element_types}
        self.rarities_by_id: Dict[str, RarityDefinition] = {r.id: r for r in rarities}
        self.common_rarity = rarities[0].id if rarities else "common"
        self.element_colors = element_colors

    def is_premium_type(self, element_type: str) -> bool:
        type_def = self.element_types_by_id.get(element_type)
        return bool(type_def and type_def.premium)

    def get_element_name(self, element_type: str, rarity: str, seed: str = "") -> str:
        type_def = self.element_types_by_id.get(element_type)
        if not type_def or not type_def.names:
            return element_type

        base_name = type_def.names[string_hash(seed + element_type) % len(type_def.names)]

        if type_def.premium or rarity == self.common_rarity:
            return base_name

        rarity_def = self.rarities_by_id.get(rarity)
        if not rarity_def or not rarity_def.prefixes:
            return base_name

        prefix = rarity_def.prefixes[string_hash(seed + rarity) % len(rarity_def.prefixes)]
        return f"{base_name} {prefix}" if prefix else base_name

    def get_element_description(self, element_type: str, rarity: str) -> str:
        rarity_def = self.rarities_by_id.get(rarity) or self.rarities_by_id.get(self.common_rarity)
        type_def = self.element_types_by_id.get(element_type)

        rarity_label = rarity_def.label if rarity_def else rarity
        type_label = type_def.label if type_def else element_type
        return f"{rarity_label} {type_label}"

    def get_element_emoji(self, element_type: str) -> str:
        type_def = self.element_types_by_id.get(element_type)
        return type_def.emoji if type_def else self.DEFAULT_EMOJI

    @classmethod
    def generate_color_variants(cls, base_color: str) -> List[str]:
        """Five tones of ``base_color``: two darker, the base color itself, two lighter."""

        hex_value = base_color.lstrip("#")
        channels = [int(hex_value[i:i + 2], 16) for i in (0, 2, 4)]

        variants = []
        for adjustment in cls.COLOR_ADJUSTMENTS:
            # round half up
            adjusted = [
                max(0, min(255, math.floor(c + (255 - c) * adjustment * 0.3 + 0.5)))
                for c in channels
            ]
            variants.append("#" + "".join(f"{c:02x}" for c in adjusted))
        return variants

    def get_element_color(self, element_type: str, mood: str, seed: str = "") -> str:
        colors = (self.element_colors.get(element_type, {}).get(mood)
                  or self.element_colors.get(self.FALLBACK_COLOR_TYPE, {}).get(mood))
        if not colors:
            return self.DEFAULT_COLOR

        base_color = colors[string_hash(seed + element_type + mood) % len(colors)]
        color_variants = self.generate_color_variants(base_color)

        return color_variants[string_hash(seed + base_color + "variant") % len(color_variants)]

    def get_element_scale(self, seed: str = "") -> float:
        return self.SCALE_VARIANTS[string_hash(seed + "scale") % len(self.SCALE_VARIANTS)]
