from typing import Dict, List, Optional

from ..models import ElementTemplate, ElementTypeDefinition, MoodConfig, RarityDefinition
from .logging_helper import LoggingHelper
from .random_helper import SeededRandom


class TemplateHelper:
    """
    Selects the (type, rarity) template of a new element.
    Holds the template catalog, the mood table and the ordered rarity tiers.
    """

    DEFAULT_MOOD = "joy"

    def __init__(
            self,
            templates: List[ElementTemplate],
            moods: List[MoodConfig],
            rarities: List[RarityDefinition],
            element_types: List[ElementTypeDefinition],
            logger: Optional[LoggingHelper] = None,
    ):
        self.templates: List[ElementTemplate] = list(templates)
        self.rarities: List[RarityDefinition] = list(rarities)
        self.moods_by_id: Dict[str, MoodConfig] = {m.id: m for m in moods}
        self.premium_types = {t.id for t in element_types if t.premium}
        self.logger = logger

    @property
    def rarity_order(self) -> List[str]:
        return [r.id for r in self.rarities]

    def is_premium_type(self, element_type: str) -> bool:
        return element_type in self.premium_types

    def resolve_mood(self, mood: str) -> str:
        """Returns ``mood`` if it is configured, otherwise the default mood."""

        if mood in self.moods_by_id:
            return mood

        if self.logger:
            self.logger.trace("mood_unknown", "WARNING", mood=mood, fallback=self.DEFAULT_MOOD)
        return self.DEFAULT_MOOD

    def get_mood_config(self, mood: str) -> MoodConfig:
        return self.moods_by_id[self.resolve_mood(mood)]

    def get_eligible_templates(self, mood: str, premium_access: bool) -> List[ElementTemplate]:
        """
        Templates whose type the mood prefers, minus premium types when the user has no access.
        Falls back to the whole premium-filtered catalog when nothing matches.
        """

        mood_config = self.get_mood_config(mood)
        preferred_types = set(mood_config.element_types)

        allowed = [t for t in self.templates if premium_access or not self.is_premium_type(t.type)]
        eligible = [t for t in allowed if t.type in preferred_types]

        if not eligible:
            if self.logger:
                self.logger.trace("templates_fallback", "WARNING", mood=mood_config.id,
                                  premium_access=premium_access, catalog_size=len(allowed))
            eligible = allowed

        return eligible

    def get_adjusted_weights(self, rarity_bonus: float) -> List[float]:
        """Tier weights in declaration order, each boosted by ``(1 + rarity_bonus)``."""

        return [r.weight * (1 + rarity_bonus) for r in self.rarities]

    def select_rarity(self, random: SeededRandom, rarity_bonus: float = 0.0) -> str:
        adjusted_weights = self.get_adjusted_weights(rarity_bonus)
        total_weight = sum(adjusted_weights)

        random_weight = random.next() * total_weight
        selected_rarity = self.rarity_order[0] if self.rarities else "common"

        for rarity, weight in zip(self.rarities, adjusted_weights):
            random_weight -= weight
            if random_weight <= 0:
                selected_rarity = rarity.id
                break

        return selected_rarity

    def select_template(
            self,
            random: SeededRandom,
            mood: str,
            rarity_bonus: float = 0.0,
            premium_access: bool = False,
    ) -> ElementTemplate:
        """Draws a rarity, narrows the eligible templates to it and picks one uniformly."""

        eligible = self.get_eligible_templates(mood, premium_access)
        selected_rarity = self.select_rarity(random, rarity_bonus)

        rarity_templates = [t for t in eligible if t.rarity == selected_rarity]

        if not rarity_templates:
            for rarity in self.rarity_order:
                rarity_templates = [t for t in eligible if t.rarity == rarity]
                if rarity_templates:
                    break

        available_templates = rarity_templates or eligible

        template_index = random.next_int(0, len(available_templates) - 1)
        selected_template = available_templates[template_index]

        if self.logger:
            self.logger.trace(
                "template_selected", "DEBUG",
                mood=mood, premium_access=premium_access, eligible=len(eligible),
                selected_rarity=selected_rarity, available=len(available_templates),
                type=selected_template.type, rarity=selected_template.rarity,
            )

        return selected_template

    def get_rarity_probabilities(self, rarity_bonus: float = 0.0) -> Dict[str, float]:
        """Per-tier chance in percent, as used by the weighted draw."""

        adjusted_weights = self.get_adjusted_weights(rarity_bonus)
        total_weight = sum(adjusted_weights)

        if total_weight <= 0:
            return {r.id: 0.0 for r in self.rarities}

        return {r.id: weight / total_weight * 100 for r, weight in zip(self.rarities, adjusted_weights)}
