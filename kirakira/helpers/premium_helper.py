from typing import Dict, Iterable, List, Optional, Set

from ..models import PremiumFeature


class PremiumHelper:
    """Resolves a user's unlocked premium features into the entitlements generation needs."""

    RARE_ELEMENTS = "rare_elements"
    SEASONAL_THEMES = "seasonal_themes"

    def __init__(self, features: Dict[str, PremiumFeature]):
        self.features_by_id: Dict[str, PremiumFeature] = dict(features)

    def get_feature(self, feature_id: str) -> Optional[PremiumFeature]:
        return self.features_by_id.get(feature_id)

    def get_all_features(self) -> List[PremiumFeature]:
        return list(self.features_by_id.values())

    def resolve_features(self, unlocked: Iterable[str]) -> Set[str]:
        """Known unlocked features plus everything granted by bundles among them."""

        resolved: Set[str] = set()
        pending = [f for f in unlocked if f in self.features_by_id]

        while pending:
            feature_id = pending.pop()
            if feature_id in resolved:
                continue
            resolved.add(feature_id)
            pending.extend(g for g in self.features_by_id[feature_id].grants if g in self.features_by_id)

        return resolved

    def has_feature(self, unlocked: Iterable[str], feature_id: str) -> bool:
        return feature_id in self.resolve_features(unlocked)

    def has_rare_elements(self, unlocked: Iterable[str]) -> bool:
        return self.has_feature(unlocked, self.RARE_ELEMENTS)
