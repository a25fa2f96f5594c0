import json
import pathlib
from typing import Any, Dict, List

from ..models import (
    ElementTypeDefinition,
    RarityDefinition,
    MoodConfig,
    ElementTemplate,
    PremiumFeature,
)
from .logging_helper import LoggingHelper

DEFAULT_DATA_PATH = pathlib.Path(__file__).resolve().parent.parent / "data"


class DataHelper:
    """
    Handles the loading and validation of all JSON catalog files from the data directory.
    Raw JSON is parsed into frozen dataclasses. List order is preserved everywhere since
    the generator walks these tables in declaration order.
    """

    def __init__(self, data_path_obj: pathlib.Path, logger: LoggingHelper):
        self.data_path = data_path_obj
        self.logger = logger

        self.element_types: List[ElementTypeDefinition] = []
        self.rarities: List[RarityDefinition] = []
        self.moods: List[MoodConfig] = []
        self.element_templates: List[ElementTemplate] = []
        self.element_colors: Dict[str, Dict[str, List[str]]] = {}
        self.premium_features: Dict[str, PremiumFeature] = {}

    def load_all_data(self):
        """Master method to load all data files."""

        self.logger.init_log("Data loading process initiated.", "INFO")

        self.element_types = self._load_element_types_data()
        self.rarities = self._load_rarities_data()
        self.moods = self._load_moods_data()
        self.element_templates = self._load_element_templates_data()
        self.element_colors = self._load_element_colors_data()
        self.premium_features = self._load_premium_features_data()

        problems = self.validate()
        for problem in problems:
            self.logger.init_log(f"Data Validation: {problem}", "WARNING")

        self.logger.init_log("All data files loaded and processed.", "INFO")

    def _load_json_file(self, filename: str, default_data: Any) -> Any:
        """Generic JSON file loader with validation and logging. Does not write to disk."""

        file_path = self.data_path / filename
        log_prefix = f"Data Load ({filename}): "
        try:
            if file_path.exists():
                with open(file_path, 'r', encoding='utf-8') as f:
                    data = json.load(f)

                if data:
                    self.logger.init_log(f"{log_prefix}Successfully loaded {len(data)} entries.", "DEBUG")
                    return data
                else:
                    self.logger.init_log(f"{log_prefix}File is empty. Using default fallback data.", "WARNING")
                    return default_data
            else:
                self.logger.init_log(
                    f"{log_prefix}File not found. This is a critical error if not intended. "
                    "Using default fallback data.", "ERROR"
                )
                return default_data
        except (OSError, json.JSONDecodeError) as e:
            self.logger.init_log(f"{log_prefix}Failed to load or parse: {e}. Using default fallback data.", "ERROR")
            return default_data

    def _load_element_types_data(self) -> List[ElementTypeDefinition]:
        data = self._load_json_file("element_types.json", [])

        element_types = []
        for type_dict in data:
            type_dict.setdefault('label', type_dict['id'])
            type_dict.setdefault('emoji', '🌿')
            type_dict['names'] = tuple(type_dict.get('names', []))
            element_types.append(ElementTypeDefinition(**type_dict))
        return element_types

    def _load_rarities_data(self) -> List[RarityDefinition]:
        fallback = [
            {"id": "common", "weight": 50, "label": "Common"},
            {"id": "uncommon", "weight": 30, "label": "Uncommon"},
            {"id": "rare", "weight": 15, "label": "Rare"},
            {"id": "epic", "weight": 4, "label": "Epic"},
            {"id": "legendary", "weight": 1, "label": "Legendary"},
        ]
        data = self._load_json_file("rarities.json", fallback)

        rarities = []
        for rarity_dict in data:
            rarity_dict['prefixes'] = tuple(rarity_dict.get('prefixes', []))
            rarities.append(RarityDefinition(**rarity_dict))
        return rarities

    def _load_moods_data(self) -> List[MoodConfig]:
        data = self._load_json_file("moods.json", [])

        moods = []
        for mood_dict in data:
            mood_dict['element_types'] = tuple(mood_dict.get('element_types', []))
            moods.append(MoodConfig(**mood_dict))
        return moods

    def _load_element_templates_data(self) -> List[ElementTemplate]:
        data = self._load_json_file("element_templates.json", [])
        return [ElementTemplate(**t_dict) for t_dict in data]

    def _load_element_colors_data(self) -> Dict[str, Dict[str, List[str]]]:
        return self._load_json_file("element_colors.json", {})

    def _load_premium_features_data(self) -> Dict[str, PremiumFeature]:
        data = self._load_json_file("premium_features.json", {})

        features = {}
        for feature_id, details in data.items():
            details['grants'] = tuple(details.get('grants', []))
            features[feature_id] = PremiumFeature(id=feature_id, **details)
        return features

    def validate(self) -> List[str]:
        """Cross-checks the loaded tables and returns a list of human-readable problems."""

        problems = []
        known_types = {t.id for t in self.element_types}
        known_rarities = {r.id for r in self.rarities}

        if not self.rarities:
            problems.append("No rarity tiers are defined.")

        for mood in self.moods:
            for type_id in mood.element_types:
                if type_id not in known_types:
                    problems.append(f"Mood '{mood.id}' references unknown element type '{type_id}'.")
            if mood.rarity_bonus < 0:
                problems.append(f"Mood '{mood.id}' has a negative rarity bonus.")

        if "joy" not in {m.id for m in self.moods}:
            problems.append("Mood 'joy' is missing; unknown moods have nothing to fall back to.")

        for template in self.element_templates:
            if template.type not in known_types:
                problems.append(f"Template references unknown element type '{template.type}'.")
            if template.rarity not in known_rarities:
                problems.append(f"Template references unknown rarity '{template.rarity}'.")

        for type_id, colors_by_mood in self.element_colors.items():
            if type_id not in known_types:
                problems.append(f"Color table references unknown element type '{type_id}'.")
            for mood_id, colors in colors_by_mood.items():
                if len(colors) != 4:
                    problems.append(f"Color list for '{type_id}'/'{mood_id}' has {len(colors)} entries, expected 4.")

        for feature in self.premium_features.values():
            for granted in feature.grants:
                if granted not in self.premium_features:
                    problems.append(f"Premium feature '{feature.id}' grants unknown feature '{granted}'.")

        return problems
