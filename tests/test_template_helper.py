import pytest

from kirakira.helpers import SeededRandom, TemplateHelper
from kirakira.models import ElementTemplate, MoodConfig

PREMIUM_TYPES = {"rainbow_flower", "glowing_crystal", "mystic_mushroom", "aurora_tree", "starlight_decoration"}


def day_seeds(count):
    """Midnight timestamps of consecutive days from 2024-01-01 UTC, as used for real template seeds."""
    return [1704067200000 + day * 86400000 for day in range(count)]


def test_rarity_order_follows_catalog(template_helper):
    assert template_helper.rarity_order == ["common", "uncommon", "rare", "epic", "legendary"]


def test_catalog_has_mundane_then_premium_templates(template_helper):
    mundane = [t for t in template_helper.templates if t.type not in PREMIUM_TYPES]
    premium = [t for t in template_helper.templates if t.type in PREMIUM_TYPES]

    assert len(mundane) == 29
    assert template_helper.templates[29:] == premium
    assert {t.rarity for t in premium} == {"rare", "epic"}


def test_unknown_mood_resolves_to_joy(data_helper, recording_logger):
    helper = TemplateHelper(data_helper.element_templates, data_helper.moods, data_helper.rarities,
                            data_helper.element_types, recording_logger)

    assert helper.resolve_mood("melancholy") == "joy"
    assert helper.get_mood_config("melancholy").id == "joy"
    assert "mood_unknown" in recording_logger.event_names()


def test_known_mood_is_kept(template_helper):
    assert template_helper.resolve_mood("calm") == "calm"
    assert template_helper.get_mood_config("sadness").rarity_bonus == pytest.approx(0.05)


def test_eligible_templates_without_premium(template_helper):
    eligible = template_helper.get_eligible_templates("joy", premium_access=False)

    assert eligible
    assert {t.type for t in eligible} == {"flower", "decoration"}


def test_eligible_templates_with_premium(template_helper):
    eligible = template_helper.get_eligible_templates("joy", premium_access=True)
    assert {t.type for t in eligible} == {"flower", "decoration", "rainbow_flower", "starlight_decoration"}


def test_eligible_templates_fall_back_to_catalog(data_helper, recording_logger):
    moods = [MoodConfig(id="joy", label="Joy", emoji="", color="#000000", element_types=("nothing",))]
    helper = TemplateHelper(data_helper.element_templates, moods, data_helper.rarities,
                            data_helper.element_types, recording_logger)

    eligible = helper.get_eligible_templates("joy", premium_access=False)

    assert len(eligible) == 29
    assert not any(t.type in PREMIUM_TYPES for t in eligible)
    assert "templates_fallback" in recording_logger.event_names()


def test_rarity_probabilities_without_bonus(template_helper):
    probabilities = template_helper.get_rarity_probabilities(0.0)

    assert probabilities == pytest.approx(
        {"common": 50.0, "uncommon": 30.0, "rare": 15.0, "epic": 4.0, "legendary": 1.0}
    )


def test_uniform_bonus_never_lowers_rare_share(template_helper):
    base = template_helper.get_rarity_probabilities(0.0)
    boosted = template_helper.get_rarity_probabilities(0.2)

    for rarity in ("rare", "epic", "legendary"):
        assert boosted[rarity] >= base[rarity] - 1e-9


def test_adjusted_weights(template_helper):
    assert template_helper.get_adjusted_weights(0.1) == pytest.approx([55, 33, 16.5, 4.4, 1.1])


def test_select_rarity_distribution_roughly_matches_weights(template_helper):
    counts = {r: 0 for r in template_helper.rarity_order}
    random = SeededRandom(2024)
    draws = 20000

    for _ in range(draws):
        counts[template_helper.select_rarity(random)] += 1

    assert counts["common"] / draws == pytest.approx(0.50, abs=0.02)
    assert counts["uncommon"] / draws == pytest.approx(0.30, abs=0.02)
    assert counts["rare"] / draws == pytest.approx(0.15, abs=0.02)


@pytest.mark.parametrize("mood", ["joy", "calm", "stress", "sadness", "anger", "anxiety"])
def test_selected_template_matches_mood(template_helper, mood):
    preferred = set(template_helper.get_mood_config(mood).element_types)

    for seed in day_seeds(300):
        template = template_helper.select_template(SeededRandom(seed), mood, premium_access=False)
        assert template.type in preferred
        assert template.type not in PREMIUM_TYPES


def test_premium_templates_reachable_only_with_access(template_helper):
    with_access = {template_helper.select_template(SeededRandom(seed), "joy", 0.2, True).type
                   for seed in day_seeds(2000)}
    without_access = {template_helper.select_template(SeededRandom(seed), "joy", 0.2, False).type
                      for seed in day_seeds(2000)}

    assert with_access & PREMIUM_TYPES
    assert not without_access & PREMIUM_TYPES


def test_missing_rarity_falls_back_to_lowest_available(template_helper):
    # stress has no rare or legendary templates without premium
    fallbacks = 0
    for seed in day_seeds(1000):
        drawn_rarity = template_helper.select_rarity(SeededRandom(seed), 0.0)
        template = template_helper.select_template(SeededRandom(seed), "stress", 0.0, False)

        if drawn_rarity in ("rare", "legendary"):
            assert template == ElementTemplate(type="stone", rarity="common")
            fallbacks += 1
        else:
            assert template.rarity == drawn_rarity

    assert fallbacks > 0


def test_template_selected_event(data_helper, recording_logger):
    helper = TemplateHelper(data_helper.element_templates, data_helper.moods, data_helper.rarities,
                            data_helper.element_types, recording_logger)

    template = helper.select_template(SeededRandom(5), "calm", 0.1, False)

    event, level, fields = recording_logger.events[-1]
    assert (event, level) == ("template_selected", "DEBUG")
    assert fields["type"] == template.type
    assert fields["rarity"] == template.rarity
