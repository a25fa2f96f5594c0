import dataclasses
from datetime import date

import pytest

from kirakira.helpers import GardenHelper
from kirakira.models import Position


@pytest.fixture
def element(generation_helper):
    return generation_helper.generate_daily_element("1001", date(2024, 1, 1), date(2024, 1, 1), "joy")


def test_new_profile_is_empty(garden_helper):
    profile = garden_helper.get_user_profile_view(1001)

    assert profile.registration_date is None
    assert profile.elements == ()
    assert profile.premium_features == ()
    assert dict(profile.mood_history) == {}


def test_second_check_in_keeps_registration(garden_helper, generation_helper, element):
    garden_helper.record_check_in(1001, element, "joy", date(2024, 1, 1))
    next_day = generation_helper.generate_daily_element(
        "1001", date(2024, 1, 1), date(2024, 1, 2), "calm", [element.position]
    )

    garden_helper.record_check_in(1001, next_day, "calm", date(2024, 1, 2))

    assert garden_helper.get_user_profile_view(1001).registration_date == date(2024, 1, 1)


def test_add_element_records_mood(garden_helper, element):
    success, _ = garden_helper.add_element(1001, element, "joy")

    profile = garden_helper.get_user_profile_view(1001)
    assert success
    assert profile.elements == (element,)
    assert profile.mood_history["2024-01-01"] == "joy"
    assert garden_helper.get_latest_element(profile) == element


def test_duplicate_day_is_rejected(garden_helper, element):
    garden_helper.add_element(1001, element, "joy")
    success, message = garden_helper.add_element(1001, element, "joy")

    assert not success
    assert "2024-01-01" in message


def test_occupied_slot_is_rejected(garden_helper, generation_helper, element):
    garden_helper.add_element(1001, element, "joy")
    other_day = generation_helper.generate_daily_element("1001", date(2024, 1, 1), date(2024, 1, 2), "calm")
    clash = dataclasses.replace(other_day, position=element.position)

    success, _ = garden_helper.add_element(1001, clash, "calm")

    assert not success


def test_view_is_read_only(garden_helper, element):
    garden_helper.add_element(1001, element, "joy")
    profile = garden_helper.get_user_profile_view(1001)

    with pytest.raises(TypeError):
        profile.mood_history["2024-01-02"] = "calm"
    with pytest.raises(AttributeError):
        profile.elements.append(element)


def test_profile_survives_a_cache_reload(garden_helper, element):
    garden_helper.set_registration_date(1001, date(2024, 1, 1))
    garden_helper.add_element(1001, element, "joy")
    garden_helper.add_premium_feature(1001, "rare_elements")

    garden_helper.clear_cache()
    profile = garden_helper.get_user_profile_view(1001)

    assert profile.registration_date == date(2024, 1, 1)
    assert profile.elements == (element,)
    assert profile.premium_features == ("rare_elements",)


def test_stored_form_is_plain_json(game_state_helper, garden_helper, element):
    garden_helper.add_element(1001, element, "joy")

    stored = game_state_helper.get_user_data(1001)["elements"][0]

    assert stored["unlock_date"] == "2024-01-01"
    assert stored["position"] == {"x": element.position.x, "y": element.position.y}


def test_move_element(garden_helper, element):
    garden_helper.add_element(1001, element, "joy")
    target = Position(x=3, y=6)

    success, _ = garden_helper.move_element(1001, element.id, target)

    profile = garden_helper.get_user_profile_view(1001)
    assert success
    assert garden_helper.find_element(profile, element.id).position == target
    assert garden_helper.find_element_at(profile, target).id == element.id


def test_move_rejects_bad_targets(garden_helper, element):
    garden_helper.add_element(1001, element, "joy")

    assert not garden_helper.move_element(1001, "nope", Position(x=0, y=0))[0]
    assert not garden_helper.move_element(1001, element.id, Position(x=9, y=0))[0]


def test_premium_features(garden_helper):
    assert garden_helper.add_premium_feature(1001, "premium_bundle")
    assert not garden_helper.add_premium_feature(1001, "premium_bundle")
    assert garden_helper.remove_premium_feature(1001, "premium_bundle")
    assert not garden_helper.remove_premium_feature(1001, "premium_bundle")


def test_reset_keeps_registration(garden_helper, element):
    garden_helper.set_registration_date(1001, date(2024, 1, 1))
    garden_helper.add_element(1001, element, "joy")

    garden_helper.reset_garden(1001)

    profile = garden_helper.get_user_profile_view(1001)
    assert profile.elements == ()
    assert profile.registration_date == date(2024, 1, 1)
    assert not garden_helper.any_garden_has_elements()


def test_user_listing(garden_helper, element):
    garden_helper.add_element(1001, element, "joy")
    garden_helper.set_registration_date(2002, date(2024, 1, 1))

    assert sorted(garden_helper.get_all_user_ids()) == [1001, 2002]
    assert garden_helper.any_garden_has_elements()


def test_text_room_display(garden_helper, element):
    garden_helper.add_element(1001, element, "joy")
    profile = garden_helper.get_user_profile_view(1001)

    lines = garden_helper.get_text_room_display(profile, 0)

    assert len(lines) == 4
    assert lines[element.position.y].count(element.emoji) == 1
    assert all(line.startswith(f"**Shelf {i + 1}:**") for i, line in enumerate(lines))


def test_unlock_dates(garden_helper, element):
    garden_helper.add_element(1001, element, "joy")
    assert GardenHelper.get_unlock_dates(garden_helper.get_user_profile_view(1001)) == [date(2024, 1, 1)]


def test_far_away_move_is_rejected_and_rooms_stay_small(garden_helper, element):
    garden_helper.add_element(1001, element, "joy")

    success, _ = garden_helper.move_element(1001, element.id, Position(x=0, y=4_000_000))

    profile = garden_helper.get_user_profile_view(1001)
    assert not success
    assert garden_helper.find_element(profile, element.id).position == element.position
    assert len(garden_helper.position_helper.build_rooms(profile.elements)) == 2


def test_check_in_registers_the_user(garden_helper, element):
    success, _ = garden_helper.record_check_in(1001, element, "joy", date(2024, 1, 1))

    profile = garden_helper.get_user_profile_view(1001)
    assert success
    assert profile.registration_date == date(2024, 1, 1)
    assert profile.elements == (element,)


def test_failed_check_in_writes_nothing(game_state_helper, garden_helper, element):
    garden_helper.add_element(1001, element, "joy")
    same_slot = dataclasses.replace(element, id="1001-2024-01-02", unlock_date=date(2024, 1, 2))

    success, _ = garden_helper.record_check_in(1001, same_slot, "calm", date(2024, 1, 2))

    assert not success
    assert garden_helper.get_user_profile_view(1001).registration_date is None
    assert game_state_helper.get_user_data(1001)["registration_date"] is None
    assert "2024-01-02" not in game_state_helper.get_user_data(1001)["mood_history"]


def test_unregistered_user_leaves_no_state_before_check_in(game_state_helper, garden_helper):
    profile = garden_helper.get_user_profile_view(3003)

    assert profile.registration_date is None
    assert game_state_helper.get_user_data(3003) == {}
