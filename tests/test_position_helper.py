from datetime import date

import pytest

from kirakira.helpers import PositionHelper, SeededRandom
from kirakira.models import GardenElement, Position


def full_room(room_index, slots=4, shelves=4):
    start = room_index * shelves
    return [Position(x=x, y=y) for y in range(start, start + shelves) for x in range(slots)]


def make_element(position, day=date(2024, 1, 1)):
    return GardenElement(
        id=f"u-{day.isoformat()}-{position.x}-{position.y}", type="flower", rarity="common", position=position,
        unlock_date=day, mood_influence="joy", seasonal_variant="winter", name="Ромашка",
        description="Обычный цветок", emoji="🌸", color="#ffffff",
    )


def test_layout_must_be_positive():
    with pytest.raises(ValueError):
        PositionHelper(slots_per_shelf=0)
    with pytest.raises(ValueError):
        PositionHelper(shelves_per_room=-1)


def test_room_arithmetic(position_helper):
    assert position_helper.elements_per_room == 16
    assert position_helper.get_current_room(0) == 0
    assert position_helper.get_current_room(15) == 0
    assert position_helper.get_current_room(16) == 1
    assert position_helper.get_shelf_range(2) == (8, 12)
    assert position_helper.get_room_for_position(Position(x=3, y=7)) == 1


def test_first_position_in_first_room(position_helper):
    position = position_helper.generate_position(SeededRandom(1704067200000), [])

    assert 0 <= position.x < 4
    assert 0 <= position.y < 4


def test_generated_position_never_collides(position_helper):
    occupied = []
    random = SeededRandom(1717200000000)

    for _ in range(40):
        position = position_helper.generate_position(random, occupied)
        assert position not in occupied
        occupied.append(position)

    assert len(set(occupied)) == 40


def test_full_first_room_moves_to_second(position_helper):
    existing = full_room(0)

    position = position_helper.generate_position(SeededRandom(42), existing)

    assert 4 <= position.y < 8
    assert position not in existing


def test_scan_fallback_when_current_room_is_full(recording_logger):
    helper = PositionHelper(logger=recording_logger)
    # 16 elements put room 1 in focus, but room 1 is the full one
    existing = full_room(1)

    position = helper.generate_position(SeededRandom(42), existing)

    assert position == Position(x=0, y=8)
    assert "position_fallback_scan" in recording_logger.event_names()


def test_absolute_fallback_when_scan_finds_nothing(recording_logger):
    helper = PositionHelper(slots_per_shelf=1, shelves_per_room=1, logger=recording_logger)
    helper.MAX_SCAN_ROOMS = 1

    position = helper.generate_position(SeededRandom(7), [Position(x=0, y=1)])

    assert position == Position(x=0, y=2)
    assert recording_logger.event_names()[-1] == "position_absolute_fallback"


def test_find_first_free_position_scans_in_order(position_helper):
    occupied = {(0, 0), (1, 0), (2, 0)}
    assert position_helper.find_first_free_position(occupied) == Position(x=3, y=0)
    assert position_helper.find_first_free_position(set(), from_room=3) == Position(x=0, y=12)


def test_custom_slot_count():
    helper = PositionHelper(slots_per_shelf=6, shelves_per_room=2)
    random = SeededRandom(1704067200000)

    for _ in range(50):
        position = helper.generate_position(random, [])
        assert 0 <= position.x < 6
        assert 0 <= position.y < 2


@pytest.mark.parametrize("target, ok", [
    (Position(x=0, y=0), False),
    (Position(x=1, y=0), True),
    (Position(x=4, y=0), False),
    (Position(x=-1, y=3), False),
    (Position(x=2, y=-1), False),
    (Position(x=3, y=7), True),
    (Position(x=3, y=8), False),
    (Position(x=0, y=4_000_000), False),
])
def test_validate_move(position_helper, target, ok):
    is_valid, reason = position_helper.validate_move(target, [Position(x=0, y=0)])

    assert is_valid is ok
    assert bool(reason) is not ok


def test_build_rooms_for_empty_garden(position_helper):
    rooms = position_helper.build_rooms([])

    assert len(rooms) == 1
    assert rooms[0].name == "First Room"
    assert rooms[0].id == "room-0"
    assert not rooms[0].is_full


def test_build_rooms_keeps_an_empty_room_ahead(position_helper):
    elements = [make_element(p) for p in full_room(0)] + [make_element(Position(x=0, y=5))]

    rooms = position_helper.build_rooms(elements)

    assert len(rooms) == 3
    assert rooms[0].is_full
    assert len(rooms[1].elements) == 1
    assert rooms[2].elements == ()
    assert position_helper.is_room_full(elements, 0)


def test_room_names(position_helper):
    assert position_helper.get_room_name(1) == "Second Room"
    assert position_helper.get_room_name(9) == "Tenth Room"
    assert position_helper.get_room_name(10) == "Room 11"


def test_room_navigation():
    first = PositionHelper.get_room_navigation(0, 3)
    last = PositionHelper.get_room_navigation(2, 3)
    only = PositionHelper.get_room_navigation(0, 1)

    assert (first.can_navigate_prev, first.can_navigate_next) == (False, True)
    assert (last.can_navigate_prev, last.can_navigate_next) == (True, False)
    assert (only.can_navigate_prev, only.can_navigate_next) == (False, False)


def test_move_target_may_open_one_room_past_the_furthest(position_helper):
    existing = full_room(0) + [Position(x=1, y=9)]

    assert position_helper.validate_move(Position(x=0, y=15), existing)[0]
    is_valid, reason = position_helper.validate_move(Position(x=0, y=16), existing)
    assert not is_valid
    assert "Room" in reason
