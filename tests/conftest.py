import pytest

from kirakira.helpers import (
    CosmeticHelper,
    DataHelper,
    DEFAULT_DATA_PATH,
    GameStateHelper,
    GardenHelper,
    GenerationHelper,
    LoggingHelper,
    PositionHelper,
    PremiumHelper,
    TemplateHelper,
)


class RecordingLogger(LoggingHelper):
    """Collects trace events instead of printing them."""

    def __init__(self):
        super().__init__(min_level="DEBUG")
        self.events = []
        self.messages = []

    def init_log(self, message: str, level: str = "INFO"):
        self.messages.append((level, message))

    def trace(self, event: str, level: str = "DEBUG", **fields):
        self.events.append((event, level, fields))

    def event_names(self):
        return [event for event, _, _ in self.events]


@pytest.fixture
def recording_logger():
    return RecordingLogger()


@pytest.fixture(scope="session")
def data_helper():
    helper = DataHelper(DEFAULT_DATA_PATH, LoggingHelper(min_level="ERROR"))
    helper.load_all_data()
    return helper


@pytest.fixture
def template_helper(data_helper):
    return TemplateHelper(
        data_helper.element_templates, data_helper.moods, data_helper.rarities, data_helper.element_types
    )


@pytest.fixture
def position_helper():
    return PositionHelper(slots_per_shelf=4, shelves_per_room=4)


@pytest.fixture
def cosmetic_helper(data_helper):
    return CosmeticHelper(data_helper.element_types, data_helper.rarities, data_helper.element_colors)


@pytest.fixture
def generation_helper(data_helper):
    return GenerationHelper.from_data(data_helper)


@pytest.fixture
def premium_helper(data_helper):
    return PremiumHelper(data_helper.premium_features)


@pytest.fixture
def game_state_helper():
    # Only commit_to_disk/load_game_state touch Config; the in-memory API needs none.
    return GameStateHelper(None, LoggingHelper())


@pytest.fixture
def garden_helper(game_state_helper, position_helper):
    return GardenHelper(game_state_helper, position_helper)
