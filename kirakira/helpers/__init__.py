from .random_helper import SeededRandom, string_hash
from .time_helper import TimeHelper
from .logging_helper import LoggingHelper
from .data_helper import DataHelper, DEFAULT_DATA_PATH
from .template_helper import TemplateHelper
from .position_helper import PositionHelper
from .cosmetic_helper import CosmeticHelper
from .generation_helper import GenerationHelper
from .streak_helper import StreakHelper
from .premium_helper import PremiumHelper
from .lock_helper import LockHelper, UserLockedError
from .game_state_helper import GameStateHelper
from .garden_helper import GardenHelper
from .image_helper import ImageHelper, PIL_AVAILABLE
