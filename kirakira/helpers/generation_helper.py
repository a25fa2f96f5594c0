from datetime import date
from typing import Optional, Sequence

import pytz

from ..models import GardenElement, Position
from .cosmetic_helper import CosmeticHelper
from .data_helper import DataHelper
from .logging_helper import LoggingHelper
from .position_helper import PositionHelper
from .random_helper import SeededRandom
from .template_helper import TemplateHelper
from .time_helper import DateLike, TimeHelper


class GenerationHelper:
    """
    Produces the one garden element a user unlocks per calendar day.

    Two seeds are involved. The template seed (local midnight of the unlock day, in milliseconds)
    drives the type, rarity and position draws. The characteristics seed is the element id,
    ``"{user_id}-{yyyy-MM-dd}"``, and drives every cosmetic attribute through ``CosmeticHelper``.

    Generation is pure: everything it depends on is passed in, and it never touches game state.
    """

    def __init__(
            self,
            template_helper: TemplateHelper,
            position_helper: PositionHelper,
            cosmetic_helper: CosmeticHelper,
            timezone: pytz.BaseTzInfo = TimeHelper.DEFAULT_TZ,
            logger: Optional[LoggingHelper] = None,
    ):
        self.template_helper = template_helper
        self.position_helper = position_helper
        self.cosmetic_helper = cosmetic_helper
        self.timezone = timezone
        self.logger = logger

    @classmethod
    def from_data(
            cls,
            data_helper: DataHelper,
            slots_per_shelf: int = 4,
            shelves_per_room: int = 4,
            timezone: pytz.BaseTzInfo = TimeHelper.DEFAULT_TZ,
            logger: Optional[LoggingHelper] = None,
    ) -> "GenerationHelper":
        """Wires the sub-helpers from a loaded DataHelper."""

        template_helper = TemplateHelper(
            data_helper.element_templates, data_helper.moods, data_helper.rarities, data_helper.element_types, logger
        )
        position_helper = PositionHelper(slots_per_shelf, shelves_per_room, logger)
        cosmetic_helper = CosmeticHelper(data_helper.element_types, data_helper.rarities, data_helper.element_colors)
        return cls(template_helper, position_helper, cosmetic_helper, timezone, logger)

    @staticmethod
    def generate_template_seed(registration_day: date, day_offset: int,
                               tz: pytz.BaseTzInfo = TimeHelper.DEFAULT_TZ) -> int:
        target_day = TimeHelper.add_days(registration_day, day_offset)
        return TimeHelper.start_of_day_ms(target_day, tz)

    @staticmethod
    def get_season(day: date) -> str:
        month = day.month

        if 3 <= month <= 5:
            return "spring"
        if 6 <= month <= 8:
            return "summer"
        if 9 <= month <= 11:
            return "autumn"
        return "winter"

    @staticmethod
    def build_element_id(user_id: str, day: date) -> str:
        return f"{user_id}-{day.strftime('%Y-%m-%d')}"

    def generate_daily_element(
            self,
            user_id: str,
            registration_date: DateLike,
            current_date: DateLike,
            mood: str,
            existing_positions: Sequence[Position] = (),
            premium_access: bool = False,
    ) -> GardenElement:
        """
        Generates the element for ``current_date``. Identical arguments always give an identical element.
        ``existing_positions`` must be a consistent snapshot of the user's occupied slots; the returned
        position is never one of them.
        """

        registration_day = TimeHelper.to_local_date(registration_date, self.timezone)
        current_day = TimeHelper.to_local_date(current_date, self.timezone)
        day_offset = (current_day - registration_day).days

        random = SeededRandom(self.generate_template_seed(registration_day, day_offset, self.timezone))

        resolved_mood = self.template_helper.resolve_mood(mood)
        mood_config = self.template_helper.get_mood_config(resolved_mood)

        template = self.template_helper.select_template(
            random, resolved_mood, mood_config.rarity_bonus, premium_access
        )
        position = self.position_helper.generate_position(random, existing_positions)

        element_id = self.build_element_id(str(user_id), current_day)
        element_type = template.type
        rarity = template.rarity

        return GardenElement(
            id=element_id,
            type=element_type,
            rarity=rarity,
            position=position,
            unlock_date=current_day,
            mood_influence=resolved_mood,
            seasonal_variant=self.get_season(current_day),
            name=self.cosmetic_helper.get_element_name(element_type, rarity, element_id),
            description=self.cosmetic_helper.get_element_description(element_type, rarity),
            emoji=self.cosmetic_helper.get_element_emoji(element_type),
            color=self.cosmetic_helper.get_element_color(element_type, resolved_mood, element_id),
            scale=self.cosmetic_helper.get_element_scale(element_id),
        )

    def preview_element(
            self,
            user_id: str,
            registration_date: DateLike,
            mood: str,
            existing_positions: Sequence[Position] = (),
            premium_access: bool = False,
            now: Optional[DateLike] = None,
    ) -> GardenElement:
        """What today's check-in would produce for ``mood``. Nothing is persisted."""

        current_date = now if now is not None else TimeHelper.now(self.timezone)
        return self.generate_daily_element(
            user_id, registration_date, current_date, mood, existing_positions, premium_access
        )

    def generate_element_for_date(
            self,
            user_id: str,
            registration_date: DateLike,
            day: DateLike,
            mood: str,
            premium_access: bool = False,
    ) -> GardenElement:
        """Regenerates a historical element as if the garden had been empty that day."""

        return self.generate_daily_element(user_id, registration_date, day, mood, (), premium_access)
