import io
from typing import Dict, Optional, Sequence, Tuple

import discord

from .logging_helper import LoggingHelper
from .position_helper import PositionHelper
from ..models import GardenElement

try:
    from PIL import Image, ImageDraw, ImageFont

    PIL_AVAILABLE = True
except ImportError:
    PIL_AVAILABLE = False
    Image, ImageDraw, ImageFont = None, None, None


class ImageHelper:
    """Handles PIL-based rendering of garden rooms: shelves of slots, one disc per element."""

    _SLOT_SIZE: int = 96
    _SLOT_SPACING: int = 16
    _MARGIN: int = 32
    _HEADER_HEIGHT: int = 48
    _SHELF_THICKNESS: int = 10
    _BACKGROUND_COLOR: Tuple[int, int, int, int] = (250, 245, 235, 255)
    _SHELF_COLOR: Tuple[int, int, int, int] = (139, 94, 60, 255)
    _EMPTY_SLOT_COLOR: Tuple[int, int, int, int] = (210, 200, 185, 255)
    _TEXT_COLOR: Tuple[int, int, int, int] = (60, 45, 30, 255)
    RARITY_OUTLINE_COLORS: Dict[str, str] = {
        "common": "#9ca3af",
        "uncommon": "#22c55e",
        "rare": "#3b82f6",
        "epic": "#a855f7",
        "legendary": "#f59e0b",
    }

    def __init__(self, position_helper: PositionHelper, logger: LoggingHelper):
        if not PIL_AVAILABLE:
            logger.init_log("Pillow (PIL) not found. Room image generation will be disabled.", "CRITICAL")

        self.position_helper = position_helper
        self.logger = logger
        self.title_font: Optional["ImageFont.ImageFont"] = ImageFont.load_default() if PIL_AVAILABLE else None

    @property
    def is_ready(self) -> bool:
        return PIL_AVAILABLE

    def get_canvas_size(self) -> Tuple[int, int]:
        slots = self.position_helper.slots_per_shelf
        shelves = self.position_helper.shelves_per_room
        width = self._MARGIN * 2 + slots * self._SLOT_SIZE + (slots - 1) * self._SLOT_SPACING
        height = (self._HEADER_HEIGHT + self._MARGIN
                  + shelves * (self._SLOT_SIZE + self._SHELF_THICKNESS) + (shelves - 1) * self._SLOT_SPACING)
        return width, height

    def get_slot_origin(self, slot_x: int, shelf_in_room: int) -> Tuple[int, int]:
        x = self._MARGIN + slot_x * (self._SLOT_SIZE + self._SLOT_SPACING)
        y = self._HEADER_HEIGHT + shelf_in_room * (self._SLOT_SIZE + self._SHELF_THICKNESS + self._SLOT_SPACING)
        return x, y

    def render_room(self, room_index: int, elements: Sequence[GardenElement], title: str = "") -> Optional[io.BytesIO]:
        """Renders one room to a PNG buffer. Elements outside the room are ignored."""

        if not PIL_AVAILABLE:
            return None

        width, height = self.get_canvas_size()
        room_image = Image.new("RGBA", (width, height), self._BACKGROUND_COLOR)
        draw = ImageDraw.Draw(room_image)

        draw.text((self._MARGIN, self._HEADER_HEIGHT // 3), title or self.position_helper.get_room_name(room_index),
                  font=self.title_font, fill=self._TEXT_COLOR)

        start_shelf, _ = self.position_helper.get_shelf_range(room_index)
        by_slot = {
            (e.position.x, e.position.y - start_shelf): e
            for e in self.position_helper.get_elements_in_room(elements, room_index)
        }

        for shelf in range(self.position_helper.shelves_per_room):
            _, shelf_top = self.get_slot_origin(0, shelf)
            plank_y = shelf_top + self._SLOT_SIZE
            draw.rectangle(
                (self._MARGIN // 2, plank_y, width - self._MARGIN // 2, plank_y + self._SHELF_THICKNESS),
                fill=self._SHELF_COLOR,
            )

            for slot in range(self.position_helper.slots_per_shelf):
                origin_x, origin_y = self.get_slot_origin(slot, shelf)
                center = (origin_x + self._SLOT_SIZE // 2, origin_y + self._SLOT_SIZE // 2)
                element = by_slot.get((slot, shelf))

                if element is None:
                    radius = self._SLOT_SIZE // 6
                    draw.ellipse((center[0] - radius, center[1] - radius, center[0] + radius, center[1] + radius),
                                 outline=self._EMPTY_SLOT_COLOR, width=2)
                    continue

                radius = int(self._SLOT_SIZE * 0.4 * element.scale)
                outline = self.RARITY_OUTLINE_COLORS.get(element.rarity, self.RARITY_OUTLINE_COLORS["common"])
                draw.ellipse((center[0] - radius, center[1] - radius, center[0] + radius, center[1] + radius),
                             fill=element.color, outline=outline, width=4)

        buffer = io.BytesIO()
        room_image.save(buffer, format='PNG')
        buffer.seek(0)
        return buffer

    def generate_room_file(self, room_index: int, elements: Sequence[GardenElement],
                           title: str = "") -> Optional[discord.File]:
        try:
            buffer = self.render_room(room_index, elements, title)
        except (OSError, ValueError) as e:
            self.logger.init_log(f"Room image generation failed for room {room_index}: {e}", "ERROR")
            return None

        if buffer is None:
            return None
        return discord.File(buffer, filename=f"garden_room_{room_index + 1}.png")
