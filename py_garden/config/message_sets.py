"""
Hidden messages planted into the garden.

Each entry is static data; the layout engine turns it into flowers starting
on ``start_day``. Messages registered later take precedence on any day two
messages share.
"""

from typing import Dict, List

from ..core.messages import MessageBounds, MessageConfig
from ..core.text_mask import TextMaskOptions


MESSAGE_SETS: List[MessageConfig] = [
    MessageConfig(
        id="valentine-2026",
        label="Valentine's Day",
        lines=["LOVE U", "FOREVER", "CHERRY"],
        start_day=1600,
        bounds=MessageBounds(width=80, height=80, offset_x=10, offset_y=10),
        density=0.7,
        jitter=0.1,
        seed=1337,
        mask_options=TextMaskOptions(
            char_spacing=14,
            line_spacing=4,
            pixel_scale_x=3,
            pixel_scale_y=2,
        ),
        line_species=[
            ["peony", "lily", "forgetmenot", "rose"],
            ["forgetmenot", "rose", "tulip"],
            ["tulip", "lily", "forgetmenot"],
        ],
    ),
]


def get_message_set(message_id: str) -> MessageConfig:
    """
    Get a registered message by id.

    Raises:
        KeyError: If no message has that id
    """
    for message in MESSAGE_SETS:
        if message.id == message_id:
            return message
    raise KeyError(f"Unknown message set: {message_id}")


def list_message_sets() -> Dict[str, str]:
    """Message ids mapped to their display labels."""
    return {message.id: message.label for message in MESSAGE_SETS}
