"""
Input handling: pygame event conversion and presentation switching
"""

from .events import (
    InputEvent,
    InputEventType,
    from_pygame_event
)
from .presentation import PresentationAdapter

__all__ = [
    "InputEvent",
    "InputEventType",
    "from_pygame_event",
    "PresentationAdapter",
]
