"""
Raw input samples for PyJoyUI.

Input arrives as pygame events and is converted into InputEvent records so the
presentation layer can classify the device that produced it without touching
pygame directly.
"""

import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple

import pygame


class InputEventType(Enum):
    """Types of input events."""
    BUTTON_PRESS = "button_press"
    BUTTON_RELEASE = "button_release"
    AXIS_CHANGE = "axis_change"
    HAT_CHANGE = "hat_change"
    KEY_PRESS = "key_press"
    KEY_RELEASE = "key_release"
    MOUSE_MOTION = "mouse_motion"
    MOUSE_BUTTON = "mouse_button"
    MOUSE_WHEEL = "mouse_wheel"
    TOUCH = "touch"


GAMEPAD_EVENT_TYPES = frozenset({
    InputEventType.BUTTON_PRESS,
    InputEventType.BUTTON_RELEASE,
    InputEventType.AXIS_CHANGE,
    InputEventType.HAT_CHANGE,
})

KEYBOARD_MOUSE_EVENT_TYPES = frozenset({
    InputEventType.KEY_PRESS,
    InputEventType.KEY_RELEASE,
    InputEventType.MOUSE_MOTION,
    InputEventType.MOUSE_BUTTON,
    InputEventType.MOUSE_WHEEL,
})


@dataclass
class InputEvent:
    """Represents an input event."""
    event_type: InputEventType
    timestamp: float = 0.0

    # Event-specific data
    joystick_id: Optional[int] = None
    button_id: Optional[int] = None
    axis_id: Optional[int] = None
    axis_value: Optional[float] = None
    hat_value: Optional[Tuple[int, int]] = None
    key: Optional[int] = None
    position: Optional[Tuple[float, float]] = None

    # Originating pygame event, if any
    source: Any = None

    @property
    def is_gamepad(self) -> bool:
        return self.event_type in GAMEPAD_EVENT_TYPES

    @property
    def is_keyboard_or_mouse(self) -> bool:
        return self.event_type in KEYBOARD_MOUSE_EVENT_TYPES

    @property
    def is_touch(self) -> bool:
        return self.event_type is InputEventType.TOUCH

    def __str__(self) -> str:
        parts = [self.event_type.value]

        if self.joystick_id is not None:
            parts.append(f"js={self.joystick_id}")
        if self.button_id is not None:
            parts.append(f"button={self.button_id}")
        if self.axis_id is not None:
            parts.append(f"axis={self.axis_id}:{self.axis_value:.3f}")
        if self.hat_value is not None:
            parts.append(f"hat={self.hat_value}")
        if self.key is not None:
            parts.append(f"key={self.key}")

        return f"InputEvent({', '.join(parts)})"


def from_pygame_event(event: pygame.event.Event,
                      timestamp: Optional[float] = None) -> Optional[InputEvent]:
    """
    Convert a pygame event into an InputEvent.

    Args:
        event: pygame event
        timestamp: Event time, defaults to now

    Returns:
        The converted event, or None for event types that carry no input
    """
    timestamp = time.time() if timestamp is None else timestamp
    joystick_id = getattr(event, "instance_id", getattr(event, "joy", None))

    if event.type in (pygame.JOYBUTTONDOWN, pygame.JOYBUTTONUP):
        return InputEvent(
            event_type=(InputEventType.BUTTON_PRESS if event.type == pygame.JOYBUTTONDOWN
                        else InputEventType.BUTTON_RELEASE),
            timestamp=timestamp,
            joystick_id=joystick_id,
            button_id=event.button,
            source=event
        )

    if event.type == pygame.JOYAXISMOTION:
        return InputEvent(
            event_type=InputEventType.AXIS_CHANGE,
            timestamp=timestamp,
            joystick_id=joystick_id,
            axis_id=event.axis,
            axis_value=float(event.value),
            source=event
        )

    if event.type == pygame.JOYHATMOTION:
        return InputEvent(
            event_type=InputEventType.HAT_CHANGE,
            timestamp=timestamp,
            joystick_id=joystick_id,
            hat_value=tuple(event.value),
            source=event
        )

    if event.type in (pygame.KEYDOWN, pygame.KEYUP):
        return InputEvent(
            event_type=(InputEventType.KEY_PRESS if event.type == pygame.KEYDOWN
                        else InputEventType.KEY_RELEASE),
            timestamp=timestamp,
            key=event.key,
            source=event
        )

    if event.type in (pygame.FINGERDOWN, pygame.FINGERUP, pygame.FINGERMOTION):
        return InputEvent(
            event_type=InputEventType.TOUCH,
            timestamp=timestamp,
            position=(event.x, event.y),
            source=event
        )

    if event.type in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONDOWN,
                      pygame.MOUSEBUTTONUP, pygame.MOUSEWHEEL):
        # Mouse events synthesized from touches are reported as touch
        if getattr(event, "touch", False):
            event_type = InputEventType.TOUCH
        elif event.type == pygame.MOUSEMOTION:
            event_type = InputEventType.MOUSE_MOTION
        elif event.type == pygame.MOUSEWHEEL:
            event_type = InputEventType.MOUSE_WHEEL
        else:
            event_type = InputEventType.MOUSE_BUTTON

        position = getattr(event, "pos", None)
        return InputEvent(
            event_type=event_type,
            timestamp=timestamp,
            position=tuple(position) if position is not None else None,
            source=event
        )

    return None
