"""
Transition descriptions for page and widget visibility changes.
"""

import math
from abc import ABC, abstractmethod
from typing import Any, Optional

from .elements import UIElement


class UITransition(ABC):
    """
    Describes how an element moves between its hidden and shown states.

    ``duration`` is used when an element turns on, ``previous_duration`` when
    it turns off. When both are equal the transition is synchronous and a
    single duration applies to both directions. A duration of None stands
    for the default duration of the engine that runs the transition.
    """

    def __init__(self,
                 duration: Optional[float] = 0.0,
                 previous_duration: Optional[float] = None,
                 should_reset: bool = False,
                 bring_to_front: bool = True):
        """
        Args:
            duration: Seconds to show the element, the engine default if None
            previous_duration: Seconds to hide the element, same as ``duration`` if None
            should_reset: Replay the show cycle of a widget that is already shown
            bring_to_front: Raise the element within its band when shown
        """
        self.duration = duration
        self.previous_duration = duration if previous_duration is None else previous_duration
        self.should_reset = should_reset
        self.bring_to_front = bring_to_front

    @property
    def is_synchronous(self) -> bool:
        if self.duration is None or self.previous_duration is None:
            return self.duration is None and self.previous_duration is None
        return math.isclose(self.duration, self.previous_duration)

    def duration_for(self, on: bool, default: float = 0.0) -> float:
        """Duration that applies when toggling on (or off), ``default`` if unset."""
        duration = self.duration if self.is_synchronous or on else self.previous_duration
        return default if duration is None else duration

    @abstractmethod
    def get_starting_data(self, element: UIElement) -> Any:
        """Value the transition starts from, e.g. the current opacity."""

    @abstractmethod
    def get_ending_data(self, element: UIElement) -> Any:
        """Value the transition ends at, read after ``is_on`` has flipped."""

    @abstractmethod
    def update(self, element: UIElement, start: Any, end: Any, progress: float) -> None:
        """Apply the transition at ``progress`` in [0, 1]."""

    def __repr__(self) -> str:
        return (f"{type(self).__name__}(duration={self.duration}, "
                f"previous_duration={self.previous_duration}, "
                f"should_reset={self.should_reset})")


class FadeTransition(UITransition):
    """
    Fades the element's opacity in or out.

    ``FadeTransition()`` without a duration fades over the default duration
    of the engine that runs it, which a ``UIManager`` takes from its
    ``ui.fade_duration`` setting.
    """

    def __init__(self,
                 duration: Optional[float] = None,
                 previous_duration: Optional[float] = None,
                 should_reset: bool = False,
                 bring_to_front: bool = True):
        super().__init__(duration, previous_duration, should_reset, bring_to_front)

    @classmethod
    def reset(cls, duration: float = 0.0) -> "FadeTransition":
        """A transition that replays the show cycle even if already shown."""
        return cls(duration, should_reset=True)

    def get_starting_data(self, element: UIElement) -> float:
        return element.opacity

    def get_ending_data(self, element: UIElement) -> float:
        return 1.0 if element.is_on else 0.0

    def update(self, element: UIElement, start: float, end: float, progress: float) -> None:
        element.set_alpha(start + (end - start) * progress)
