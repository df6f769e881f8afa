"""
Per-element transition scheduler.

Every animating element owns exactly one Animation record. The records are
advanced once per scheduler tick by ``TransitionEngine.tick``; issuing a new
transition for an element replaces (and silently cancels) its current record.
"""

from dataclasses import dataclass
from functools import partial
from typing import Any, Callable, Dict, Optional

from .elements import UIElement, ViewType
from .transitions import UITransition
from ..core.exceptions import ErrorHandler, TransitionError, get_error_handler
from ..core.logging import get_logger


@dataclass
class Animation:
    """State of one in-flight transition."""
    element: UIElement
    start_frame: int
    duration: float
    start: Any
    end: Any
    update: Callable[[Any, Any, float], None]
    on_complete: Optional[Callable[[], None]] = None
    elapsed: float = 0.0
    progress: float = 0.0


class TransitionEngine:
    """
    Schedules and advances element transitions.

    Sampling starts on the first tick after a request, never on the tick in
    which the request was made. Each tick adds ``dt`` to the elapsed time,
    samples ``progress = min(elapsed / duration, 1.0)`` and, once progress
    reaches 1.0, releases the record and runs its completion callback.

    A record whose update or completion callback raises is released and the
    failure is reported as a ``TransitionError``.
    """

    def __init__(self,
                 default_duration: float = 1.0,
                 error_handler: Optional[ErrorHandler] = None):
        """
        Args:
            default_duration: Seconds used by transitions that carry no duration
            error_handler: Receives failing transitions, the global handler if None
        """
        self.logger = get_logger("transition_engine")
        self.default_duration = default_duration
        self.error_handler = error_handler or get_error_handler()
        self._animations: Dict[UIElement, Animation] = {}
        self._frame = 0

    @property
    def frame(self) -> int:
        """Number of ticks processed so far."""
        return self._frame

    @property
    def active_count(self) -> int:
        return len(self._animations)

    def is_animating(self, element: UIElement) -> bool:
        return element in self._animations

    def run(self,
            element: UIElement,
            duration: float,
            start: Any,
            end: Any,
            update: Callable[[Any, Any, float], None],
            on_complete: Optional[Callable[[], None]] = None) -> Animation:
        """
        Start a transition for an element, cancelling any in-flight one.

        Args:
            element: Element being animated
            duration: Length of the transition in seconds
            start: Value passed to ``update`` as the starting point
            end: Value passed to ``update`` as the end point
            update: Called as ``update(start, end, progress)`` on every tick
            on_complete: Called once when progress reaches 1.0

        Returns:
            The scheduled animation record
        """
        self.cancel(element)
        animation = Animation(
            element=element,
            start_frame=self._frame,
            duration=duration,
            start=start,
            end=end,
            update=update,
            on_complete=on_complete
        )
        self._animations[element] = animation
        return animation

    def cancel(self, element: UIElement) -> bool:
        """
        Drop the element's in-flight transition without completing it.

        Returns:
            True if a transition was cancelled
        """
        animation = self._animations.pop(element, None)
        if animation is None:
            return False
        self.logger.debug("Transition cancelled", extra={
            "identity": element.identity,
            "progress": round(animation.progress, 3)
        })
        return True

    def tick(self, dt: float) -> None:
        """Advance every scheduled transition by one frame of ``dt`` seconds."""
        self._frame += 1

        for element, animation in list(self._animations.items()):
            # Replaced or cancelled by an earlier callback during this tick
            if self._animations.get(element) is not animation:
                continue
            # Requested during this tick, first sample happens next tick
            if animation.start_frame >= self._frame:
                continue

            animation.elapsed += dt
            if animation.duration > 0.0:
                animation.progress = min(animation.elapsed / animation.duration, 1.0)
            else:
                animation.progress = 1.0

            try:
                animation.update(animation.start, animation.end, animation.progress)
            except Exception as e:
                self._release_failed(animation, e)
                continue

            if animation.progress >= 1.0:
                del self._animations[element]
                if animation.on_complete is not None:
                    try:
                        animation.on_complete()
                    except Exception as e:
                        self._release_failed(animation, e)

    def _release_failed(self, animation: Animation, error: Exception) -> None:
        if self._animations.get(animation.element) is animation:
            del self._animations[animation.element]
        self.error_handler.handle_error(
            TransitionError(animation.element.identity, cause=error),
            {"frame": self._frame, "progress": round(animation.progress, 3)}
        )

    def toggle(self,
               element: UIElement,
               on: bool,
               view_type: ViewType,
               transition: Optional[UITransition] = None,
               force: bool = False) -> bool:
        """
        Turn an element on or off.

        If the element is already in the requested state (and ``force`` is not
        set) only a differing view type is applied, as a view change. Without a
        transition, or with a non-positive duration for the requested direction,
        the terminal state is applied before returning.

        Returns:
            True if a visibility change was issued
        """
        if element.is_on == on and not force:
            if element.view_type != view_type:
                element.change_view(view_type)
            return False

        element.is_on = on
        self.cancel(element)

        duration = transition.duration_for(on, self.default_duration) if transition is not None else 0.0
        if duration <= 0.0:
            self._apply_terminal_state(element)
        else:
            if on:
                element.set_active(True)
            self.run(
                element,
                duration,
                transition.get_starting_data(element),
                transition.get_ending_data(element),
                partial(transition.update, element),
                partial(self._apply_terminal_state, element)
            )

        self.logger.debug("Element toggled", extra={
            "identity": element.identity,
            "on": on,
            "duration": duration
        })

        if on:
            element.on_enable()
            element.on_toggle(view_type)
        else:
            element.on_disable()
        return True

    def _apply_terminal_state(self, element: UIElement) -> None:
        element.set_alpha(1.0 if element.is_on else 0.0)
        element.set_active(element.is_on)
        element.emit_toggled()
