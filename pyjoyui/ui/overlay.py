"""
Overlay widget management for PyJoyUI.

Any number of widgets can be visible at once. Every registered widget has a
slot in a z-order sorted ascending by priority; moving a widget "to the front"
only moves it to the end of its own priority band, so layering between bands
is preserved.
"""

from bisect import bisect_right
from typing import Any, Callable, List, Optional, Set

from .elements import ViewType, Widget
from .registry import Registry
from .transition_engine import TransitionEngine
from .transitions import FadeTransition, UITransition
from ..core.logging import get_logger


class OverlayController:
    """
    Manager for the set of visible widgets.

    Provides show/hide/toggle operations with transitions, priority-ordered
    insertion and band-local reordering.
    """

    def __init__(self,
                 registry: Registry,
                 engine: TransitionEngine,
                 view_type: Callable[[], ViewType]):
        """
        Initialize the overlay controller.

        Args:
            registry: Widget registry
            engine: Transition engine shared with the navigation controller
            view_type: Returns the current shared view type
        """
        self.logger = get_logger("overlay")
        self.registry = registry
        self.engine = engine
        self._view_type = view_type

        self._z_order: List[str] = []
        self._visible: Set[str] = set()

        self.registry.add_listener(self._on_widget_registered)

    def _on_widget_registered(self, widget: Widget) -> None:
        self._insert(widget)
        widget.hide_away()
        widget.awaken(self._view_type())

        if widget.is_on:
            self._toggle(widget, True, FadeTransition.reset())

        self.logger.debug("Overlay widget added", extra={
            "identity": widget.identity,
            "priority": widget.priority,
            "index": self._z_order.index(widget.identity)
        })

    def _insert(self, widget: Widget) -> None:
        """Insert after every present widget of lower or equal priority."""
        priorities = [self._priority(identity) for identity in self._z_order]
        self._z_order.insert(bisect_right(priorities, widget.priority), widget.identity)

    def _priority(self, identity: str) -> int:
        return self.registry.get(identity).priority

    # Queries
    @property
    def z_order(self) -> List[str]:
        """Identities of all registered widgets, bottom first."""
        return list(self._z_order)

    def visible_widgets(self) -> List[Widget]:
        """Visible widgets in z-order, bottom first."""
        return [self.registry.get(identity) for identity in self._z_order
                if identity in self._visible]

    def is_visible(self, identity: str) -> bool:
        return identity in self._visible

    # Visibility
    def show(self,
             identity: str,
             transition: Optional[UITransition] = None,
             update_data: Optional[Callable[[Any], None]] = None) -> Optional[Widget]:
        """
        Show a widget.

        Args:
            identity: Widget to show
            transition: Transition to use, instant if None
            update_data: Called with the widget's data record before it is shown

        Returns:
            The widget, or None if it could not be resolved
        """
        widget = self.registry.get(identity)
        if widget is None:
            return None
        if update_data is not None:
            update_data(widget.data)
        self._toggle(widget, True, transition)
        return widget

    def hide(self, identity: str, transition: Optional[UITransition] = None) -> Optional[Widget]:
        """Hide a widget. Returns the widget, or None if it could not be resolved."""
        widget = self.registry.get(identity)
        if widget is None:
            return None
        self._toggle(widget, False, transition)
        return widget

    def toggle(self,
               identity: str,
               transition: Optional[UITransition] = None,
               update_data: Optional[Callable[[Any], None]] = None) -> Optional[Widget]:
        """Flip a widget between shown and hidden."""
        widget = self.registry.get(identity)
        if widget is None:
            return None
        if update_data is not None:
            update_data(widget.data)
        self._toggle(widget, not widget.is_on, transition)
        return widget

    def show_all(self, transition: Optional[UITransition] = None) -> None:
        for identity in self.registry.identities():
            self.show(identity, transition)

    def hide_all(self, transition: Optional[UITransition] = None) -> None:
        for identity in self.registry.identities():
            self.hide(identity, transition)

    def _toggle(self, widget: Widget, on: bool, transition: Optional[UITransition]) -> None:
        force = transition is not None and transition.should_reset
        if on and not widget.is_on:
            # Newly shown widgets go above the visible widgets of equal priority
            self.bring_to_front(widget.identity)
        elif on and force and transition.bring_to_front:
            self.bring_to_front(widget.identity)

        self.engine.toggle(widget, on, self._view_type(), transition, force=force)

        if widget.is_on:
            self._visible.add(widget.identity)
        else:
            self._visible.discard(widget.identity)

    def change_widget_view(self, identity: str, view_type: ViewType) -> Optional[Widget]:
        widget = self.registry.get(identity)
        if widget is None:
            return None
        widget.change_view(view_type)
        return widget

    # Ordering within a priority band
    def _band(self, identity: str) -> range:
        """Index range of the priority band containing ``identity``."""
        index = self._z_order.index(identity)
        priority = self._priority(identity)

        first = index
        while first > 0 and self._priority(self._z_order[first - 1]) == priority:
            first -= 1
        last = index
        while last + 1 < len(self._z_order) and self._priority(self._z_order[last + 1]) == priority:
            last += 1
        return range(first, last + 1)

    def _move(self, identity: str, new_index: int) -> None:
        self._z_order.remove(identity)
        self._z_order.insert(new_index, identity)

    def bring_to_front(self, identity: str) -> None:
        """Move a widget above every other widget of its priority."""
        if identity in self._z_order:
            self._move(identity, self._band(identity)[-1])

    def bring_to_back(self, identity: str) -> None:
        """Move a widget below every other widget of its priority."""
        if identity in self._z_order:
            self._move(identity, self._band(identity)[0])

    def move_forward_one(self, identity: str) -> None:
        """Swap a widget with the one above it, within its priority band."""
        if identity not in self._z_order:
            return
        index = self._z_order.index(identity)
        if index + 1 in self._band(identity):
            self._move(identity, index + 1)

    def move_back_one(self, identity: str) -> None:
        """Swap a widget with the one below it, within its priority band."""
        if identity not in self._z_order:
            return
        index = self._z_order.index(identity)
        if index - 1 in self._band(identity):
            self._move(identity, index - 1)
