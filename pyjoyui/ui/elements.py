"""
UI element data model for PyJoyUI.

A UI element (page or widget) owns a data record and up to three views, one
per input modality. The data record lives on the element rather than on the
views, so swapping the active view never loses state.
"""

from typing import Any, Callable, Dict, List, Optional, Iterable
from enum import Enum

from ..core.logging import get_logger


class ViewType(Enum):
    """Presentation variants, one per input modality."""
    KEYBOARD = "keyboard"
    GAMEPAD = "gamepad"
    MOBILE = "mobile"

    @classmethod
    def from_name(cls, name: str) -> "ViewType":
        """Parse a view type from its (case-insensitive) name."""
        try:
            return cls(name.lower())
        except ValueError:
            raise ValueError(f"Unknown view type '{name}'") from None


class ElementKind(Enum):
    """Kinds of UI elements tracked by the manager."""
    PAGE = "page"
    WIDGET = "widget"


class UIData:
    """
    Data record attached to a UI element.

    Subclasses declare a ``KEY`` used to look the record up through the
    manager without knowing which element owns it.
    """
    KEY: str = ""


class UIView:
    """A representation of an element for one specific view type."""

    def __init__(self, view_type: ViewType, name: Optional[str] = None):
        self.view_type = view_type
        self.name = name or view_type.value
        self.parent: Optional["UIElement"] = None
        self.active = False
        self.alpha = 1.0

    @property
    def data(self) -> Optional[UIData]:
        """Data record of the owning element."""
        return self.parent.data if self.parent is not None else None

    def set_active(self, is_active: bool) -> None:
        self.active = is_active

    def set_alpha(self, alpha: float) -> None:
        self.alpha = alpha

    # Hooks, overridden by concrete views
    def on_enter(self) -> None:
        pass

    def on_process(self, dt: float) -> None:
        pass

    def on_input(self, event: Any) -> None:
        pass

    def on_enable(self) -> None:
        pass

    def on_disable(self) -> None:
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, active={self.active})"


class UIElement:
    """
    Base class for pages and widgets.

    State:
        is_on: logical visibility, flips as soon as a toggle is requested
        active: whether the element is shown and processed; follows ``is_on``
            once a transition completes
        opacity: current alpha in [0, 1], animated by fade transitions

    Callbacks (see ``connect``): ``toggled``, ``toggled_on``, ``toggled_off``
    receive the element; ``view_changed`` receives the element, the old view
    and the new view.
    """

    kind: ElementKind
    IDENTITY: str = ""

    TOGGLED = "toggled"
    TOGGLED_ON = "toggled_on"
    TOGGLED_OFF = "toggled_off"
    VIEW_CHANGED = "view_changed"
    EVENTS = (TOGGLED, TOGGLED_ON, TOGGLED_OFF, VIEW_CHANGED)

    def __init__(self,
                 identity: Optional[str] = None,
                 data: Optional[UIData] = None,
                 views: Optional[Iterable[UIView]] = None,
                 always_update: bool = False):
        """
        Initialize a UI element.

        Args:
            identity: Stable key of the element, defaults to the class ``IDENTITY``
            data: Data record, a blank ``UIData`` if not given
            views: View representations, at most one per view type
            always_update: Process the element even while it is hidden
        """
        self.identity = identity or self.IDENTITY
        if not self.identity:
            raise ValueError(f"{type(self).__name__} requires an identity")

        self.logger = get_logger(self.kind.value)
        self.data = data if data is not None else UIData()
        self.view_type = ViewType.KEYBOARD
        self.always_update = always_update
        self.is_on = False
        self.active = True
        self.opacity = 1.0

        self._views: Dict[ViewType, UIView] = {}
        for view in views or ():
            self.add_view(view)

        self._callbacks: Dict[str, List[Callable[..., None]]] = {name: [] for name in self.EVENTS}

    # Views
    def add_view(self, view: UIView) -> None:
        """Attach a view, replacing any view of the same type."""
        view.parent = self
        view.set_alpha(self.opacity)
        self._views[view.view_type] = view

    def get_view(self, view_type: ViewType) -> Optional[UIView]:
        return self._views.get(view_type)

    @property
    def current_view(self) -> Optional[UIView]:
        return self.get_view(self.view_type)

    @property
    def views(self) -> List[UIView]:
        return [self._views[vt] for vt in ViewType if vt in self._views]

    def data_as(self, data_type: type) -> Optional[Any]:
        """Return the data record if it is an instance of ``data_type``."""
        return self.data if isinstance(self.data, data_type) else None

    # Callbacks
    def connect(self, event: str, callback: Callable[..., None]) -> None:
        """Register a callback for one of ``EVENTS``."""
        if event not in self._callbacks:
            raise ValueError(f"Unknown element event '{event}'")
        self._callbacks[event].append(callback)

    def disconnect(self, event: str, callback: Callable[..., None]) -> None:
        callbacks = self._callbacks.get(event, [])
        if callback in callbacks:
            callbacks.remove(callback)

    def emit(self, event: str, *args: Any) -> None:
        for callback in list(self._callbacks[event]):
            try:
                callback(self, *args)
            except Exception as e:
                self.logger.error("Error in element callback", extra={
                    "identity": self.identity,
                    "event": event,
                    "error": str(e),
                    "error_type": type(e).__name__
                })

    def emit_toggled(self) -> None:
        """Fire ``toggled`` followed by ``toggled_on`` or ``toggled_off``."""
        self.emit(self.TOGGLED)
        self.emit(self.TOGGLED_ON if self.is_on else self.TOGGLED_OFF)

    # State
    def set_active(self, is_active: bool) -> None:
        self.active = is_active

    def set_alpha(self, alpha: float) -> None:
        """Set the opacity and pass it on to every view."""
        self.opacity = max(0.0, min(1.0, alpha))
        for view in self._views.values():
            view.set_alpha(self.opacity)

    def hide_away(self) -> None:
        """Put the element into its initial hidden state."""
        self.set_alpha(0.0)
        self.set_active(False)
        self.is_on = False

    def awaken(self, view_type: ViewType) -> None:
        """Enter the manager: run view enter hooks and select the active view."""
        for view in self.views:
            view.on_enter()
        self.view_type = view_type
        for view in self.views:
            view.set_active(view.view_type == view_type)

    def change_view(self, next_view_type: ViewType) -> None:
        """Swap the active view representation and notify listeners."""
        old_view = self.get_view(self.view_type)
        new_view = self.get_view(next_view_type)

        self.on_view_changed(old_view, new_view)
        self.emit(self.VIEW_CHANGED, old_view, new_view)

        if next_view_type != self.view_type and old_view is not None:
            old_view.on_disable()
            old_view.set_active(False)

        self.view_type = next_view_type
        if new_view is not None:
            new_view.on_enable()
            new_view.set_active(True)

        self.logger.debug("View changed", extra={
            "identity": self.identity,
            "view_type": next_view_type.value
        })

    def process(self, dt: float) -> None:
        if self.is_on or self.always_update:
            self.on_process(dt)

    def handle_input(self, event: Any) -> None:
        self.on_input(event)

    # Hooks, overridden by concrete elements
    def on_enable(self) -> None:
        pass

    def on_disable(self) -> None:
        pass

    def on_toggle(self, view_type: ViewType) -> None:
        """Called when the element is turned on; activates the matching view."""
        for view in self.views:
            if view.view_type != view_type and view.active:
                view.on_disable()
                view.set_active(False)

        self.view_type = view_type
        new_view = self.get_view(view_type)
        if new_view is not None:
            new_view.on_enable()
            new_view.set_active(True)

    def on_view_changed(self, old_view: Optional[UIView], new_view: Optional[UIView]) -> None:
        pass

    def on_process(self, dt: float) -> None:
        view = self.current_view
        if view is not None:
            view.on_process(dt)

    def on_input(self, event: Any) -> None:
        view = self.current_view
        if view is not None:
            view.on_input(event)

    def __repr__(self) -> str:
        return (f"{type(self).__name__}({self.identity!r}, is_on={self.is_on}, "
                f"opacity={self.opacity:.2f})")


class Page(UIElement):
    """A full-screen view; at most one page is current at a time."""
    kind = ElementKind.PAGE


class Widget(UIElement):
    """An overlay view; any number may be visible, ordered by priority."""
    kind = ElementKind.WIDGET

    def __init__(self,
                 identity: Optional[str] = None,
                 priority: int = 0,
                 show_on_startup: bool = False,
                 **kwargs):
        """
        Initialize a widget.

        Args:
            identity: Stable key of the widget
            priority: Z-order band, higher priorities are drawn above lower ones
            show_on_startup: Start visible instead of hidden
            **kwargs: Passed to UIElement
        """
        super().__init__(identity, **kwargs)
        self.priority = priority
        self.show_on_startup = show_on_startup

    def hide_away(self) -> None:
        """Put the widget into its startup state."""
        self.set_alpha(1.0 if self.show_on_startup else 0.0)
        self.set_active(self.show_on_startup)
        self.is_on = self.show_on_startup
