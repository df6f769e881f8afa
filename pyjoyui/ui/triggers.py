"""
Named UI actions that can be attached to element callbacks.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from . import api
from .elements import UIElement
from .transitions import UITransition


class LogicType(Enum):
    """UI manager actions a trigger can perform."""
    OPEN_PAGE = "open_page"
    CLOSE_PAGE = "close_page"
    GO_BACK = "go_back"
    GO_FORWARD = "go_forward"
    SHOW_WIDGET = "show_widget"
    HIDE_WIDGET = "hide_widget"
    TOGGLE_WIDGET = "toggle_widget"
    HIDE_ALL_WIDGETS = "hide_all_widgets"


# Actions that act on a specific element
_TARGETED = {LogicType.OPEN_PAGE, LogicType.SHOW_WIDGET,
             LogicType.HIDE_WIDGET, LogicType.TOGGLE_WIDGET}


@dataclass
class LogicTrigger:
    """
    A UI action bound to a target identity.

    Instances are callable, so they can be connected directly to element
    events::

        button.connect(UIElement.TOGGLED_ON, LogicTrigger(LogicType.OPEN_PAGE, "settings"))
    """
    logic: LogicType = LogicType.OPEN_PAGE
    identity: Optional[str] = None
    transition: Optional[UITransition] = None

    def __post_init__(self):
        if self.logic in _TARGETED and not self.identity:
            raise ValueError(f"{self.logic.value} requires an identity")

    def trigger(self) -> Any:
        """Run the action against the installed UI manager."""
        if self.logic == LogicType.OPEN_PAGE:
            return api.open_page(self.identity, self.transition)
        if self.logic == LogicType.CLOSE_PAGE:
            return api.close_page(self.transition)
        if self.logic == LogicType.GO_BACK:
            return api.go_back(self.transition)
        if self.logic == LogicType.GO_FORWARD:
            return api.go_forward(self.transition)
        if self.logic == LogicType.SHOW_WIDGET:
            return api.show_widget(self.identity, self.transition)
        if self.logic == LogicType.HIDE_WIDGET:
            return api.hide_widget(self.identity, self.transition)
        if self.logic == LogicType.TOGGLE_WIDGET:
            return api.toggle_widget(self.identity, self.transition)
        return api.hide_all_widgets(self.transition)

    def __call__(self, *args: Any) -> Any:
        return self.trigger()

    def hook(self, element: UIElement, event: str = UIElement.TOGGLED_ON) -> None:
        """Run this trigger whenever ``element`` emits ``event``."""
        element.connect(event, self)

    def unhook(self, element: UIElement, event: str = UIElement.TOGGLED_ON) -> None:
        element.disconnect(event, self)
