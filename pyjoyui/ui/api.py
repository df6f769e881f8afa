"""
Module-level access to the installed UI manager.

Application code that has no reference to the UIManager (menu callbacks,
logic triggers) goes through these functions. Each one reports a
NotInstantiatedError and returns a neutral result when no manager has been
installed.
"""

import functools
from typing import Any, Callable, List, Optional, TypeVar

from .elements import Page, UIData, ViewType, Widget
from .manager import UIManager
from .transitions import UITransition
from ..core.exceptions import NotInstantiatedError, handle_error

F = TypeVar("F", bound=Callable[..., Any])

# Global UI manager instance
_ui_manager: Optional[UIManager] = None


def install_ui_manager(manager: UIManager) -> UIManager:
    """Install the manager used by the module-level functions."""
    global _ui_manager
    _ui_manager = manager
    return manager


def uninstall_ui_manager() -> None:
    """Remove the installed manager."""
    global _ui_manager
    _ui_manager = None


def has_ui_manager() -> bool:
    return _ui_manager is not None


def get_ui_manager(operation: str = "access the UI manager") -> Optional[UIManager]:
    """
    Get the installed UI manager.

    Args:
        operation: Description used in the warning if none is installed

    Returns:
        The manager, or None after reporting a NotInstantiatedError
    """
    if _ui_manager is None:
        handle_error(NotInstantiatedError(operation))
    return _ui_manager


def _requires_manager(operation: str, default: Any = None) -> Callable[[F], F]:
    """Run the wrapped function with the installed manager, or return ``default``."""
    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            manager = get_ui_manager(operation)
            if manager is None:
                return default() if callable(default) else default
            return func(manager, *args, **kwargs)
        return wrapper
    return decorator


# Registration and lookup
@_requires_manager("add page", default=False)
def add_page(manager: UIManager, page: Page) -> bool:
    return manager.add_page(page)


@_requires_manager("add widget", default=False)
def add_widget(manager: UIManager, widget: Widget) -> bool:
    return manager.add_widget(widget)


@_requires_manager("check for page", default=False)
def contains_page(manager: UIManager, identity: str) -> bool:
    return manager.contains_page(identity)


@_requires_manager("check for widget", default=False)
def contains_widget(manager: UIManager, identity: str) -> bool:
    return manager.contains_widget(identity)


@_requires_manager("get page")
def get_page(manager: UIManager, identity: str) -> Optional[Page]:
    return manager.get_page(identity)


@_requires_manager("get widget")
def get_widget(manager: UIManager, identity: str) -> Optional[Widget]:
    return manager.get_widget(identity)


# Pages
@_requires_manager("open page")
def open_page(manager: UIManager,
              identity: str,
              transition: Optional[UITransition] = None,
              update_data: Optional[Callable[[Any], None]] = None,
              view_type: Optional[ViewType] = None) -> Optional[Page]:
    return manager.navigation.open(identity, transition, update_data, view_type)


@_requires_manager("close page")
def close_page(manager: UIManager, transition: Optional[UITransition] = None) -> Optional[Page]:
    return manager.navigation.close(transition)


@_requires_manager("close page")
def close_page_if(manager: UIManager,
                  identity: str,
                  transition: Optional[UITransition] = None) -> Optional[Page]:
    return manager.navigation.close_if(identity, transition)


@_requires_manager("go back")
def go_back(manager: UIManager, transition: Optional[UITransition] = None) -> Optional[Page]:
    return manager.navigation.back(transition)


@_requires_manager("go forward")
def go_forward(manager: UIManager, transition: Optional[UITransition] = None) -> Optional[Page]:
    return manager.navigation.forward(transition)


@_requires_manager("get the current page")
def current_page(manager: UIManager) -> Optional[Page]:
    return manager.navigation.current_page


@_requires_manager("get the previous page")
def previous_page(manager: UIManager) -> Optional[Page]:
    return manager.navigation.previous_page


@_requires_manager("get the next page")
def next_page(manager: UIManager) -> Optional[Page]:
    return manager.navigation.next_page


@_requires_manager("change page view")
def change_page_view(manager: UIManager, identity: str, view_type: ViewType) -> Optional[Page]:
    return manager.navigation.change_page_view(identity, view_type)


@_requires_manager("change current page view")
def change_current_page_view(manager: UIManager, view_type: ViewType) -> Optional[Page]:
    return manager.navigation.change_current_page_view(view_type)


# Widgets
@_requires_manager("show widget")
def show_widget(manager: UIManager,
                identity: str,
                transition: Optional[UITransition] = None,
                update_data: Optional[Callable[[Any], None]] = None) -> Optional[Widget]:
    return manager.overlay.show(identity, transition, update_data)


@_requires_manager("hide widget")
def hide_widget(manager: UIManager,
                identity: str,
                transition: Optional[UITransition] = None) -> Optional[Widget]:
    return manager.overlay.hide(identity, transition)


@_requires_manager("toggle widget")
def toggle_widget(manager: UIManager,
                  identity: str,
                  transition: Optional[UITransition] = None,
                  update_data: Optional[Callable[[Any], None]] = None) -> Optional[Widget]:
    return manager.overlay.toggle(identity, transition, update_data)


@_requires_manager("show all widgets")
def show_all_widgets(manager: UIManager, transition: Optional[UITransition] = None) -> None:
    manager.overlay.show_all(transition)


@_requires_manager("hide all widgets")
def hide_all_widgets(manager: UIManager, transition: Optional[UITransition] = None) -> None:
    manager.overlay.hide_all(transition)


@_requires_manager("get visible widgets", default=list)
def visible_widgets(manager: UIManager) -> List[Widget]:
    return manager.overlay.visible_widgets()


@_requires_manager("change widget view")
def change_widget_view(manager: UIManager, identity: str, view_type: ViewType) -> Optional[Widget]:
    return manager.overlay.change_widget_view(identity, view_type)


# Shared state
@_requires_manager("get the view type")
def view_type(manager: UIManager) -> Optional[ViewType]:
    return manager.view_type


@_requires_manager("update all views", default=False)
def update_all_views(manager: UIManager, new_view_type: ViewType) -> bool:
    return manager.update_all_views(new_view_type)


@_requires_manager("get data")
def get_data(manager: UIManager, data_key: str) -> Optional[UIData]:
    return manager.get_data(data_key)
