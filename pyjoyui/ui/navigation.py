"""
Page navigation with back/forward history.

Exactly one page may be current. Opening a page hides the previous one and
pushes it onto the history stack; going back replays pages from the history
and records the page left behind on the future stack.
"""

from typing import Any, Callable, List, Optional

from .elements import Page, ViewType
from .registry import Registry
from .transition_engine import TransitionEngine
from .transitions import UITransition
from ..core.exceptions import EmptyHistoryError, ErrorHandler, get_error_handler
from ..core.logging import get_logger


class NavigationController:
    """
    State machine for the current page.

    Invariant: ``future`` is cleared by every Open/Close issued by a caller,
    and never by Back/Forward, which replay pages without touching it.
    """

    def __init__(self,
                 registry: Registry,
                 engine: TransitionEngine,
                 view_type: Callable[[], ViewType],
                 error_handler: Optional[ErrorHandler] = None):
        """
        Args:
            registry: Page registry
            engine: Transition engine shared with the overlay controller
            view_type: Returns the current shared view type
            error_handler: Receives empty-history errors
        """
        self.logger = get_logger("navigation")
        self.registry = registry
        self.engine = engine
        self.error_handler = error_handler or get_error_handler()
        self._view_type = view_type

        self.current_page: Optional[Page] = None
        self._history: List[str] = []
        self._future: List[str] = []
        self._page_order: List[str] = []

        self.registry.add_listener(self._on_page_registered)

    def _on_page_registered(self, page: Page) -> None:
        self._page_order.append(page.identity)
        page.hide_away()
        page.awaken(self._view_type())

    # History views
    @property
    def history(self) -> List[str]:
        """Back stack, oldest first."""
        return list(self._history)

    @property
    def future(self) -> List[str]:
        """Forward stack, oldest first."""
        return list(self._future)

    @property
    def previous_page(self) -> Optional[Page]:
        return self.registry.get(self._history[-1]) if self._history else None

    @property
    def next_page(self) -> Optional[Page]:
        return self.registry.get(self._future[-1]) if self._future else None

    @property
    def page_order(self) -> List[str]:
        """Stacking order of registered pages, bottom first."""
        return list(self._page_order)

    # Navigation
    def open(self,
             identity: str,
             transition: Optional[UITransition] = None,
             update_data: Optional[Callable[[Any], None]] = None,
             view_type: Optional[ViewType] = None) -> Optional[Page]:
        """
        Make a page current.

        Args:
            identity: Page to open
            transition: Transition for both the outgoing and incoming page
            update_data: Called with the page's data record before it is shown
            view_type: View to show the page in, defaults to the shared view type

        Returns:
            The opened page, or None if it could not be resolved
        """
        return self._open(identity, transition, update_data, view_type, replay=False)

    def _open(self,
              identity: str,
              transition: Optional[UITransition],
              update_data: Optional[Callable[[Any], None]],
              view_type: Optional[ViewType],
              replay: bool) -> Optional[Page]:
        page = self.registry.get(identity)
        if page is None:
            return None

        view_type = view_type or self._view_type()

        if page is self.current_page:
            if update_data is not None:
                update_data(page.data)
            self.engine.toggle(page, True, view_type, transition)
            return page

        previous = self.current_page
        if previous is not None:
            self.engine.toggle(previous, False, view_type, transition)
            if not replay:
                self._history.append(previous.identity)

        self.current_page = page
        if update_data is not None:
            update_data(page.data)
        if transition is not None and transition.bring_to_front:
            self.bring_to_front(identity)
        self.engine.toggle(page, True, view_type, transition)

        if not replay:
            self._future.clear()

        self.logger.debug("Page opened", extra={
            "identity": identity,
            "previous": previous.identity if previous is not None else None,
            "replay": replay
        })
        return page

    def close(self, transition: Optional[UITransition] = None) -> Optional[Page]:
        """
        Hide the current page, leaving no page current.

        Returns:
            The closed page, or None if no page was current
        """
        page = self.current_page
        if page is None:
            return None

        self.engine.toggle(page, False, self._view_type(), transition)
        self._history.append(page.identity)
        self._future.clear()
        self.current_page = None

        self.logger.debug("Page closed", extra={"identity": page.identity})
        return page

    def close_if(self, identity: str, transition: Optional[UITransition] = None) -> Optional[Page]:
        """Close the current page only if it is ``identity``."""
        if self.current_page is not None and self.current_page.identity == identity:
            return self.close(transition)
        return None

    def back(self, transition: Optional[UITransition] = None) -> Optional[Page]:
        """
        Reopen the most recent page from the history.

        Returns:
            The reopened page, or None if the history is empty
        """
        if not self._history:
            self.error_handler.handle_error(EmptyHistoryError("back"))
            return None

        identity = self._history.pop()
        if self.current_page is not None:
            self._future.append(self.current_page.identity)
        return self._open(identity, transition, None, None, replay=True)

    def forward(self, transition: Optional[UITransition] = None) -> Optional[Page]:
        """
        Reopen the page most recently left by going back.

        Returns:
            The reopened page, or None if there is nothing to go forward to
        """
        if not self._future:
            self.error_handler.handle_error(EmptyHistoryError("forward"))
            return None

        identity = self._future.pop()
        if self.current_page is not None:
            self._history.append(self.current_page.identity)
        return self._open(identity, transition, None, None, replay=True)

    # Views and ordering
    def change_page_view(self, identity: str, view_type: ViewType) -> Optional[Page]:
        page = self.registry.get(identity)
        if page is None:
            return None
        page.change_view(view_type)
        return page

    def change_current_page_view(self, view_type: ViewType) -> Optional[Page]:
        if self.current_page is None:
            return None
        return self.change_page_view(self.current_page.identity, view_type)

    def bring_to_front(self, identity: str) -> None:
        """Move a page to the top of the page stacking order."""
        if identity in self._page_order:
            self._page_order.remove(identity)
            self._page_order.append(identity)
