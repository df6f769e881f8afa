"""
UI manager for PyJoyUI.

The UIManager is the single context object that owns the page and widget
registries, the transition engine, the navigation and overlay controllers and
the presentation adapter. Everything that used to be process-wide state hangs
off one instance, which is passed explicitly or installed once behind
``pyjoyui.ui.api``.
"""

from typing import Any, Callable, Iterable, List, Optional

from .elements import ElementKind, Page, UIData, UIElement, ViewType, Widget
from .navigation import NavigationController
from .overlay import OverlayController
from .registry import LocationTable, Registry, SceneInstantiator
from .transition_engine import TransitionEngine
from .transitions import FadeTransition, UITransition
from ..config import Settings, get_settings
from ..core.exceptions import ErrorHandler
from ..core.logging import get_logger
from ..input.events import InputEvent
from ..input.presentation import PresentationAdapter


class UIManager:
    """
    Context object for pages, widgets and their transitions.

    Typical use::

        manager = UIManager(starting_page="main_menu")
        manager.add_page(MainMenu())
        manager.add_widget(Hud(priority=2))
        manager.awaken()

        while running:
            for event in pygame.event.get():
                manager.presentation.handle_pygame_event(event)
            manager.update(dt)
    """

    def __init__(self,
                 settings: Optional[Settings] = None,
                 page_locations: Optional[LocationTable] = None,
                 widget_locations: Optional[LocationTable] = None,
                 instantiator: Optional[SceneInstantiator] = None,
                 starting_page: Optional[str] = None,
                 error_handler: Optional[ErrorHandler] = None):
        """
        Initialize the UI manager.

        Args:
            settings: Settings to read defaults from, the global settings if None
            page_locations: Identity -> location table for lazily created pages
            widget_locations: Identity -> location table for lazily created widgets
            instantiator: Creates elements from declared locations
            starting_page: Page opened by ``awaken``
            error_handler: Receives reported UI errors
        """
        self.logger = get_logger("ui_manager")
        self.settings = settings or get_settings()
        self.error_handler = error_handler or ErrorHandler(strict=self.settings.strict_errors)
        self.starting_page = starting_page

        self.view_type = ViewType.from_name(self.settings.default_view_type)
        self.engine = TransitionEngine(self.settings.fade_duration, self.error_handler)

        self.pages = Registry(ElementKind.PAGE, page_locations, instantiator, self.error_handler)
        self.widgets = Registry(ElementKind.WIDGET, widget_locations, instantiator, self.error_handler)

        self.navigation = NavigationController(
            self.pages, self.engine, self._get_view_type, self.error_handler
        )
        self.overlay = OverlayController(self.widgets, self.engine, self._get_view_type)
        self.presentation = PresentationAdapter(self)

        self._awake = False

        self.logger.info("UIManager initialized", extra={
            "view_type": self.view_type.value,
            "starting_page": starting_page
        })

    def _get_view_type(self) -> ViewType:
        return self.view_type

    @property
    def is_awake(self) -> bool:
        return self._awake

    # Registration
    def add_page(self, page: Page) -> bool:
        """Register a page. Returns False if its identity is already taken."""
        return self.pages.register(page)

    def add_widget(self, widget: Widget) -> bool:
        """Register a widget. Returns False if its identity is already taken."""
        return self.widgets.register(widget)

    def add_element(self, element: UIElement) -> bool:
        """Register a page or widget in the matching registry."""
        if element.kind == ElementKind.PAGE:
            return self.add_page(element)
        return self.add_widget(element)

    def contains_page(self, identity: str) -> bool:
        return self.pages.contains(identity)

    def contains_widget(self, identity: str) -> bool:
        return self.widgets.contains(identity)

    def get_page(self, identity: str) -> Optional[Page]:
        return self.pages.get(identity)

    def get_widget(self, identity: str) -> Optional[Widget]:
        return self.widgets.get(identity)

    def get_data(self, data_key: str) -> Optional[UIData]:
        """Look up a data record by key, searching pages before widgets."""
        data = self.pages.find_data(data_key)
        if data is None:
            data = self.widgets.find_data(data_key)
        return data

    # Lifecycle
    def awaken(self, starting_page: Optional[str] = None) -> Optional[Page]:
        """
        Finish startup by opening the starting page without a transition.

        Widgets are already in their startup state once registered, so only
        the page needs to be brought up here.

        Returns:
            The starting page, or None if there is none
        """
        starting_page = starting_page or self.starting_page
        self._awake = True

        page = None
        if starting_page:
            page = self.navigation.open(starting_page)

        self.logger.info("UIManager awake", extra={
            "pages": len(self.pages),
            "widgets": len(self.widgets),
            "starting_page": starting_page
        })
        return page

    def update(self, dt: float) -> None:
        """
        Advance one frame: tick transitions, then process elements.

        Args:
            dt: Time since the previous frame in seconds
        """
        self.engine.tick(dt)

        for page in self.pages:
            page.process(dt)
        for identity in self.overlay.z_order:
            self.widgets.get(identity).process(dt)

    # Input
    def handle_input(self, event: InputEvent) -> Optional[ViewType]:
        return self.presentation.handle_input(event)

    def update_all_views(self, view_type: ViewType) -> bool:
        return self.presentation.update_all_views(view_type)

    # Convenience
    def fade(self, duration: Optional[float] = None, **kwargs) -> UITransition:
        """Build a fade transition, using the configured duration by default."""
        if duration is None:
            duration = self.settings.fade_duration
        return FadeTransition(duration, **kwargs)

    def open_page(self,
                  identity: str,
                  transition: Optional[UITransition] = None,
                  update_data: Optional[Callable[[Any], None]] = None,
                  view_type: Optional[ViewType] = None) -> Optional[Page]:
        return self.navigation.open(identity, transition, update_data, view_type)

    def close_page(self, transition: Optional[UITransition] = None) -> Optional[Page]:
        return self.navigation.close(transition)

    def show_widget(self,
                    identity: str,
                    transition: Optional[UITransition] = None,
                    update_data: Optional[Callable[[Any], None]] = None) -> Optional[Widget]:
        return self.overlay.show(identity, transition, update_data)

    def hide_widget(self, identity: str,
                    transition: Optional[UITransition] = None) -> Optional[Widget]:
        return self.overlay.hide(identity, transition)

    def load(self, elements: Iterable[UIElement]) -> List[UIElement]:
        """Register several elements, returning the ones that were added."""
        return [element for element in elements if self.add_element(element)]

    def get_status(self) -> dict:
        """Snapshot of the manager state, for debugging."""
        current = self.navigation.current_page
        return {
            "awake": self._awake,
            "view_type": self.view_type.value,
            "current_page": current.identity if current is not None else None,
            "history": self.navigation.history,
            "future": self.navigation.future,
            "visible_widgets": [w.identity for w in self.overlay.visible_widgets()],
            "z_order": self.overlay.z_order,
            "animations": self.engine.active_count,
            "frame": self.engine.frame,
        }
