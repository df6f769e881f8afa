"""
Sample pages and widgets used by the ``pyjoyui`` command.

The demo registers a small menu structure, lazily instantiates the "about"
page through a location table, and can replay a scripted input sequence
without opening a window.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

import pygame

from .ui import (
    ElementLocation, FactoryInstantiator, LocationTable, Page, UIData, UIManager,
    UIView, ViewType, Widget, install_ui_manager
)
from .ui import api
from .core.logging import get_logger


class MenuData(UIData):
    KEY = "menu"

    def __init__(self):
        self.selected = 0
        self.entries = ["Play", "Settings", "About"]


class ToastData(UIData):
    KEY = "toast"

    def __init__(self):
        self.message = ""


class LabelView(UIView):
    """View that renders as a single line of text."""

    def __init__(self, view_type: ViewType, label: str):
        super().__init__(view_type)
        self.label = label

    def text(self) -> str:
        return self.label


class MenuView(LabelView):
    def text(self) -> str:
        data = self.data
        entry = data.entries[data.selected] if isinstance(data, MenuData) else ""
        return f"{self.label} > {entry}"


class ToastView(LabelView):
    def text(self) -> str:
        data = self.data
        message = data.message if isinstance(data, ToastData) else ""
        return f"{self.label}: {message}"


def _views(cls: type, label: str) -> List[UIView]:
    return [
        cls(ViewType.KEYBOARD, f"{label} [keys]"),
        cls(ViewType.GAMEPAD, f"{label} [pad]"),
        cls(ViewType.MOBILE, f"{label} [touch]"),
    ]


def create_main_menu() -> Page:
    return Page("main_menu", data=MenuData(), views=_views(MenuView, "Main Menu"))


def create_settings_page() -> Page:
    return Page("settings", views=_views(LabelView, "Settings"))


def create_about_page() -> Page:
    return Page("about", views=_views(LabelView, "About"))


def create_hud() -> Widget:
    return Widget("hud", priority=1, show_on_startup=True, views=_views(LabelView, "HUD"))


def create_toast() -> Widget:
    return Widget("toast", priority=5, data=ToastData(), views=_views(ToastView, "Toast"))


def create_debug_widget() -> Widget:
    return Widget("debug", priority=10, always_update=True, views=_views(LabelView, "Debug"))


def build_demo_manager(install: bool = True) -> UIManager:
    """
    Create a manager with the demo pages and widgets registered.

    Args:
        install: Install the manager for module-level access

    Returns:
        The manager, not yet awake
    """
    instantiator = FactoryInstantiator({"demo/about": create_about_page})
    manager = UIManager(
        page_locations=LocationTable([ElementLocation("about", "demo/about")]),
        instantiator=instantiator,
        starting_page="main_menu"
    )
    manager.load([
        create_main_menu(),
        create_settings_page(),
        create_hud(),
        create_toast(),
        create_debug_widget(),
    ])
    if install:
        install_ui_manager(manager)
    return manager


def _set_toast(message: str) -> Callable[[ToastData], None]:
    def update(data: ToastData) -> None:
        data.message = message
    return update


@dataclass
class ScriptedRun:
    """Replays a fixed sequence of UI actions, one per scheduled frame."""
    manager: UIManager
    dt: float = 1.0 / 60.0
    steps: Dict[int, Tuple[str, Callable[[], object]]] = field(default_factory=dict)

    def __post_init__(self):
        self.logger = get_logger("demo")
        fade = self.manager.fade
        if not self.steps:
            self.steps = {
                1: ("open settings", lambda: api.open_page("settings", fade(0.25))),
                20: ("show toast", lambda: api.show_widget("toast", fade(0.25), _set_toast("Saved"))),
                40: ("gamepad input", lambda: self.manager.presentation.handle_pygame_event(
                    pygame.event.Event(pygame.JOYBUTTONDOWN, button=0, joy=0, instance_id=0))),
                60: ("open about", lambda: api.open_page("about", fade(0.25))),
                80: ("go back", lambda: api.go_back(fade(0.25))),
                100: ("go forward", lambda: api.go_forward()),
                110: ("keyboard input", lambda: self.manager.presentation.handle_pygame_event(
                    pygame.event.Event(pygame.KEYDOWN, key=pygame.K_RETURN))),
                120: ("hide all widgets", lambda: api.hide_all_widgets(fade(0.25))),
            }

    def run(self, frames: int) -> List[str]:
        """
        Run the script for ``frames`` frames.

        Returns:
            Description of each action performed
        """
        performed = []
        for frame in range(frames):
            step = self.steps.get(frame)
            if step is not None:
                description, action = step
                action()
                performed.append(description)
                self.logger.info("Demo step", extra={"frame": frame, "step": description})
            self.manager.update(self.dt)
        return performed


class DemoRenderer:
    """Draws element views as text lines, faded by their alpha."""

    def __init__(self, screen: pygame.Surface):
        self.screen = screen
        self.font = pygame.font.Font(None, 32)

    def _draw_element(self, label: str, alpha: float, position: Tuple[int, int],
                      color: Tuple[int, int, int]) -> None:
        surface = self.font.render(label, True, color)
        surface.set_alpha(int(255 * alpha))
        self.screen.blit(surface, position)

    def draw(self, manager: UIManager) -> None:
        self.screen.fill((20, 20, 30))

        for identity in manager.navigation.page_order:
            page = manager.pages.get(identity)
            view = page.current_view
            if page.active and isinstance(view, LabelView):
                self._draw_element(view.text(), view.alpha, (40, 40), (230, 230, 230))

        # Widgets fading out are still active
        y = 120
        for identity in manager.overlay.z_order:
            widget = manager.widgets.get(identity)
            view = widget.current_view
            if widget.active and isinstance(view, LabelView):
                self._draw_element(view.text(), view.alpha, (60, y), (120, 200, 255))
                y += 40

        status = f"view: {manager.view_type.value}  history: {manager.navigation.history}"
        self._draw_element(status, 1.0, (40, self.screen.get_height() - 50), (150, 150, 150))


KEY_ACTIONS: Dict[int, Callable[[UIManager], Optional[object]]] = {
    pygame.K_s: lambda m: m.open_page("settings", m.fade()),
    pygame.K_a: lambda m: m.open_page("about", m.fade()),
    pygame.K_m: lambda m: m.open_page("main_menu", m.fade()),
    pygame.K_BACKSPACE: lambda m: m.navigation.back(m.fade()),
    pygame.K_f: lambda m: m.navigation.forward(m.fade()),
    pygame.K_t: lambda m: m.overlay.toggle("toast", m.fade(), _set_toast("Hello")),
    pygame.K_d: lambda m: m.overlay.toggle("debug"),
    pygame.K_h: lambda m: m.overlay.hide_all(m.fade()),
}

BUTTON_ACTIONS: Dict[int, Callable[[UIManager], Optional[object]]] = {
    0: lambda m: m.open_page("settings", m.fade()),
    1: lambda m: m.navigation.back(m.fade()),
    2: lambda m: m.overlay.toggle("toast", m.fade(), _set_toast("Pad")),
}


def dispatch_action(manager: UIManager, event: pygame.event.Event) -> None:
    """Map demo keys and gamepad buttons to UI actions."""
    action = None
    if event.type == pygame.KEYDOWN:
        action = KEY_ACTIONS.get(event.key)
    elif event.type == pygame.JOYBUTTONDOWN:
        action = BUTTON_ACTIONS.get(event.button)
    if action is not None:
        action(manager)
