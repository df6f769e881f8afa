"""
Input-modality driven presentation switching.

Each input sample is classified by the device that produced it. When the
device class changes, the shared view type is updated and the current page
and every visible widget swap to the matching view.
"""

from typing import TYPE_CHECKING, Optional

import pygame

from .events import InputEvent, from_pygame_event
from ..ui.elements import ViewType
from ..core.logging import get_logger

if TYPE_CHECKING:
    from ..ui.manager import UIManager


class PresentationAdapter:
    """
    Classifies raw input and broadcasts view-type changes.

    Gamepad buttons and hats always count as gamepad use; gamepad axes only
    when their magnitude reaches ``analog_threshold``, so resting sticks do not
    steal the presentation from the keyboard.
    """

    def __init__(self,
                 manager: "UIManager",
                 analog_threshold: Optional[float] = None,
                 touch_switches_view: Optional[bool] = None):
        """
        Args:
            manager: UI manager holding the shared view type
            analog_threshold: Minimum axis magnitude, defaults to the setting
            touch_switches_view: Switch to the mobile view on touch, defaults to the setting
        """
        self.logger = get_logger("presentation")
        self.manager = manager
        settings = manager.settings
        self.analog_threshold = (settings.analog_threshold if analog_threshold is None
                                 else analog_threshold)
        self.touch_switches_view = (settings.touch_switches_view if touch_switches_view is None
                                    else touch_switches_view)

    def classify(self, event: InputEvent) -> Optional[ViewType]:
        """
        Return the view type matching the device of an input sample.

        Returns:
            The view type, or None if the sample should not affect presentation
        """
        if event.is_gamepad:
            if event.axis_value is not None and abs(event.axis_value) < self.analog_threshold:
                return None
            return ViewType.GAMEPAD
        if event.is_keyboard_or_mouse:
            return ViewType.KEYBOARD
        if event.is_touch and self.touch_switches_view:
            return ViewType.MOBILE
        return None

    def handle_input(self, event: InputEvent) -> Optional[ViewType]:
        """
        Classify an input sample, switch views if needed and forward it.

        Returns:
            The classified view type, or None if the sample was ignored
        """
        view_type = self.classify(event)
        if view_type is not None:
            self.update_all_views(view_type)

        page = self.manager.navigation.current_page
        if page is not None:
            page.handle_input(event)
        for widget in self.manager.overlay.visible_widgets():
            widget.handle_input(event)

        return view_type

    def handle_pygame_event(self, event: pygame.event.Event) -> Optional[ViewType]:
        """Convert and handle a pygame event; non-input events are ignored."""
        input_event = from_pygame_event(event)
        if input_event is None:
            return None
        return self.handle_input(input_event)

    def update_all_views(self, view_type: ViewType) -> bool:
        """
        Set the shared view type and push it to the current page and visible widgets.

        Returns:
            True if the view type changed
        """
        if self.manager.view_type == view_type:
            return False

        previous = self.manager.view_type
        self.manager.view_type = view_type

        page = self.manager.navigation.current_page
        if page is not None:
            page.change_view(view_type)
        for widget in self.manager.overlay.visible_widgets():
            widget.change_view(view_type)

        self.logger.info("View type changed", extra={
            "previous": previous.value,
            "view_type": view_type.value
        })
        return True
