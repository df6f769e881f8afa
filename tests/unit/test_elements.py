"""
Unit tests for the UI element model.
"""

import unittest
from unittest.mock import Mock

from pyjoyui.ui.elements import ElementKind, Page, UIData, UIElement, UIView, ViewType, Widget


class TrackingView(UIView):
    def __init__(self, view_type):
        super().__init__(view_type)
        self.calls = []

    def on_enter(self):
        self.calls.append("enter")

    def on_enable(self):
        self.calls.append("enable")

    def on_disable(self):
        self.calls.append("disable")

    def on_process(self, dt):
        self.calls.append("process")


class InventoryData(UIData):
    KEY = "inventory"


class TestViewType(unittest.TestCase):

    def test_from_name(self):
        self.assertEqual(ViewType.from_name("Gamepad"), ViewType.GAMEPAD)
        with self.assertRaises(ValueError):
            ViewType.from_name("joystick")


class TestUIElement(unittest.TestCase):

    def setUp(self):
        self.keyboard = TrackingView(ViewType.KEYBOARD)
        self.gamepad = TrackingView(ViewType.GAMEPAD)
        self.page = Page("menu", views=[self.keyboard, self.gamepad])

    def test_defaults(self):
        self.assertEqual(self.page.kind, ElementKind.PAGE)
        self.assertFalse(self.page.is_on)
        self.assertIsInstance(self.page.data, UIData)
        self.assertIs(self.keyboard.parent, self.page)
        self.assertEqual(self.page.views, [self.keyboard, self.gamepad])

    def test_identity_required(self):
        with self.assertRaises(ValueError):
            Page()

    def test_class_identity(self):
        class MainMenu(Page):
            IDENTITY = "main_menu"

        self.assertEqual(MainMenu().identity, "main_menu")

    def test_views_share_element_data(self):
        data = InventoryData()
        page = Page("inventory", data=data, views=[UIView(ViewType.KEYBOARD)])

        self.assertIs(page.get_view(ViewType.KEYBOARD).data, data)
        self.assertIs(page.data_as(InventoryData), data)
        self.assertIsNone(self.page.data_as(InventoryData))

    def test_hide_away(self):
        self.page.is_on = True
        self.page.hide_away()

        self.assertFalse(self.page.is_on)
        self.assertFalse(self.page.active)
        self.assertEqual(self.page.opacity, 0.0)

    def test_awaken_selects_view(self):
        self.page.awaken(ViewType.GAMEPAD)

        self.assertEqual(self.keyboard.calls, ["enter"])
        self.assertFalse(self.keyboard.active)
        self.assertTrue(self.gamepad.active)
        self.assertEqual(self.page.view_type, ViewType.GAMEPAD)

    def test_change_view(self):
        self.page.awaken(ViewType.KEYBOARD)
        view_changed = Mock()
        self.page.connect(UIElement.VIEW_CHANGED, view_changed)

        self.page.change_view(ViewType.GAMEPAD)

        view_changed.assert_called_once_with(self.page, self.keyboard, self.gamepad)
        self.assertEqual(self.keyboard.calls[-1], "disable")
        self.assertFalse(self.keyboard.active)
        self.assertEqual(self.gamepad.calls[-1], "enable")
        self.assertTrue(self.gamepad.active)

    def test_change_view_to_missing_view(self):
        self.page.change_view(ViewType.MOBILE)

        self.assertEqual(self.page.view_type, ViewType.MOBILE)
        self.assertIsNone(self.page.current_view)

    def test_process_only_when_on(self):
        self.page.process(0.016)
        self.assertNotIn("process", self.keyboard.calls)

        self.page.is_on = True
        self.page.process(0.016)
        self.assertIn("process", self.keyboard.calls)

    def test_always_update(self):
        page = Page("clock", views=[self.keyboard], always_update=True)
        page.process(0.016)
        self.assertIn("process", self.keyboard.calls)

    def test_set_alpha_clamped(self):
        self.page.set_alpha(1.5)
        self.assertEqual(self.page.opacity, 1.0)
        self.page.set_alpha(-1.0)
        self.assertEqual(self.page.opacity, 0.0)

    def test_alpha_forwarded_to_views(self):
        self.page.set_alpha(0.4)

        self.assertAlmostEqual(self.keyboard.alpha, 0.4)
        self.assertAlmostEqual(self.gamepad.alpha, 0.4)

        self.page.hide_away()
        self.assertEqual(self.keyboard.alpha, 0.0)

    def test_added_view_takes_element_alpha(self):
        self.page.set_alpha(0.25)
        mobile = UIView(ViewType.MOBILE)

        self.page.add_view(mobile)

        self.assertAlmostEqual(mobile.alpha, 0.25)

    def test_callbacks(self):
        on = Mock()
        self.page.connect(UIElement.TOGGLED_ON, on)
        self.page.is_on = True

        self.page.emit_toggled()
        on.assert_called_once_with(self.page)

        self.page.disconnect(UIElement.TOGGLED_ON, on)
        self.page.emit_toggled()
        on.assert_called_once()

    def test_unknown_event(self):
        with self.assertRaises(ValueError):
            self.page.connect("pressed", Mock())

    def test_failing_callback_does_not_stop_others(self):
        second = Mock()
        self.page.connect(UIElement.TOGGLED, Mock(side_effect=RuntimeError("boom")))
        self.page.connect(UIElement.TOGGLED, second)

        self.page.emit_toggled()

        second.assert_called_once_with(self.page)


class TestWidget(unittest.TestCase):

    def test_startup_state(self):
        hidden = Widget("w", priority=3)
        shown = Widget("v", show_on_startup=True)
        hidden.hide_away()
        shown.hide_away()

        self.assertEqual(hidden.kind, ElementKind.WIDGET)
        self.assertEqual(hidden.priority, 3)
        self.assertFalse(hidden.is_on)
        self.assertFalse(hidden.active)
        self.assertEqual(hidden.opacity, 0.0)

        self.assertTrue(shown.is_on)
        self.assertTrue(shown.active)
        self.assertEqual(shown.opacity, 1.0)


if __name__ == '__main__':
    unittest.main()
