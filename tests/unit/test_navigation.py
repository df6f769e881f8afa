"""
Unit tests for page navigation and history.
"""

import unittest
from unittest.mock import Mock

from pyjoyui.core.exceptions import EmptyHistoryError, ErrorHandler
from pyjoyui.ui.elements import ElementKind, Page, UIData, UIElement, UIView, ViewType
from pyjoyui.ui.navigation import NavigationController
from pyjoyui.ui.registry import Registry
from pyjoyui.ui.transition_engine import TransitionEngine
from pyjoyui.ui.transitions import FadeTransition


class TitleData(UIData):
    KEY = "title"

    def __init__(self):
        self.title = ""


def make_page(identity: str) -> Page:
    return Page(identity, views=[UIView(ViewType.KEYBOARD), UIView(ViewType.GAMEPAD)])


class NavigationTestCase(unittest.TestCase):
    """Base case with three registered pages."""

    def setUp(self):
        self.errors = []
        self.error_handler = ErrorHandler()
        self.error_handler.register_error_callback(
            lambda error, context: self.errors.append(error)
        )
        self.view_type = ViewType.KEYBOARD
        self.engine = TransitionEngine()
        self.registry = Registry(ElementKind.PAGE, error_handler=self.error_handler)
        self.navigation = NavigationController(
            self.registry, self.engine, lambda: self.view_type, self.error_handler
        )

        self.pages = {identity: make_page(identity) for identity in ("a", "b", "c")}
        for page in self.pages.values():
            self.registry.register(page)

    def current(self):
        page = self.navigation.current_page
        return page.identity if page is not None else None


class TestRegistration(NavigationTestCase):

    def test_registered_pages_start_hidden(self):
        for page in self.pages.values():
            self.assertFalse(page.is_on)
            self.assertFalse(page.active)
            self.assertEqual(page.opacity, 0.0)

        self.assertIsNone(self.navigation.current_page)
        self.assertEqual(self.navigation.page_order, ["a", "b", "c"])


class TestOpenClose(NavigationTestCase):

    def test_open_shows_page(self):
        page = self.navigation.open("a")

        self.assertIs(page, self.pages["a"])
        self.assertEqual(self.current(), "a")
        self.assertTrue(page.is_on)
        self.assertTrue(page.active)
        self.assertEqual(page.opacity, 1.0)
        self.assertEqual(self.navigation.history, [])

    def test_open_hides_previous_page(self):
        self.navigation.open("a")
        self.navigation.open("b")

        self.assertFalse(self.pages["a"].is_on)
        self.assertFalse(self.pages["a"].active)
        self.assertEqual(self.navigation.history, ["a"])
        self.assertIs(self.navigation.previous_page, self.pages["a"])

    def test_open_unknown_page(self):
        self.navigation.open("a")

        self.assertIsNone(self.navigation.open("missing"))
        self.assertEqual(self.current(), "a")
        self.assertEqual(self.navigation.history, [])
        self.assertEqual(len(self.errors), 1)

    def test_update_data_runs_before_show(self):
        page = Page("titled", data=TitleData())
        self.registry.register(page)
        seen = []

        def update(data):
            seen.append(page.is_on)
            data.title = "Hello"

        self.navigation.open("titled", update_data=update)

        self.assertEqual(seen, [False])
        self.assertEqual(page.data.title, "Hello")

    def test_reopen_current_page_changes_view_only(self):
        self.navigation.open("a")
        page = self.pages["a"]
        toggled = Mock()
        view_changed = Mock()
        page.connect(UIElement.TOGGLED, toggled)
        page.connect(UIElement.VIEW_CHANGED, view_changed)

        result = self.navigation.open("a", FadeTransition(1.0), view_type=ViewType.GAMEPAD)

        self.assertIs(result, page)
        self.assertEqual(page.view_type, ViewType.GAMEPAD)
        self.assertFalse(self.engine.is_animating(page))
        toggled.assert_not_called()
        view_changed.assert_called_once()
        self.assertEqual(self.navigation.history, [])

    def test_close(self):
        self.navigation.open("a")

        closed = self.navigation.close()

        self.assertIs(closed, self.pages["a"])
        self.assertIsNone(self.navigation.current_page)
        self.assertFalse(self.pages["a"].is_on)
        self.assertEqual(self.navigation.history, ["a"])

    def test_close_without_current_page(self):
        self.assertIsNone(self.navigation.close())
        self.assertEqual(self.navigation.history, [])

    def test_close_if(self):
        self.navigation.open("a")

        self.assertIsNone(self.navigation.close_if("b"))
        self.assertEqual(self.current(), "a")

        self.assertIs(self.navigation.close_if("a"), self.pages["a"])
        self.assertIsNone(self.navigation.current_page)

    def test_transition_brings_page_to_front(self):
        self.navigation.open("a", FadeTransition(0.0))
        self.assertEqual(self.navigation.page_order, ["b", "c", "a"])

        self.navigation.open("b", FadeTransition(0.0, bring_to_front=False))
        self.assertEqual(self.navigation.page_order, ["b", "c", "a"])

    def test_open_and_close_mid_transition(self):
        page = self.pages["a"]
        toggled_on = Mock()
        toggled_off = Mock()
        page.connect(UIElement.TOGGLED_ON, toggled_on)
        page.connect(UIElement.TOGGLED_OFF, toggled_off)

        self.navigation.open("a", FadeTransition(1.0))
        self.engine.tick(0.5)
        self.navigation.close(FadeTransition(1.0))

        for _ in range(4):
            self.engine.tick(0.5)

        toggled_on.assert_not_called()
        toggled_off.assert_called_once_with(page)
        self.assertEqual(page.opacity, 0.0)
        self.assertFalse(page.active)


class TestHistory(NavigationTestCase):

    def test_back_and_forward(self):
        self.navigation.open("a")
        self.navigation.open("b")

        self.assertIs(self.navigation.back(), self.pages["a"])
        self.assertEqual(self.current(), "a")
        self.assertTrue(self.pages["a"].is_on)
        self.assertFalse(self.pages["b"].is_on)
        self.assertIs(self.navigation.next_page, self.pages["b"])

        self.assertIs(self.navigation.forward(), self.pages["b"])
        self.assertEqual(self.current(), "b")
        self.assertEqual(self.navigation.history, ["a"])
        self.assertEqual(self.navigation.future, [])

    def test_history_and_future_sequence(self):
        self.navigation.open("a")

        self.navigation.open("b")
        self.assertEqual(self.navigation.history, ["a"])
        self.assertEqual(self.navigation.future, [])

        self.navigation.open("a")
        self.assertEqual(self.navigation.history, ["a", "b"])
        self.assertEqual(self.navigation.future, [])

        self.navigation.back()
        self.assertEqual(self.current(), "b")
        self.assertEqual(self.navigation.history, ["a"])
        self.assertEqual(self.navigation.future, ["a"])

    def test_back_on_empty_history(self):
        self.assertIsNone(self.navigation.back())
        self.assertIsInstance(self.errors[0], EmptyHistoryError)

        self.navigation.open("a")
        self.assertIsNone(self.navigation.back())
        self.assertEqual(self.current(), "a")

    def test_forward_on_empty_future(self):
        self.navigation.open("a")

        self.assertIsNone(self.navigation.forward())
        self.assertIsInstance(self.errors[0], EmptyHistoryError)
        self.assertEqual(self.errors[0].context["direction"], "forward")

    def test_open_clears_future(self):
        self.navigation.open("a")
        self.navigation.open("b")
        self.navigation.back()
        self.assertEqual(self.navigation.future, ["b"])

        self.navigation.open("c")

        self.assertEqual(self.navigation.future, [])
        self.assertEqual(self.navigation.history, ["a"])

    def test_close_clears_future(self):
        self.navigation.open("a")
        self.navigation.open("b")
        self.navigation.back()

        self.navigation.close()

        self.assertEqual(self.navigation.future, [])
        self.assertEqual(self.navigation.history, ["a"])

    def test_back_after_close(self):
        self.navigation.open("a")
        self.navigation.close()

        self.assertIs(self.navigation.back(), self.pages["a"])
        self.assertEqual(self.navigation.future, [])
        self.assertEqual(self.navigation.history, [])

    def test_back_uses_shared_view_type(self):
        self.navigation.open("a")
        self.navigation.open("b")
        self.view_type = ViewType.GAMEPAD

        self.navigation.back()

        self.assertEqual(self.pages["a"].view_type, ViewType.GAMEPAD)


class TestViews(NavigationTestCase):

    def test_change_current_page_view(self):
        self.assertIsNone(self.navigation.change_current_page_view(ViewType.GAMEPAD))

        self.navigation.open("a")
        page = self.navigation.change_current_page_view(ViewType.GAMEPAD)

        self.assertIs(page, self.pages["a"])
        self.assertTrue(page.get_view(ViewType.GAMEPAD).active)
        self.assertFalse(page.get_view(ViewType.KEYBOARD).active)


if __name__ == '__main__':
    unittest.main()
