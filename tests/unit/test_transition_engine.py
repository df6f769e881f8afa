"""
Unit tests for the transition engine.

Covers instant and timed toggles, tick sampling, cancellation by
replacement and the one-tick delay for newly requested transitions.
"""

import unittest
from unittest.mock import Mock

from pyjoyui.core.exceptions import ErrorHandler, TransitionError
from pyjoyui.ui.elements import Page, UIElement, UIView, ViewType, Widget
from pyjoyui.ui.transition_engine import TransitionEngine
from pyjoyui.ui.transitions import FadeTransition


class ToggleRecorder:
    """Counts toggled callbacks of an element."""

    def __init__(self, element: UIElement):
        self.toggled = 0
        self.on = 0
        self.off = 0
        element.connect(UIElement.TOGGLED, self._toggled)
        element.connect(UIElement.TOGGLED_ON, self._on)
        element.connect(UIElement.TOGGLED_OFF, self._off)

    def _toggled(self, element):
        self.toggled += 1

    def _on(self, element):
        self.on += 1

    def _off(self, element):
        self.off += 1


def hidden_page(identity: str = "page") -> Page:
    page = Page(identity, views=[UIView(ViewType.KEYBOARD), UIView(ViewType.GAMEPAD)])
    page.hide_away()
    return page


class TestFadeTransition(unittest.TestCase):
    """Test transition descriptions."""

    def test_synchronous_when_durations_match(self):
        transition = FadeTransition(0.5)
        self.assertTrue(transition.is_synchronous)
        self.assertEqual(transition.duration_for(True), 0.5)
        self.assertEqual(transition.duration_for(False), 0.5)

    def test_previous_duration_used_when_hiding(self):
        transition = FadeTransition(1.0, previous_duration=0.25)
        self.assertFalse(transition.is_synchronous)
        self.assertEqual(transition.duration_for(True), 1.0)
        self.assertEqual(transition.duration_for(False), 0.25)

    def test_reset_transition(self):
        transition = FadeTransition.reset()
        self.assertTrue(transition.should_reset)
        self.assertEqual(transition.duration, 0.0)

    def test_fade_interpolates_opacity(self):
        page = hidden_page()
        transition = FadeTransition(1.0)
        transition.update(page, 0.0, 1.0, 0.75)
        self.assertAlmostEqual(page.opacity, 0.75)


class TestTransitionEngine(unittest.TestCase):
    """Test the per-element transition scheduler."""

    def setUp(self):
        self.engine = TransitionEngine()
        self.page = hidden_page()
        self.recorder = ToggleRecorder(self.page)

    def test_zero_duration_show_is_synchronous(self):
        changed = self.engine.toggle(self.page, True, ViewType.KEYBOARD, FadeTransition(0.0))

        self.assertTrue(changed)
        self.assertTrue(self.page.is_on)
        self.assertTrue(self.page.active)
        self.assertEqual(self.page.opacity, 1.0)
        self.assertFalse(self.engine.is_animating(self.page))
        self.assertEqual(self.recorder.toggled, 1)
        self.assertEqual(self.recorder.on, 1)

    def test_no_transition_is_synchronous(self):
        self.engine.toggle(self.page, True, ViewType.KEYBOARD)
        self.engine.toggle(self.page, False, ViewType.KEYBOARD)

        self.assertFalse(self.page.is_on)
        self.assertFalse(self.page.active)
        self.assertEqual(self.page.opacity, 0.0)
        self.assertEqual(self.recorder.off, 1)

    def test_timed_show_samples_each_tick(self):
        self.engine.toggle(self.page, True, ViewType.KEYBOARD, FadeTransition(1.0))

        # Flag flips immediately, opacity only changes on ticks
        self.assertTrue(self.page.is_on)
        self.assertTrue(self.page.active)
        self.assertEqual(self.page.opacity, 0.0)
        self.assertTrue(self.engine.is_animating(self.page))

        self.engine.tick(0.25)
        self.assertAlmostEqual(self.page.opacity, 0.25)
        self.assertEqual(self.recorder.toggled, 0)

        for _ in range(3):
            self.engine.tick(0.25)

        self.assertEqual(self.page.opacity, 1.0)
        self.assertFalse(self.engine.is_animating(self.page))
        self.assertEqual(self.recorder.toggled, 1)
        self.assertEqual(self.recorder.on, 1)

    def test_progress_is_clamped(self):
        self.engine.toggle(self.page, True, ViewType.KEYBOARD, FadeTransition(0.5))
        self.engine.tick(10.0)

        self.assertEqual(self.page.opacity, 1.0)
        self.assertEqual(self.engine.active_count, 0)

    def test_hide_uses_previous_duration(self):
        transition = FadeTransition(1.0, previous_duration=0.5)
        self.engine.toggle(self.page, True, ViewType.KEYBOARD)
        self.engine.toggle(self.page, False, ViewType.KEYBOARD, transition)

        self.engine.tick(0.25)
        self.assertAlmostEqual(self.page.opacity, 0.5)
        # Still shown while fading out
        self.assertTrue(self.page.active)

        self.engine.tick(0.25)
        self.assertEqual(self.page.opacity, 0.0)
        self.assertFalse(self.page.active)
        self.assertEqual(self.recorder.off, 1)

    def test_replacing_transition_does_not_complete_previous(self):
        self.engine.toggle(self.page, True, ViewType.KEYBOARD, FadeTransition(1.0))
        self.engine.tick(0.5)

        self.engine.toggle(self.page, False, ViewType.KEYBOARD, FadeTransition(1.0))
        self.assertEqual(self.engine.active_count, 1)

        # Fade out starts from the interrupted opacity
        self.engine.tick(0.5)
        self.assertAlmostEqual(self.page.opacity, 0.25)

        self.engine.tick(0.5)
        self.assertEqual(self.page.opacity, 0.0)
        self.assertEqual(self.recorder.on, 0)
        self.assertEqual(self.recorder.off, 1)
        self.assertEqual(self.recorder.toggled, 1)

    def test_same_state_only_changes_view(self):
        self.engine.toggle(self.page, True, ViewType.KEYBOARD)
        view_changed = Mock()
        self.page.connect(UIElement.VIEW_CHANGED, view_changed)

        changed = self.engine.toggle(self.page, True, ViewType.GAMEPAD, FadeTransition(1.0))

        self.assertFalse(changed)
        self.assertFalse(self.engine.is_animating(self.page))
        self.assertEqual(self.page.view_type, ViewType.GAMEPAD)
        view_changed.assert_called_once()
        self.assertEqual(self.recorder.toggled, 1)

    def test_same_state_and_view_is_noop(self):
        self.engine.toggle(self.page, True, ViewType.KEYBOARD)
        view_changed = Mock()
        self.page.connect(UIElement.VIEW_CHANGED, view_changed)

        self.assertFalse(self.engine.toggle(self.page, True, ViewType.KEYBOARD))
        view_changed.assert_not_called()

    def test_force_replays_show(self):
        self.engine.toggle(self.page, True, ViewType.KEYBOARD)
        self.engine.toggle(self.page, True, ViewType.KEYBOARD, FadeTransition.reset(), force=True)

        self.assertEqual(self.recorder.on, 2)

    def test_toggle_activates_matching_view(self):
        self.engine.toggle(self.page, True, ViewType.GAMEPAD)

        self.assertTrue(self.page.get_view(ViewType.GAMEPAD).active)
        self.assertFalse(self.page.get_view(ViewType.KEYBOARD).active)

    def test_run_replaces_and_cancel(self):
        first_complete = Mock()
        self.engine.run(self.page, 1.0, 0.0, 1.0, Mock(), first_complete)
        self.engine.run(self.page, 1.0, 0.0, 1.0, Mock())

        self.assertEqual(self.engine.active_count, 1)
        self.assertTrue(self.engine.cancel(self.page))
        self.assertFalse(self.engine.cancel(self.page))

        self.engine.tick(2.0)
        first_complete.assert_not_called()

    def test_request_during_tick_waits_for_next_tick(self):
        widget = Widget("late")
        late_update = Mock()

        def start_late():
            self.engine.run(widget, 1.0, 0.0, 1.0, late_update)

        self.engine.run(self.page, 0.1, 0.0, 1.0, Mock(), start_late)

        self.engine.tick(0.1)
        self.assertTrue(self.engine.is_animating(widget))
        late_update.assert_not_called()

        self.engine.tick(0.5)
        late_update.assert_called_once_with(0.0, 1.0, 0.5)

    def test_frame_counter(self):
        self.assertEqual(self.engine.frame, 0)
        self.engine.tick(0.016)
        self.engine.tick(0.016)
        self.assertEqual(self.engine.frame, 2)


class TestDefaultDuration(unittest.TestCase):
    """Test transitions that leave their duration to the engine."""

    def test_fade_without_duration_uses_engine_default(self):
        transition = FadeTransition()
        self.assertTrue(transition.is_synchronous)
        self.assertEqual(transition.duration_for(True, 0.5), 0.5)

        engine = TransitionEngine(default_duration=0.5)
        page = hidden_page()
        engine.toggle(page, True, ViewType.KEYBOARD, transition)

        engine.tick(0.25)
        self.assertAlmostEqual(page.opacity, 0.5)

    def test_zero_default_duration_is_synchronous(self):
        engine = TransitionEngine(default_duration=0.0)
        page = hidden_page()

        engine.toggle(page, True, ViewType.KEYBOARD, FadeTransition())

        self.assertEqual(page.opacity, 1.0)
        self.assertFalse(engine.is_animating(page))

    def test_only_hide_duration_set(self):
        transition = FadeTransition(None, previous_duration=0.25)

        self.assertFalse(transition.is_synchronous)
        self.assertEqual(transition.duration_for(True, 2.0), 2.0)
        self.assertEqual(transition.duration_for(False, 2.0), 0.25)


class TestFailingTransitions(unittest.TestCase):
    """Test that a failing transition is reported and released."""

    def setUp(self):
        self.handler = ErrorHandler()
        self.reported = Mock()
        self.handler.register_error_callback(self.reported)
        self.engine = TransitionEngine(error_handler=self.handler)

    def test_failing_update_is_released(self):
        broken = hidden_page("broken")
        healthy = hidden_page("healthy")
        healthy_update = Mock()
        self.engine.run(broken, 1.0, 0.0, 1.0, Mock(side_effect=RuntimeError("boom")))
        self.engine.run(healthy, 1.0, 0.0, 1.0, healthy_update)

        self.engine.tick(0.5)

        healthy_update.assert_called_once_with(0.0, 1.0, 0.5)
        self.assertFalse(self.engine.is_animating(broken))
        self.assertTrue(self.engine.is_animating(healthy))

        error = self.reported.call_args[0][0]
        self.assertIsInstance(error, TransitionError)
        self.assertEqual(error.context["identity"], "broken")
        self.assertIsInstance(error.cause, RuntimeError)

        # Not reported again on later ticks
        self.engine.tick(0.5)
        self.reported.assert_called_once()

    def test_failing_completion_is_reported(self):
        page = hidden_page()
        self.engine.run(page, 0.5, 0.0, 1.0, Mock(), Mock(side_effect=RuntimeError("boom")))

        self.engine.tick(0.5)

        self.assertFalse(self.engine.is_animating(page))
        self.assertIsInstance(self.reported.call_args[0][0], TransitionError)

    def test_strict_handler_raises(self):
        engine = TransitionEngine(error_handler=ErrorHandler(strict=True))
        page = hidden_page()
        engine.run(page, 1.0, 0.0, 1.0, Mock(side_effect=RuntimeError("boom")))

        with self.assertRaises(TransitionError):
            engine.tick(0.5)
        self.assertFalse(engine.is_animating(page))


if __name__ == '__main__':
    unittest.main()
