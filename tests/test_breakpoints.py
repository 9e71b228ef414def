"""Viewport breakpoint tracking."""

import pytest
from django.dispatch import Signal

from apps.catalog.services import BreakpointWatcher, breakpoint_for_width


class Viewport:
    def __init__(self, width):
        self.width = width

    def __call__(self):
        return self.width


@pytest.mark.parametrize('width, expected', [
    (1920, 'xl'),
    (1200, 'xl'),
    (1199, 'lg'),
    (800, 'md'),
    (576, 'sm'),
    (575, 'xs'),
    (0, 'xs'),
])
def test_breakpoint_for_width(width, expected):
    assert breakpoint_for_width(width) == expected


def test_custom_breakpoints():
    breakpoints = [('desktop', 1024), ('tablet', 600)]
    assert breakpoint_for_width(700, breakpoints, 'phone') == 'tablet'
    assert breakpoint_for_width(300, breakpoints, 'phone') == 'phone'


class TestBreakpointWatcher:
    def test_start_publishes_initial_breakpoint(self):
        watcher = BreakpointWatcher(Viewport(1000))
        events = []
        watcher.subscribe(lambda old, new: events.append((old, new)))

        assert watcher.start() == 'lg'
        assert events == [(None, 'lg')]
        assert watcher.old_breakpoint == 'lg'

    def test_start_is_idempotent(self):
        watcher = BreakpointWatcher(Viewport(1000))
        events = []
        watcher.subscribe(lambda old, new: events.append((old, new)))

        watcher.start()
        watcher.start()

        assert events == [(None, 'lg')]

    def test_publishes_transitions_only(self):
        viewport = Viewport(1000)
        watcher = BreakpointWatcher(viewport)
        events = []
        calls = []
        watcher.subscribe(lambda old, new: events.append((old, new)))
        watcher.add_function(lambda: calls.append(watcher.old_breakpoint))
        watcher.start()

        viewport.width = 1100
        assert watcher.handle_resize() is False

        viewport.width = 500
        assert watcher.handle_resize() is True

        assert events == [(None, 'lg'), ('lg', 'xs')]
        # functions run before the transition is recorded
        assert calls == ['lg']
        assert watcher.old_breakpoint == 'xs'

    def test_first_resize_starts_the_watcher(self):
        watcher = BreakpointWatcher(Viewport(700))
        events = []
        watcher.subscribe(lambda old, new: events.append((old, new)))

        assert watcher.handle_resize() is False
        assert events == [(None, 'sm')]

    def test_unsubscribe(self):
        viewport = Viewport(1000)
        watcher = BreakpointWatcher(viewport)
        events = []
        listener = watcher.subscribe(lambda old, new: events.append((old, new)))
        watcher.start()
        watcher.unsubscribe(listener)

        viewport.width = 300
        watcher.handle_resize()

        assert events == [(None, 'lg')]

    def test_resize_signal(self):
        resized = Signal()
        watcher = BreakpointWatcher(Viewport(1300))
        events = []
        watcher.subscribe(lambda old, new: events.append((old, new)))
        watcher.start()
        watcher.connect(resized)

        resized.send(sender=None, width=600)
        assert events[-1] == ('xl', 'sm')

        watcher.disconnect(resized)
        resized.send(sender=None, width=1300)
        assert watcher.old_breakpoint == 'sm'

    def test_uses_settings(self, settings):
        settings.CATALOG_VARIATION_SELECT = {
            'BREAKPOINTS': [('wide', 900)],
            'DEFAULT_BREAKPOINT': 'narrow',
        }
        watcher = BreakpointWatcher(Viewport(1000))
        assert watcher.get_current_breakpoint() == 'wide'
        assert watcher.get_current_breakpoint(400) == 'narrow'
