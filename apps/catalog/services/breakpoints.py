"""
Viewport breakpoint tracking for storefront clients.

A `BreakpointWatcher` is created by whoever owns the viewport (there is no
shared instance) and is fed resize events, either by calling
`handle_resize()` directly or by connecting it to a resize signal.
"""

import logging
from typing import Callable, Optional

from apps.catalog.conf import get_setting


logger = logging.getLogger(__name__)


def breakpoint_for_width(width, breakpoints=None, default=None):
    """Name of the widest breakpoint whose minimum width fits."""
    if breakpoints is None:
        breakpoints = get_setting('BREAKPOINTS')
    if default is None:
        default = get_setting('DEFAULT_BREAKPOINT')

    for name, min_width in sorted(breakpoints, key=lambda b: b[1], reverse=True):
        if width >= min_width:
            return name
    return default


class BreakpointWatcher:
    """
    Publishes breakpoint transitions.

    Listeners receive `(old_breakpoint, breakpoint)` once when the watcher
    starts and once per transition afterwards. Functions added with
    `add_function` run on transitions only.
    """

    def __init__(self, width_source: Callable[[], int], breakpoints=None, default=None):
        self.width_source = width_source
        self.breakpoints = breakpoints
        self.default = default
        self.old_breakpoint: Optional[str] = None
        self._listeners = []
        self._functions = []
        self._started = False

    def subscribe(self, listener):
        self._listeners.append(listener)
        return listener

    def unsubscribe(self, listener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def add_function(self, function):
        self._functions.append(function)
        return function

    def get_current_breakpoint(self, width=None):
        if width is None:
            width = self.width_source()
        return breakpoint_for_width(width, self.breakpoints, self.default)

    def start(self):
        if self._started:
            return self.old_breakpoint

        current = self.get_current_breakpoint()
        self._started = True
        self._publish(current)
        self.old_breakpoint = current
        return current

    def handle_resize(self, width=None):
        """Feed one resize event; returns True if the breakpoint changed."""
        if not self._started:
            self.start()
            return False

        current = self.get_current_breakpoint(width)
        if current == self.old_breakpoint:
            return False

        for function in self._functions:
            function()
        self._publish(current)
        self.old_breakpoint = current
        return True

    def connect(self, resize_signal):
        """Listen to a Django signal sent with a `width` keyword on resize."""
        resize_signal.connect(self._on_resize, weak=False)

    def disconnect(self, resize_signal):
        resize_signal.disconnect(self._on_resize)

    def _on_resize(self, sender=None, width=None, **kwargs):
        self.handle_resize(width)

    def _publish(self, breakpoint):
        logger.debug("Breakpoint %s -> %s", self.old_breakpoint, breakpoint)
        for listener in list(self._listeners):
            listener(self.old_breakpoint, breakpoint)
