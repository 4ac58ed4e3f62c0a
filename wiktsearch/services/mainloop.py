"""
GLib main loop scheduler.

Timers run on the GLib main loop. Blocking work (HTTP requests) runs on
a daemon thread and its outcome is handed back to the main loop with
GLib.idle_add, so everything touching shared state stays single-threaded.
"""

import threading
from typing import Any, Callable, Optional

from gi.repository import GLib

# on_done(result, error): exactly one of the two is set
DoneCallback = Callable[[Any, Optional[BaseException]], None]


class GLibScheduler:
    """Timer and worker scheduling on the default GLib main context."""

    def timeout_add(self, delay_ms: int, callback: Callable[[], Any]) -> int:
        """Run callback once after delay_ms. Returns the GLib source id."""
        return GLib.timeout_add(delay_ms, _run_once, callback)

    def source_remove(self, source_id: int) -> None:
        GLib.source_remove(source_id)

    def run_in_thread(self, func: Callable[[], Any], on_done: DoneCallback) -> None:
        """
        Run func on a daemon thread, then on_done on the main loop.

        Args:
            func: Blocking callable producing the result
            on_done: Receives (result, None) or (None, error)
        """
        def worker():
            try:
                result = func()
            except Exception as e:
                GLib.idle_add(_deliver, on_done, None, e)
                return
            GLib.idle_add(_deliver, on_done, result, None)

        threading.Thread(target=worker, daemon=True).start()


def _run_once(callback):
    """GLib.timeout_add wrapper that never repeats."""
    callback()
    return False


def _deliver(on_done, result, error):
    """GLib.idle_add callback handing a worker outcome to the main loop."""
    on_done(result, error)
    return False
