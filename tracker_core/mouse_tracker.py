"""
Mouse Tracker Module
Cross-platform mouse position polling using pynput
"""

from typing import Any, Callable, Optional, Tuple

from .errors import Lookup, PointerUnavailable


def _pynput_controller() -> Any:
    # Imported on first use: pynput picks its platform backend at import
    # time and fails without a display server.
    from pynput import mouse
    return mouse.Controller()


class MouseTracker:
    """
    Polls the system mouse position.

    The position is read synchronously on every call, on the caller's thread,
    through a pynput mouse controller created when the tracker starts.
    """

    def __init__(self, controller_factory: Optional[Callable[[], Any]] = None):
        """
        Initialize mouse tracker.

        Args:
            controller_factory: Returns an object with a ``position`` (x, y)
                attribute; defaults to ``pynput.mouse.Controller``
        """
        self._controller_factory = controller_factory or _pynput_controller
        self._controller: Optional[Any] = None
        self._start_error: Optional[str] = None
        self._position: Tuple[int, int] = (0, 0)

    @property
    def start_error(self) -> Optional[str]:
        """Why the pointer backend could not be created, if it failed."""
        return self._start_error

    def start(self) -> bool:
        """
        Create the pointer backend.

        Returns:
            True if the mouse position can be read
        """
        if self._controller is not None:
            return True

        try:
            self._controller = self._controller_factory()
        except Exception as e:
            self._start_error = f"{type(e).__name__}: {e}"
            return False

        self._start_error = None
        return True

    def stop(self):
        """Drop the pointer backend."""
        self._controller = None

    def is_running(self) -> bool:
        """Check if tracker is running."""
        return self._controller is not None

    def poll(self) -> Lookup[Tuple[int, int]]:
        """
        Poll for current mouse position.

        Returns:
            Lookup of (x, y) screen coordinates. On macOS, these are in
            points (logical pixels).
        """
        if self._controller is None and not self.start():
            return Lookup.failure(PointerUnavailable(self._start_error or "no pointer backend"))

        try:
            x, y = self._controller.position
        except Exception as e:
            return Lookup.failure(PointerUnavailable(f"{type(e).__name__}: {e}"))

        self._position = (int(x), int(y))
        return Lookup.success(self._position)

    def get_mouse_x(self) -> Lookup[float]:
        """Poll the current mouse X coordinate."""
        pos = self.poll()
        if not pos.ok:
            return Lookup.failure(pos.error)
        return Lookup.success(float(pos.value[0]))

    @property
    def last_position(self) -> Tuple[int, int]:
        """Most recent successfully polled position."""
        return self._position
