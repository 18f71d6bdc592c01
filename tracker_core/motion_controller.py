"""
Motion Controller Module
State machine deciding when and how the tracked layer moves
"""

from enum import Enum, auto
from typing import Callable, Optional

from .easing import get_easing, lerp, progress
from .errors import Lookup, TrackerError
from .position_mapper import CalibrationState, PositionMapper, calibrate
from .settings import TrackingConfig

# Smallest horizontal mouse movement, in screen pixels, treated as motion.
MOVEMENT_THRESHOLD = 2


class MotionState(Enum):
    """States of the motion state machine."""
    IDLE = auto()              # No pending target
    TRACKING_ACTIVE = auto()   # Cursor moving, target being updated
    WAITING_FOR_IDLE = auto()  # Cursor stopped, debouncing
    ANIMATING = auto()         # Layer easing toward target


def _noop_log(message: str) -> None:
    return None


class MotionController:
    """
    Decides each tick whether the layer waits, snaps or animates.

    Does not touch OBS directly. Layer geometry is read through ``layer``, an
    object providing ``get_layer_bounds()``, ``get_layer_position()`` and
    ``get_canvas_width()``, each returning a ``Lookup``. Positions to apply are
    returned from ``tick`` and passed to the ``on_position_changed`` callback.
    """

    def __init__(self, layer, config: Optional[TrackingConfig] = None,
                 mapper: Optional[PositionMapper] = None,
                 logger: Optional[Callable[[str], None]] = None):
        """
        Initialize motion controller.

        Args:
            layer: Collaborator giving access to the tracked layer
            config: Tracking settings snapshot
            mapper: Mouse to position mapper
            logger: Callable receiving diagnostic messages
        """
        self._layer = layer
        self._config = config or TrackingConfig()
        self._mapper = mapper or PositionMapper()
        self._log = logger or _noop_log
        self._state = MotionState.IDLE
        self._calibration: Optional[CalibrationState] = None
        self.enabled = True

        # Scheduler time, accumulated from tick deltas
        self._clock = 0.0
        self._since_sample = self._config.update_interval_seconds

        # Tracking
        self._last_mouse_x: Optional[float] = None
        self._last_moved_at = 0.0
        self._idle_since = 0.0
        self._target_x: Optional[float] = None

        # Animation
        self._start_x = 0.0
        self._elapsed = 0.0

        self._last_failure: Optional[str] = None
        self._on_position_changed: Optional[Callable[[float], None]] = None

    @property
    def state(self) -> MotionState:
        """Current motion state."""
        return self._state

    @property
    def config(self) -> TrackingConfig:
        return self._config

    @property
    def calibration(self) -> Optional[CalibrationState]:
        return self._calibration

    @property
    def target_x(self) -> Optional[float]:
        """Most recently computed target position."""
        return self._target_x

    @property
    def is_animating(self) -> bool:
        return self._state == MotionState.ANIMATING

    def set_callbacks(self, on_position_changed: Optional[Callable[[float], None]] = None):
        """
        Set callbacks for emitted positions.

        Args:
            on_position_changed: Called with each x position to apply
        """
        self._on_position_changed = on_position_changed

    def configure(self, config: TrackingConfig):
        """Replace the tracking settings and sample on the next tick that advances time."""
        self._config = config
        self._since_sample = config.update_interval_seconds

    def recalibrate(self, mouse_x: float) -> Lookup[CalibrationState]:
        """
        Capture a new calibration at the given mouse position.

        The layer must be resolvable. On failure the previous calibration
        is kept.
        """
        position = self._layer.get_layer_position()
        if not position.ok:
            self._report("Cannot calibrate", position.error)
            return Lookup.failure(position.error)

        canvas = self._layer.get_canvas_width()
        if not canvas.ok:
            self._report("Cannot calibrate", canvas.error)
            return Lookup.failure(canvas.error)

        self._calibration = calibrate(canvas.value, mouse_x, self._config.center_offset_x)
        # Force the next sample to map from scratch
        self._last_mouse_x = None
        self._last_failure = None
        self._log(
            f"Calibration complete - Mouse: {mouse_x}, "
            f"Screen center: {self._calibration.screen_center_x}"
        )
        return Lookup.success(self._calibration)

    def tick(self, dt: float, mouse_x: float) -> Optional[float]:
        """
        Advance the state machine by one host tick.

        Args:
            dt: Seconds since the previous tick
            mouse_x: Current mouse X position

        Returns:
            The layer x position to apply this tick, or None
        """
        if not self.enabled:
            return None

        if dt > 0:
            self._clock += dt
            self._since_sample += dt

        was_animating = self._state == MotionState.ANIMATING
        emitted = None

        # A pending forced sample waits for time to advance
        if dt > 0 and self._since_sample >= self._config.update_interval_seconds:
            self._since_sample = 0.0
            emitted = self._sample(mouse_x)

        # An animation started by this sample advances from the next tick on
        if was_animating and self._state == MotionState.ANIMATING and dt > 0:
            emitted = self._step_animation(dt)

        if emitted is not None and self._on_position_changed:
            self._on_position_changed(emitted)

        return emitted

    def _sample(self, mouse_x: float) -> Optional[float]:
        """Check for movement or idleness. Returns a position only when snapping."""
        if self._calibration is None:
            self._log("Calibrating first...")
            self.recalibrate(mouse_x)
            return None

        moved = (self._last_mouse_x is None or
                 abs(mouse_x - self._last_mouse_x) >= MOVEMENT_THRESHOLD)

        if moved:
            target = self._compute_target(mouse_x)
            if not target.ok:
                self._report("Could not calculate target", target.error)
                return None

            self._target_x = target.value
            self._last_mouse_x = mouse_x
            self._last_moved_at = self._clock
            self._state = MotionState.TRACKING_ACTIVE
            self._last_failure = None
            self._log(f"Cursor moved to: {mouse_x} - target position: {self._target_x}")
            return None

        if self._state == MotionState.TRACKING_ACTIVE and self._clock > self._last_moved_at:
            self._state = MotionState.WAITING_FOR_IDLE
            self._idle_since = self._last_moved_at

        if self._state == MotionState.WAITING_FOR_IDLE:
            idle_time = self._clock - self._idle_since
            if idle_time >= self._config.idle_delay_seconds:
                self._log(f"Cursor idle for {idle_time:.2f} seconds, starting transition")
                return self._begin_animation()

        return None

    def _compute_target(self, mouse_x: float) -> Lookup[float]:
        bounds = self._layer.get_layer_bounds()
        if not bounds.ok:
            return Lookup.failure(bounds.error)
        canvas = self._layer.get_canvas_width()
        if not canvas.ok:
            return Lookup.failure(canvas.error)

        layer_width = bounds.value[0]
        return Lookup.success(self._mapper.compute_target(
            mouse_x, layer_width, canvas.value, self._calibration, self._config
        ))

    def _begin_animation(self) -> Optional[float]:
        """Start moving toward the stored target. Returns the target when snapping."""
        target = self._target_x
        self._state = MotionState.IDLE
        if target is None:
            return None

        if self._config.animation_duration_seconds <= 0:
            return target

        current = self._layer.get_layer_position()
        if not current.ok:
            self._report("Could not read layer position, snapping to target", current.error)
            return target

        self._start_x = current.value
        self._elapsed = 0.0
        self._state = MotionState.ANIMATING
        self._log(f"Starting animation from {self._start_x} to {target}")
        return None

    def _step_animation(self, dt: float) -> float:
        self._elapsed += dt
        t = progress(self._elapsed, self._config.animation_duration_seconds)

        if t >= 1.0:
            self._state = MotionState.IDLE
            self._log("Animation complete")
            return self._target_x

        eased = get_easing(self._config.easing)(t)
        return lerp(self._start_x, self._target_x, eased)

    def _report(self, context: str, error: TrackerError):
        """Log a failure once until it changes or clears."""
        message = f"{context}: {error}"
        if message != self._last_failure:
            self._last_failure = message
            self._log(message)

    def reset(self):
        """Forget any pending target and return to idle. Calibration is kept."""
        self._state = MotionState.IDLE
        self._last_mouse_x = None
        self._target_x = None
        self._elapsed = 0.0
        self._last_failure = None
        self._since_sample = self._config.update_interval_seconds

    def get_state_info(self) -> dict:
        """Get current state information for debugging/status."""
        return {
            'state': self._state.name,
            'enabled': self.enabled,
            'calibrated': self._calibration is not None,
            'target_x': self._target_x,
            'last_mouse_x': self._last_mouse_x,
            'animation_elapsed': self._elapsed,
        }
