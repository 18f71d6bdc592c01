"""
Position Mapper Module
Maps the horizontal mouse position to a horizontal offset for the tracked layer
"""

from dataclasses import dataclass

from .easing import clamp
from .errors import NotCalibrated
from .settings import TrackingConfig


@dataclass(frozen=True)
class CalibrationState:
    """Reference coordinates captured by a calibration."""
    screen_center_x: float
    initial_mouse_x: float
    base_position_x: float = 0.0


@dataclass(frozen=True)
class TrackingArea:
    """Horizontal band of the canvas in which the mouse drives the layer."""
    start: float
    end: float

    @property
    def size(self) -> float:
        return self.end - self.start

    @classmethod
    def for_canvas(cls, canvas_width: float, width_percent: float) -> 'TrackingArea':
        """Build an area of ``width_percent`` of the canvas, centered on it."""
        center = canvas_width / 2
        half_width = canvas_width * (width_percent / 100.0) / 2
        return cls(start=center - half_width, end=center + half_width)

    def normalize(self, mouse_x: float) -> float:
        """Position of ``mouse_x`` across the area, 0.0 at the left edge, 1.0 at the right."""
        if mouse_x <= self.start:
            return 0.0
        if mouse_x >= self.end:
            return 1.0
        return (mouse_x - self.start) / self.size


def calibrate(canvas_width: float, mouse_x: float, center_offset_x: int = 0) -> CalibrationState:
    """
    Capture a calibration.

    The layer is aligned to the left edge of the canvas, so the base
    position is always 0.
    """
    return CalibrationState(
        screen_center_x=canvas_width / 2 + center_offset_x,
        initial_mouse_x=float(mouse_x),
        base_position_x=0.0,
    )


class PositionMapper:
    """
    Converts a mouse x coordinate into the x position of the tracked layer.

    The layer moves opposite to the cursor: with the mouse at the left edge of
    the tracking area the layer sits at 0, at the right edge it is shifted
    left by the full width it overhangs the canvas.
    """

    def compute_target(self, mouse_x: float, layer_width: float, canvas_width: float,
                       calibration: CalibrationState, config: TrackingConfig) -> float:
        """
        Compute the target x position of the layer.

        Args:
            mouse_x: Mouse X in screen coordinates
            layer_width: Width of the layer on the canvas
            canvas_width: Width of the output canvas
            calibration: Current calibration (must not be None)
            config: Tracking settings

        Returns:
            Target x position, within [-(layer_width - canvas_width), 0]
        """
        if calibration is None:
            raise NotCalibrated("calibrate before mapping the mouse position")

        max_movement_range = max(0.0, layer_width - canvas_width)
        area = TrackingArea.for_canvas(canvas_width, config.tracking_area_width_percent)

        # Sensitivity is applied before clamping, so values above 1 only make
        # the edges of the range reachable sooner.
        normalized = clamp(area.normalize(mouse_x) * config.sensitivity, 0.0, 1.0)

        return -normalized * max_movement_range
