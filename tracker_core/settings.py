"""
Settings Module
Tracking configuration snapshots built from OBS script settings
"""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict

from .easing import EASING_FUNCTIONS, DEFAULT_EASING, clamp
from .errors import InvalidConfig


@dataclass(frozen=True)
class OptionRange:
    """Slider bounds and default for a numeric script option."""
    key: str
    label: str
    minimum: float
    maximum: float
    step: float
    default: float
    is_int: bool = False

    def clamp(self, value: Any) -> float:
        try:
            number = float(value)
        except (TypeError, ValueError):
            return self.default
        number = clamp(number, self.minimum, self.maximum)
        return int(round(number)) if self.is_int else number


# Keys match the settings names stored by earlier versions of the script.
OPTION_RANGES: Dict[str, OptionRange] = {
    option.key: option for option in (
        OptionRange('sensitivity', 'Movement Sensitivity', 0.1, 3.0, 0.1, 1.0),
        OptionRange('center_offset_x', 'Center Offset X', -500, 500, 1, 0, is_int=True),
        OptionRange('center_offset_y', 'Center Offset Y', -500, 500, 1, 0, is_int=True),
        OptionRange('update_interval', 'Update Interval (seconds)', 0.01, 0.5, 0.01, 0.05),
        OptionRange('cursor_idle_delay', 'Movement Delay (seconds)', 0.0, 3.0, 0.1, 0.5),
        OptionRange('animation_duration', 'Transition Duration (seconds)', 0.0, 2.0, 0.1, 0.3),
        OptionRange('tracking_area_width', 'Tracking Area Width (%)', 10.0, 100.0, 5.0, 80.0),
    )
}


def _option(data: Dict[str, Any], key: str) -> float:
    option = OPTION_RANGES[key]
    return option.clamp(data.get(key, option.default))


@dataclass(frozen=True)
class TrackingConfig:
    """
    Immutable snapshot of the values that drive mapping and motion.

    A new snapshot replaces the old one whenever the script settings change.
    Construction rejects values the mapper and controller cannot work with;
    use ``from_dict`` to build one from untrusted settings.
    """

    sensitivity: float = 1.0
    tracking_area_width_percent: float = 80.0
    center_offset_x: int = 0
    idle_delay_seconds: float = 0.5
    animation_duration_seconds: float = 0.3
    update_interval_seconds: float = 0.05
    easing: str = DEFAULT_EASING

    def __post_init__(self):
        if self.sensitivity <= 0:
            raise InvalidConfig(f"sensitivity must be positive, got {self.sensitivity}")
        if not 10.0 <= self.tracking_area_width_percent <= 100.0:
            raise InvalidConfig(
                f"tracking area width must be within 10-100%, got {self.tracking_area_width_percent}"
            )
        if self.idle_delay_seconds < 0:
            raise InvalidConfig(f"idle delay cannot be negative, got {self.idle_delay_seconds}")
        if self.animation_duration_seconds < 0:
            raise InvalidConfig(
                f"animation duration cannot be negative, got {self.animation_duration_seconds}"
            )
        if self.update_interval_seconds <= 0:
            raise InvalidConfig(
                f"update interval must be positive, got {self.update_interval_seconds}"
            )
        if self.easing not in EASING_FUNCTIONS:
            raise InvalidConfig(f"unknown easing '{self.easing}'")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the settings keys used by the script."""
        return {
            'sensitivity': self.sensitivity,
            'tracking_area_width': self.tracking_area_width_percent,
            'center_offset_x': self.center_offset_x,
            'cursor_idle_delay': self.idle_delay_seconds,
            'animation_duration': self.animation_duration_seconds,
            'update_interval': self.update_interval_seconds,
            'easing': self.easing,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TrackingConfig':
        """Create from script settings, clamping each value to its slider range."""
        easing = data.get('easing') or DEFAULT_EASING
        if easing not in EASING_FUNCTIONS:
            easing = DEFAULT_EASING
        return cls(
            sensitivity=_option(data, 'sensitivity'),
            tracking_area_width_percent=_option(data, 'tracking_area_width'),
            center_offset_x=_option(data, 'center_offset_x'),
            idle_delay_seconds=_option(data, 'cursor_idle_delay'),
            animation_duration_seconds=_option(data, 'animation_duration'),
            update_interval_seconds=_option(data, 'update_interval'),
            easing=easing,
        )


@dataclass
class TrackerSettings:
    """Everything the script reads from its OBS settings."""

    enabled: bool = False
    source_name: str = ""
    scene_name: str = ""
    center_offset_y: int = 0
    debug_logging: bool = False
    tracking: TrackingConfig = field(default_factory=TrackingConfig)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        del data['tracking']
        data.update(self.tracking.to_dict())
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'TrackerSettings':
        return cls(
            enabled=bool(data.get('enabled', False)),
            source_name=data.get('source_name') or "",
            scene_name=data.get('scene_name') or "",
            center_offset_y=_option(data, 'center_offset_y'),
            debug_logging=bool(data.get('debug_logging', False)),
            tracking=TrackingConfig.from_dict(data),
        )
