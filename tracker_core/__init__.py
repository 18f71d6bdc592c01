"""
OBS Cursor Tracker - Core Module
Host-independent cursor following for OBS Studio
"""

from .errors import (
    TrackerError,
    NotCalibrated,
    LayerUnresolvable,
    PointerUnavailable,
    InvalidConfig,
    Lookup,
)
from .easing import EASING_FUNCTIONS, DEFAULT_EASING, lerp, get_easing, clamp
from .settings import TrackingConfig, TrackerSettings, OptionRange, OPTION_RANGES
from .position_mapper import CalibrationState, TrackingArea, PositionMapper, calibrate
from .motion_controller import MotionController, MotionState, MOVEMENT_THRESHOLD
from .mouse_tracker import MouseTracker
from .scene_access import SceneLayerAccess, source_ref, DEFAULT_CANVAS_WIDTH

__all__ = [
    # Errors
    'TrackerError',
    'NotCalibrated',
    'LayerUnresolvable',
    'PointerUnavailable',
    'InvalidConfig',
    'Lookup',

    # Easing/Animation
    'EASING_FUNCTIONS',
    'DEFAULT_EASING',
    'lerp',
    'get_easing',
    'clamp',

    # Configuration
    'TrackingConfig',
    'TrackerSettings',
    'OptionRange',
    'OPTION_RANGES',

    # Mapping
    'CalibrationState',
    'TrackingArea',
    'PositionMapper',
    'calibrate',

    # Motion
    'MotionController',
    'MotionState',
    'MOVEMENT_THRESHOLD',

    # Host access
    'MouseTracker',
    'SceneLayerAccess',
    'source_ref',
    'DEFAULT_CANVAS_WIDTH',
]

__version__ = '1.0.0'
