"""
OBS Cursor Tracker
Move a screen capture source horizontally so the mouse cursor stays inside
a narrow (e.g. 9:16) output frame.

Version: 1.0.0
"""

import sys
import os

# Add the script directory to path for importing tracker_core
script_dir = os.path.dirname(os.path.abspath(__file__))
if script_dir not in sys.path:
    sys.path.insert(0, script_dir)

try:
    import obspython as obs
except ImportError:
    # For development/testing outside OBS
    obs = None

from tracker_core import (
    DEFAULT_EASING,
    EASING_FUNCTIONS,
    OPTION_RANGES,
    MotionController,
    MouseTracker,
    SceneLayerAccess,
    TrackerSettings,
)

# Version
VERSION = "1.0.0"

# Global state
mouse_tracker = None
layer_access = None
motion_controller = None
tracker_settings = TrackerSettings()

# Hotkey ids, keyed by the settings array their bindings are saved under
hotkey_ids = {}

debug_logging = False


def log(msg):
    """Log a message to OBS script log."""
    if debug_logging and obs:
        obs.script_log(obs.LOG_INFO, str(msg))


def log_warning(msg):
    """Log a warning to OBS script log regardless of the debug setting."""
    if obs:
        obs.script_log(obs.LOG_WARNING, str(msg))


def read_settings(settings):
    """Read the script settings into a plain dict."""
    data = {
        'enabled': obs.obs_data_get_bool(settings, "enabled"),
        'source_name': obs.obs_data_get_string(settings, "source_name"),
        'scene_name': obs.obs_data_get_string(settings, "scene_name"),
        'easing': obs.obs_data_get_string(settings, "easing"),
        'debug_logging': obs.obs_data_get_bool(settings, "debug_logging"),
    }
    for key, option in OPTION_RANGES.items():
        if option.is_int:
            data[key] = obs.obs_data_get_int(settings, key)
        else:
            data[key] = obs.obs_data_get_double(settings, key)
    return data


def apply_position(x):
    """Motion controller callback: move the tracked source."""
    if layer_access is None:
        return
    result = layer_access.set_layer_position(x)
    if not result.ok:
        log(f"Could not move source: {result.error}")


def on_toggle_tracking(pressed):
    """Hotkey callback for tracking toggle."""
    # Only toggle on key press, not release
    if not pressed or motion_controller is None:
        return

    motion_controller.enabled = not motion_controller.enabled
    tracker_settings.enabled = motion_controller.enabled
    log(f"Hotkey pressed - Cursor tracking {'enabled' if motion_controller.enabled else 'disabled'}")


def on_calibrate(pressed):
    """Hotkey callback for recalibration."""
    if not pressed or motion_controller is None or mouse_tracker is None:
        return

    pointer = mouse_tracker.get_mouse_x()
    if not pointer.ok:
        log_warning(f"Cannot calibrate: {pointer.error}")
        return

    result = motion_controller.recalibrate(pointer.value)
    if not result.ok:
        log_warning(f"Cannot calibrate: {result.error}")


def hotkey_table():
    """Settings key -> (hotkey name, description, callback)."""
    return {
        "toggle_hotkey": ("cursor_tracker_toggle", "Toggle Cursor Tracking", on_toggle_tracking),
        "calibrate_hotkey": ("cursor_tracker_calibrate", "Calibrate Cursor Tracking", on_calibrate),
    }


def register_hotkeys(settings):
    """Register the hotkeys and restore their saved bindings."""
    for settings_key, (name, description, callback) in hotkey_table().items():
        hotkey_id = obs.obs_hotkey_register_frontend(name, description, callback)
        if hotkey_id == obs.OBS_INVALID_HOTKEY_ID:
            log_warning(f"Could not register hotkey '{description}'")
            continue
        hotkey_ids[settings_key] = hotkey_id

        save_array = obs.obs_data_get_array(settings, settings_key)
        obs.obs_hotkey_load(hotkey_id, save_array)
        obs.obs_data_array_release(save_array)


# OBS Script Interface

def script_description():
    """Return script description."""
    return f"""<h3>Cursor Tracker v{VERSION}</h3>
<p>Moves a screen capture source based on cursor position for 9:16 format scenes.
The source moves in the opposite direction of the cursor to keep the cursor
visible in the frame.</p>
<p>Set up hotkeys in OBS Settings -> Hotkeys:</p>
<ul>
<li>"Toggle Cursor Tracking"</li>
<li>"Calibrate Cursor Tracking"</li>
</ul>"""


def script_load(settings):
    """Called when script is loaded."""
    global mouse_tracker, layer_access, motion_controller

    mouse_tracker = MouseTracker()
    if not mouse_tracker.start():
        log_warning(f"Mouse position unavailable: {mouse_tracker.start_error}")

    layer_access = SceneLayerAccess(obs, mouse_tracker=mouse_tracker)

    motion_controller = MotionController(layer_access, logger=log)
    motion_controller.set_callbacks(on_position_changed=apply_position)

    # Apply settings
    script_update(settings)

    register_hotkeys(settings)

    log(f"Script loaded. Platform: {sys.platform}")
    log(f"Enabled: {tracker_settings.enabled}")
    log(f"Source: {tracker_settings.source_name}")


def script_unload():
    """Called when script is unloaded."""
    global mouse_tracker, layer_access, motion_controller

    # OBS releases the hotkeys itself when the script unloads
    hotkey_ids.clear()

    if mouse_tracker:
        mouse_tracker.stop()
        mouse_tracker = None

    layer_access = None
    motion_controller = None

    log("Script unloaded")


def script_defaults(settings):
    """Set default settings."""
    obs.obs_data_set_default_bool(settings, "enabled", False)
    for key, option in OPTION_RANGES.items():
        if option.is_int:
            obs.obs_data_set_default_int(settings, key, int(option.default))
        else:
            obs.obs_data_set_default_double(settings, key, option.default)
    obs.obs_data_set_default_string(settings, "easing", DEFAULT_EASING)
    obs.obs_data_set_default_bool(settings, "debug_logging", False)


def script_properties():
    """Create script properties UI."""
    props = obs.obs_properties_create()

    obs.obs_properties_add_bool(props, "enabled", "Enable Cursor Tracking")

    source_list = obs.obs_properties_add_list(
        props, "source_name", "Screen Capture Source",
        obs.OBS_COMBO_TYPE_LIST, obs.OBS_COMBO_FORMAT_STRING
    )
    scene_list = obs.obs_properties_add_list(
        props, "scene_name", "Scene",
        obs.OBS_COMBO_TYPE_LIST, obs.OBS_COMBO_FORMAT_STRING
    )
    populate_lists(source_list, scene_list)

    obs.obs_properties_add_button(props, "refresh", "Refresh Lists", on_refresh_lists)

    for option in OPTION_RANGES.values():
        if option.is_int:
            obs.obs_properties_add_int_slider(
                props, option.key, option.label,
                int(option.minimum), int(option.maximum), int(option.step)
            )
        else:
            obs.obs_properties_add_float_slider(
                props, option.key, option.label,
                option.minimum, option.maximum, option.step
            )

    easing_list = obs.obs_properties_add_list(
        props, "easing", "Transition Easing",
        obs.OBS_COMBO_TYPE_LIST, obs.OBS_COMBO_FORMAT_STRING
    )
    for name in EASING_FUNCTIONS:
        obs.obs_property_list_add_string(easing_list, name, name)

    obs.obs_properties_add_bool(props, "debug_logging", "Enable Debug Logging")

    return props


def populate_lists(source_list, scene_list):
    """Fill the source and scene dropdowns."""
    access = layer_access or SceneLayerAccess(obs)

    obs.obs_property_list_clear(source_list)
    obs.obs_property_list_add_string(source_list, "Select a source", "")
    for name in access.list_source_names():
        obs.obs_property_list_add_string(source_list, name, name)

    obs.obs_property_list_clear(scene_list)
    obs.obs_property_list_add_string(scene_list, "Current Scene", "")
    for name in access.list_scene_names():
        obs.obs_property_list_add_string(scene_list, name, name)


def on_refresh_lists(props, prop):
    """Refresh lists button callback."""
    populate_lists(
        obs.obs_properties_get(props, "source_name"),
        obs.obs_properties_get(props, "scene_name"),
    )
    return True


def script_update(settings):
    """Called when settings are updated."""
    global tracker_settings, debug_logging

    old_settings = tracker_settings
    tracker_settings = TrackerSettings.from_dict(read_settings(settings))
    debug_logging = tracker_settings.debug_logging

    if layer_access:
        layer_access.source_name = tracker_settings.source_name
        layer_access.scene_name = tracker_settings.scene_name

    if motion_controller:
        motion_controller.configure(tracker_settings.tracking)
        motion_controller.enabled = tracker_settings.enabled

        # A different layer means the pending target no longer applies
        if (old_settings.source_name, old_settings.scene_name) != \
                (tracker_settings.source_name, tracker_settings.scene_name):
            motion_controller.reset()

    tracking = tracker_settings.tracking
    log(f"Settings updated - Enabled: {tracker_settings.enabled}, "
        f"Source: {tracker_settings.source_name}, "
        f"Scene: {tracker_settings.scene_name or 'current'}, "
        f"Sensitivity: {tracking.sensitivity}, "
        f"Idle delay: {tracking.idle_delay_seconds}, "
        f"Animation duration: {tracking.animation_duration_seconds}, "
        f"Tracking area width: {tracking.tracking_area_width_percent}%")


def script_save(settings):
    """Called when settings are saved."""
    for settings_key, hotkey_id in hotkey_ids.items():
        save_array = obs.obs_hotkey_save(hotkey_id)
        obs.obs_data_set_array(settings, settings_key, save_array)
        obs.obs_data_array_release(save_array)

    log("Script settings saved")


def script_tick(seconds):
    """Called every frame."""
    if motion_controller is None or mouse_tracker is None:
        return
    # Skip polling the pointer while tracking is off
    if not motion_controller.enabled:
        return

    pointer = mouse_tracker.get_mouse_x()
    if not pointer.ok:
        log(f"Could not read mouse position: {pointer.error}")
        return

    motion_controller.tick(seconds, pointer.value)
