from __future__ import annotations

from collections import Counter
from typing import Optional

import pytest


class Vec2:
    def __init__(self, x: float = 0.0, y: float = 0.0) -> None:
        self.x = x
        self.y = y


class VideoInfo:
    base_width = 0


class FakeSource:
    def __init__(self, name: str, width: int = 0, height: int = 0) -> None:
        self.name = name
        self.width = width
        self.height = height


class FakeSceneItem:
    def __init__(self, source: FakeSource, pos: Vec2, bounds: Vec2, scale: Vec2) -> None:
        self.source = source
        self.pos = pos
        self.bounds = bounds
        self.scale = scale


class FakeScene:
    def __init__(self, source: FakeSource) -> None:
        self.source = source
        self.items: dict[str, FakeSceneItem] = {}


class FakeObs:
    """Just enough of ``obspython`` for the script, with reference counting."""

    LOG_INFO = 300
    LOG_WARNING = 200
    OBS_COMBO_TYPE_LIST = 2
    OBS_COMBO_FORMAT_STRING = 3
    OBS_INVALID_HOTKEY_ID = -1

    def __init__(self) -> None:
        self.sources: dict[str, FakeSource] = {}
        self.scenes: dict[str, FakeScene] = {}
        self.current_scene: Optional[str] = None
        self.canvas_width: Optional[int] = 1920
        self.refs: Counter = Counter()
        self.released_lists = 0
        self.logs: list[tuple[int, str]] = []
        self.data: dict[str, object] = {}
        self.defaults: dict[str, object] = {}
        self.hotkeys: dict[int, tuple[str, str, object]] = {}
        self.hotkey_bindings: dict[int, object] = {}
        self.released_arrays = 0
        self.properties: dict[str, tuple] = {}
        self.list_items: dict[str, list[tuple[str, str]]] = {}

    # Scene graph helpers for tests

    def add_source(self, name: str, width: int = 1920, height: int = 1080) -> FakeSource:
        source = FakeSource(name, width, height)
        self.sources[name] = source
        return source

    def add_scene(self, name: str) -> FakeScene:
        scene = FakeScene(self.add_source(name, 0, 0))
        self.scenes[name] = scene
        if self.current_scene is None:
            self.current_scene = name
        return scene

    def place(self, scene_name: str, source_name: str, x: float = 0.0, y: float = 0.0,
              bounds: tuple[float, float] = (0.0, 0.0),
              scale: tuple[float, float] = (1.0, 1.0)) -> FakeSceneItem:
        item = FakeSceneItem(self.sources[source_name], Vec2(x, y), Vec2(*bounds), Vec2(*scale))
        self.scenes[scene_name].items[source_name] = item
        return item

    def outstanding_refs(self) -> dict[str, int]:
        return {name: count for name, count in self.refs.items() if count}

    # obspython API

    def vec2(self) -> Vec2:
        return Vec2()

    def obs_video_info(self) -> VideoInfo:
        return VideoInfo()

    def obs_get_video_info(self, ovi: VideoInfo) -> bool:
        if self.canvas_width is None:
            return False
        ovi.base_width = self.canvas_width
        return True

    def obs_get_source_by_name(self, name: str):
        source = self.sources.get(name)
        if source is not None:
            self.refs[name] += 1
        return source

    def obs_frontend_get_current_scene(self):
        if self.current_scene is None:
            return None
        return self.obs_get_source_by_name(self.current_scene)

    def obs_source_release(self, source: FakeSource) -> None:
        self.refs[source.name] -= 1

    def obs_scene_from_source(self, source: FakeSource):
        return self.scenes.get(source.name)

    def obs_scene_find_source(self, scene: FakeScene, name: str):
        return scene.items.get(name)

    def obs_sceneitem_get_pos(self, item: FakeSceneItem, vec: Vec2) -> None:
        vec.x, vec.y = item.pos.x, item.pos.y

    def obs_sceneitem_set_pos(self, item: FakeSceneItem, vec: Vec2) -> None:
        item.pos = Vec2(vec.x, vec.y)

    def obs_sceneitem_get_bounds(self, item: FakeSceneItem, vec: Vec2) -> None:
        vec.x, vec.y = item.bounds.x, item.bounds.y

    def obs_sceneitem_get_scale(self, item: FakeSceneItem, vec: Vec2) -> None:
        vec.x, vec.y = item.scale.x, item.scale.y

    def obs_source_get_width(self, source: FakeSource) -> int:
        return source.width

    def obs_source_get_height(self, source: FakeSource) -> int:
        return source.height

    def obs_source_get_name(self, source: FakeSource) -> str:
        return source.name

    def obs_enum_sources(self):
        listed = [s for name, s in self.sources.items() if name not in self.scenes]
        for source in listed:
            self.refs[source.name] += 1
        return listed

    def obs_frontend_get_scenes(self):
        listed = [scene.source for scene in self.scenes.values()]
        for source in listed:
            self.refs[source.name] += 1
        return listed

    def source_list_release(self, sources) -> None:
        self.released_lists += 1
        for source in sources:
            self.refs[source.name] -= 1

    def script_log(self, level: int, message: str) -> None:
        self.logs.append((level, message))

    # Settings

    def obs_data_get_bool(self, settings, key):
        return bool(settings.get(key, self.defaults.get(key, False)))

    def obs_data_get_string(self, settings, key):
        return settings.get(key, self.defaults.get(key, ""))

    def obs_data_get_int(self, settings, key):
        return int(settings.get(key, self.defaults.get(key, 0)))

    def obs_data_get_double(self, settings, key):
        return float(settings.get(key, self.defaults.get(key, 0.0)))

    def obs_data_set_default_bool(self, settings, key, value):
        self.defaults[key] = value

    obs_data_set_default_int = obs_data_set_default_bool
    obs_data_set_default_double = obs_data_set_default_bool
    obs_data_set_default_string = obs_data_set_default_bool

    def obs_data_get_array(self, settings, key):
        return settings.get(key, [])

    def obs_data_set_array(self, settings, key, array):
        settings[key] = array

    def obs_data_array_release(self, array):
        self.released_arrays += 1

    # Hotkeys

    def obs_hotkey_register_frontend(self, name, description, callback):
        hotkey_id = len(self.hotkeys) + 1
        self.hotkeys[hotkey_id] = (name, description, callback)
        return hotkey_id

    def obs_hotkey_load(self, hotkey_id, array):
        self.hotkey_bindings[hotkey_id] = array

    def obs_hotkey_save(self, hotkey_id):
        return self.hotkey_bindings.get(hotkey_id, [])

    def press(self, name: str) -> None:
        for registered, _description, callback in self.hotkeys.values():
            if registered == name:
                callback(True)
                return
        raise AssertionError(f"Hotkey {name} not registered")

    # Properties

    def obs_properties_create(self):
        return self.properties

    def obs_properties_add_bool(self, props, key, label):
        props[key] = ("bool", label)
        return key

    def obs_properties_add_list(self, props, key, label, combo_type, combo_format):
        props[key] = ("list", label)
        self.list_items[key] = []
        return key

    def obs_properties_add_button(self, props, key, label, callback):
        props[key] = ("button", label, callback)
        return key

    def obs_properties_add_float_slider(self, props, key, label, minimum, maximum, step):
        props[key] = ("float", label, minimum, maximum, step)
        return key

    def obs_properties_add_int_slider(self, props, key, label, minimum, maximum, step):
        props[key] = ("int", label, minimum, maximum, step)
        return key

    def obs_properties_get(self, props, key):
        return key

    def obs_property_list_clear(self, prop):
        self.list_items[prop] = []

    def obs_property_list_add_string(self, prop, name, value):
        self.list_items[prop].append((name, value))


@pytest.fixture
def fake_obs() -> FakeObs:
    obs = FakeObs()
    obs.add_scene("Vertical")
    obs.add_source("Display Capture", 1920, 1080)
    obs.place("Vertical", "Display Capture", x=0.0, y=120.0, bounds=(1920.0, 1080.0))
    obs.canvas_width = 1080
    return obs


class FakePointer:
    """Stands in for ``pynput.mouse.Controller``."""

    def __init__(self, x: int = 0, y: int = 0) -> None:
        self.position = (x, y)


@pytest.fixture
def pointer() -> FakePointer:
    return FakePointer(540, 300)
