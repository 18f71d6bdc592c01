"""
Scene Access Module
Resolves the tracked scene item in OBS and reads or moves it
"""

from contextlib import contextmanager
from typing import Any, Callable, Iterator, List, Tuple

from .errors import LayerUnresolvable, Lookup

# Canvas width assumed when OBS cannot report its video settings
DEFAULT_CANVAS_WIDTH = 1920


@contextmanager
def source_ref(obs, source) -> Iterator[Any]:
    """
    Hold a strong source reference for the duration of the block.

    ``source`` is a handle already returned with a reference by OBS (for
    example from ``obs_get_source_by_name``); it is released on exit,
    including when the block raises. ``None`` is passed through.
    """
    try:
        yield source
    finally:
        if source is not None:
            obs.obs_source_release(source)


@contextmanager
def source_list_ref(obs, sources) -> Iterator[list]:
    """Hold a source list from ``obs_enum_sources`` and release it on exit."""
    try:
        yield sources or []
    finally:
        if sources is not None:
            obs.source_list_release(sources)


class SceneLayerAccess:
    """
    Host collaborator for the tracked layer.

    Every operation resolves the scene and the scene item afresh, so a
    renamed or removed source is picked up on the next call. Failures come
    back as ``Lookup`` failures rather than exceptions.
    """

    def __init__(self, obs, source_name: str = "", scene_name: str = "",
                 mouse_tracker=None):
        """
        Initialize scene access.

        Args:
            obs: The ``obspython`` module
            source_name: Name of the tracked screen capture source
            scene_name: Scene holding the source, empty for the current scene
            mouse_tracker: Provides ``get_mouse_x()``
        """
        self._obs = obs
        self.source_name = source_name
        self.scene_name = scene_name
        self._mouse_tracker = mouse_tracker

    @property
    def _scene_label(self) -> str:
        return self.scene_name or "<current scene>"

    def _scene_source(self):
        if self.scene_name:
            return self._obs.obs_get_source_by_name(self.scene_name)
        return self._obs.obs_frontend_get_current_scene()

    @contextmanager
    def _scene_item(self) -> Iterator[Tuple[Any, Any]]:
        """Yield ``(scene_item, source)`` for the tracked layer."""
        obs = self._obs
        if not self.source_name:
            raise LayerUnresolvable("no source selected")

        with source_ref(obs, self._scene_source()) as scene_source:
            if scene_source is None:
                raise LayerUnresolvable(f"scene '{self._scene_label}' not found")

            scene = obs.obs_scene_from_source(scene_source)
            if scene is None:
                raise LayerUnresolvable(f"'{self._scene_label}' is not a scene")

            with source_ref(obs, obs.obs_get_source_by_name(self.source_name)) as source:
                if source is None:
                    raise LayerUnresolvable(f"source '{self.source_name}' not found")

                scene_item = obs.obs_scene_find_source(scene, self.source_name)
                if scene_item is None:
                    raise LayerUnresolvable(
                        f"source '{self.source_name}' not in scene '{self._scene_label}'"
                    )

                yield scene_item, source

    def _lookup(self, read: Callable[[Any, Any], Any]) -> Lookup:
        try:
            with self._scene_item() as (scene_item, source):
                return Lookup.success(read(scene_item, source))
        except LayerUnresolvable as e:
            return Lookup.failure(e)

    def _read_vec2(self, getter, scene_item):
        vec = self._obs.vec2()
        getter(scene_item, vec)
        return vec

    def get_layer_bounds(self) -> Lookup[Tuple[float, float]]:
        """
        Size of the layer on the canvas.

        Uses the bounding box when the item has one, otherwise the source
        size scaled by the item transform.
        """
        obs = self._obs

        def read(scene_item, source):
            bounds = self._read_vec2(obs.obs_sceneitem_get_bounds, scene_item)
            if bounds.x > 0:
                return (float(bounds.x), float(bounds.y))

            scale = self._read_vec2(obs.obs_sceneitem_get_scale, scene_item)
            return (float(obs.obs_source_get_width(source) * scale.x),
                    float(obs.obs_source_get_height(source) * scale.y))

        return self._lookup(read)

    def get_layer_position(self) -> Lookup[float]:
        """Current x position of the layer."""
        return self._lookup(
            lambda scene_item, _source: float(
                self._read_vec2(self._obs.obs_sceneitem_get_pos, scene_item).x
            )
        )

    def set_layer_position(self, x: float) -> Lookup[float]:
        """Move the layer horizontally, keeping its y position."""
        obs = self._obs

        def write(scene_item, _source):
            pos = self._read_vec2(obs.obs_sceneitem_get_pos, scene_item)
            pos.x = x
            obs.obs_sceneitem_set_pos(scene_item, pos)
            return x

        return self._lookup(write)

    def get_canvas_width(self) -> Lookup[float]:
        """Base (canvas) width from the OBS video settings."""
        ovi = self._obs.obs_video_info()
        if self._obs.obs_get_video_info(ovi):
            return Lookup.success(float(ovi.base_width))
        return Lookup.success(float(DEFAULT_CANVAS_WIDTH))

    def get_mouse_x(self) -> Lookup[float]:
        return self._mouse_tracker.get_mouse_x()

    def list_source_names(self) -> List[str]:
        """Names of all sources, for the source dropdown."""
        obs = self._obs
        with source_list_ref(obs, obs.obs_enum_sources()) as sources:
            return [obs.obs_source_get_name(s) for s in sources]

    def list_scene_names(self) -> List[str]:
        """Names of all scenes, for the scene dropdown."""
        obs = self._obs
        with source_list_ref(obs, obs.obs_frontend_get_scenes()) as scenes:
            return [obs.obs_source_get_name(s) for s in scenes]
