import logging
from typing import Optional

import numpy as np

from .config import FieldConfig
from .field import ParticleField
from .surface import SurfaceUnavailable

logger = logging.getLogger("particle_field")


class ParticleFieldAnimation:
    """
    Ambient "connected dots" background bound to one host.

    start() acquires the surface, seeds the field and schedules the first
    frame. Each frame advances every particle, redraws and schedules the
    next one. teardown() stops the chain, drops the resize listener and
    hands the surface back to the host.

    The host must provide:
      viewport_size() -> (w, h)
      acquire_surface() -> surface or None (may raise SurfaceUnavailable)
      request_frame(cb) -> handle / cancel_frame(handle)
      bind_resize(cb) -> token / unbind_resize(token)
      release_surface(surface)
    """

    def __init__(self, host, cfg: Optional[FieldConfig] = None,
                 rng: Optional[np.random.Generator] = None):
        self.host = host
        self.cfg = cfg or FieldConfig()
        self.cfg.validate()
        self._rng = rng

        self.field: Optional[ParticleField] = None
        self.surface = None
        self.frames = 0
        self.last_edge_count = 0
        self._frame_handle = None
        self._resize_token = None
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> bool:
        """Returns False, and does nothing else, when no surface is available."""
        if self._running:
            return True

        try:
            surface = self.host.acquire_surface()
        except SurfaceUnavailable as exc:
            logger.debug("particle field disabled: %s", exc)
            return False
        if surface is None:
            logger.debug("particle field disabled: host returned no surface")
            return False

        width, height = self.host.viewport_size()
        width, height = max(0, width), max(0, height)
        surface.set_size(width, height)

        self.surface = surface
        self.field = ParticleField(width, height, self.cfg, rng=self._rng)
        self._resize_token = self.host.bind_resize(self.handle_resize)
        self._running = True
        logger.debug("particle field started: %d particles on %sx%s", len(self.field), width, height)

        self.frame()
        return True

    def frame(self) -> None:
        if not self._running:
            return
        self._frame_handle = None

        self.field.step()
        self.last_edge_count = self.field.render(self.surface)
        self.frames += 1

        self._frame_handle = self.host.request_frame(self.frame)

    def handle_resize(self, width: int, height: int) -> None:
        if not self._running:
            return
        width, height = max(0, width), max(0, height)
        self.field.resize(width, height)
        self.surface.set_size(width, height)

    def teardown(self) -> None:
        if not self._running:
            return
        self._running = False

        if self._resize_token is not None:
            self.host.unbind_resize(self._resize_token)
            self._resize_token = None
        if self._frame_handle is not None:
            self.host.cancel_frame(self._frame_handle)
            self._frame_handle = None

        self.host.release_surface(self.surface)
        self.field = None
        self.surface = None
        logger.debug("particle field torn down after %d frames", self.frames)
