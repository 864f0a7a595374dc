"""Component base class and render caching."""

import logging
from abc import ABC, abstractmethod
from functools import wraps
from typing import Any, Dict

from .render_buffer import RenderBuffer

logger = logging.getLogger(__name__)

# Set to True to log render cache hits and misses
DEBUG = False


def _make_hashable(obj):
    """Convert nested dicts/lists to hashable tuples recursively."""
    if isinstance(obj, dict):
        return tuple(sorted((k, _make_hashable(v)) for k, v in obj.items()))
    elif isinstance(obj, (list, tuple)):
        return tuple(_make_hashable(item) for item in obj)
    else:
        return obj


def cache_with_dict(maxsize=128):
    """
    Cache decorator for instance methods taking (state_dict, time).

    Keys on state_dict only; time is passed through but never cached on.
    Each instance keeps its own cache in self._render_cache with FIFO eviction.
    """

    def decorator(func):
        @wraps(func)
        def wrapper(self, state_dict, time=None):
            if not hasattr(self, "_render_cache"):
                self._render_cache = {}
                self._render_cache_maxsize = maxsize

            state_key = _make_hashable(state_dict)

            if state_key not in self._render_cache:
                if DEBUG:
                    logger.debug(f"[CACHE MISS] {self.__class__.__name__}._render_cached()")
                if len(self._render_cache) >= self._render_cache_maxsize:
                    self._render_cache.pop(next(iter(self._render_cache)))
                self._render_cache[state_key] = func(self, state_dict, time)
            elif DEBUG:
                logger.debug(f"[CACHE HIT] {self.__class__.__name__}._render_cached()")

            return self._render_cache[state_key]

        return wrapper

    return decorator


class Component(ABC):
    """
    Base class for renderable components.

    render(time) calls compute_state(time), then the cached _render_cached(state, time).
    _rendered_at records the last time the state changed.
    """

    def __init__(self):
        self._rendered_at = 0.0
        self._last_state = None

    @property
    @abstractmethod
    def width(self) -> int:
        """Component width in pixels."""

    @property
    @abstractmethod
    def height(self) -> int:
        """Component height in pixels."""

    @abstractmethod
    def compute_state(self, time: float) -> Dict[str, Any]:
        """
        Compute component state at given time.

        Must return a dict of hashable values that affect rendering, without 'time'.
        """

    @abstractmethod
    def _render_cached(self, state: Dict[str, Any], time: float) -> RenderBuffer:
        """Render from state dict. Decorate with @cache_with_dict."""

    def render(self, time: float = 0.0) -> RenderBuffer:
        """Render component at given time."""
        state = self.compute_state(time)

        if state != self._last_state:
            self._rendered_at = time
            self._last_state = state

        return self._render_cached(state, time)
