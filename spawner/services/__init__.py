"""Runtime services for Spawner."""

from spawner.services.hot_reload import HotReloader

__all__ = ["HotReloader"]
