from .packages import get_package, resolve_cache, resolve_handler, resolve_merger, resolve_pubsub

__all__ = ["get_package", "resolve_cache", "resolve_handler", "resolve_merger", "resolve_pubsub"]
