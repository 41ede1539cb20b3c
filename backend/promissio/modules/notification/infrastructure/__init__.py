from .in_memory_read_store import InMemoryReadNotificationStore

__all__ = ["InMemoryReadNotificationStore"]
