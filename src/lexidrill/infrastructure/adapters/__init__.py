# Infrastructure Adapters Package
from .file_store import JsonFileStore
from .memory_store import InMemoryStore
from .threading_timers import ThreadingTimers

__all__ = ["InMemoryStore", "JsonFileStore", "ThreadingTimers"]
