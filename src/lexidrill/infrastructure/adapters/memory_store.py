"""In-memory KeyValueStore for tests and throwaway sessions."""

from lexidrill.domain.ports import KeyValueStore


class InMemoryStore(KeyValueStore):
    def __init__(self, initial: dict[str, str] | None = None):
        self.data: dict[str, str] = dict(initial or {})

    def load(self, key: str) -> str | None:
        return self.data.get(key)

    def save(self, key: str, blob: str) -> None:
        self.data[key] = blob
