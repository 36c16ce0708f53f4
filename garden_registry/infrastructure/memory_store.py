from typing import Dict, List, Optional

from garden_registry.domain.models import Garden


class InMemoryGardenStore:
    """
    Ordered map of garden id to Garden held in process memory.
    Values are returned in key order.

    max_key_size and max_value_size bound the UTF-8 size of a key and of the
    JSON-encoded record; an insert over either bound raises ValueError and
    leaves the store unchanged.
    """

    def __init__(self, max_key_size: Optional[int] = None, max_value_size: Optional[int] = None):
        self.max_key_size = max_key_size
        self.max_value_size = max_value_size
        self._entries: Dict[str, Garden] = {}

    def get(self, key: str) -> Optional[Garden]:
        return self._entries.get(key)

    def insert(self, key: str, value: Garden) -> Optional[Garden]:
        if self.max_key_size is not None and len(key.encode('utf-8')) > self.max_key_size:
            raise ValueError(f"Key exceeds {self.max_key_size} bytes: {key!r}")

        if self.max_value_size is not None:
            size = len(value.model_dump_json().encode('utf-8'))
            if size > self.max_value_size:
                raise ValueError(f"Value of {size} bytes exceeds {self.max_value_size} bytes for key {key!r}")

        previous = self._entries.get(key)
        self._entries[key] = value
        return previous

    def remove(self, key: str) -> Optional[Garden]:
        return self._entries.pop(key, None)

    def values(self) -> List[Garden]:
        return [self._entries[key] for key in sorted(self._entries)]

    def __len__(self) -> int:
        return len(self._entries)
