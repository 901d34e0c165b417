"""In-memory key -> record lookup used to validate and enrich dependent entities."""

from collections.abc import Iterable, Iterator, Mapping
from typing import Any


class ReferenceIndex:
    """Map from one designated key field to the full record.

    Records without the key field are skipped; when two records share a key
    the later one wins.  Lookups return ``None`` for unknown keys so the
    caller decides whether a missing reference is fatal.
    """

    def __init__(self, key_field: str, records: Mapping[str, dict[str, Any]] | None = None) -> None:
        self.key_field = key_field
        self._records: dict[str, dict[str, Any]] = dict(records or {})

    @classmethod
    def from_records(cls, records: Iterable[Any], key_field: str) -> "ReferenceIndex":
        index = cls(key_field)
        for record in records:
            if not isinstance(record, Mapping):
                continue
            key = record.get(key_field)
            if key is None or key == "":
                continue
            index._records[key] = dict(record)
        return index

    def get(self, key: Any) -> dict[str, Any] | None:
        return self._records.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[str]:
        return iter(self._records)

    def __repr__(self) -> str:
        return f"<ReferenceIndex key_field={self.key_field!r} size={len(self)}>"
