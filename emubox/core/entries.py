from __future__ import annotations

import os
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import overload


@dataclass(frozen=True, slots=True)
class ConfigEntry:
    """One selectable configuration file name."""
    name: str

    def __post_init__(self):
        if not self.name:
            raise ValueError("Entry name cannot be empty.")
        separators = {"/", os.sep} | ({os.altsep} if os.altsep else set())
        if any(sep in self.name for sep in separators):
            raise ValueError(f"Entry name cannot contain a path separator: {self.name!r}")

    @property
    def sort_key(self) -> bytes:
        # Byte-wise ordinal order, independent of the locale
        return os.fsencode(self.name)


class EntrySet(Sequence[ConfigEntry]):
    """Sorted, read-only sequence of entries for one menu session.

    Indices are stable for the lifetime of the object, so the numbering shown
    in the menu always maps back to the same file.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Iterable[ConfigEntry] = ()):
        ordered = sorted(entries, key=lambda e: e.sort_key)
        for prev, cur in zip(ordered, ordered[1:]):
            if prev.name == cur.name:
                raise ValueError(f"Duplicate entry name: {cur.name!r}")
        self._entries: tuple[ConfigEntry, ...] = tuple(ordered)

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "EntrySet":
        return cls(ConfigEntry(n) for n in names)

    @overload
    def __getitem__(self, index: int) -> ConfigEntry: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[ConfigEntry, ...]: ...

    def __getitem__(self, index):
        return self._entries[index]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ConfigEntry]:
        return iter(self._entries)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, EntrySet):
            return self._entries == other._entries
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._entries)

    def __repr__(self) -> str:
        return f"EntrySet({list(self.names)!r})"

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(e.name for e in self._entries)

    @property
    def max_name_length(self) -> int:
        return max((len(e.name) for e in self._entries), default=0)

    def get(self, index: int) -> ConfigEntry | None:
        """Return the entry at ``index`` or None when the slot is empty."""
        if 0 <= index < len(self._entries):
            return self._entries[index]
        return None
