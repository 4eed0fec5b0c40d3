"""A keyed table with releases, stored as a linked list of records in a binary file.

File layout (little-endian 32-bit integers): the table size, then records of
``next offset, info length, info bytes, release, key``. Each record's next
offset points at the following live record; the list ends at end of file.
"""

from __future__ import annotations

import os
import struct
from collections import Counter
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List, Optional, Union

_INT = struct.Struct("<i")
_PAIR = struct.Struct("<ii")
_HEADER_SIZE = _INT.size
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1

HASH_NUMBER = 37
KEY_BYTES = 4


def hash_key(key: int, size: int) -> int:
    """Hash a key's four little-endian bytes with multiplier 37, modulo size."""
    if size <= 0:
        raise ValueError("table size must be positive")
    if not 0 <= key <= _INT_MAX:
        raise ValueError("key must be a non-negative 32-bit integer")
    value = 0
    for byte in key.to_bytes(KEY_BYTES, "little"):
        value = HASH_NUMBER * value + byte
    return value % size


@dataclass(frozen=True)
class Record:
    key: int
    info: str
    release: int = 0

    def __str__(self) -> str:
        return f"{self.key}. {self.info} -- {self.release}"


@dataclass
class _Slot:
    position: int
    next: int
    key: int
    info: str
    release: int
    release_position: int

    def record(self) -> Record:
        return Record(self.key, self.info, self.release)


class FileTable:
    """A table kept in a file; close() rewrites the file compactly."""

    def __init__(self, path: Union[str, os.PathLike], size: Optional[int] = None):
        self.path = Path(path)
        if size is None:
            self._file = open(self.path, "r+b")
            header = self._file.read(_HEADER_SIZE)
            if len(header) != _HEADER_SIZE:
                self._file.close()
                raise ValueError(f"{self.path} is not a table file")
            (self.size,) = _INT.unpack(header)
            self.created = False
        else:
            if size <= 0:
                raise ValueError("table size must be positive")
            self._file = open(self.path, "w+b")
            self._file.write(_INT.pack(size))
            self.size = size
            self.created = True
        self._head = _HEADER_SIZE

    @classmethod
    def open(cls, path: Union[str, os.PathLike], size: Optional[int] = None) -> "FileTable":
        """Open an existing table file, or create one of the given size."""
        if Path(path).exists():
            return cls(path)
        if size is None:
            raise FileNotFoundError(f"no table file at {path}")
        return cls(path, size)

    def close(self) -> None:
        if self._file is None:
            return
        self.compact()
        self._file.close()
        self._file = None

    def __enter__(self) -> "FileTable":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _handle(self):
        if self._file is None:
            raise ValueError("table is closed")
        return self._file

    def _end(self) -> int:
        return self._handle().seek(0, os.SEEK_END)

    def _read_exact(self, count: int) -> bytes:
        data = self._handle().read(count)
        if len(data) != count:
            raise ValueError(f"{self.path} is corrupt")
        return data

    def _read_slot(self, position: int) -> _Slot:
        handle = self._handle()
        handle.seek(position)
        nxt, length = _PAIR.unpack(self._read_exact(_PAIR.size))
        if length < 0:
            raise ValueError(f"{self.path} is corrupt")
        info = self._read_exact(length).decode("utf-8")
        release_position = handle.tell()
        release, key = _PAIR.unpack(self._read_exact(_PAIR.size))
        return _Slot(position, nxt, key, info, release, release_position)

    def _slots(self) -> Iterator[_Slot]:
        position = self._head
        end = self._end()
        while position < end:
            slot = self._read_slot(position)
            if slot.next <= position:
                raise ValueError(f"{self.path} is corrupt")
            yield slot
            position = slot.next

    def _write_int(self, position: int, value: int) -> None:
        handle = self._handle()
        handle.seek(position)
        handle.write(_INT.pack(value))

    def _append(self, key: int, info: str, release: int) -> int:
        if not _INT_MIN <= key <= _INT_MAX:
            raise ValueError("key must fit in a 32-bit integer")
        data = info.encode("utf-8")
        position = self._end()
        nxt = position + _PAIR.size * 2 + len(data)
        handle = self._handle()
        handle.write(_PAIR.pack(nxt, len(data)) + data + _PAIR.pack(release, key))
        return position

    def _unlink(self, previous: Optional[_Slot], slot: _Slot) -> None:
        if previous is None:
            self._head = slot.next
        else:
            self._write_int(previous.position, slot.next)

    def is_empty(self) -> bool:
        return self._head >= self._end()

    def __iter__(self) -> Iterator[Record]:
        for slot in self._slots():
            yield slot.record()

    def __len__(self) -> int:
        return sum(1 for _ in self._slots())

    def contains(self, key: int, info: str) -> bool:
        return any(slot.key == key and slot.info == info for slot in self._slots())

    def count_releases(self, key: int) -> int:
        return sum(1 for slot in self._slots() if slot.key == key)

    def add(self, key: int, info: str) -> Record:
        """Append a record; its release is the number of records with that key."""
        empty = self.is_empty()
        release = 0 if empty else self.count_releases(key)
        position = self._append(key, info, release)
        if empty:
            self._head = position
        return Record(key, info, release)

    def find(self, key: int, release: int) -> Record:
        for slot in self._slots():
            if slot.key == key and slot.release == release:
                return slot.record()
        raise KeyError((key, release))

    def find_all(self, key: int) -> List[Record]:
        return [slot.record() for slot in self._slots() if slot.key == key]

    def delete(self, key: int, release: int) -> Record:
        previous = None
        for slot in list(self._slots()):
            if slot.key == key and slot.release == release:
                self._unlink(previous, slot)
                return slot.record()
            previous = slot
        raise KeyError((key, release))

    def delete_all(self, key: int) -> List[Record]:
        removed = []
        previous = None
        for slot in list(self._slots()):
            if slot.key == key:
                self._unlink(previous, slot)
                removed.append(slot.record())
            else:
                previous = slot
        return removed

    def clean(self) -> int:
        """Keep only the newest release of each key, reset releases to 0.

        Returns the number of records removed.
        """
        slots = list(self._slots())
        if not slots:
            return 0
        counts = Counter(slot.key for slot in slots)
        removed = 0
        previous = None
        for slot in slots:
            count = counts[slot.key]
            if count > 1 and slot.release < count - 1:
                self._unlink(previous, slot)
                removed += 1
            else:
                previous = slot
        for slot in list(self._slots()):
            if slot.release != 0:
                self._write_int(slot.release_position, 0)
        return removed

    def bucket(self, index: int) -> List[Record]:
        return [record for record in self if hash_key(record.key, self.size) == index]

    def compact(self) -> None:
        """Rewrite the file with live records only, renumbering releases per key."""
        records = [(slot.key, slot.info) for slot in self._slots()]
        handle = self._handle()
        handle.seek(0)
        handle.truncate()
        handle.write(_INT.pack(self.size))
        self._head = _HEADER_SIZE
        releases: Counter = Counter()
        for key, info in records:
            self._append(key, info, releases[key])
            releases[key] += 1
        handle.flush()