"""The Table value: an ordered hybrid of positional array and keyed record.

A Table is one ordered list of slots. Each slot is a ``[key, value]`` pair
where ``key`` is None for positional entries and a string for named fields.
Positional index ``i`` addresses the i-th slot whose key is None; the slot
order is what the printer walks.
"""

from __future__ import annotations

from typing import Iterator, Optional

from pera import Value
from pera.errors import PeraTypeError
from pera.types.nil import Nil
from pera.types.symbol import Symbol


def key_name(key: Value) -> str:
    """Name under which a non-positional key is stored."""
    if isinstance(key, Symbol):
        return key.id
    if isinstance(key, str):
        return key
    if isinstance(key, float) and key.is_integer():
        return str(int(key))
    if isinstance(key, (int, float)) and not isinstance(key, bool):
        return repr(key)
    raise PeraTypeError(f"Invalid table key: {key!r}")


def _as_index(key: Value) -> Optional[int]:
    if isinstance(key, bool) or not isinstance(key, (int, float)):
        return None
    if isinstance(key, float) and not key.is_integer():
        return None
    return int(key)


class Table:
    __slots__ = ("slots", "_keyed")

    def __init__(self):
        self.slots: list[list] = []
        self._keyed = 0

    # --- Positional part ---
    def _slot_of_position(self, index: int) -> Optional[int]:
        if index < 0:
            return None
        if not self._keyed:
            return index if index < len(self.slots) else None
        seen = 0
        for i, (k, _) in enumerate(self.slots):
            if k is None:
                if seen == index:
                    return i
                seen += 1
        return None

    def array_length(self) -> int:
        return len(self.slots) - self._keyed

    def push(self, value: Value) -> Value:
        self.slots.append([None, value])
        return value

    def pop(self) -> Value:
        """Remove and return the last positional value, or Nil if none."""
        for i in range(len(self.slots) - 1, -1, -1):
            if self.slots[i][0] is None:
                return self.slots.pop(i)[1]
        return Nil

    # --- Keyed part ---
    def _slot_of_key(self, name: str) -> Optional[int]:
        if not self._keyed:
            return None
        for i, (k, _) in enumerate(self.slots):
            if k == name:
                return i
        return None

    def get(self, key: Value) -> Value:
        """Read `key`; numbers index the positional part. Absent keys are Nil.

        A number first stored past the end of the array lives in a named
        slot; that slot keeps answering for the number after pushes grow
        the array over it.
        """
        name = key_name(key)
        slot = self._slot_of_key(name)
        if slot is None:
            index = _as_index(key)
            if index is not None:
                slot = self._slot_of_position(index)
        return Nil if slot is None else self.slots[slot][1]

    def put(self, key: Value, value: Value) -> Value:
        """Write `key`, creating it when absent. Returns `value`."""
        name = key_name(key)
        slot = self._slot_of_key(name)
        if slot is not None:
            self.slots[slot][1] = value
            return value
        index = _as_index(key)
        if index is not None:
            slot = self._slot_of_position(index)
            if slot is not None:
                self.slots[slot][1] = value
                return value
            if index == self.array_length():
                return self.push(value)
        self.slots.append([name, value])
        self._keyed += 1
        return value

    def __len__(self) -> int:
        return len(self.slots)

    def __iter__(self) -> Iterator[tuple[Optional[str], Value]]:
        for k, v in self.slots:
            yield k, v

    def __repr__(self) -> str:
        return f"<Table {len(self.slots)} slots>"
