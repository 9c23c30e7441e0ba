"""
Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
SPDX-License-Identifier: Apache-2.0
"""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field


@dataclass
class Field:
    """A single HTTP header with one or more ordered values."""

    name: str
    values: list[str] = field(default_factory=list)

    def add(self, value: str) -> None:
        """Append a value to the field."""
        self.values.append(value)

    def as_string(self, delimiter: str = ",") -> str:
        return delimiter.join(self.values)


class Fields:
    """
    Ordered, multi-valued collection of :class:`Field` objects.

    Names are matched case-insensitively and stored lower-cased, so ``Host`` and
    ``host`` refer to the same entry.
    """

    def __init__(
        self, initial: Mapping[str, str | Iterable[str]] | Iterable[Field] | None = None
    ):
        self._entries: dict[str, Field] = {}
        if initial is None:
            return
        if isinstance(initial, Mapping):
            for name, values in initial.items():
                if isinstance(values, str):
                    self.add(name, values)
                else:
                    for value in values:
                        self.add(name, value)
        else:
            for item in initial:
                self.set_field(Field(name=item.name, values=list(item.values)))

    def add(self, name: str, value: str) -> None:
        key = name.lower()
        if key not in self._entries:
            self._entries[key] = Field(name=key)
        self._entries[key].add(value)

    def set_field(self, field: Field) -> None:
        """Set a field, replacing any existing values stored under its name."""
        key = field.name.lower()
        self._entries[key] = Field(name=key, values=list(field.values))

    def get(self, name: str, default: Field | None = None) -> Field | None:
        return self._entries.get(name.lower(), default)

    def to_dict(self, delimiter: str = ",") -> dict[str, str]:
        """Flatten into a plain ``{name: value}`` dict for transports."""
        return {
            key: entry.as_string(delimiter=delimiter)
            for key, entry in self._entries.items()
        }

    def __getitem__(self, name: str) -> Field:
        return self._entries[name.lower()]

    def __delitem__(self, name: str) -> None:
        del self._entries[name.lower()]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._entries

    def __iter__(self) -> Iterator[Field]:
        return iter(self._entries.values())

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Fields):
            return NotImplemented
        return list(self) == list(other)

    def __repr__(self) -> str:
        return f"Fields({list(self)!r})"
