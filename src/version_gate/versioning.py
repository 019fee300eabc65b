"""Dotted version identifiers and their ordering.

Parsing is deliberately lenient: any component that is not a plain
non-negative integer counts as ``0`` and nothing here raises. A header
value the gate does not understand must never take the API down.
"""
from __future__ import annotations

import sys
from enum import IntEnum
from functools import total_ordering
from itertools import zip_longest
from typing import Union


class Ordering(IntEnum):
    """Result of comparing two versions."""
    LESS = -1
    EQUAL = 0
    GREATER = 1


# Components longer than this saturate instead of going through int(),
# which refuses very long digit strings.
_MAX_COMPONENT_DIGITS = 18


def _parse_component(part: str) -> int:
    part = part.strip()
    if not (part.isascii() and part.isdigit()):
        return 0
    digits = part.lstrip("0") or "0"
    if len(digits) > _MAX_COMPONENT_DIGITS:
        return sys.maxsize
    return int(digits)


@total_ordering
class VersionIdentifier:
    """Immutable ordered tuple of non-negative integers.

    Missing trailing components compare as ``0``, so ``1.0`` equals
    ``1.0.0`` and both hash the same.
    """

    __slots__ = ("_parts", "_raw")

    def __init__(self, parts: tuple[int, ...], raw: str | None = None) -> None:
        object.__setattr__(self, "_parts", tuple(parts))
        object.__setattr__(
            self, "_raw", raw if raw is not None else ".".join(map(str, parts))
        )

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("VersionIdentifier is immutable")

    @classmethod
    def parse(cls, raw: str | None) -> VersionIdentifier:
        """Parse a dotted string; bad or missing components become ``0``."""
        if raw is None:
            return cls((0,), "")
        text = str(raw).strip()
        return cls(tuple(_parse_component(p) for p in text.split(".")), text)

    @property
    def parts(self) -> tuple[int, ...]:
        return self._parts

    @property
    def raw(self) -> str:
        """The string this identifier was parsed from."""
        return self._raw

    def _normalized(self) -> tuple[int, ...]:
        parts = list(self._parts)
        while len(parts) > 1 and parts[-1] == 0:
            parts.pop()
        return tuple(parts)

    def compare(self, other: VersionIdentifier) -> Ordering:
        for left, right in zip_longest(self._parts, other._parts, fillvalue=0):
            if left < right:
                return Ordering.LESS
            if left > right:
                return Ordering.GREATER
        return Ordering.EQUAL

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VersionIdentifier):
            return NotImplemented
        return self.compare(other) is Ordering.EQUAL

    def __lt__(self, other: VersionIdentifier) -> bool:
        if not isinstance(other, VersionIdentifier):
            return NotImplemented
        return self.compare(other) is Ordering.LESS

    def __hash__(self) -> int:
        return hash(self._normalized())

    def __str__(self) -> str:
        return ".".join(map(str, self._parts))

    def __repr__(self) -> str:
        return f"VersionIdentifier({str(self)!r})"


VersionLike = Union[str, VersionIdentifier, None]


def parse_version(raw: VersionLike) -> VersionIdentifier:
    """Return *raw* as a VersionIdentifier, parsing strings leniently."""
    if isinstance(raw, VersionIdentifier):
        return raw
    return VersionIdentifier.parse(raw)


def compare_versions(a: VersionLike, b: VersionLike) -> Ordering:
    """Compare two versions component by component, padding with zeros."""
    return parse_version(a).compare(parse_version(b))


def is_version_supported(version: VersionLike, minimum_version: VersionLike) -> bool:
    """True if *version* is at or above *minimum_version*."""
    return compare_versions(version, minimum_version) is not Ordering.LESS


def is_transition_minimum(minimum_version: VersionLike, threshold: VersionLike) -> bool:
    """True while the configured minimum still tolerates unversioned clients."""
    return compare_versions(minimum_version, threshold) is not Ordering.GREATER
