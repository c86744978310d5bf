"""Result merger: folds partial detector results into one report.

Each detector returns a mapping of top-level keys. The orchestrator merges
every mapping into the shared report with ``merge()``. Values are
classified into one of three kinds and merged per kind:

- ``ARRAY``: concatenated onto an existing array, otherwise set.
- ``OBJECT``: shallow-copied into a dict at the same key, one level deep,
  last writer wins. Deeper values are assigned by reference.
- ``SCALAR``: overwritten unconditionally (``None`` included).

Merging the same object/scalar source twice is idempotent. Merging the
same array twice duplicates its entries; the orchestrator merges each
detector result exactly once.
"""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from enum import Enum
from typing import Any


class ValueKind(Enum):
    """Merge-relevant kind of a report value."""

    ARRAY = "array"
    OBJECT = "object"
    SCALAR = "scalar"


def classify(value: Any) -> ValueKind:
    """Return the ``ValueKind`` for a value.

    Lists and tuples are arrays. Any non-null mapping is an object.
    Everything else (strings, numbers, booleans, ``None``) is a scalar.
    """
    if isinstance(value, (list, tuple)):
        return ValueKind.ARRAY
    if isinstance(value, Mapping):
        return ValueKind.OBJECT
    return ValueKind.SCALAR


def merge(
    source: Mapping[str, Any], destination: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Merge ``source`` into ``destination`` and return ``destination``.

    Args:
        source: Partial result produced by one detector.
        destination: The accumulating report. Mutated in place.

    Returns:
        The same ``destination`` object, for chaining.
    """
    for name, value in source.items():
        kind = classify(value)
        if kind is ValueKind.ARRAY:
            existing = destination.get(name)
            if classify(existing) is ValueKind.ARRAY:
                destination[name] = [*existing, *value]
            else:
                destination[name] = list(value)
        elif kind is ValueKind.OBJECT:
            target = destination.get(name)
            if not isinstance(target, MutableMapping):
                target = {}
                destination[name] = target
            for key, inner in value.items():
                target[key] = inner
        else:
            destination[name] = value
    return destination
