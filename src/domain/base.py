import copy
from datetime import UTC, datetime
from typing import Any, Dict, Mapping


def utcnow() -> datetime:
    """Naive UTC timestamp, matching the DateTime columns of the entities."""
    return datetime.now(UTC).replace(tzinfo=None)


def deep_merge(base: Mapping[str, Any], patch: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Merge ``patch`` into a copy of ``base`` key by key.

    Nested mappings are merged recursively; every other value (lists
    included) replaces the existing one. Neither argument is mutated.
    """
    merged = copy.deepcopy(dict(base))
    for key, value in patch.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged
