from __future__ import annotations

from typing import Any, Mapping

import inflection

__all__ = [
    'from_camel',
    'to_camel',
    'camelize_keys',
]


def from_camel(name: str) -> str:
    """Convert lower/upper camelCase to snake_case."""
    if not name:
        return name
    return inflection.underscore(str(name))


def to_camel(name: str) -> str:
    """Convert snake_case to lowerCamelCase."""
    if not name:
        return name
    return inflection.camelize(str(name), False)


def camelize_keys(value: Any) -> Any:
    """Recursively camelCase the keys of mappings (lists are walked too)."""
    if isinstance(value, Mapping):
        return {to_camel(k): camelize_keys(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [camelize_keys(v) for v in value]
    return value
