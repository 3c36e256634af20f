"""Project-wide JSON typing helpers.

These aliases model JSON-serializable values as they arrive from, or are sent
to, the Sure API.
"""

from __future__ import annotations

from typing_extensions import TypeAliasType

JsonPrimitive = TypeAliasType("JsonPrimitive", None | bool | int | float | str)
JsonValue = TypeAliasType(
    "JsonValue", "JsonPrimitive | list[JsonValue] | dict[str, JsonValue]"
)
JsonObject = TypeAliasType("JsonObject", "dict[str, JsonValue]")

__all__ = ["JsonObject", "JsonPrimitive", "JsonValue"]
