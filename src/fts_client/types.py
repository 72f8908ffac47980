"""JSON type aliases shared by the query model, the result schema and errors."""

from __future__ import annotations

from typing import Dict, List, TypeAlias, Union

# Containers use ``object`` rather than recursive aliases so pydantic can build
# schemas for fields typed with them.
JSONPrimitive: TypeAlias = Union[str, int, float, bool, None]
JSONValue: TypeAlias = Union[JSONPrimitive, Dict[str, object], List[object]]
JSONDict: TypeAlias = Dict[str, JSONValue]

__all__ = ["JSONPrimitive", "JSONValue", "JSONDict"]
