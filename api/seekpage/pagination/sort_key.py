"""Sort key declarations for seek pagination.

A sort key is the ordered list of fields a listing is traversed by. Seek
pagination only works when that ordering is total, so the last field of
every sort key has to be unique (normally the primary key).
"""

import hashlib
import re
from enum import Enum
from collections.abc import Mapping
from typing import Any, Iterable, List, Tuple

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from ..errors.problem_details import InvalidSortKey


IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class SortOrder(str, Enum):
    """Per-field sort order."""

    ASC = "asc"
    DESC = "desc"

    def flipped(self) -> "SortOrder":
        return SortOrder.DESC if self is SortOrder.ASC else SortOrder.ASC


class Direction(str, Enum):
    """Direction of travel relative to the cursor."""

    NEXT = "next"
    PREV = "prev"


class SortField(BaseModel):
    """One field of a sort key."""

    name: str = Field(description="Column or attribute name")
    order: SortOrder = Field(default=SortOrder.ASC, description="Sort order for this field")
    value_type: Any = Field(default=str, description="Python type of the field's values")
    unique: bool = Field(default=False, description="Whether values of this field are unique")

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


def read_field(row: Any, name: str) -> Any:
    """Read a field from a mapping-like row (dict, asyncpg Record) or an object."""
    if isinstance(row, Mapping) or hasattr(row, "keys"):
        return row[name]
    return getattr(row, name)


class SortKey:
    """Validated, ordered collection of sort fields.

    Raises:
        InvalidSortKey: If the key is empty, repeats a field, names a field
            that is not a plain identifier, or does not end in a unique field.
    """

    def __init__(self, fields: Iterable[SortField]):
        self.fields: Tuple[SortField, ...] = tuple(fields)

        if not self.fields:
            raise InvalidSortKey("Sort key must contain at least one field")

        seen = set()
        for field in self.fields:
            if not IDENTIFIER_PATTERN.match(field.name):
                raise InvalidSortKey(f"Invalid sort field name: {field.name!r}")
            if field.name in seen:
                raise InvalidSortKey(f"Sort field '{field.name}' appears more than once")
            seen.add(field.name)

        if not self.fields[-1].unique:
            raise InvalidSortKey(
                f"Last sort field '{self.fields[-1].name}' must be unique to break ties",
                field=self.fields[-1].name
            )

        self._adapters = tuple(TypeAdapter(field.value_type) for field in self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def __iter__(self):
        return iter(self.fields)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SortKey):
            return NotImplemented
        return self.signature == other.signature

    def __hash__(self) -> int:
        return hash(self.signature)

    def __repr__(self) -> str:
        return f"SortKey({self.signature})"

    @property
    def names(self) -> List[str]:
        return [field.name for field in self.fields]

    @property
    def signature(self) -> str:
        """Human readable description, e.g. ``score:desc:int,id:asc:int``."""
        return ",".join(
            f"{field.name}:{field.order.value}:{getattr(field.value_type, '__name__', repr(field.value_type))}"
            for field in self.fields
        )

    @property
    def fingerprint(self) -> str:
        """Short stable hash identifying this sort key inside cursors."""
        return hashlib.sha256(self.signature.encode("utf-8")).hexdigest()[:12]

    def values_of(self, row: Any) -> Tuple[Any, ...]:
        """Extract this key's field values from a row, in key order."""
        return tuple(read_field(row, field.name) for field in self.fields)

    def dump_values(self, values: Tuple[Any, ...]) -> List[Any]:
        """Validate values against the field types and convert them to JSON-safe data.

        Raises:
            pydantic.ValidationError: If a value does not match its field type.
        """
        return [
            adapter.dump_python(adapter.validate_python(value), mode="json")
            for adapter, value in zip(self._adapters, values)
        ]

    def load_values(self, raw: List[Any]) -> Tuple[Any, ...]:
        """Coerce JSON data back into typed field values.

        Raises:
            pydantic.ValidationError: If a value cannot be coerced.
        """
        return tuple(
            adapter.validate_python(value)
            for adapter, value in zip(self._adapters, raw)
        )
