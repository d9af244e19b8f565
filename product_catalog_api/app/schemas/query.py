"""
Schemas for the query-graph surface.

A client posts a :class:`QueryRequestIn` naming an operation, its
arguments and the fields it wants back.  The raw JSON arguments are
converted exactly once, by :func:`parse_arguments`, into the small
tagged-variant family below (:class:`IntArgument`,
:class:`TextArgument`, :class:`DecimalArgument`,
:class:`ObjectArgument`).  Domain code downstream only ever sees these
variants, never untyped JSON.

The response envelope mirrors GraphQL: ``data`` holds the projected
result and ``errors`` lists per-field or per-operation problems that
did not prevent a response from being produced.
"""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, ClassVar, Dict, List, Optional, Union

from pydantic import BaseModel, Field

from product_catalog_api.app.core.errors import PathElement, RequestError


class Operation(str, Enum):
    FETCH_ALL = "fetch-all"
    FETCH_BY_ID = "fetch-by-id"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class IntArgument:
    kind: ClassVar[str] = "int"
    value: int


@dataclass(frozen=True)
class TextArgument:
    kind: ClassVar[str] = "text"
    value: str


@dataclass(frozen=True)
class DecimalArgument:
    kind: ClassVar[str] = "decimal"
    value: Decimal


@dataclass(frozen=True)
class ObjectArgument:
    kind: ClassVar[str] = "object"
    value: Dict[str, "ArgumentValue"] = field(default_factory=dict)


ArgumentValue = Union[IntArgument, TextArgument, DecimalArgument, ObjectArgument]


def parse_argument(raw: Any, path: List[PathElement]) -> ArgumentValue:
    """Convert one raw JSON value into an argument variant.

    Booleans, nulls and arrays have no variant and are rejected.
    Floats become decimals via their shortest textual form, so a JSON
    ``9.99`` arrives as ``Decimal("9.99")``.
    """
    # bool is a subclass of int and must be checked first
    if isinstance(raw, bool) or raw is None:
        raise RequestError(f"Unsupported argument value {raw!r}", path)
    if isinstance(raw, int):
        return IntArgument(raw)
    if isinstance(raw, str):
        return TextArgument(raw)
    if isinstance(raw, float):
        try:
            return DecimalArgument(Decimal(str(raw)))
        except InvalidOperation:
            raise RequestError(f"Unsupported number {raw!r}", path)
    if isinstance(raw, dict):
        return ObjectArgument(
            {str(key): parse_argument(value, path + [str(key)]) for key, value in raw.items()}
        )
    raise RequestError(f"Unsupported argument type {type(raw).__name__}", path)


def parse_arguments(raw: Dict[str, Any]) -> Dict[str, ArgumentValue]:
    return {name: parse_argument(value, [name]) for name, value in raw.items()}


class QueryRequestIn(BaseModel):
    """Body of ``POST /query`` as sent by clients."""

    operation: Operation = Field(..., examples=["fetch-all"])
    arguments: Dict[str, Any] = Field(default_factory=dict, examples=[{"id": 1}])
    fields: List[str] = Field(default_factory=list, examples=[["id", "name", "warehouse"]])


@dataclass
class QueryRequest:
    """A validated query: typed arguments and an ordered field selection."""

    operation: Operation
    arguments: Dict[str, ArgumentValue]
    fields: List[str]

    @classmethod
    def from_payload(cls, payload: QueryRequestIn) -> "QueryRequest":
        return cls(
            operation=payload.operation,
            arguments=parse_arguments(payload.arguments),
            fields=list(payload.fields),
        )


class QueryErrorEntry(BaseModel):
    message: str
    code: str
    path: List[Union[str, int]] = Field(default_factory=list)


class QueryResponse(BaseModel):
    """Response envelope for the query surface."""

    data: Optional[Any] = None
    errors: List[QueryErrorEntry] = Field(default_factory=list)
