"""
Building blocks shared by the paginated listing queries.

Callers describe what they want with `FilterBy` / `SortBy` requests. Each
repository declares which filter and sort kinds it understands as a
`QueryEnum`, and resolves the requests against it. Kinds a repository does
not know are skipped, values it cannot parse raise
`InvalidQueryParameterError`.
"""
import enum
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, List, Optional, Type, TypeVar

from projectstore.services.exceptions import InvalidQueryParameterError

E = TypeVar("E", bound=enum.Enum)

DATE_FORMATS = (
    "%Y-%m-%d",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%dT%H:%M:%S.%f",
    "%Y-%m-%dT%H:%M:%S%z",
    "%Y-%m-%dT%H:%M:%S.%f%z",
)


class Order(str, enum.Enum):
    ASC = "ASC"
    DESC = "DESC"


class QueryEnum(enum.Enum):
    """Base for filter/sort kind enums. Members carry a `key`, the name callers use."""

    @classmethod
    def of(cls, name: Optional[str]):
        """Resolves a kind by member name or key. Returns None when unknown."""
        if not name:
            return None
        name = name.strip().upper()
        for member in cls:
            if member.name == name or member.key == name:
                return member
        return None


@dataclass(frozen=True)
class FilterBy:
    """A request to narrow a listing: filter kind `value`, raw caller value `param`."""
    value: str
    param: str = ""

    @classmethod
    def parse(cls, expression: str) -> "FilterBy":
        """
        Parses a `kind:param` expression such as `status:job_failed,job_killed`.

        Only the first colon separates kind from param, so timestamps like
        `created_gt:2021-03-01T10:00:00` survive intact.

        Raises:
            InvalidQueryParameterError: the expression has no kind or no colon.
        """
        kind, sep, param = (expression or "").partition(":")
        if not sep or not kind.strip():
            raise InvalidQueryParameterError(
                f"Malformed filter '{expression}'. Expected 'field:value'.")
        return cls(kind.strip().upper(), param.strip())


@dataclass(frozen=True)
class SortBy:
    """A request to order a listing by kind `value`; `order` None means the kind's default."""
    value: str
    order: Optional[Order] = None

    @classmethod
    def parse(cls, expression: str) -> "SortBy":
        """
        Parses `kind` or `kind:asc|desc`, e.g. `created:desc`.

        Raises:
            InvalidQueryParameterError: empty kind or an order other than asc/desc.
        """
        kind, sep, order = (expression or "").partition(":")
        if not kind.strip():
            raise InvalidQueryParameterError(f"Malformed sort '{expression}'. Expected 'field[:asc|desc]'.")
        if not sep or not order.strip():
            return cls(kind.strip().upper())
        try:
            return cls(kind.strip().upper(), Order(order.strip().upper()))
        except ValueError:
            raise InvalidQueryParameterError(
                f"Sort order for {kind.strip()} must be ASC or DESC, but found: {order.strip()}") from None


@dataclass
class CollectionInfo:
    """One page of a listing plus the number of rows matching its filters."""
    count: int
    items: List[Any] = field(default_factory=list)


def get_enum_values(filter_by: FilterBy, field_name: str, enum_type: Type[E]) -> List[E]:
    """
    Resolves a comma separated filter param into members of `enum_type`.

    Raises:
        InvalidQueryParameterError: a token is not a member name.
    """
    values = []
    for token in filter_by.param.split(","):
        token = token.strip().upper()
        if not token:
            continue
        try:
            values.append(enum_type[token])
        except KeyError:
            raise InvalidQueryParameterError(
                f"Filter value for {field_name} needs to set a valid {field_name}, but found: {token}") from None
    if not values:
        raise InvalidQueryParameterError(f"Filter value for {field_name} is empty.")
    return values


def get_date(field_name: str, value: str) -> datetime:
    """
    Parses a date filter value. Timezone-aware input is converted to naive UTC,
    the form timestamps are stored in.

    Raises:
        InvalidQueryParameterError: the value matches none of DATE_FORMATS.
    """
    value = (value or "").strip()
    if value.endswith("Z"):
        value = value[:-1] + "+0000"
    for fmt in DATE_FORMATS:
        try:
            parsed = datetime.strptime(value, fmt)
        except ValueError:
            continue
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
        return parsed
    raise InvalidQueryParameterError(
        f"Unrecognized date format for {field_name} value: '{value}'. "
        f"Use YYYY-MM-DD or YYYY-MM-DDTHH:MM:SS[.ffffff][+HH:MM].")


def paginate(query, offset: Optional[int], limit: Optional[int]):
    """Applies offset and limit to a SQLAlchemy query, ignoring non-positive values."""
    if offset is not None and offset > 0:
        query = query.offset(offset)
    if limit is not None and limit > 0:
        query = query.limit(limit)
    return query
