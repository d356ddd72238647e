import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple
from sqlalchemy import DateTime, bindparam, text
from sqlalchemy.sql.elements import TextClause
from inventory_sales.errors import InvalidInput

_PLACEHOLDER = re.compile(r"\$(\d+)")


def prepare_update_query(
    data: Mapping[str, Any],
    column_map: Optional[Mapping[str, str]] = None
) -> Tuple[str, List[Any]]:
    """Build the SET clause of a partial UPDATE.

    Keys of ``data`` are logical (API) field names; ``column_map`` translates
    them to column names, and keys it does not mention are used as-is. Values
    are never interpolated: each one gets a positional ``$n`` placeholder.

        >>> prepare_update_query({"firstName": "Aliya", "age": 32}, {"firstName": "first_name"})
        ('"first_name"=$1, "age"=$2', ['Aliya', 32])

    The caller binds the row id at ``$<len(values) + 1>``.
    """
    if not data:
        raise InvalidInput("No data")

    column_map = column_map or {}
    set_columns = [
        f'"{column_map.get(field, field)}"=${idx}'
        for idx, field in enumerate(data, start=1)
    ]
    return ", ".join(set_columns), list(data.values())


def bind_positional(sql: str, values: Sequence[Any]) -> TextClause:
    """Turn a ``$n`` statement into a text clause with bound parameters.

    Lets the same statement run on any driver SQLAlchemy supports, whatever
    its native placeholder style.
    """
    params: Dict[str, Any] = {f"p{idx}": value for idx, value in enumerate(values, start=1)}
    used = {f"p{m}" for m in _PLACEHOLDER.findall(sql)}
    missing = used - params.keys()
    if missing:
        raise ValueError(f"No value for placeholder(s): {', '.join(sorted(missing))}")

    statement = text(_PLACEHOLDER.sub(lambda m: f":p{m.group(1)}", sql))
    return statement.bindparams(*(_bind(name, params[name]) for name in sorted(used)))


def _bind(name: str, value: Any):
    # timestamp columns are all timezone-aware
    if isinstance(value, datetime):
        return bindparam(name, value, type_=DateTime(timezone=True))
    return bindparam(name, value)


def _as_utc(value: datetime) -> datetime:
    # naive values are stored and sent as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def is_changed(new: Any, current: Any) -> bool:
    """Whether an update value differs from the stored one.

    Datetimes are compared as instants, so a naive and an aware value for
    the same moment count as unchanged.
    """
    if isinstance(new, datetime) and isinstance(current, datetime):
        return _as_utc(new) != _as_utc(current)
    return new != current
