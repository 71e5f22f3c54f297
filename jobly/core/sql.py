"""
Builders for the SQL fragments the repositories share.

Both builders emit numbered positional placeholders ($1, $2, ...) and return
the values to bind alongside the fragment, so no caller-supplied value is
ever interpolated into SQL text. Column names come from application-owned
tables only.
"""

from typing import Any, Callable, List, Mapping, NamedTuple, Optional

from jobly.core.errors import BadRequestError

# rule(value, bind) -> condition or None; bind(v) registers v and returns "$n"
FilterRule = Callable[[Any, Callable[[Any], str]], Optional[str]]

TRUE_VALUES = {"true", "t", "yes", "y", "1"}
FALSE_VALUES = {"false", "f", "no", "n", "0"}

LIKE_ESCAPE = "\\"


class PartialUpdate(NamedTuple):
    """SET assignments for an UPDATE plus the values bound to them, in order."""
    assignments: List[str]
    values: List[Any]

    @property
    def set_clause(self) -> str:
        return ", ".join(self.assignments)


class WhereClause(NamedTuple):
    """AND-joined conditions (no WHERE keyword) plus their bound values."""
    fragment: str
    values: List[Any]

    def __bool__(self) -> bool:
        return bool(self.fragment)

    @property
    def sql(self) -> str:
        return f"WHERE {self.fragment}" if self.fragment else ""


def quote_identifier(name: str) -> str:
    """Double-quote a column name, escaping embedded quotes."""
    escaped = name.replace('"', '""')
    return f'"{escaped}"'


def column_for(field: str, column_map: Mapping[str, str]) -> str:
    """Column name for a record field; unmapped fields are used verbatim."""
    return column_map.get(field, field)


def placeholder(index: int) -> str:
    return f"${index}"


def sql_for_partial_update(data: Mapping[str, Any], column_map: Mapping[str, str]) -> PartialUpdate:
    """
    Build the SET clause of a partial-record UPDATE.

    Args:
        data: Fields to change and their new values, e.g.
            {"name": "NewCo", "numEmployees": 35}
        column_map: Field name to column name translations, e.g.
            {"numEmployees": "num_employees"}. Pass {} when every field
            already matches its column.

    Returns:
        PartialUpdate with assignments ['"name"=$1', '"num_employees"=$2']
        and values ["NewCo", 35]. Callers number any further parameters
        from len(values) + 1.

    Raises:
        BadRequestError: If data is empty
        TypeError: If column_map is missing
    """
    if column_map is None:
        raise TypeError("sql_for_partial_update() requires a column_map (use {} for none)")

    keys = list(data)
    if not keys:
        raise BadRequestError("No data")

    assignments = [
        f"{quote_identifier(column_for(key, column_map))}={placeholder(idx + 1)}"
        for idx, key in enumerate(keys)
    ]
    return PartialUpdate(assignments, [data[key] for key in keys])


def sql_for_variable_where(
    filters: Optional[Mapping[str, Any]],
    rules: Mapping[str, FilterRule],
    start: int = 1,
) -> WhereClause:
    """
    Build a WHERE fragment from search filters using an entity's rule table.

    Args:
        filters: Filter name to value, e.g. {"name": "net", "minEmployees": 10}.
            None or empty means no filtering.
        rules: Recognized filters for the entity being searched
        start: Number of the first placeholder

    Returns:
        WhereClause whose fragment holds one condition per filter, in input
        order, joined by " AND ". Rules may decline to add a condition.

    Raises:
        BadRequestError: If any filter is not in rules, or a value is invalid
    """
    if not filters:
        return WhereClause("", [])

    unsupported = [key for key in filters if key not in rules]
    if unsupported:
        raise BadRequestError(
            f"Unsupported filter: {', '.join(unsupported)}. "
            f"Allowed filters: {', '.join(rules)}"
        )

    values: List[Any] = []

    def bind(value: Any) -> str:
        values.append(value)
        return placeholder(start + len(values) - 1)

    conditions = []
    for key, value in filters.items():
        try:
            condition = rules[key](value, bind)
        except (TypeError, ValueError) as e:
            raise BadRequestError(f"Invalid value for filter '{key}': {value!r}") from e
        if condition:
            conditions.append(condition)

    return WhereClause(" AND ".join(conditions), values)


def as_bool(value: Any) -> bool:
    """Interpret a query-string style flag ("true", "0", True, ...)."""
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    raise ValueError(f"not a boolean: {value!r}")


def escape_like(value: str) -> str:
    """Make %, _ and the escape character match literally in a LIKE pattern."""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def contains(column: str) -> FilterRule:
    """Case-insensitive literal substring match on column."""
    def rule(value: Any, bind: Callable[[Any], str]) -> str:
        pattern = f"%{escape_like(str(value))}%"
        return f"{quote_identifier(column)} ILIKE {bind(pattern)} ESCAPE '{LIKE_ESCAPE}'"
    return rule


def at_least(column: str, cast: Callable[[Any], Any] = int) -> FilterRule:
    def rule(value: Any, bind: Callable[[Any], str]) -> str:
        return f"{quote_identifier(column)} >= {bind(cast(value))}"
    return rule


def at_most(column: str, cast: Callable[[Any], Any] = int) -> FilterRule:
    def rule(value: Any, bind: Callable[[Any], str]) -> str:
        return f"{quote_identifier(column)} <= {bind(cast(value))}"
    return rule


def positive_when_true(column: str) -> FilterRule:
    """Require column > 0 for a true flag; a false flag adds no condition."""
    def rule(value: Any, bind: Callable[[Any], str]) -> Optional[str]:
        if as_bool(value):
            return f"{quote_identifier(column)} > 0"
        return None
    return rule
