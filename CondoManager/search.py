"""
Free-text search for list pages.

Each entity declares the columns a search term is matched against as a list
of `SearchField` entries. `build_search_filter` compiles that list into one
OR clause of case-insensitive substring matches. Date columns are matched
against their human rendering ("Monday, December 01, 2025") so a user can
type a month, a weekday or a year.
"""

import enum
from typing import NamedTuple, Optional, Sequence

from sqlalchemy import String, or_
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.sql.functions import FunctionElement

WEEKDAYS = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]
MONTHS = [
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
]


class MatchKind(enum.Enum):
    TEXT = "text"
    DATE = "date"


class SearchField(NamedTuple):
    column: object
    kind: MatchKind = MatchKind.TEXT


def text_field(column) -> SearchField:
    return SearchField(column, MatchKind.TEXT)


def date_field(column) -> SearchField:
    return SearchField(column, MatchKind.DATE)


class display_date(FunctionElement):
    """SQL expression rendering a date/timestamp column as "Weekday, Month DD, YYYY"."""
    type = String()
    name = "display_date"
    inherit_cache = True


@compiles(display_date)
def _display_date_default(element, compiler, **kw):
    # ISO text only; year and numeric month/day are still searchable
    return "CAST(%s AS VARCHAR)" % compiler.process(element.clauses, **kw)


@compiles(display_date, "postgresql")
def _display_date_postgresql(element, compiler, **kw):
    return "TO_CHAR(%s, 'FMDay, FMMonth DD, YYYY')" % compiler.process(element.clauses, **kw)


@compiles(display_date, "sqlite")
def _display_date_sqlite(element, compiler, **kw):
    column = compiler.process(element.clauses, **kw)
    weekday = "CASE strftime('%w', {col}) {whens} END".format(
        col=column,
        whens=" ".join("WHEN '%d' THEN '%s'" % (i, name) for i, name in enumerate(WEEKDAYS)),
    )
    month = "CASE strftime('%m', {col}) {whens} END".format(
        col=column,
        whens=" ".join("WHEN '%02d' THEN '%s'" % (i + 1, name) for i, name in enumerate(MONTHS)),
    )
    return "({weekday} || ', ' || {month} || ' ' || strftime('%d', {col}) || ', ' || strftime('%Y', {col}))".format(
        weekday=weekday, month=month, col=column,
    )


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def normalize_term(term: Optional[str]) -> Optional[str]:
    if term is None:
        return None
    term = term.strip()
    return term or None


def build_search_filter(fields: Sequence[SearchField], term: Optional[str]):
    """
    Compile search fields into a single filter clause.

    Args:
        fields (Sequence[SearchField]): Columns to match against.
        term (str, optional): The user's search term.

    Returns:
        ClauseElement | None: An OR of case-insensitive substring matches, or
        None when there is nothing to search for.
    """
    term = normalize_term(term)
    if term is None or not fields:
        return None
    pattern = f"%{_escape_like(term)}%"
    clauses = []
    for field in fields:
        target = display_date(field.column) if field.kind is MatchKind.DATE else field.column
        clauses.append(target.ilike(pattern, escape="\\"))
    return or_(*clauses)


def apply_search(query, fields: Sequence[SearchField], term: Optional[str]):
    condition = build_search_filter(fields, term)
    return query.filter(condition) if condition is not None else query
