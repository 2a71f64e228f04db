"""dtoIn Validation — independent field rules aggregated into one error map.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Every rule runs; a failing rule yields exactly one ErrorEntry keyed
      "<command>/<violation>" with the offending raw values in paramMap
    - collect_violations merges entries once into a fresh map (no shared mutation)

Design Decisions:
    - Return ErrorEntry | None per rule (not exceptions): the aggregate is a plain
      value, the caller decides whether to reject
    - MISSING sentinel separates an absent field from an explicit null, so
      optional rules only skip fields that were not sent at all
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Mapping, Sequence
from uuid import UUID

from shoplist.core.errors import ErrorEntry, ErrorMap


class _Missing:
    def __repr__(self) -> str:
        return "MISSING"


MISSING: Any = _Missing()

Predicate = Callable[..., bool]

MAX_NAME_LENGTH = 255
MAX_PAGE_INDEX = 1_000_000
MAX_PAGE_SIZE = 1000


@dataclass(frozen=True)
class FieldRule:
    """One validation rule over one or more dtoIn fields."""
    fields: tuple[str, ...]
    violation: str
    message: str
    predicate: Predicate


# ─── Predicates ──────────────────────────────────────────────────

def is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def is_bounded_string(max_length: int) -> Predicate:
    """Non-empty after stripping and at most max_length characters."""
    def check(value: Any) -> bool:
        return is_non_empty_string(value) and len(value.strip()) <= max_length
    return check


def is_uuid(value: Any) -> bool:
    if not isinstance(value, str):
        return False
    try:
        UUID(value)
    except ValueError:
        return False
    return True


def is_member_of(enum_type: type[Enum]) -> Predicate:
    allowed = {e.value for e in enum_type}

    def check(value: Any) -> bool:
        return isinstance(value, str) and value in allowed
    return check


def optional(predicate: Predicate) -> Predicate:
    """Field may be absent; when sent it must satisfy predicate."""
    def check(value: Any) -> bool:
        return value is MISSING or predicate(value)
    return check


def as_int(value: Any) -> int | None:
    """Coerce an int or a numeric string (query params) to int, else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def is_page_info(page_index: Any, page_size: Any) -> bool:
    """0 <= pageIndex <= MAX_PAGE_INDEX and 1 <= pageSize <= MAX_PAGE_SIZE, each optional."""
    if page_index is not MISSING:
        index = as_int(page_index)
        if index is None or not 0 <= index <= MAX_PAGE_INDEX:
            return False
    if page_size is not MISSING:
        size = as_int(page_size)
        if size is None or not 1 <= size <= MAX_PAGE_SIZE:
            return False
    return True


# ─── Aggregation ─────────────────────────────────────────────────

def check_dto_in_object(command: str, dto_in: Any) -> ErrorEntry | None:
    """dtoIn must be a JSON object before any field rule can run."""
    if isinstance(dto_in, Mapping):
        return None
    key = f"{command}/invalidDtoIn"
    return ErrorEntry(
        key=key,
        message="dtoIn is not a valid JSON object.",
        param_map={"type": type(dto_in).__name__},
    )


def check_rule(
    command: str, rule: FieldRule, dto_in: Mapping[str, Any],
) -> ErrorEntry | None:
    """Run one rule. Returns the violation entry or None."""
    values = [dto_in.get(name, MISSING) for name in rule.fields]
    if rule.predicate(*values):
        return None
    return ErrorEntry(
        key=f"{command}/{rule.violation}",
        message=rule.message,
        param_map={
            name: (None if value is MISSING else value)
            for name, value in zip(rule.fields, values)
        },
    )


def collect_violations(
    command: str, rules: Sequence[FieldRule], dto_in: Mapping[str, Any],
) -> ErrorMap:
    """Run every rule and merge all violations. Never stops at the first one."""
    entries = [check_rule(command, rule, dto_in) for rule in rules]
    return {entry.key: entry for entry in entries if entry is not None}
