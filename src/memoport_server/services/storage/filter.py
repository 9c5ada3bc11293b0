"""
Memo filter expressions.

A filter is a set of clauses joined by ``&&``; a memo matches when every
clause matches. Supported clauses::

    tag in ["work", "ideas"]
    visibility == "PUBLIC"
    visibility in ["PUBLIC", "PROTECTED"]
    pinned == true
    content.contains("meeting")
    has_link == true            (also has_task_list, has_code, has_incomplete_tasks)
    created_ts >= 1700000000    (also updated_ts; ops == != < <= > >=)

Storage backends compile the expression once per listing and apply it to
each candidate memo.
"""
import json
import operator
import re
from typing import Callable

from ...models.memo import Memo, Visibility
from ...utils import to_unix_seconds

MemoPredicate = Callable[[Memo], bool]

_TAG_IN = re.compile(r"^tag\s+in\s+(\[.*\])$")
_VISIBILITY_EQ = re.compile(r"^visibility\s*==\s*(\".*\")$")
_VISIBILITY_IN = re.compile(r"^visibility\s+in\s+(\[.*\])$")
_PINNED = re.compile(r"^pinned\s*==\s*(true|false)$")
_CONTENT_CONTAINS = re.compile(r"^content\.contains\(\s*(\".*\")\s*\)$")
_PROPERTY = re.compile(r"^(has_link|has_task_list|has_code|has_incomplete_tasks)\s*==\s*(true|false)$")
_TIMESTAMP = re.compile(r"^(created_ts|updated_ts)\s*(==|!=|<=|>=|<|>)\s*(-?\d+)$")

_COMPARATORS = {
    "==": operator.eq,
    "!=": operator.ne,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
}


class FilterError(ValueError):
    """Raised when a filter expression cannot be parsed."""


def _split_clauses(expression: str) -> list[str]:
    """Split on ``&&`` outside of string literals."""
    clauses = []
    current = []
    in_string = False
    escaped = False
    i = 0
    while i < len(expression):
        ch = expression[i]
        if in_string:
            current.append(ch)
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
            current.append(ch)
        elif expression.startswith("&&", i):
            clauses.append("".join(current).strip())
            current = []
            i += 1
        else:
            current.append(ch)
        i += 1

    if in_string:
        raise FilterError(f"unterminated string in filter: {expression}")
    clauses.append("".join(current).strip())
    return clauses


def _parse_string(literal: str) -> str:
    try:
        value = json.loads(literal)
    except json.JSONDecodeError as e:
        raise FilterError(f"invalid string literal {literal}: {e}") from e
    if not isinstance(value, str):
        raise FilterError(f"expected a string, got {literal}")
    return value


def _parse_string_list(literal: str) -> list[str]:
    try:
        values = json.loads(literal)
    except json.JSONDecodeError as e:
        raise FilterError(f"invalid list literal {literal}: {e}") from e
    if not isinstance(values, list) or not all(isinstance(item, str) for item in values):
        raise FilterError(f"expected a list of strings, got {literal}")
    return values


def _parse_visibility(name: str) -> Visibility:
    try:
        return Visibility(name)
    except ValueError as e:
        raise FilterError(f"unknown visibility in filter: {name}") from e


def _has_tag(memo: Memo, wanted: list[str]) -> bool:
    # "work" also matches nested tags such as "work/meetings"
    for tag in memo.payload.tags:
        for candidate in wanted:
            if tag == candidate or tag.startswith(candidate + "/"):
                return True
    return False


def _compile_clause(clause: str) -> MemoPredicate:
    if match := _TAG_IN.match(clause):
        tags = _parse_string_list(match.group(1))
        return lambda memo: _has_tag(memo, tags)

    if match := _VISIBILITY_EQ.match(clause):
        visibility = _parse_visibility(_parse_string(match.group(1)))
        return lambda memo: memo.visibility == visibility

    if match := _VISIBILITY_IN.match(clause):
        allowed = {_parse_visibility(name) for name in _parse_string_list(match.group(1))}
        return lambda memo: memo.visibility in allowed

    if match := _PINNED.match(clause):
        pinned = match.group(1) == "true"
        return lambda memo: memo.pinned == pinned

    if match := _CONTENT_CONTAINS.match(clause):
        needle = _parse_string(match.group(1))
        return lambda memo: needle in memo.content

    if match := _PROPERTY.match(clause):
        name, expected = match.group(1), match.group(2) == "true"
        return lambda memo: getattr(memo.payload.property, name) == expected

    if match := _TIMESTAMP.match(clause):
        field_name = "created_at" if match.group(1) == "created_ts" else "updated_at"
        compare = _COMPARATORS[match.group(2)]
        bound = int(match.group(3))
        return lambda memo: compare(to_unix_seconds(getattr(memo, field_name)), bound)

    raise FilterError(f"unsupported filter clause: {clause}")


def compile_filter(expression: str | None) -> MemoPredicate:
    """
    Compile a filter expression into a predicate over memos.

    An empty or blank expression matches every memo.

    Raises:
        FilterError: If any clause is malformed or unsupported
    """
    if not expression or not expression.strip():
        return lambda memo: True

    clauses = _split_clauses(expression)
    if any(not clause for clause in clauses):
        raise FilterError(f"empty clause in filter: {expression}")

    predicates = [_compile_clause(clause) for clause in clauses]
    return lambda memo: all(predicate(memo) for predicate in predicates)
