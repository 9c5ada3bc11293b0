"""Derive a memo payload (tags and content properties) from memo text."""

import re
from typing import Optional

from ..models.memo import Location, MemoPayload, MemoProperty

_FENCED_CODE_PATTERN = re.compile(r"^```.*?^```[ \t]*$", re.MULTILINE | re.DOTALL)
_INLINE_CODE_PATTERN = re.compile(r"`[^`\n]+`")
_TAG_PATTERN = re.compile(r"(?<![\w#/&])#([\w/-]+)")
_URL_PATTERN = re.compile(r"https?://[^\s<>()]+", re.IGNORECASE)
_MARKDOWN_LINK_PATTERN = re.compile(r"\[[^\]\n]*\]\([^)\s]+\)")
_TASK_PATTERN = re.compile(r"^\s*[-*+] \[([ xX])\] ", re.MULTILINE)


def _strip_code(content: str) -> tuple[str, bool]:
    """Remove fenced and inline code spans; report whether any were present."""
    text, fenced = _FENCED_CODE_PATTERN.subn("", content)
    text, inline = _INLINE_CODE_PATTERN.subn("", text)
    return text, bool(fenced or inline)


def extract_tags(content: str) -> list[str]:
    """Unique ``#tag`` tokens in first-seen order, ignoring code."""
    text, _ = _strip_code(content)
    tags: list[str] = []
    for match in _TAG_PATTERN.finditer(text):
        tag = match.group(1).rstrip("/-")
        if tag and tag not in tags:
            tags.append(tag)
    return tags


def rebuild_payload(content: str, location: Optional[Location] = None) -> MemoPayload:
    """
    Rebuild a memo payload from its content.

    Tags and properties are always re-derived from ``content``; ``location``
    is carried through unchanged. Calling this twice on the same input gives
    equal payloads.

    Args:
        content: Memo text
        location: Location to keep on the payload, if any

    Returns:
        Fresh MemoPayload
    """
    text, has_code = _strip_code(content)
    tasks = _TASK_PATTERN.findall(text)

    return MemoPayload(
        tags=extract_tags(content),
        location=location.model_copy() if location is not None else None,
        property=MemoProperty(
            has_link=bool(_URL_PATTERN.search(text) or _MARKDOWN_LINK_PATTERN.search(text)),
            has_task_list=bool(tasks),
            has_code=has_code,
            has_incomplete_tasks=any(mark == " " for mark in tasks),
        ),
    )
