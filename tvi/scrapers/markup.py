"""Landmark based extraction over raw page text.

There is no HTML parser here. Every field is found by searching for a
literal fragment of the page template (a landmark) and copying the text
that follows it. Each primitive returns the copied text together with the
offset where copying stopped, so callers can chain scans without sharing a
cursor.
"""

import re
from dataclasses import dataclass
from typing import Iterator, Optional

from ..constants.landmarks import ANCHOR_CLOSE


# (character, named reference, numeric reference)
ENTITY_REFERENCES = (
    ('"', "&quot;", "&#34;"),
    ("&", "&amp;", "&#38;"),
    ("'", "&apos;", "&#39;"),
    ("<", "&lt;", "&#60;"),
    (">", "&gt;", "&#62;"),
    (" ", "&nbsp;", "&#160;"),
)

# Elements that never have a closing tag
VOID_TAGS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img",
    "input", "link", "meta", "param", "source", "track", "wbr",
})

_TAG_NAME_PATTERN = re.compile(r"[A-Za-z][A-Za-z0-9]*")


@dataclass(frozen=True)
class Span:
    """Text copied from a page and the offset just past it."""

    text: str
    end: int

    @property
    def found(self) -> bool:
        return self.end >= 0


NOT_FOUND = Span("", -1)


def decode_entity(text: str, pos: int) -> tuple[str, int]:
    """
    Decode the character reference starting at ``text[pos]``.

    Named references match case-insensitively, numeric ones exactly.
    Anything else is a literal ampersand.

    Args:
        text: Page text
        pos: Offset of an ``&``

    Returns:
        Tuple of (decoded character, offset just past the reference)
    """
    for char, named, numeric in ENTITY_REFERENCES:
        if text[pos:pos + len(named)].lower() == named:
            return char, pos + len(named)
        if text.startswith(numeric, pos):
            return char, pos + len(numeric)
    return "&", pos + 1


def decode_entities(text: str) -> str:
    """Decode every supported character reference in a string."""
    chars: list[str] = []
    pos = 0
    while pos < len(text):
        if text[pos] == "&":
            char, pos = decode_entity(text, pos)
        else:
            char = text[pos]
            pos += 1
        chars.append(char)
    return "".join(chars)


def _copy_until(text: str, pos: int, terminator: str) -> tuple[str, int]:
    chars: list[str] = []
    while pos < len(text) and not text.startswith(terminator, pos):
        if text[pos] == "&":
            char, pos = decode_entity(text, pos)
        else:
            char = text[pos]
            pos += 1
        chars.append(char)
    return "".join(chars), pos


def _skip_tag(text: str, pos: int) -> int:
    close = text.find(">", pos)
    return len(text) if close < 0 else close + 1


def _tag_name(text: str, pos: int) -> str:
    """Lowercase name of the tag at ``pos``, for opening and closing tags alike."""
    body_start = pos + 2 if text.startswith("</", pos) else pos + 1
    match = _TAG_NAME_PATTERN.match(text, body_start)
    return match.group(0).lower() if match else ""


def _opened_element(text: str, pos: int) -> Optional[str]:
    """Name of the element the tag at ``pos`` opens, or None if it opens nothing."""
    close = text.find(">", pos)
    body = text[pos + 1:] if close < 0 else text[pos + 1:close]
    if body.endswith("/"):
        return None
    name = _tag_name(text, pos)
    if not name or name in VOID_TAGS:
        return None
    return name


def _find_landmark(text: str, landmark: str, start: int, end: Optional[int]) -> int:
    if end is None:
        end = len(text)
    pos = text.find(landmark, start, end)
    return pos if pos < 0 else pos + len(landmark)


def extract_span(
    text: str,
    landmark: str,
    terminator: str,
    start: int = 0,
    end: Optional[int] = None,
    skip_past: Optional[str] = None,
) -> Span:
    """
    Copy the text between a landmark and a terminator.

    Args:
        text: Page text
        landmark: Literal fragment to search for
        terminator: Copying stops in front of this fragment
        start: Offset to start searching at
        end: Landmark must lie before this offset (None for end of text)
        skip_past: If set, copying starts after the first occurrence of
            this fragment following the landmark

    Returns:
        Span with the decoded text, or NOT_FOUND if the landmark is absent
    """
    pos = _find_landmark(text, landmark, start, end)
    if pos < 0:
        return NOT_FOUND
    if skip_past:
        marker = text.find(skip_past, pos)
        if marker < 0:
            return NOT_FOUND
        pos = marker + len(skip_past)
    value, pos = _copy_until(text, pos, terminator)
    return Span(value, pos)


def _step_over_tag(text: str, pos: int, open_tags: list[str]) -> Optional[int]:
    """
    Skip the tag at ``pos``, tracking the inline elements it opens or closes.

    Returns the offset past the tag, or None when it is a closing tag that
    does not match the innermost open element and so ends the field.
    """
    if text.startswith("</", pos):
        if not open_tags or open_tags[-1] != _tag_name(text, pos):
            return None
        open_tags.pop()
    else:
        name = _opened_element(text, pos)
        if name:
            open_tags.append(name)
    return _skip_tag(text, pos)


def extract_rich_span(
    text: str,
    landmark: str,
    start: int = 0,
    end: Optional[int] = None,
) -> Span:
    """
    Copy a rich text field that may mix plain text with inline markup.

    Whitespace and whole tags right after the landmark are skipped. Inline
    tags inside the content are dropped along with their closing tags, and
    the first closing tag that does not close the innermost of them ends
    the field.

    Args:
        text: Page text
        landmark: Literal fragment to search for
        start: Offset to start searching at
        end: Landmark and copied text must lie before this offset (None for
            end of text)

    Returns:
        Span with the decoded text, or NOT_FOUND if the landmark is absent
    """
    pos = _find_landmark(text, landmark, start, end)
    if pos < 0:
        return NOT_FOUND

    limit = len(text) if end is None else min(end, len(text))
    open_tags: list[str] = []
    while pos < limit:
        if text[pos] == "<":
            after = _step_over_tag(text, pos, open_tags)
            if after is None:
                return Span("", pos)
            pos = after
        elif text[pos] == ">" or text[pos].isspace():
            pos += 1
        else:
            break

    chars: list[str] = []
    while pos < limit:
        char = text[pos]
        if char == "<":
            after = _step_over_tag(text, pos, open_tags)
            if after is None:
                break
            pos = after
            continue
        if char == "&":
            char, pos = decode_entity(text, pos)
        else:
            pos += 1
        chars.append(char)
    return Span("".join(chars).rstrip(), min(pos, limit))


def recover_anchor_title(text: str, cursor: int) -> str:
    """
    Recover the text of the nearest anchor that closes before ``cursor``.

    Episode anchors come before their "Episode N" marker on season pages,
    so titles are found by scanning backward from the marker.
    """
    close = text.rfind(ANCHOR_CLOSE, 0, cursor)
    if close < 0:
        return ""
    open_end = text.rfind(">", 0, close)
    if open_end < 0:
        return ""
    return decode_entities(text[open_end + 1:close]).strip()


def probe_until_miss(text: str, template: str) -> Iterator[tuple[int, int]]:
    """
    Yield (number, offset) for landmarks numbered 1, 2, 3... until one is missing.

    ``template`` is formatted with ``number``, e.g. "Episode {number}\\r\\n".
    """
    number = 1
    while True:
        pos = text.find(template.format(number=number))
        if pos < 0:
            return
        yield number, pos
        number += 1
