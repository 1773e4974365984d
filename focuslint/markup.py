"""Lexical matchers over serialized markup.

Every pattern the rules rely on lives here, behind three matchers:

- ``TagMatcher``: finds opening tags of a fixed set of element names
- ``attribute_value``: extracts a quoted attribute value from a tag's attribute string
- ``ContentMatcher``: captures an element's inner content up to the next closing tag

Nothing here builds a tree. A malformed or unmatched construct is simply not
matched. Swapping in a structural parser later only means replacing these
matchers; the rules consume ``TagMatch`` objects and plain strings.
"""

from __future__ import annotations

import re
from bisect import bisect_left
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Iterable, Iterator

_NEWLINE_RE = re.compile(r"\n")


@dataclass(frozen=True)
class TagMatch:
    """An opening tag found in markup."""

    name: str
    attrs: str
    raw: str
    start: int
    end: int


class LineIndex:
    """Map character offsets in one markup string to 1-based line numbers.

    Newline offsets are collected once, on the first lookup, so a rule that
    reports many diagnostics still scans the markup a single time.
    """

    def __init__(self, markup: str):
        self.markup = markup
        self._newlines: list[int] | None = None

    def line_of(self, offset: int) -> int:
        if self._newlines is None:
            self._newlines = [m.start() for m in _NEWLINE_RE.finditer(self.markup)]
        return bisect_left(self._newlines, offset) + 1


class TagMatcher:
    """Match opening tags whose name is one of ``names``.

    ``<a ...>`` matches for name ``a`` but ``<abbr>`` does not. Closing tags
    are never matched. A tag-open interrupted by another ``<`` before its ``>``
    is not a match.
    """

    def __init__(self, names: Iterable[str]):
        self.names = tuple(n.lower() for n in names)
        alternation = "|".join(re.escape(n) for n in self.names)
        self._pattern = re.compile(rf"<({alternation})\b([^<>]*)>", re.IGNORECASE)

    def __repr__(self) -> str:
        return f"TagMatcher({', '.join(self.names)})"

    def finditer(self, markup: str, pos: int = 0) -> Iterator[TagMatch]:
        for m in self._pattern.finditer(markup, pos):
            yield TagMatch(
                name=m.group(1).lower(),
                attrs=m.group(2),
                raw=m.group(0),
                start=m.start(),
                end=m.end(),
            )

    def first(self, markup: str) -> TagMatch | None:
        return next(self.finditer(markup), None)

    def search(self, markup: str) -> bool:
        return self._pattern.search(markup) is not None


@lru_cache(maxsize=None)
def _attribute_pattern(name: str) -> re.Pattern[str]:
    # Only quoted values count; an attribute is never matched inside another
    # attribute's name (e.g. data-tabindex).
    return re.compile(
        rf"(?<![\w-]){re.escape(name)}\s*=\s*([\"'])(.*?)\1",
        re.IGNORECASE | re.DOTALL,
    )


def attribute_value(attrs: str, name: str) -> str | None:
    """Return the quoted value of attribute ``name`` in ``attrs``, or None."""
    m = _attribute_pattern(name).search(attrs)
    if m is None:
        return None
    return m.group(2)


def has_token(attrs: str, token: str) -> bool:
    """Case-sensitive word-bounded search for ``token`` anywhere in ``attrs``."""
    return re.search(rf"\b{re.escape(token)}\b", attrs) is not None


_INT_RE = re.compile(r"-?\d+")


def integer_attribute(attrs: str, name: str) -> int | None:
    """Return attribute ``name`` as an int when its value is an integer literal."""
    value = attribute_value(attrs, name)
    if value is None or not _INT_RE.fullmatch(value):
        return None
    return int(value)


class ContentMatcher:
    """Capture the content following an opening tag up to the next ``</name>``.

    The capture is the shortest match and is not nesting-aware: a nested
    element of the same name ends the capture early.
    """

    def __init__(self, name: str):
        self.name = name.lower()
        self._close = re.compile(rf"</{re.escape(self.name)}\s*>", re.IGNORECASE)

    def content_after(self, markup: str, tag: TagMatch) -> str | None:
        """Inner content for ``tag``, or None when no closing tag follows."""
        m = self._close.search(markup, tag.end)
        if m is None:
            return None
        return markup[tag.end:m.start()]

    def elements(
        self,
        markup: str,
        opener: TagMatcher,
        where: Callable[[TagMatch], bool] | None = None,
    ) -> Iterator[tuple[TagMatch, str]]:
        """Yield ``(tag, content)`` pairs, resuming the scan after each closing tag.

        Tags rejected by ``where`` are skipped without consuming any content.
        """
        pos = 0
        while True:
            tag = next(opener.finditer(markup, pos), None)
            if tag is None:
                return
            if where is not None and not where(tag):
                pos = tag.end
                continue
            m = self._close.search(markup, tag.end)
            if m is None:
                return
            yield tag, markup[tag.end:m.start()]
            pos = m.end()
