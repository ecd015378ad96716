"""
Small composable matchers used by the field extractor and the item table parser.

Every extraction rule is a named object holding its pattern as data:

  LabelMatcher:  one label-anchored value with ONE capture group, plus an
                 optional cleanup step applied to the captured text.
  BlockMatcher:  isolates the span from a start label up to (not including)
                 the first of several stop labels.
  TableAnchors:  the header and end-marker patterns that bound the item table.

Patterns are case-insensitive unless a matcher says otherwise.  A matcher that
finds nothing returns None; none of them raise on arbitrary text.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, Optional

logger = logging.getLogger(__name__)


def tokenize_lines(text: str) -> list[str]:
    """Split *text* into lines, accepting \\n, \\r\\n, \\r and form feeds."""
    return text.splitlines()


def strip_trailing_labels(value: str, labels: tuple[str, ...] = ("Telefone:", "Fax:")) -> str:
    """Drop everything from the first of *labels* onwards (case-insensitive)."""
    for label in labels:
        value = re.sub(re.escape(label) + r"[\s\S]*", "", value, flags=re.IGNORECASE)
    return value.strip()


@dataclass
class LabelMatcher:
    name: str                                   # field name, used in logs
    pattern: str                                # regex with ONE capture group
    flags: int = re.IGNORECASE
    cleanup: Optional[Callable[[str], str]] = None

    _re: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self._re = re.compile(self.pattern, self.flags)

    def match(self, text: str) -> Optional[str]:
        """
        Return the stripped first capture, or None when the label is absent
        or the captured value is empty after cleanup.
        """
        m = self._re.search(text)
        if not m or m.group(1) is None:
            logger.debug("%s: not found", self.name)
            return None
        value = m.group(1).strip()
        if self.cleanup is not None:
            value = self.cleanup(value).strip()
        return value or None


@dataclass
class BlockMatcher:
    name: str
    start: str                                  # regex for the opening label
    stops: tuple[str, ...]                      # regexes, first one wins

    _re: re.Pattern = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        stop_alternation = "|".join(f"(?:{s})" for s in self.stops)
        self._re = re.compile(
            rf"(?:{self.start})[\s\S]*?(?={stop_alternation})", re.IGNORECASE
        )

    def isolate(self, text: str) -> Optional[str]:
        """Return the bounded block, or None if no stop follows the start label."""
        m = self._re.search(text)
        if not m:
            logger.debug("%s: no bounded block", self.name)
            return None
        return m.group(0)

    def isolate_or_all(self, text: str) -> str:
        """Bounded block when one exists, otherwise the whole text."""
        block = self.isolate(text)
        return text if block is None else block


@dataclass(frozen=True)
class TableAnchors:
    """
    Boundaries of the item table.

    header:       the first line matching this starts the table (exclusive).
    end_markers:  the first later line matching any of these ends it (exclusive).
    """
    header: str = r"C[oó]digo\s+Descri[cç][aã]o"
    end_markers: tuple[str, ...] = (
        r"Sr\.\s*Fornecedor",
        r"Para\s+pagamentos\s+[àa]\s+vista",
        r"FORMA\s+PAGAMENTO",
    )

    def is_header(self, line: str) -> bool:
        return re.search(self.header, line, re.IGNORECASE) is not None

    def is_end(self, line: str) -> bool:
        return any(re.search(p, line, re.IGNORECASE) for p in self.end_markers)

    def bound(self, lines: list[str]) -> Optional[list[str]]:
        """
        Return the lines strictly between the header and the end marker.
        None when there is no header line at all; an unterminated table runs
        to the end of the text.
        """
        start = next((i for i, ln in enumerate(lines) if self.is_header(ln)), None)
        if start is None:
            return None
        end = next(
            (i for i in range(start + 1, len(lines)) if self.is_end(lines[i])),
            len(lines),
        )
        return lines[start + 1:end]
