"""A line cursor that the bulletin grammars are written against.

The bulletins are informal, line oriented and full of optional and
repeating sections, so each grammar is simply a sequence of pattern
attempts against the current line.  `try_consume` implements an optional
read, `require_consume` a mandatory one.
"""

import re
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Optional, Union

from pywmo.exceptions import WMOParseError
from pywmo.util import condition_text

CONTEXT_LINES = 5
LINE_SPLIT = re.compile(r"\r?\n")
ANY_LINE = re.compile(r"^.*$")

Until = Union[re.Pattern, Callable[[str], bool]]


class SeekOrigin(str, Enum):
    """Where a seek is relative to."""

    def __str__(self):
        """When we want the str repr."""
        return str(self.value)

    START = "start"
    CURRENT = "current"
    END = "end"


class StopCondition:
    """A named line predicate used to end free text accumulation."""

    def __init__(self, name: str, pattern: str, flags=0):
        """Constructor."""
        self.name = name
        self.pattern = re.compile(pattern, flags)

    def __call__(self, line: str) -> bool:
        """Does this line stop the accumulation?"""
        return self.pattern.search(line) is not None

    def __repr__(self):
        """Representation."""
        return f"StopCondition({self.name})"


def any_of(*conditions) -> Callable[[str], bool]:
    """Combine stop conditions, any one of them stops."""

    def _check(line: str) -> bool:
        return any(cond(line) for cond in conditions)

    _check.conditions = conditions
    return _check


class LineCursor:
    """Owns the bulletin lines and the current read position."""

    def __init__(self, text: str, utcnow: Optional[datetime] = None):
        """Constructor.

        Args:
          text (str): The bulletin text, can start with the <cntr>-a char.
          utcnow (datetime, optional): The context instant used to fill in
            partial dates, defaults to now.
        """
        self.utcnow = utcnow
        if utcnow is None:
            self.utcnow = datetime.now(timezone.utc)
        elif utcnow.tzinfo is None:
            self.utcnow = utcnow.replace(tzinfo=timezone.utc)
        else:
            self.utcnow = utcnow.astimezone(timezone.utc)
        self.position = 0
        self.lines = ()
        trimmed = condition_text(text)
        if not trimmed:
            self.fail("Provided WMO Text was empty")
        self.lines = tuple(LINE_SPLIT.split(trimmed))

    def total_lines(self) -> int:
        """How many lines in this bulletin."""
        return len(self.lines)

    def remaining_lines(self) -> int:
        """How many lines have not been consumed."""
        return len(self.lines) - self.position

    def peek(self, offset: int = 0) -> Optional[str]:
        """Return the line at the position plus offset, without moving."""
        pos = self.position + offset
        if 0 <= pos < len(self.lines):
            return self.lines[pos]
        return None

    def seek(self, delta: int = 0, origin: SeekOrigin = SeekOrigin.CURRENT):
        """Reposition the cursor."""
        if origin == SeekOrigin.START:
            newpos = delta
        elif origin == SeekOrigin.END:
            newpos = len(self.lines) + delta
        else:
            newpos = self.position + delta
        if newpos < 0 or newpos > len(self.lines):
            self.fail(f"Unable to seek {delta} from {origin}: Out of Bounds")
        self.position = newpos

    def skip_blanks(self):
        """Move past any empty lines."""
        while self.position < len(self.lines):
            if self.lines[self.position].strip() != "":
                break
            self.position += 1

    def _current(self, trim: bool) -> Optional[str]:
        """Get the current line, maybe trimmed."""
        line = self.peek()
        if line is not None and trim:
            line = line.strip()
        return line

    def _advance(self, skip_blanks: bool):
        """Move forward one line."""
        self.position += 1
        if skip_blanks:
            self.skip_blanks()

    def try_consume(
        self, pattern=None, trim: bool = True, skip_blanks: bool = True
    ) -> Optional[re.Match]:
        """Consume the current line if it matches the pattern.

        Args:
          pattern (re.Pattern, optional): what to search for, any line when
            not provided.
          trim (bool): strip the line before matching.
          skip_blanks (bool): move past empty lines after a match.

        Returns:
          re.Match or None, in which case the position is unchanged.
        """
        line = self._current(trim)
        if not line:
            return None
        match = (pattern or ANY_LINE).search(line)
        if match is None:
            return None
        self._advance(skip_blanks)
        return match

    def try_consume_all(
        self, pattern, trim: bool = True, skip_blanks: bool = True
    ) -> Optional[list]:
        """Consume the current line when the pattern matches one or more
        times, returning all of the matches."""
        line = self._current(trim)
        if not line:
            return None
        matches = list(pattern.finditer(line))
        if not matches:
            return None
        self._advance(skip_blanks)
        return matches

    def require_consume(self, message: str, pattern=None) -> re.Match:
        """Consume the current line or fail with the message."""
        match = self.try_consume(pattern)
        if match is None:
            self.fail(message)
        return match

    def consume_until(
        self,
        until: Until,
        joiner: str = " ",
        trim: bool = True,
        skip_blanks: bool = True,
    ) -> str:
        """Accumulate lines until one satisfies `until` or input ends.

        The stopping line is not consumed.
        """
        check = until.search if isinstance(until, re.Pattern) else until
        pieces = []
        while True:
            line = self._current(trim)
            if line is None or check(line):
                break
            if line != "":
                pieces.append(line)
            self._advance(skip_blanks)
        return joiner.join(pieces)

    def context(self) -> str:
        """Render the lines around the current position."""
        pos = self.position
        width = len(str(pos + CONTEXT_LINES + 1))
        rows = []
        for i in range(-CONTEXT_LINES, CONTEXT_LINES + 1):
            idx = pos + i
            if idx < 0 or idx >= len(self.lines):
                continue
            marker = "-->" if i == 0 else "   "
            rows.append(
                f"{marker} {str(idx + 1).zfill(width)} | {self.lines[idx]}"
            )
        return "\n".join(rows)

    def fail(self, message: str, cause: Optional[Exception] = None):
        """Raise a WMOParseError decorated with the surrounding lines."""
        if not self.lines:
            raise WMOParseError(message, cause)
        rule = "=" * 20
        raise WMOParseError(
            f"{message}\n{rule}\n{self.context()}\n{rule}", cause
        )
