"""Terminal string helpers: measuring, cutting, padding and highlighting.

Widths are counted in terminal columns, not code points. ANSI escape
sequences take no room and double-width glyphs take two columns.
"""

import re
from dataclasses import dataclass
from itertools import cycle
from typing import ClassVar, Iterator

from colorama import Style
from colorama.ansi import code_to_chars
from wcwidth import wcwidth

# CSI sequences such as "\x1b[7m" or "\x1b[0m"
_ANSI_ESCAPE = re.compile(r"\x1b\[[0-?]*[ -/]*[@-~]")

REVERSE_VIDEO = code_to_chars(7)


def _char_width(c: str) -> int:
    """Columns taken by one code point (control characters take none)."""
    return max(wcwidth(c), 0)


def _tokens(s: str) -> Iterator[tuple[int, int, int]]:
    """Yield (start, end, width) for each glyph or escape sequence in order."""
    pos = 0
    for match in _ANSI_ESCAPE.finditer(s):
        for i in range(pos, match.start()):
            yield i, i + 1, _char_width(s[i])
        yield match.start(), match.end(), 0
        pos = match.end()
    for i in range(pos, len(s)):
        yield i, i + 1, _char_width(s[i])


def ansi_width(s: str) -> int:
    """Calculate how many terminal columns the string occupies."""
    return sum(width for _, _, width in _tokens(s))


def cut_end(s: str, maximum_width: int) -> str:
    """Keep the leading glyphs of ``s`` while they fit in ``maximum_width``.

    The cut happens on a code point boundary, so a wide glyph that would
    straddle the limit is dropped entirely. If styling was opened in the kept
    part, it is closed again.
    """
    width = 0
    styled = False
    for start, end, glyph_width in _tokens(s):
        width += glyph_width
        if width > maximum_width:
            kept = s[:start]
            return kept + Style.RESET_ALL if styled else kept
        if glyph_width == 0 and end - start > 1:
            styled = True
    return s


def repeat_for_width(s: str, maximum_width: int) -> str:
    """Repeat ``s`` glyph by glyph without exceeding ``maximum_width``.

    The result may be narrower than requested when the next glyph does not
    fit. A zero-width ``s`` can never reach any width and yields "".
    """
    if ansi_width(s) == 0:
        return ""

    buf = []
    width = 0
    for c in cycle(s):
        width += _char_width(c)
        if width > maximum_width:
            return "".join(buf)
        buf.append(c)


def highlight(s: str, enabled: bool = True) -> str:
    """Render ``s`` in reverse video.

    Whether color is wanted at all is decided once by the caller and passed
    down as ``enabled``.
    """
    if not enabled:
        return s
    return f"{REVERSE_VIDEO}{s}{Style.RESET_ALL}"


@dataclass(frozen=True)
class Aligner:
    """Pad or cut strings to an exact width with a repeating filler.

    ``filler`` may be any string; ``filler_adjust`` must be exactly one
    column wide and patches the gap whenever the filler cannot land on the
    requested width (e.g. a two-column filler with an odd pad).

    Results are always exactly the requested width: shorter input is padded,
    longer input is cut with :func:`cut_end`.
    """

    filler: str = " "
    filler_adjust: str = " "

    SPACE: ClassVar["Aligner"]
    CENTER_DOT: ClassVar["Aligner"]
    ZERO: ClassVar["Aligner"]

    def __post_init__(self) -> None:
        if len(self.filler_adjust) != 1 or ansi_width(self.filler_adjust) != 1:
            raise ValueError(
                f"filler_adjust must be a single one-column character, got {self.filler_adjust!r}"
            )

    def _cut(self, s: str, width: int) -> str:
        """Cut ``s`` to ``width``, patching a dropped wide glyph with the adjust."""
        cut = cut_end(s, width)
        return cut + self.filler_adjust * (width - ansi_width(cut))

    def fill(self, needed_width: int) -> str:
        """Return filler text of exactly ``needed_width`` columns."""
        filler = repeat_for_width(self.filler, needed_width)
        missing = max(needed_width - ansi_width(filler), 0)
        return filler + self.filler_adjust * missing

    def right(self, s: str, width: int) -> str:
        """Shift ``s`` to the right edge of ``width`` columns."""
        actual = ansi_width(s)
        if actual < width:
            return self.fill(width - actual) + s
        if actual == width:
            return s
        return self._cut(s, width)

    def left(self, s: str, width: int) -> str:
        """Append filler after ``s`` up to ``width`` columns."""
        actual = ansi_width(s)
        if actual < width:
            return s + self.fill(width - actual)
        if actual == width:
            return s
        return self._cut(s, width)

    def center(self, s: str, width: int) -> str:
        """Center ``s``; an odd pad puts the extra filler on the right."""
        actual = ansi_width(s)
        if actual < width:
            padding = width - actual
            left = padding // 2
            right = left + padding % 2
            return self.fill(left) + s + self.fill(right)
        if actual == width:
            return s
        return self._cut(s, width)


Aligner.SPACE = Aligner(" ", " ")
Aligner.CENTER_DOT = Aligner("·", "·")
Aligner.ZERO = Aligner("0", "0")
