"""Deterministic file names and file content"""
from vcs_torture.constants import (
    CONTENT_ATOMS,
    CONTENT_LINE_WIDTH,
    LINE_TERMINATOR,
    NAME_ATOMS,
)
from vcs_torture.exceptions import ContentGenerationError

_MASK64 = (1 << 64) - 1
_SIGN64 = 1 << 63

_CONTENT_TOKENS = [(atom + " ").encode("ascii") for atom in CONTENT_ATOMS]


def unique_name(ordinal: int) -> str:
    """Encode ordinal in base 16 as atoms, least significant first."""
    if ordinal < 0:
        raise ValueError(f"ordinal must not be negative, got {ordinal}")

    fragments = []
    while ordinal >= 16:
        fragments.append(NAME_ATOMS[ordinal % 16])
        ordinal >>= 4
    fragments.append(NAME_ATOMS[ordinal])
    return "_".join(fragments)


def _next_state(state: int) -> int:
    """Advance the content recurrence, wrapping like a signed 64-bit integer."""
    mixed = (((state << 27) | (state >> 5)) + state + 13) & _MASK64
    return mixed - (1 << 64) if mixed & _SIGN64 else mixed


def make_content(size: int, ordinal: int, newline: bytes = LINE_TERMINATOR) -> bytes:
    """Make unique content of exactly size bytes.

    Tokens are chosen by a recurrence seeded from ordinal. Once a line
    reaches CONTENT_LINE_WIDTH bytes the last bytes written are replaced by
    the line terminator, and the buffer always ends with one.

    Args:
        size: Number of bytes to produce
        ordinal: Seed; the same ordinal always gives the same content
        newline: Line terminator, LF or CRLF

    Returns:
        The content as bytes
    """
    if size < len(newline):
        raise ValueError(f"size must be at least {len(newline)}, got {size}")

    content = bytearray(size)
    state = ordinal
    col = 0
    i = 0
    while i < size:
        if col >= CONTENT_LINE_WIDTH:
            content[i - len(newline):i] = newline
            col = 0
        token = _CONTENT_TOKENS[state & 31]
        state = _next_state(state)
        length = min(len(token), size - i)
        content[i:i + length] = token[:length]
        i += length
        col += length

    content[size - len(newline):] = newline

    if len(content) != size:
        raise ContentGenerationError(size, len(content))
    return bytes(content)


class NameGenerator:
    """Hands out unique names in a reproducible order."""

    def __init__(self):
        self.counter = 0

    def next_unique_name(self) -> str:
        name = unique_name(self.counter)
        self.counter += 1
        return name

    def reset(self):
        self.counter = 0


class ContentGenerator:
    """Makes content for successive files, one ordinal per file."""

    def __init__(self, size: int, newline: bytes = LINE_TERMINATOR):
        self.size = size
        self.newline = newline
        self.counter = 0

    def next_content(self) -> bytes:
        content = make_content(self.size, self.counter, self.newline)
        self.counter += 1
        return content

    def skip(self):
        """Consume an ordinal without producing content (file already exists)."""
        self.counter += 1

    def reset(self):
        self.counter = 0
