"""ASCII code table: descriptions, formatted rows and a scrollable view."""

from __future__ import annotations

import enum
from collections.abc import Iterator

TOTAL_ENTRIES = 256
LINES_PER_PAGE = 15
WHEEL_STEP = LINES_PER_PAGE

CONTROL_NAMES: tuple[str, ...] = (
    "NUL NULL",
    "SOH Start of Heading",
    "STX Start of Text",
    "ETX End of Text",
    "EOT End of Transmission",
    "ENQ Enquiry",
    "ACK Acknowledge",
    "BEL Bell",
    "BS  Backspace",
    "TAB Horizontal Tab",
    "LF  NL Line Heed,new line",
    "VT  Vertical Tab",
    "FF  NP Form Heed,new page",
    "CR  Carriage Return",
    "SO  Shift Out",
    "SI  Shift In",
    "DLE Data Link Escape",
    "DC1 Device Control 1",
    "DC2 Device Control 2",
    "DC3 Device Control 3",
    "DC4 Device Control 4",
    "NAK Negative Acknowledge",
    "SYN Synchronous Idle",
    "ETB End of Trans. Block",
    "CAN Cancel",
    "EM  End of Medium",
    "SUB Substitute",
    "ESC Escape",
    "FS  File Separator",
    "GS  Group Separator",
    "RS  Record Separator",
    "US  Unit Separator",
)

COLORS: tuple[tuple[int, int, int], ...] = (
    (255, 0, 0),
    (0, 255, 0),
    (0, 0, 255),
    (255, 255, 0),
    (0, 255, 255),
    (255, 0, 255),
    (0, 0, 0),
    (255, 255, 255),
)


def describe_code(code: int) -> str:
    """Return the description column for a code 0..255."""
    if not 0 <= code < TOTAL_ENTRIES:
        raise ValueError(f"code out of range: {code}")
    if code < 32:
        return CONTROL_NAMES[code]
    if code == 32:
        return "(Space)"
    if code == 127:
        return "(DEL)"
    return chr(code)


def _pad(text: str, width: int) -> str:
    # Width is measured the way a double-byte console measures it.
    used = len(text.encode("gbk"))
    return " " * max(0, width - used) + text


def table_header() -> tuple[str, str]:
    """Return the column title line and the separator line."""
    title = f"{_pad('十', 4)} {_pad('八', 4)}  {_pad('十六', 4)}  描述"
    return title, "-" * 40


def table_rows(start: int, count: int) -> Iterator[str]:
    """Yield up to ``count`` formatted rows beginning at code ``start``."""
    for code in range(start, start + count):
        if not 0 <= code < TOTAL_ENTRIES:
            break
        yield f"{code:4d}, {code:03o},  {code:02X}   {describe_code(code)}"


class ScrollAction(enum.Enum):
    LINE_UP = "line_up"
    LINE_DOWN = "line_down"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    THUMB_POSITION = "thumb_position"
    THUMB_TRACK = "thumb_track"
    TOP = "top"
    BOTTOM = "bottom"
    END_SCROLL = "end_scroll"


class AsciiTableView:
    """Scroll position and colour choice of the table window."""

    def __init__(self) -> None:
        self.minimum = 0
        self.maximum = TOTAL_ENTRIES - 1
        self.page = LINES_PER_PAGE
        self.position = 0
        self.fg_index = 0
        self.bg_index = 6

    @property
    def foreground(self) -> tuple[int, int, int]:
        return COLORS[self.fg_index]

    @property
    def background(self) -> tuple[int, int, int]:
        return COLORS[self.bg_index]

    def visible_lines(self) -> list[str]:
        return list(table_rows(self.position, LINES_PER_PAGE))

    def _clamp(self, pos: int) -> int:
        if pos < self.minimum:
            pos = self.minimum
        if pos + self.page - 1 > self.maximum:
            pos = self.maximum - self.page + 1
        return pos

    def scroll(self, action: ScrollAction, track_pos: int = 0) -> bool:
        """Move the view; False (and no move) when a line step would pass an end."""
        pos = self.position
        if action is ScrollAction.TOP:
            pos = 0
        elif action is ScrollAction.BOTTOM:
            pos = TOTAL_ENTRIES - 1
        elif action is ScrollAction.LINE_UP:
            pos -= 1
        elif action is ScrollAction.LINE_DOWN:
            pos += 1
        elif action is ScrollAction.PAGE_UP:
            pos -= self.page
        elif action is ScrollAction.PAGE_DOWN:
            pos += self.page
        elif action in (ScrollAction.THUMB_TRACK, ScrollAction.THUMB_POSITION):
            pos = track_pos

        if (action is ScrollAction.LINE_UP and pos < self.minimum) or (
            action is ScrollAction.LINE_DOWN and pos + LINES_PER_PAGE - 1 > self.maximum
        ):
            return False
        self.position = self._clamp(pos)
        return True

    def wheel(self, delta: int) -> bool:
        """Scroll by a wheel notch; False when already at the end in that direction."""
        if (self.position == TOTAL_ENTRIES - LINES_PER_PAGE and delta < 0) or (
            self.position == 0 and delta > 0
        ):
            return False
        pos = self.position
        if delta < 0:
            pos += WHEEL_STEP
        elif delta > 0:
            pos -= WHEEL_STEP
        self.position = self._clamp(pos)
        return True

    def next_foreground(self) -> tuple[int, int, int]:
        self.fg_index = (self.fg_index + 1) % len(COLORS)
        return self.foreground

    def next_background(self) -> tuple[int, int, int]:
        self.bg_index = (self.bg_index + 1) % len(COLORS)
        return self.background