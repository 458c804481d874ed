"""A text buffer with terminal-style character attributes, used as a receive view."""

from __future__ import annotations

from dataclasses import dataclass, replace

DEFAULT_FOREGROUND = 30
DEFAULT_BACKGROUND = 47

# Index 0..7 corresponds to SGR colours 30..37 (foreground) and 40..47 (background).
PALETTE: tuple[tuple[int, int, int], ...] = (
    (0, 0, 0),
    (255, 0, 0),
    (0, 255, 0),
    (255, 255, 0),
    (0, 0, 255),
    (255, 0, 255),
    (0, 255, 255),
    (255, 255, 255),
)


@dataclass(frozen=True)
class TextStyle:
    """Character attributes: SGR foreground code, SGR background code and boldness."""

    fg: int = DEFAULT_FOREGROUND
    bg: int = DEFAULT_BACKGROUND
    bold: bool = False

    @property
    def fg_rgb(self) -> tuple[int, int, int]:
        return PALETTE[self.fg - 30]

    @property
    def bg_rgb(self) -> tuple[int, int, int]:
        return PALETTE[self.bg - 40]


class TextBuffer:
    """Appendable text made of styled runs, with backspace and SGR attribute support."""

    def __init__(self, default_fg: int = DEFAULT_FOREGROUND, default_bg: int = DEFAULT_BACKGROUND):
        if not 30 <= default_fg <= 37:
            raise ValueError(f"default foreground must be 30..37, got {default_fg}")
        if not 40 <= default_bg <= 47:
            raise ValueError(f"default background must be 40..47, got {default_bg}")
        self.default_style = TextStyle(default_fg, default_bg)
        self.style = self.default_style
        self._runs: list[tuple[str, TextStyle]] = []

    @property
    def text(self) -> str:
        return "".join(text for text, _ in self._runs)

    @property
    def runs(self) -> list[tuple[str, TextStyle]]:
        return list(self._runs)

    def __len__(self) -> int:
        return sum(len(text) for text, _ in self._runs)

    def append_text(self, text: str) -> bool:
        """Append text at the end using the current style."""
        if text:
            if self._runs and self._runs[-1][1] == self.style:
                last, style = self._runs[-1]
                self._runs[-1] = (last + text, style)
            else:
                self._runs.append((text, self.style))
        return True

    def back_delete_char(self, n: int) -> bool:
        """Delete up to ``n`` characters from the end; False when ``n`` is not positive."""
        if n <= 0:
            return False
        if n >= len(self):
            self._runs.clear()
            return True
        remaining = n
        while remaining:
            text, style = self._runs[-1]
            if len(text) <= remaining:
                self._runs.pop()
                remaining -= len(text)
            else:
                self._runs[-1] = (text[:-remaining], style)
                remaining = 0
        return True

    def set_text(self, text: str) -> None:
        self._runs = [(text, self.style)] if text else []

    def clear(self) -> None:
        self._runs.clear()

    def apply_linux_attributes(self, attrs: str) -> bool:
        """Apply a complete escape sequence such as ``"\\033[1;31m"``."""
        if not attrs:
            return False
        if not attrs.startswith("\033["):
            raise ValueError(f"not an escape sequence: {attrs!r}")
        if attrs[-1] == "m":
            for part in attrs[2:-1].split(";"):
                if not part:
                    continue
                if not part.isdigit() or not part.isascii():
                    raise ValueError(f"bad attribute {part!r} in {attrs!r}")
                self.apply_linux_attribute_m(int(part))
        return True

    def apply_linux_attribute_m(self, attr: int) -> bool:
        """Apply one SGR attribute; unsupported values are ignored."""
        if 30 <= attr <= 37:
            self.style = replace(self.style, fg=attr)
        elif 40 <= attr <= 47:
            self.style = replace(self.style, bg=attr)
        elif attr == 0:
            self.style = self.default_style
        elif attr == 1:
            self.style = replace(self.style, bold=True)
        return True