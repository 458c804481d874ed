"""Turn received serial bytes into text for the receive views.

Processors each handle one kind of input (printable ASCII, line breaks,
terminal escape sequences, GB2312 pairs, raw bytes). Receivers split incoming
data between them. A processor may ask to keep going on the next chunk,
which matters when a multi-byte construct is split across reads.
"""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import NamedTuple, Protocol

from commonitor.editor import TextBuffer

HEX_LINE_WIDTH = 16
MAX_ASCII_RUN = 1023
MAX_TAB_RUN = 63
MAX_GB2312_PAIRS = 512

ESC = 0x1B
BELL = 0x07
BACKSPACE = 0x08
TAB = 0x09
CR = 0x0D
LF = 0x0A


class Editor(Protocol):
    def append_text(self, text: str) -> object: ...

    def back_delete_char(self, n: int) -> object: ...


class RichEditor(Editor, Protocol):
    def apply_linux_attributes(self, attrs: str) -> object: ...


class Processed(NamedTuple):
    """How many bytes a processor used, and whether it wants the next chunk first."""

    consumed: int
    follow: bool


def _run_length(data, value: int, limit: int | None = None) -> int:
    count = 0
    for byte in data:
        if byte != value or (limit is not None and count >= limit):
            break
        count += 1
    return count


def _gbk(raw) -> str:
    return bytes(raw).decode("gbk", errors="replace")


class DataProcessor(ABC):
    """Handles part of a byte stream and writes the result to an editor."""

    def __init__(self, editor: Editor):
        self.editor = editor

    @abstractmethod
    def process_some(self, follow: bool, data) -> Processed:
        """Process a prefix of ``data``; ``follow`` is True when continuing a previous call."""

    def reset_buffer(self) -> None:
        """Forget any partial state."""


class DataReceiver(ABC):
    """Receives raw data read from the port."""

    _pending: DataProcessor | None = None

    @abstractmethod
    def receive(self, data) -> None:
        """Handle a chunk of received bytes."""

    @abstractmethod
    def reset_buffer(self) -> None:
        """Forget any partial state."""

    def _process(self, proc: DataProcessor, follow: bool, data: memoryview) -> memoryview:
        consumed, keep = proc.process_some(follow, data)
        if not 0 <= consumed <= len(data):
            raise RuntimeError(
                f"{type(proc).__name__} consumed {consumed} of {len(data)} bytes"
            )
        self._pending = proc if keep else None
        return data[consumed:]


class SingleByteProcessor(DataProcessor):
    """Shows one byte as ``<XX>``."""

    def process_some(self, follow: bool, data) -> Processed:
        self.editor.append_text(f"<{data[0]:02X}>")
        return Processed(1, False)


def _render_newlines(data: bytes) -> str:
    """Unify CR, LF, CR LF and LF CR into one newline each."""
    count = 0
    pos = 0
    while pos < len(data):
        pair = data[pos:pos + 2]
        pos += 2 if pair in (b"\r\n", b"\n\r") else 1
        count += 1
    return "\n" * count


class CrlfProcessor(DataProcessor):
    """Turns runs of CR/LF into newlines, even when a pair is split between reads."""

    def __init__(self, editor: Editor):
        super().__init__(editor)
        self._rendered = 0
        self._data = bytearray()

    def process_some(self, follow: bool, data) -> Processed:
        if not follow:
            self.reset_buffer()
        n = 0
        for byte in data:
            if byte not in (CR, LF):
                break
            n += 1
        if n == 0:
            return Processed(0, False)

        self._data += bytes(data[:n])
        text = _render_newlines(bytes(self._data))
        diff = len(text) - self._rendered
        if diff > 0:
            self.editor.append_text(text[self._rendered:])
        else:
            self.editor.back_delete_char(-diff)
        self._rendered = len(text)
        return Processed(n, True)

    def reset_buffer(self) -> None:
        self._rendered = 0
        self._data.clear()


class _Lcs(enum.Enum):
    NONE = enum.auto()
    ESC = enum.auto()
    BRACKET = enum.auto()
    VAL = enum.auto()
    SEMI = enum.auto()
    H = enum.auto()
    f = enum.auto()
    A = enum.auto()
    B = enum.auto()
    C = enum.auto()
    D = enum.auto()
    s = enum.auto()
    u = enum.auto()
    j = enum.auto()
    K = enum.auto()
    h = enum.auto()
    l = enum.auto()  # noqa: E741
    EQU = enum.auto()
    m = enum.auto()
    P = enum.auto()


_FINAL_STATES = frozenset(
    {
        _Lcs.H, _Lcs.f, _Lcs.A, _Lcs.B, _Lcs.C, _Lcs.D,
        _Lcs.s, _Lcs.u, _Lcs.j, _Lcs.K, _Lcs.m, _Lcs.h, _Lcs.l,
    }
)
_DIGIT_STATES = frozenset({_Lcs.BRACKET, _Lcs.VAL, _Lcs.SEMI, _Lcs.EQU})


def _table(chars: str, names: str | None = None) -> dict[int, _Lcs]:
    names = names or chars
    return {ord(c): _Lcs[n] for c, n in zip(chars, names.split() if " " in names else names)}


_AFTER_BRACKET = {**_table("HfmsuKABCD"), ord("="): _Lcs.EQU}
_VAL_AFTER_BRACKET = {ord(";"): _Lcs.SEMI, **_table("ABCDjm")}
_MODE_END = _table("hl")
_POSITION_END = _table("Hf")
_VAL_AFTER_SEMI = {ord(";"): _Lcs.SEMI, ord("m"): _Lcs.m}
_AFTER_SEMI = {ord(";"): _Lcs.SEMI, **_table("mHf")}


def _is_digit(byte: int) -> bool:
    return 0x30 <= byte <= 0x39


class EscapeProcessor(DataProcessor):
    """Parses terminal escape sequences (``ESC [ ... m`` and friends).

    A complete sequence is applied to the editor when the byte after it is seen.
    """

    def __init__(self, editor: RichEditor):
        super().__init__(editor)
        self._state = _Lcs.NONE
        self._stack: list[_Lcs] = []
        self._data = bytearray()
        self.reset_buffer()

    def reset_buffer(self) -> None:
        self._state = _Lcs.NONE
        self._stack = [self._state]
        self._data.clear()

    def _transition(self, state: _Lcs, byte: int) -> _Lcs | None:
        if state is _Lcs.NONE:
            return _Lcs.ESC if byte == ESC else None
        if state is _Lcs.ESC:
            return _Lcs.BRACKET if byte == ord("[") else None
        if state is _Lcs.BRACKET:
            return _AFTER_BRACKET.get(byte)
        if state is _Lcs.VAL:
            previous = self._stack[-2]
            if previous is _Lcs.BRACKET:
                return _VAL_AFTER_BRACKET.get(byte)
            if previous is _Lcs.EQU:
                return _MODE_END.get(byte)
            if previous is _Lcs.SEMI:
                if len(self._stack) == 5 and byte in _POSITION_END:
                    return _POSITION_END[byte]
                return _VAL_AFTER_SEMI.get(byte)
            return None
        if state is _Lcs.SEMI:
            return _AFTER_SEMI.get(byte)
        if state is _Lcs.EQU:
            return _MODE_END.get(byte)
        return None

    def _resets_on_error(self, state: _Lcs) -> bool:
        if state is _Lcs.SEMI:
            return False
        if state is _Lcs.VAL:
            return self._stack[-2] in (_Lcs.BRACKET, _Lcs.EQU, _Lcs.SEMI)
        return True

    def process_some(self, follow: bool, data) -> Processed:
        if not follow:
            self.reset_buffer()

        i = 0
        while i < len(data):
            state = self._state
            byte = data[i]
            if state in _FINAL_STATES:
                self._state = _Lcs.NONE
                self.editor.apply_linux_attributes(self._data.decode("latin-1"))
                return Processed(i, False)

            if state in _DIGIT_STATES and _is_digit(byte):
                step = 0
                while i + step < len(data) and _is_digit(data[i + step]):
                    self._data.append(data[i + step])
                    step += 1
                self._state = _Lcs.VAL
                if state is not _Lcs.VAL:
                    self._stack.append(self._state)
                i += step
                continue

            target = self._transition(state, byte)
            if target is None:
                if self._resets_on_error(state):
                    self._state = _Lcs.NONE
                return Processed(i, False)
            self._data.append(byte)
            self._state = target
            self._stack.append(target)
            i += 1

        return Processed(i, True)


class AsciiProcessor(DataProcessor):
    """Shows a run of printable ASCII bytes."""

    def process_some(self, follow: bool, data) -> Processed:
        n = 0
        for byte in data:
            if n >= MAX_ASCII_RUN or not 0x20 <= byte <= 0x7F:
                break
            n += 1
        self.editor.append_text(bytes(data[:n]).decode("ascii"))
        return Processed(n, False)


def _in_gb2312_range(byte: int) -> bool:
    return 0xA1 <= byte <= 0xFE


class Gb2312Processor(DataProcessor):
    """Shows GB2312 (EUC-CN) byte pairs, holding a lead byte across reads."""

    def __init__(self, editor: Editor):
        super().__init__(editor)
        self.lead_byte = 0

    def process_some(self, follow: bool, data) -> Processed:
        if follow:
            byte = data[0]
            lead = self.lead_byte
            self.lead_byte = 0
            if _in_gb2312_range(byte):
                if 0xA1 <= lead <= 0xAF or 0xB0 <= lead <= 0xF7:
                    self.editor.append_text(_gbk(bytes((lead, byte))))
                else:
                    self.editor.append_text(f"<A+{lead:02X}{byte:02X}>")
                return Processed(1, False)
            self.editor.append_text(f"<{lead:02X}>")
            return Processed(0, False)

        self.lead_byte = 0
        pairs = 0
        while pairs < MAX_GB2312_PAIRS and (pairs + 1) * 2 <= len(data):
            if _in_gb2312_range(data[pairs * 2]) and _in_gb2312_range(data[pairs * 2 + 1]):
                pairs += 1
            else:
                break

        if pairs:
            self.editor.append_text(_gbk(data[:pairs * 2]))
            return Processed(pairs * 2, False)
        if len(data) < 2:
            self.lead_byte = data[0]
            return Processed(1, True)
        self.editor.append_text(f"<{data[0]:02X}>")
        return Processed(1, False)

    def reset_buffer(self) -> None:
        self.lead_byte = 0


class TextDataReceiver(DataReceiver):
    """Shows received bytes as text, handling control characters and GB2312."""

    def __init__(self, editor: RichEditor | None = None, bell: Callable[[], object] | None = None):
        self._pending = None
        self.bell = bell
        self._proc_byte = SingleByteProcessor(None)
        self._proc_crlf = CrlfProcessor(None)
        self._proc_escape = EscapeProcessor(None)
        self._proc_ascii = AsciiProcessor(None)
        self._proc_gb2312 = Gb2312Processor(None)
        self.editor = editor if editor is not None else TextBuffer()

    @property
    def editor(self) -> RichEditor:
        return self._editor

    @editor.setter
    def editor(self, editor: RichEditor) -> None:
        self._editor = editor
        for proc in (self._proc_byte, self._proc_crlf, self._proc_escape,
                     self._proc_ascii, self._proc_gb2312):
            proc.editor = editor

    def reset_buffer(self) -> None:
        self._pending = None
        for proc in (self._proc_ascii, self._proc_escape, self._proc_crlf, self._proc_gb2312):
            proc.reset_buffer()

    def receive(self, data) -> None:
        view = memoryview(bytes(data))
        while view:
            if self._pending is not None:
                view = self._process(self._pending, True, view)
                continue

            byte = view[0]
            if byte <= 0x1F:
                if byte == BELL:
                    if self.bell is not None:
                        self.bell()
                    view = view[1:]
                elif byte == BACKSPACE:
                    n = _run_length(view, BACKSPACE)
                    self._editor.back_delete_char(n)
                    view = view[n:]
                elif byte == TAB:
                    n = _run_length(view, TAB, MAX_TAB_RUN)
                    self._editor.append_text("\t" * n)
                    view = view[n:]
                elif byte in (CR, LF):
                    view = self._process(self._proc_crlf, False, view)
                elif byte == ESC:
                    view = self._process(self._proc_escape, False, view)
                else:
                    view = self._process(self._proc_byte, False, view)
            elif byte <= 0x7F:
                view = self._process(self._proc_ascii, False, view)
            elif _in_gb2312_range(byte):
                view = self._process(self._proc_gb2312, False, view)
            else:
                view = self._process(self._proc_byte, False, view)


class HexDataProcessor(DataProcessor):
    """Shows bytes as ``XX `` groups, breaking the line every ``line_width`` bytes."""

    def __init__(self, editor: Editor, line_width: int = HEX_LINE_WIDTH):
        super().__init__(editor)
        if line_width <= 0:
            raise ValueError(f"line width must be positive, got {line_width}")
        self.line_width = line_width
        self.count = 0

    def process_some(self, follow: bool, data) -> Processed:
        parts = []
        for offset, byte in enumerate(data, start=self.count % self.line_width):
            parts.append(f"{byte:02X} ")
            if (offset + 1) % self.line_width == 0:
                parts.append("\n")
        self.editor.append_text("".join(parts))
        self.count += len(data)
        return Processed(len(data), False)

    def reset_buffer(self) -> None:
        self.count = 0


class HexDataReceiver(DataReceiver):
    """Shows every received byte in hexadecimal."""

    def __init__(self, editor: Editor | None = None):
        self._pending = None
        self._proc_hex = HexDataProcessor(None)
        self.editor = editor if editor is not None else TextBuffer()

    @property
    def editor(self) -> Editor:
        return self._editor

    @editor.setter
    def editor(self, editor: Editor) -> None:
        self._editor = editor
        self._proc_hex.editor = editor

    @property
    def count(self) -> int:
        return self._proc_hex.count

    @count.setter
    def count(self, n: int) -> None:
        self._proc_hex.count = n

    def reset_buffer(self) -> None:
        self._pending = None
        self._proc_hex.reset_buffer()

    def receive(self, data) -> None:
        view = memoryview(bytes(data))
        while view:
            if self._pending is not None:
                view = self._process(self._pending, True, view)
            else:
                view = self._process(self._proc_hex, False, view)


class FileDataReceiver(DataReceiver):
    """Collects received bytes in memory, e.g. for saving to a file."""

    def __init__(self) -> None:
        self._data = bytearray()

    def receive(self, data) -> None:
        self._data += data

    def reset_buffer(self) -> None:
        self._data.clear()

    def __len__(self) -> int:
        return len(self._data)

    def data(self) -> bytes:
        return bytes(self._data)