# commonitor

The pieces of a serial port monitor that do not depend on a port: turning
received bytes into text or a hex dump, a thread-safe send queue with byte
counters, port setting lists, event listeners, an elapsed-time clock and an
ASCII code table. The package has no dependencies outside the standard library.

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

- `commonitor.editor` – `TextBuffer`, an appendable text made of styled runs.
  `append_text`, `back_delete_char`, `set_text` and `clear` edit it;
  `apply_linux_attributes` applies a complete `ESC[...m` sequence (colours
  30–37 and 40–47, `0` to reset, `1` for bold) to the style of text appended
  afterwards. Each run carries a frozen `TextStyle`.
- `commonitor.processors` – receivers that split incoming bytes between
  processors:
  - `TextDataReceiver` shows printable ASCII, turns CR, LF, CR LF and LF CR
    into one newline each (even when a pair is split between reads), handles
    backspace, tabs and bell (an optional `bell` callback), GB2312 byte pairs
    (holding a lead byte across reads) and `ESC[` sequences. Other bytes are
    shown as `<XX>`.
  - `HexDataReceiver` shows bytes as `XX ` groups, 16 per line, continuing
    the line across reads; its `count` can be set or reset.
  - `FileDataReceiver` collects bytes in memory; `data()` returns them.
  The single processors (`AsciiProcessor`, `CrlfProcessor`, `EscapeProcessor`,
  `Gb2312Processor`, `SingleByteProcessor`, `HexDataProcessor`) can be used on
  their own through `process_some(follow, data)`.
- `commonitor.packets` – `PacketManager`, a send queue with a pool of reusable
  small packets (`alloc`, `release`, `put`, `put_front`, `get` with an
  optional timeout, `query_head`, `empty`); `DataCounter` for read, written
  and unsent byte counts with an optional updater callback; `ComItem`,
  `ComPort`, `BaudRate` and `ComList` for setting choices; `CommEvent` flags,
  `EventListener` and `EventListenerHub` for dispatching port events by mask.
- `commonitor.timer` – `ClockTimer`, which runs in its own thread and every
  period advances an hh:mm:ss clock and calls `on_time(h, m, s)` and
  `on_period()`. It can be used as a context manager.
- `commonitor.asctable` – `describe_code`, `table_header` and `table_rows`
  format codes 0–255 in decimal, octal and hex with control-code names;
  `AsciiTableView` keeps a scroll position and colour choice.
- `commonitor.about` – `name_and_version()` and `about_text()`.

## Example

```python
from commonitor.editor import TextBuffer
from commonitor.processors import TextDataReceiver

screen = TextBuffer()
receiver = TextDataReceiver(screen)
receiver.receive(b"hello\r\n\x1b[31mred\x1b[0m!")
print(screen.text)   # "hello\nred" – the sequence is applied when "!" arrives
```

## What it does not do

The package does not open serial ports, read from or write to them, or list
the ports present; data has to be fed to the receivers and taken from the
`PacketManager` by the caller. It has no command files of saved commands, no
command line program and no window of its own.