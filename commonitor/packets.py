"""Send-packet queue, byte counters, port item lists and port event listeners."""

from __future__ import annotations

import enum
import threading
from collections import deque
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Generic, Protocol, TypeVar

DEFAULT_PACKET_SIZE = 1024
LOCAL_PACKET_COUNT = 100

MAX_LOAD_SIZE = 1 << 20
LINE_CCH_SEND = 16
LINE_CCH_RECV = 16
SEND_BUF_SIZE = MAX_LOAD_SIZE
INTERNAL_RECV_BUF_SIZE = 1 << 20
READ_BUFFER_SIZE = 1 << 20


class CommEvent(enum.IntFlag):
    """Serial port events a listener can subscribe to."""

    RXCHAR = 0x0001
    RXFLAG = 0x0002
    TXEMPTY = 0x0004
    CTS = 0x0008
    DSR = 0x0010
    RLSD = 0x0020
    BREAK = 0x0040
    ERR = 0x0080
    RING = 0x0100
    PERR = 0x0200
    RX80FULL = 0x0400


CounterUpdater = Callable[[int, int, int], object]


class DataCounter:
    """Thread-safe counts of bytes read, written and still waiting to be written."""

    def __init__(self, updater: CounterUpdater | None = None):
        self.updater = updater
        self._lock = threading.Lock()
        self._read = 0
        self._written = 0
        self._unsent = 0

    @property
    def read(self) -> int:
        return self._read

    @property
    def written(self) -> int:
        return self._written

    @property
    def unsent(self) -> int:
        return self._unsent

    def call_updater(self) -> tuple[int, int, int]:
        """Report (read, written, unsent) to the updater, if any, and return it."""
        with self._lock:
            values = (self._read, self._written, self._unsent)
            if self.updater is not None:
                self.updater(*values)
        return values

    def reset_all(self) -> None:
        with self._lock:
            self._read = self._written = self._unsent = 0

    def reset_wr_rd(self) -> None:
        with self._lock:
            self._read = self._written = 0

    def reset_unsend(self) -> None:
        with self._lock:
            self._unsent = 0

    def add_send(self, n: int) -> None:
        with self._lock:
            self._written += n

    def add_recv(self, n: int) -> None:
        with self._lock:
            self._read += n

    def add_unsend(self, n: int) -> None:
        with self._lock:
            self._unsent += n

    def sub_unsend(self, n: int) -> None:
        with self._lock:
            self._unsent -= n


class PacketType(enum.Enum):
    LOCAL = "local"   # taken from the manager's pool, returned on release
    ALLOC = "alloc"   # allocated for a large payload or when the pool is empty
    EXIT = "exit"     # tells the writer to stop


@dataclass(eq=False)
class SendPacket:
    """A block of data queued for sending."""

    type: PacketType
    data: bytearray = field(default_factory=bytearray)
    used: bool = False

    def __len__(self) -> int:
        return len(self.data)


class PacketManager:
    """Thread-safe send queue with a pool of reusable small packets."""

    def __init__(self, pool_size: int = LOCAL_PACKET_COUNT, default_size: int = DEFAULT_PACKET_SIZE):
        self.default_size = default_size
        self._pool = [SendPacket(PacketType.LOCAL) for _ in range(pool_size)]
        self._queue: deque[SendPacket] = deque()
        self._cond = threading.Condition()

    @property
    def local_free(self) -> int:
        with self._cond:
            return sum(1 for p in self._pool if not p.used)

    def __len__(self) -> int:
        with self._cond:
            return len(self._queue)

    def alloc(self, size: int) -> SendPacket:
        """Return a packet with room for ``size`` bytes."""
        if size < 0:
            raise ValueError(f"packet size must not be negative, got {size}")
        with self._cond:
            if size <= self.default_size:
                for packet in self._pool:
                    if not packet.used:
                        packet.used = True
                        packet.data = bytearray(size)
                        return packet
        return SendPacket(PacketType.ALLOC, bytearray(size), used=True)

    def release(self, packet: SendPacket) -> None:
        """Give a packet back; pooled packets become available again."""
        if packet is None:
            raise ValueError("cannot release None")
        with self._cond:
            packet.used = False
            if packet.type is PacketType.ALLOC:
                packet.data = bytearray()

    def put(self, packet: SendPacket) -> None:
        with self._cond:
            self._queue.append(packet)
            self._cond.notify()

    def put_front(self, packet: SendPacket) -> None:
        with self._cond:
            self._queue.appendleft(packet)
            self._cond.notify()

    def get(self, timeout: float | None = None) -> SendPacket | None:
        """Take the head packet, waiting for one; None if ``timeout`` runs out."""
        with self._cond:
            if not self._cond.wait_for(lambda: bool(self._queue), timeout):
                return None
            return self._queue.popleft()

    def query_head(self) -> SendPacket | None:
        with self._cond:
            return self._queue[0] if self._queue else None

    def empty(self) -> None:
        """Drop every queued packet, releasing each."""
        with self._cond:
            dropped = list(self._queue)
            self._queue.clear()
        for packet in dropped:
            self.release(packet)


@dataclass(frozen=True)
class ComItem:
    """A setting choice: its numeric value and its display name."""

    value: int
    name: str


@dataclass(frozen=True)
class ComPort(ComItem):
    """A serial port: its number and friendly name."""

    @property
    def id(self) -> int:
        return self.value

    def id_and_name(self) -> str:
        return f"COM{self.value:<13d}"[:16] + "\t\t" + self.name


@dataclass(frozen=True)
class BaudRate(ComItem):
    """A baud rate; ``inner`` is False when the user typed it in."""

    inner: bool = True

    @property
    def is_added_by_user(self) -> bool:
        return not self.inner


T = TypeVar("T", bound=ComItem)


class ComList(Generic[T]):
    """An ordered list of setting choices."""

    def __init__(self, items=()):
        self._items: list[T] = list(items)

    def add(self, item: T) -> T:
        self._items.append(item)
        return item

    def empty(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> T:
        return self._items[index]

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)


class ComEventListener(Protocol):
    def do_event(self, event: int) -> object: ...


class EventListener:
    """Records the last event and wakes one waiter (auto-reset)."""

    def __init__(self) -> None:
        self.event = 0
        self._signal = threading.Event()

    def do_event(self, event: int) -> None:
        self.event = event
        self._signal.set()

    def wait(self, timeout: float | None = None) -> bool:
        """Wait for an event; True when one arrived. The signal is consumed."""
        if self._signal.wait(timeout):
            self._signal.clear()
            return True
        return False

    def reset(self) -> None:
        self._signal.clear()


class EventListenerHub:
    """Dispatches port events to listeners whose mask matches."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._listeners: list[tuple[ComEventListener, int]] = []

    def __len__(self) -> int:
        with self._lock:
            return len(self._listeners)

    def call_listeners(self, event: int) -> None:
        with self._lock:
            for listener, mask in self._listeners:
                if event & mask:
                    listener.do_event(event)

    def add_listener(self, listener: ComEventListener, mask: int) -> None:
        with self._lock:
            self._listeners.append((listener, int(mask)))

    def remove_listener(self, listener: ComEventListener) -> None:
        """Remove the first registration of ``listener``, if present."""
        with self._lock:
            for index, (registered, _) in enumerate(self._listeners):
                if registered is listener:
                    del self._listeners[index]
                    break