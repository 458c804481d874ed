"""Serial monitor building blocks: text and hex display of received bytes, send queue, counters, clock and ASCII table."""

__version__ = "1.20.0"