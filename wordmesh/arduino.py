"""Writing words to the Arduino character device as bit patterns."""

from __future__ import annotations

import argparse
import logging
import os
import time
from os import PathLike

DEFAULT_DEVICE = "/dev/ArduinoDriver3"
ONE_PATTERN = b"11111111111111"
ZERO_PATTERN = b"00000"
BIT_DELAY = 1.4

_log = logging.getLogger(__name__)


def _as_bytes(data: str | bytes) -> bytes:
    return data.encode("utf-8") if isinstance(data, str) else bytes(data)


def arduino_write(device: str | PathLike[str], data: str | bytes) -> int:
    """Open *device* for writing, write *data* and return the byte count.

    Raises ``OSError`` if the device cannot be opened or written.
    """
    payload = _as_bytes(data)
    print(f"Writing: {payload.decode('utf-8', 'replace')} to device: {os.fspath(device)}")
    fd = os.open(device, os.O_WRONLY)
    try:
        return os.write(fd, payload)
    finally:
        os.close(fd)


def char_bits(byte: int) -> str:
    """Return the eight bits of *byte*, most significant first."""
    if not 0 <= byte <= 0xFF:
        raise ValueError(f"not a byte: {byte!r}")
    return format(byte, "08b")


def send_word_as_binary(
    device: str | PathLike[str],
    word: str | bytes,
    delay: float = BIT_DELAY,
) -> list[bytes]:
    """Send every bit of *word* to *device*, pausing *delay* seconds per bit.

    A one bit is sent as ``ONE_PATTERN`` and a zero bit as ``ZERO_PATTERN``.
    Write failures are logged and do not stop the transmission. Returns the
    payloads in the order they were sent.
    """
    sent: list[bytes] = []
    for byte in _as_bytes(word):
        bits = char_bits(byte)
        print(f"Sending character: {chr(byte)} (ASCII: {byte}), Binary representation: {bits}")
        for bit in bits:
            payload = ONE_PATTERN if bit == "1" else ZERO_PATTERN
            try:
                arduino_write(device, payload)
            except OSError as exc:
                _log.error("write to %s failed: %s", os.fspath(device), exc)
            sent.append(payload)
            if delay > 0:
                time.sleep(delay)
    return sent


def main(argv: list[str] | None = None) -> int:
    """Send a word to the Arduino device."""
    parser = argparse.ArgumentParser(description="Send a word to the Arduino device bit by bit.")
    parser.add_argument("device", nargs="?", default=DEFAULT_DEVICE)
    parser.add_argument("word", nargs="?", default="ééó")
    parser.add_argument("--delay", type=float, default=BIT_DELAY)
    args = parser.parse_args(argv)
    send_word_as_binary(args.device, args.word, args.delay)
    return 0