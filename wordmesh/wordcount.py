"""Word frequency counting performed by each worker node."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from os import PathLike
from pathlib import Path

MAX_WORDS = 10_000
MAX_WORD_LENGTH = 50

_log = logging.getLogger(__name__)

_WORD_BYTES = frozenset(b for b in range(256) if b >= 128 or bytes([b]).isalnum())


def iter_words(data: bytes) -> Iterator[bytes]:
    """Yield the lower-cased words of *data* in order.

    A word is a run of ASCII letters, digits or bytes of 128 and above.
    Words are cut to ``MAX_WORD_LENGTH - 1`` bytes. A word is only emitted
    once a separator follows it, so a word at the very end of the data
    without a trailing separator is not counted.
    """
    current = bytearray()
    for byte in bytes(data).lower():
        if byte in _WORD_BYTES:
            if len(current) < MAX_WORD_LENGTH - 1:
                current.append(byte)
        elif current:
            yield bytes(current)
            current.clear()


def count_words(data: bytes) -> dict[bytes, int]:
    """Count the words of *data*, keeping first-seen order.

    At most ``MAX_WORDS`` distinct words are kept; further new words are
    ignored with a warning.
    """
    counts: dict[bytes, int] = {}
    for word in iter_words(data):
        if word in counts:
            counts[word] += 1
        elif len(counts) < MAX_WORDS:
            counts[word] = 1
        else:
            _log.warning("maximum number of distinct words reached (%d)", MAX_WORDS)
    return counts


def format_word_list(counts: Mapping[bytes, int]) -> bytes:
    """Render counts as ``word: count`` lines."""
    return b"".join(b"%s: %d\n" % (word, count) for word, count in counts.items())


def words_counter(
    filename: str | PathLike[str],
    port: int,
    lists_dir: str | PathLike[str] = "NodeFiles/words_lists",
) -> Path:
    """Count the words of *filename* and write ``list_<port>.txt`` in *lists_dir*.

    Returns the path of the written list.
    """
    counts = count_words(Path(filename).read_bytes())
    output = Path(lists_dir)
    output.mkdir(parents=True, exist_ok=True)
    list_path = output / f"list_{port}.txt"
    list_path.write_bytes(format_word_list(counts))
    print("[+] Proceso completado.")
    return list_path