"""Splitting the input among nodes and merging the nodes' word lists."""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator, Mapping
from itertools import islice
from os import PathLike
from pathlib import Path
from typing import TypeVar

from wordmesh.arduino import BIT_DELAY, DEFAULT_DEVICE, send_word_as_binary

MAX_WORDS = 10_000
MAX_WORD_LEN = 128
PARTS = 3

_TOKEN_LIMIT = 255
_LINE = re.compile(rb"([^:]{1,%d}):\s*([+-]?\d+)" % (MAX_WORD_LEN - 1))

T = TypeVar("T")


def part_sizes(total: int, parts: int = PARTS) -> list[int]:
    """Share *total* items among *parts*; earlier parts take the remainder."""
    if parts < 1:
        raise ValueError("parts must be at least 1")
    if total < 0:
        raise ValueError("total must not be negative")
    base, remainder = divmod(total, parts)
    return [base + (index < remainder) for index in range(parts)]


def split_words(words: Iterable[T], parts: int = PARTS) -> list[list[T]]:
    """Cut *words* into *parts* consecutive chunks of nearly equal size."""
    items = list(words)
    stream = iter(items)
    return [list(islice(stream, size)) for size in part_sizes(len(items), parts)]


def _tokens(data: bytes) -> Iterator[bytes]:
    for token in data.split():
        for start in range(0, len(token), _TOKEN_LIMIT):
            yield token[start : start + _TOKEN_LIMIT]


def split_file(
    filename: str | PathLike[str],
    output_dir: str | PathLike[str] = "ServerFiles/Split_files",
    parts: int = PARTS,
) -> list[Path]:
    """Split the whitespace-separated words of *filename* into part files.

    Writes ``part_1.txt`` ... into *output_dir*, words joined by single
    spaces, and returns their paths. Returns an empty list if the input
    cannot be read.
    """
    try:
        data = Path(filename).read_bytes()
    except OSError:
        return []
    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)
    paths = []
    for number, chunk in enumerate(split_words(_tokens(data), parts), start=1):
        path = out / f"part_{number}.txt"
        path.write_bytes(b" ".join(chunk))
        paths.append(path)
    return paths


def parse_word_list(lines: Iterable[bytes | str]) -> Iterator[tuple[bytes, int]]:
    """Yield ``(word, count)`` from ``word: count`` lines, skipping malformed ones."""
    for line in lines:
        if isinstance(line, str):
            line = line.encode("utf-8")
        match = _LINE.match(line)
        if match:
            yield match.group(1), int(match.group(2))


def merge_word_lists(paths: Iterable[str | PathLike[str]]) -> dict[bytes, int]:
    """Sum the counts of several word list files; unreadable files are skipped."""
    totals: dict[bytes, int] = {}
    for path in paths:
        try:
            handle = open(path, "rb")
        except OSError:
            continue
        with handle:
            for word, count in parse_word_list(handle):
                if word in totals:
                    totals[word] += count
                elif len(totals) < MAX_WORDS:
                    totals[word] = count
    return totals


def most_frequent(counts: Mapping[bytes, int]) -> tuple[bytes, int]:
    """Return the word with the highest count; the first one wins ties."""
    if not counts:
        raise ValueError("no words to choose from")
    return max(counts.items(), key=lambda item: item[1])


def most_freq_word(
    ports: Iterable[int],
    lists_dir: str | PathLike[str] = "ServerFiles/Words_lists",
    device: str | PathLike[str] = DEFAULT_DEVICE,
    delay: float = BIT_DELAY,
) -> tuple[bytes, int]:
    """Find the most frequent word over the nodes' lists and send it to *device*."""
    directory = Path(lists_dir)
    counts = merge_word_lists(directory / f"list_{port}.txt" for port in ports)
    word, count = most_frequent(counts)
    print(
        f"La palabra con más ocurrencias es '{word.decode('utf-8', 'replace')}' "
        f"con {count} apariciones."
    )
    send_word_as_binary(device, word, delay)
    return word, count