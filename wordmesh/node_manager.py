"""Distributing the text parts to the nodes and collecting their word lists."""

from __future__ import annotations

import logging
import socket
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from os import PathLike
from pathlib import Path

from wordmesh.arduino import BIT_DELAY, DEFAULT_DEVICE
from wordmesh.textparts import most_freq_word

BUFFER_SIZE = 1024
DEFAULT_HOST = "127.0.0.1"
DEFAULT_LISTS_DIR = "ServerFiles/Words_lists"
NODE_PORTS = (9001, 9002, 9003)
FILE_PARTS = tuple(f"ServerFiles/Split_files/part_{number}.txt" for number in (1, 2, 3))

_log = logging.getLogger(__name__)


@dataclass
class NodeTask:
    """A part file to be processed by the node on *port*."""

    port: int
    file_part: str | PathLike[str]
    response: bytes = b""


def send_part(
    task: NodeTask,
    lists_dir: str | PathLike[str] = DEFAULT_LISTS_DIR,
    host: str = DEFAULT_HOST,
) -> Path:
    """Send the task's part to its node and save the reply as ``list_<port>.txt``.

    The reply is also kept in ``task.response``. Returns the list's path.
    """
    with socket.create_connection((host, task.port)) as sock:
        with open(task.file_part, "rb") as handle:
            for chunk in iter(lambda: handle.read(BUFFER_SIZE), b""):
                sock.sendall(chunk)
        sock.shutdown(socket.SHUT_WR)
        print(f"[i] Esperando respuesta del nodo en el puerto {task.port}")
        response = b"".join(iter(lambda: sock.recv(BUFFER_SIZE), b""))
    directory = Path(lists_dir)
    directory.mkdir(parents=True, exist_ok=True)
    list_path = directory / f"list_{task.port}.txt"
    list_path.write_bytes(response)
    task.response = response
    return list_path


def create_nodes(
    tasks: Iterable[NodeTask] | None = None,
    lists_dir: str | PathLike[str] = DEFAULT_LISTS_DIR,
    host: str = DEFAULT_HOST,
    device: str | PathLike[str] = DEFAULT_DEVICE,
    delay: float = BIT_DELAY,
) -> tuple[bytes, int]:
    """Run every task in its own thread, then report the most frequent word.

    A node that cannot be reached is logged and left out of the merge.
    Raises ``ValueError`` if no node returned any words.
    """
    if tasks is None:
        tasks = [NodeTask(port, part) for port, part in zip(NODE_PORTS, FILE_PARTS)]
    tasks = list(tasks)
    with ThreadPoolExecutor(max_workers=max(len(tasks), 1)) as pool:
        futures = [pool.submit(send_part, task, lists_dir, host) for task in tasks]
    for task, future in zip(tasks, futures):
        try:
            future.result()
        except OSError as exc:
            _log.error("node on port %d failed: %s", task.port, exc)
        print(f"[+] Respuesta recibida del nodo del puerto {task.port}")
    return most_freq_word([task.port for task in tasks], lists_dir, device, delay)