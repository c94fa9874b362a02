"""Worker node: receives a text part, counts its words and replies with the list."""

from __future__ import annotations

import argparse
import socket
import sys
from os import PathLike
from pathlib import Path

from wordmesh.wordcount import words_counter

BUFFER_SIZE = 1024


class WordNode:
    """A node listening on *port* that keeps its files under *base_dir*."""

    def __init__(self, port: int, base_dir: str | PathLike[str] = ".") -> None:
        self.port = port
        root = Path(base_dir) / "NodeFiles"
        self.input_path = root / "Input_server_files" / f"Input_{port}.txt"
        self.lists_dir = root / "words_lists"

    def handle(self, conn: socket.socket) -> bytes:
        """Serve one connection and return the word list sent back.

        The received text is stored, counted, and the resulting list is
        written back before the connection is closed.
        """
        try:
            self.input_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.input_path, "wb") as handle:
                for chunk in iter(lambda: conn.recv(BUFFER_SIZE), b""):
                    handle.write(chunk)
            list_path = words_counter(self.input_path, self.port, self.lists_dir)
            reply = list_path.read_bytes()
            conn.sendall(reply)
            try:
                conn.shutdown(socket.SHUT_RDWR)
            except OSError:
                pass
        finally:
            conn.close()
        return reply

    def serve_forever(self, server_socket: socket.socket) -> None:
        """Accept and handle connections until *server_socket* is closed."""
        while server_socket.fileno() != -1:
            try:
                conn, _ = server_socket.accept()
            except OSError as exc:
                if server_socket.fileno() == -1:
                    break
                if isinstance(exc, socket.timeout):
                    continue
                print(f"[-] Error al aceptar conexión: {exc}", file=sys.stderr)
                continue
            conn.settimeout(None)
            try:
                self.handle(conn)
            except OSError as exc:
                print(f"[-] Error atendiendo la conexión: {exc}", file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    """Run a word-count node on the given port."""
    parser = argparse.ArgumentParser(description="Run a word-count node.")
    parser.add_argument("port", type=int)
    parser.add_argument("--base-dir", default=".")
    args = parser.parse_args(argv)
    node = WordNode(args.port, args.base_dir)
    with socket.create_server(("", args.port), backlog=5) as server:
        print(f"[+] Nodo escuchando en el puerto {args.port}")
        try:
            node.serve_forever(server)
        except KeyboardInterrupt:
            pass
    return 0