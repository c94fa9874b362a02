"""Server that receives an encrypted file and coordinates the word-count nodes."""

from __future__ import annotations

import argparse
import logging
import socket
import sys
import threading
from collections.abc import Iterable
from os import PathLike
from pathlib import Path

from wordmesh.arduino import BIT_DELAY, DEFAULT_DEVICE
from wordmesh.cipher import xor_cipher
from wordmesh.node_manager import DEFAULT_HOST, NODE_PORTS, NodeTask, create_nodes
from wordmesh.textparts import split_file

BUFFER_SIZE = 1024
DEFAULT_PORT = 9000

_log = logging.getLogger(__name__)


class Server:
    """Receives client files under *base_dir* and hands them to the nodes."""

    def __init__(
        self,
        base_dir: str | PathLike[str] = ".",
        port: int = DEFAULT_PORT,
        node_ports: Iterable[int] = NODE_PORTS,
        device: str | PathLike[str] = DEFAULT_DEVICE,
        host: str = DEFAULT_HOST,
        delay: float = BIT_DELAY,
    ) -> None:
        self.port = port
        self.node_ports = tuple(node_ports)
        self.device = device
        self.host = host
        self.delay = delay
        root = Path(base_dir) / "ServerFiles"
        inputs = root / "Input_files"
        self.decrypted_path = inputs / "archivo_decifrado.txt"
        self.encrypted_path = inputs / "archivo_cifrado.txt"
        self.split_dir = root / "Split_files"
        self.lists_dir = root / "Words_lists"

    def receive_file(self, conn: socket.socket) -> Path:
        """Read the key byte and the encrypted file from *conn*.

        Both the encrypted and the decrypted copies are stored; the path of
        the decrypted one is returned. Raises ``ConnectionError`` if the
        peer closes before sending the key.
        """
        key_byte = conn.recv(1)
        if not key_byte:
            raise ConnectionError("connection closed before the key was received")
        key = key_byte[0]
        self.decrypted_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.decrypted_path, "wb") as plain, open(self.encrypted_path, "wb") as cipher:
            for chunk in iter(lambda: conn.recv(BUFFER_SIZE), b""):
                cipher.write(chunk)
                plain.write(xor_cipher(chunk, key))
        return self.decrypted_path

    def manage_flow(self, conn: socket.socket) -> tuple[bytes, int]:
        """Receive a file, split it among the nodes and return the top word."""
        try:
            path = self.receive_file(conn)
        finally:
            conn.close()
        print("Archivo recibido guardado.")
        parts = split_file(path, self.split_dir, len(self.node_ports))
        tasks = [NodeTask(port, part) for port, part in zip(self.node_ports, parts)]
        return create_nodes(tasks, self.lists_dir, self.host, self.device, self.delay)

    def _run_flow(self, conn: socket.socket) -> None:
        try:
            self.manage_flow(conn)
        except Exception:
            _log.exception("processing a client failed")

    def serve_forever(self, server_socket: socket.socket) -> None:
        """Handle each client in its own thread until *server_socket* is closed."""
        while server_socket.fileno() != -1:
            try:
                conn, _ = server_socket.accept()
            except OSError as exc:
                if server_socket.fileno() == -1:
                    break
                if isinstance(exc, socket.timeout):
                    continue
                print(f"[-] Accept fallido: {exc}", file=sys.stderr)
                continue
            conn.settimeout(None)
            threading.Thread(target=self._run_flow, args=(conn,), daemon=True).start()


def main(argv: list[str] | None = None) -> int:
    """Run the word-count server."""
    parser = argparse.ArgumentParser(description="Run the word-count server.")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--base-dir", default=".")
    parser.add_argument("--node-port", type=int, action="append", dest="node_ports")
    parser.add_argument("--device", default=DEFAULT_DEVICE)
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--delay", type=float, default=BIT_DELAY)
    args = parser.parse_args(argv)
    server = Server(
        args.base_dir,
        args.port,
        args.node_ports or NODE_PORTS,
        args.device,
        args.host,
        args.delay,
    )
    with socket.create_server(("", args.port), backlog=5) as listener:
        print(f"[+] Servidor escuchando en el puerto {args.port}")
        try:
            server.serve_forever(listener)
        except KeyboardInterrupt:
            pass
    return 0