"""Client that sends an XOR-encrypted text file to the server."""

from __future__ import annotations

import argparse
import socket
import sys
from os import PathLike

from wordmesh.cipher import DEFAULT_KEY, xor_cipher

BUFFER_SIZE = 1024
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 9000
DEFAULT_FILE = "ClientFiles/el_quijote.txt"


def send_file(
    sock: socket.socket,
    filename: str | PathLike[str],
    key: int = DEFAULT_KEY,
) -> int:
    """Send *filename* over *sock* in encrypted chunks and return its size.

    Raises ``OSError`` if the file cannot be read or the socket fails.
    """
    total = 0
    with open(filename, "rb") as handle:
        for chunk in iter(lambda: handle.read(BUFFER_SIZE), b""):
            sock.sendall(xor_cipher(chunk, key))
            total += len(chunk)
    return total


def run_client(
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
    filename: str | PathLike[str] = DEFAULT_FILE,
    key: int = DEFAULT_KEY,
) -> int:
    """Connect to the server, send the key byte and then the encrypted file.

    Returns the number of file bytes sent.
    """
    key_byte = bytes([key])
    with socket.create_connection((host, port)) as sock:
        print("[+] Socket creado correctamente.")
        print(f"[+] Conectado al servidor {host}:{port}")
        sock.sendall(key_byte)
        sent = send_file(sock, filename, key)
    print("[+] Archivo enviado correctamente.")
    return sent


def main(argv: list[str] | None = None) -> int:
    """Send a file to the word-count server."""
    parser = argparse.ArgumentParser(description="Send an encrypted file to the server.")
    parser.add_argument("filename", nargs="?", default=DEFAULT_FILE)
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--key", type=lambda text: int(text, 0), default=DEFAULT_KEY)
    args = parser.parse_args(argv)
    try:
        run_client(args.host, args.port, args.filename, args.key)
    except (OSError, ValueError) as exc:
        print(f"[-] Envio fallido: {exc}", file=sys.stderr)
        return 1
    return 0