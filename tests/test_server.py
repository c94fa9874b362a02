import socket
import threading
import time

import pytest

from wordmesh.cipher import DEFAULT_KEY, xor_cipher
from wordmesh.client import run_client
from wordmesh.node import WordNode
from wordmesh.server import Server

TEXT = b"uno dos uno dos uno tres uno cuatro uno fin"


def _start_node(base_dir):
    listener = socket.create_server(("127.0.0.1", 0))
    listener.settimeout(0.1)
    port = listener.getsockname()[1]
    node = WordNode(port, base_dir)
    thread = threading.Thread(target=node.serve_forever, args=(listener,), daemon=True)
    thread.start()
    return port, listener, thread


@pytest.fixture
def nodes(tmp_path):
    started = [_start_node(tmp_path / "nodes") for _ in range(3)]
    yield [port for port, _, _ in started]
    for _, listener, thread in started:
        listener.close()
        thread.join(5)


@pytest.fixture
def device(tmp_path):
    path = tmp_path / "device"
    path.touch()
    return path


def test_receive_file_stores_both_copies(tmp_path):
    server = Server(tmp_path, delay=0)
    content = bytes(range(256)) * 5
    encrypted = xor_cipher(content, DEFAULT_KEY)
    a, b = socket.socketpair()
    with a, b:
        a.sendall(bytes([DEFAULT_KEY]) + encrypted)
        a.shutdown(socket.SHUT_WR)
        path = server.receive_file(b)
    assert path == server.decrypted_path
    assert path.read_bytes() == content
    assert server.encrypted_path.read_bytes() == encrypted


def test_receive_file_without_key_raises(tmp_path):
    server = Server(tmp_path, delay=0)
    a, b = socket.socketpair()
    with a, b:
        a.shutdown(socket.SHUT_WR)
        with pytest.raises(ConnectionError):
            server.receive_file(b)


def test_manage_flow_returns_most_frequent_word(tmp_path, nodes, device):
    server = Server(tmp_path / "srv", node_ports=nodes, device=device, delay=0)
    a, b = socket.socketpair()
    with a:
        a.sendall(bytes([DEFAULT_KEY]) + xor_cipher(TEXT, DEFAULT_KEY))
        a.shutdown(socket.SHUT_WR)
        result = server.manage_flow(b)
    assert result == (b"uno", 4)
    assert b.fileno() == -1
    assert server.decrypted_path.read_bytes() == TEXT
    parts = [(server.split_dir / f"part_{n}.txt").read_bytes() for n in (1, 2, 3)]
    assert b" ".join(parts).split() == TEXT.split()
    for port in nodes:
        assert (server.lists_dir / f"list_{port}.txt").exists()


def test_serve_forever_processes_client(tmp_path, nodes, device):
    server = Server(tmp_path / "srv", node_ports=nodes, device=device, delay=0)
    listener = socket.create_server(("127.0.0.1", 0))
    listener.settimeout(0.1)
    port = listener.getsockname()[1]
    thread = threading.Thread(target=server.serve_forever, args=(listener,), daemon=True)
    thread.start()
    source = tmp_path / "client.txt"
    source.write_bytes(TEXT)
    assert run_client("127.0.0.1", port, source, DEFAULT_KEY) == len(TEXT)
    deadline = time.monotonic() + 10
    while device.stat().st_size == 0 and time.monotonic() < deadline:
        time.sleep(0.05)
    listener.close()
    thread.join(5)
    assert not thread.is_alive()
    assert device.stat().st_size > 0
    assert server.decrypted_path.read_bytes() == TEXT
    assert server.encrypted_path.read_bytes() == xor_cipher(TEXT, DEFAULT_KEY)