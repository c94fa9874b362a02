import socket
import threading

import pytest

from wordmesh.cipher import DEFAULT_KEY, xor_cipher
from wordmesh.client import BUFFER_SIZE, main, run_client, send_file


def _read_all(sock):
    return b"".join(iter(lambda: sock.recv(4096), b""))


def _receiver():
    listener = socket.create_server(("127.0.0.1", 0))
    port = listener.getsockname()[1]
    received = []

    def run():
        conn, _ = listener.accept()
        with conn:
            received.append(_read_all(conn))
        listener.close()

    thread = threading.Thread(target=run, daemon=True)
    thread.start()
    return port, thread, received


def _free_port():
    with socket.socket() as probe:
        probe.bind(("127.0.0.1", 0))
        return probe.getsockname()[1]


@pytest.fixture
def sample(tmp_path):
    path = tmp_path / "input.txt"
    content = bytes(range(256)) * 10
    path.write_bytes(content)
    return path, content


def test_send_file_sends_encrypted_chunks(sample):
    path, content = sample
    assert len(content) > BUFFER_SIZE
    a, b = socket.socketpair()
    with a, b:
        sent = send_file(a, path, DEFAULT_KEY)
        a.shutdown(socket.SHUT_WR)
        data = _read_all(b)
    assert sent == len(content)
    assert data == xor_cipher(content, DEFAULT_KEY)
    assert xor_cipher(data, DEFAULT_KEY) == content


def test_send_file_missing_file_raises(tmp_path):
    a, b = socket.socketpair()
    with a, b, pytest.raises(FileNotFoundError):
        send_file(a, tmp_path / "missing.txt", DEFAULT_KEY)


def test_run_client_sends_key_then_file(sample):
    path, content = sample
    port, thread, received = _receiver()
    sent = run_client("127.0.0.1", port, path, DEFAULT_KEY)
    thread.join(5)
    assert sent == len(content)
    wire = received[0]
    assert wire[:1] == b"Z"
    assert xor_cipher(wire[1:], wire[0]) == content


def test_main_uses_given_key(sample):
    path, content = sample
    port, thread, received = _receiver()
    assert main(["--port", str(port), "--key", "0x10", str(path)]) == 0
    thread.join(5)
    wire = received[0]
    assert wire[0] == 0x10
    assert xor_cipher(wire[1:], 0x10) == content


def test_main_reports_refused_connection(sample):
    path, _ = sample
    assert main(["--port", str(_free_port()), str(path)]) == 1