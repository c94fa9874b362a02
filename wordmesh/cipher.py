"""Single-byte XOR cipher shared by the client and the server."""

DEFAULT_KEY = 0x5A


def xor_cipher(data: bytes, key: int) -> bytes:
    """Return *data* with every byte XORed with *key*.

    The operation is its own inverse: applying it twice with the same key
    gives back the original bytes.
    """
    if isinstance(key, bool) or not isinstance(key, int) or not 0 <= key <= 0xFF:
        raise ValueError(f"key must be a single byte (0-255), got {key!r}")
    table = bytes(value ^ key for value in range(256))
    return bytes(data).translate(table)