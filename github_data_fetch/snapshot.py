"""Binary snapshot files (MessagePack)."""

from pathlib import Path

import msgpack


def write_snapshot(records: list, path: Path) -> None:
    """Write ``records`` as the complete contents of ``path``, replacing any existing file."""
    data = msgpack.packb(records, use_bin_type=True)
    with open(path, "wb") as f:
        f.write(data)


def read_snapshot(path: Path) -> list:
    with open(path, "rb") as f:
        return msgpack.unpackb(f.read(), raw=False, strict_map_key=False)
