"""Opening DAT files from disk."""

import gzip
from pathlib import Path
from typing import IO, Union

GZIP_MAGIC = b"\x1f\x8b"


def open_stream(path: Union[str, Path]) -> IO[bytes]:
    """
    Open a DAT file for binary reading.

    Gzip-compressed files are detected by their magic bytes and
    decompressed transparently.

    Args:
        path: Path to the DAT file

    Returns:
        Binary stream; the caller is responsible for closing it

    Raises:
        FileNotFoundError: If the file doesn't exist
        OSError: If the file cannot be opened
    """
    path = Path(path).expanduser()
    if not path.is_file():
        raise FileNotFoundError(f"DAT file not found: {path}")

    with open(path, 'rb') as f:
        magic = f.read(2)

    if magic == GZIP_MAGIC:
        return gzip.open(path, 'rb')
    return open(path, 'rb')
