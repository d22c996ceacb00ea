"""
ClrMamePro DAT serializer.

Writes a MetadataFile as ClrMamePro text. Content kept in
``additional_elements`` is not written back.
"""

import io
import logging
from pathlib import Path
from typing import Optional, Union

from .models import ITEM_TYPES, SINGLE_VALUED_ITEMS, ClrMamePro, GameBase, MetadataFile
from .writer import ClrMameProWriter

logger = logging.getLogger(__name__)


def serialize(document: Optional[MetadataFile], quotes: bool = True) -> Optional[bytes]:
    """
    Serialize a document to ClrMamePro text.

    Args:
        document: Document to write
        quotes: True to wrap every value in double quotes

    Returns:
        UTF-8 encoded DAT text, or None if no document was given

    Raises:
        RequiredFieldMissingError: If a game or item lacks a required field
    """
    if document is None:
        return None

    buffer = io.StringIO(newline="\n")
    writer = ClrMameProWriter(buffer, quotes=quotes)

    write_header(document.clrmamepro, writer)
    for game in document.game:
        write_game(game, writer)

    return buffer.getvalue().encode("utf-8")


def serialize_to_file(
    document: Optional[MetadataFile],
    path: Union[str, Path],
    quotes: bool = True
) -> bool:
    """
    Serialize a document to a file.

    The file is written to a temporary sibling first and renamed into place,
    so a failed write never leaves partial output behind.

    Args:
        document: Document to write
        path: Destination file
        quotes: True to wrap every value in double quotes

    Returns:
        True if the file was written, False if there was nothing to write

    Raises:
        RequiredFieldMissingError: If a game or item lacks a required field
        OSError: If the file cannot be written
    """
    data = serialize(document, quotes=quotes)
    if data is None:
        return False

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    # Atomic write: write to temp file, then rename
    temp_file = path.with_suffix(path.suffix + '.tmp')
    try:
        with open(temp_file, 'wb') as f:
            f.write(data)
        temp_file.replace(path)
    except OSError:
        if temp_file.exists():
            temp_file.unlink()
        raise

    logger.info(f"Wrote {len(document.game)} games to {path}")
    return True


def write_header(header: Optional[ClrMamePro], writer: ClrMameProWriter) -> None:
    """Write the ``clrmamepro`` block; every header field is optional."""
    if header is None:
        return

    writer.write_start_element("clrmamepro")
    for key in ClrMamePro.FIELDS:
        writer.write_optional_standalone(key, getattr(header, key))
    writer.write_end_element()


def write_game(game: GameBase, writer: ClrMameProWriter) -> None:
    """
    Write one game block using the keyword of its variant.

    Args:
        game: Game record
        writer: Output writer

    Raises:
        RequiredFieldMissingError: If the game or one of its items lacks a
            required field
    """
    writer.write_start_element(game.variant.value)

    writer.write_required_standalone("name", game.name, throw_on_error=True)
    for key in GameBase.FIELDS:
        if key != "name":
            writer.write_optional_standalone(key, getattr(game, key))

    for keyword in ITEM_TYPES:
        value = getattr(game, keyword)
        if keyword in SINGLE_VALUED_ITEMS:
            if value is not None:
                write_item(value, writer)
        else:
            for item in value:
                write_item(item, writer)

    writer.write_end_element()


def write_item(item, writer: ClrMameProWriter) -> None:
    """Write one item record as a single-line element."""
    writer.write_start_element(item.KEYWORD)

    for key in item.FIELDS:
        value = getattr(item, key)
        if isinstance(value, list):
            # Repeatable fields; every entry is required to have a value
            for entry in value:
                writer.write_required_attribute(key, entry)
        elif key in item.REQUIRED:
            writer.write_required_attribute(key, value, throw_on_error=True)
        else:
            writer.write_optional_attribute(key, value)

    writer.write_end_element()
