"""
ClrMamePro DAT deserializer.

Assembles the rows produced by ClrMameProReader into a MetadataFile. Anything
that is readable but not recognized is kept verbatim in the
``additional_elements`` list of the nearest enclosing scope, so loading a
real-world DAT never fails because of its content.
"""

import logging
import zlib
from enum import Enum
from pathlib import Path
from typing import IO, Dict, List, Optional, Tuple, Union

from romdat.path_processor import open_stream
from .models import (
    ITEM_TYPES,
    MULTI_VALUED_ITEMS,
    SINGLE_VALUED_ITEMS,
    ClrMamePro,
    GameBase,
    GameVariant,
    MetadataFile,
    Sample,
)
from .reader import ClrMameProReader, Line, RowType

logger = logging.getLogger(__name__)

HEADER_BLOCK = "clrmamepro"
GAME_BLOCKS = {variant.value: variant for variant in GameVariant}


class ParseState(Enum):
    ROOT = "root"
    HEADER = "header"
    GAME = "game"


def deserialize(
    source: Union[str, Path, IO, None],
    quotes: bool = True
) -> Optional[MetadataFile]:
    """
    Deserialize a ClrMamePro DAT file or stream.

    Args:
        source: Path to the DAT file, or an open binary/text stream
        quotes: True if values may be wrapped in double quotes

    Returns:
        Parsed MetadataFile, or None if the input cannot be opened or read
    """
    if source is None:
        return None

    try:
        if not isinstance(source, (str, Path)):
            return deserialize_stream(source, quotes)

        with open_stream(source) as stream:
            return deserialize_stream(stream, quotes)
    except (OSError, EOFError, zlib.error, UnicodeDecodeError) as e:
        logger.warning(f"Unable to read DAT file {source}: {e}")
        return None


def deserialize_stream(stream: Optional[IO], quotes: bool = True) -> Optional[MetadataFile]:
    """
    Deserialize a ClrMamePro DAT from an open stream.

    Args:
        stream: Binary or text stream; it is read to the end but not closed
        quotes: True if values may be wrapped in double quotes

    Returns:
        Parsed MetadataFile, or None if no stream was given
    """
    if stream is None:
        return None

    reader = ClrMameProReader(stream, quotes=quotes)
    assembler = BlockAssembler()

    while reader.read_next_line():
        assembler.feed(Line(
            kind=reader.row_type,
            raw=reader.current_line,
            top_level=reader.top_level,
            standalone=reader.standalone,
            internal_name=reader.internal_name,
            internal=reader.internal,
        ))

    document = assembler.finish()
    logger.info(
        f"Parsed {len(document.game)} games from ClrMamePro DAT "
        f"({reader.line_number} lines)"
    )
    if document.additional_elements:
        logger.debug(
            f"{len(document.additional_elements)} unrecognized top-level lines preserved"
        )
    return document


class BlockAssembler:
    """
    State machine turning classified rows into a MetadataFile.

    One instance serves exactly one document; the item accumulators it keeps
    for the open game block are emptied every time that block closes.
    """

    def __init__(self):
        self.document = MetadataFile()
        self.state = ParseState.ROOT

        self._game: Optional[GameBase] = None
        self._items: Dict[str, list] = {keyword: [] for keyword in MULTI_VALUED_ITEMS}
        self._header_additional: List[str] = []
        self._game_additional: List[str] = []

    def feed(self, line: Line) -> None:
        """Apply one row."""
        if line.kind in (RowType.NONE, RowType.COMMENT):
            return

        if line.kind == RowType.END_TOP_LEVEL:
            self._end_block()
        elif line.kind == RowType.TOP_LEVEL:
            self._start_block(line)
        elif line.kind == RowType.MALFORMED:
            self._preserve(line.raw)
        elif self.state == ParseState.HEADER:
            self._read_header_row(line)
        elif self.state == ParseState.GAME:
            self._read_game_row(line)
        else:
            # Inside an unknown block, or stray content at the root
            self.document.additional_elements.append(line.raw)

    def finish(self) -> MetadataFile:
        """Close any block left open at end of input and return the document."""
        if self.state != ParseState.ROOT:
            logger.warning(f"DAT ended inside an open {self.state.value} block; closing it")
            self._end_block()
        return self.document

    def _start_block(self, line: Line) -> None:
        if self.state != ParseState.ROOT:
            self._end_block()

        name = (line.top_level or "").lower()
        if name == HEADER_BLOCK:
            self.document.clrmamepro = ClrMamePro()
            self.state = ParseState.HEADER
        elif name in GAME_BLOCKS:
            self._game = GameBase(variant=GAME_BLOCKS[name])
            self.state = ParseState.GAME
        else:
            logger.debug(f"Unknown top-level block preserved: {name}")
            self.document.additional_elements.append(line.raw)

    def _end_block(self) -> None:
        if self.state == ParseState.HEADER:
            self.document.clrmamepro.additional_elements = list(self._header_additional)
            self._header_additional.clear()

        elif self.state == ParseState.GAME:
            game = self._game
            for keyword, items in self._items.items():
                setattr(game, keyword, list(items))
                items.clear()
            game.additional_elements = list(self._game_additional)
            self._game_additional.clear()

            self.document.game.append(game)
            self._game = None

        self.state = ParseState.ROOT

    def _preserve(self, raw: str) -> None:
        """Keep raw text in the nearest enclosing scope."""
        if self.state == ParseState.HEADER:
            self._header_additional.append(raw)
        elif self.state == ParseState.GAME:
            self._game_additional.append(raw)
        else:
            self.document.additional_elements.append(raw)

    def _read_header_row(self, line: Line) -> None:
        if line.kind == RowType.STANDALONE:
            key, value = line.standalone
            key = key.lower()
            if key in ClrMamePro.FIELDS:
                setattr(self.document.clrmamepro, key, value)
                return

        self._header_additional.append(line.raw)

    def _read_game_row(self, line: Line) -> None:
        if line.kind == RowType.STANDALONE:
            key, value = line.standalone
            key = key.lower()
            if key in GameBase.FIELDS:
                setattr(self._game, key, value)
            elif key == "sample":
                # Shorthand for "sample ( name <value> )"
                self._items["sample"].append(Sample(name=value))
            else:
                self._game_additional.append(line.raw)
            return

        if line.kind == RowType.INTERNAL:
            item_type = ITEM_TYPES.get(line.internal_name)
            if item_type is None:
                logger.debug(f"Unmapped item preserved: {line.internal_name}")
                self._game_additional.append(line.raw)
                return

            item = build_item(item_type, line.internal)
            if item_type.KEYWORD in SINGLE_VALUED_ITEMS:
                setattr(self._game, item_type.KEYWORD, item)
            else:
                self._items[item_type.KEYWORD].append(item)
            return

        self._game_additional.append(line.raw)


def build_item(item_type: type, pairs: List[Tuple[str, str]]):
    """
    Build one item record from an internal row's key/value pairs.

    Keys are matched case-insensitively against the record's FIELDS;
    repeatable fields (list-valued) collect every occurrence and unmatched
    keys are kept as ``"key: value"``.

    Args:
        item_type: Record class from ITEM_TYPES
        pairs: Ordered key/value pairs

    Returns:
        Populated record instance
    """
    item = item_type()
    for key, value in pairs:
        field_name = key.lower()
        if field_name not in item_type.FIELDS:
            item.additional_elements.append(f"{key}: {value}")
            continue

        current = getattr(item, field_name)
        if isinstance(current, list):
            current.append(value)
        else:
            setattr(item, field_name, value)

    return item
