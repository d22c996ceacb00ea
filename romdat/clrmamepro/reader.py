"""
Line reader for ClrMamePro DAT files.

Splits the input into logical rows and classifies each one:

    game (                              top-level block opener
        name "Some Game"                standalone key/value
        rom ( name "a.bin" size 16 )    internal item
    )                                   end of block

A single physical line may carry several rows, e.g.
``game ( name "foo" rom ( name "a.bin" size 1 ) )``. Lines that cannot be
classified are reported as MALFORMED with their raw text so callers can keep
them verbatim.
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import IO, Deque, List, Optional, Tuple, Union

logger = logging.getLogger(__name__)


class RowType(Enum):
    """Kind of a logical row."""
    NONE = "none"
    COMMENT = "comment"
    TOP_LEVEL = "top_level"
    STANDALONE = "standalone"
    INTERNAL = "internal"
    END_TOP_LEVEL = "end_top_level"
    MALFORMED = "malformed"


@dataclass
class Line:
    """One classified logical row."""
    kind: RowType
    raw: str
    top_level: Optional[str] = None
    standalone: Optional[Tuple[str, str]] = None
    internal_name: Optional[str] = None
    internal: List[Tuple[str, str]] = field(default_factory=list)


class MalformedLineError(ValueError):
    """A physical line the tokenizer cannot split."""
    pass


@dataclass
class _Token:
    value: str
    start: int
    end: int
    quoted: bool = False

    @property
    def is_open(self) -> bool:
        return not self.quoted and self.value == "("

    @property
    def is_close(self) -> bool:
        return not self.quoted and self.value == ")"

    @property
    def is_structural(self) -> bool:
        return self.is_open or self.is_close


class ClrMameProReader:
    """
    Pull-style reader over a ClrMamePro text stream.

    Call ``read_next_line()`` until it returns False; after each call the
    ``row_type``, ``top_level``, ``standalone``, ``internal_name``,
    ``internal`` and ``current_line`` attributes describe the current row.
    """

    def __init__(self, stream: IO, quotes: bool = True, encoding: str = "utf-8"):
        """
        Initialize reader.

        Args:
            stream: Binary or text stream positioned at the start of the DAT
            quotes: True if values may be wrapped in double quotes
            encoding: Text encoding used for binary streams
        """
        self.stream = stream
        self.quotes = quotes
        self.encoding = encoding

        self.end_of_stream = False
        self.line_number = 0

        self.row_type = RowType.NONE
        self.top_level: Optional[str] = None
        self.standalone: Optional[Tuple[str, str]] = None
        self.internal_name: Optional[str] = None
        self.internal: List[Tuple[str, str]] = []
        self.current_line = ""

        self._pending: Deque[Line] = deque()
        # Block the tokenizer is inside of, ahead of the row being served
        self._open_block: Optional[str] = None

    def read_next_line(self) -> bool:
        """
        Advance to the next logical row.

        Returns:
            False once the stream is exhausted, True otherwise
        """
        while not self._pending:
            text = self._read_physical_line()
            if text is None:
                self.end_of_stream = True
                self._set_current(Line(RowType.NONE, ""))
                return False
            self._pending.extend(self.classify(text))

        self._set_current(self._pending.popleft())
        return True

    def _read_physical_line(self) -> Optional[str]:
        raw: Union[str, bytes] = self.stream.readline()
        if not raw:
            return None

        if isinstance(raw, bytes):
            raw = raw.decode(self.encoding, errors="replace")

        self.line_number += 1
        if self.line_number == 1:
            raw = raw.lstrip("\ufeff")
        return raw.rstrip("\r\n")

    def _set_current(self, line: Line) -> None:
        self.row_type = line.kind
        self.standalone = line.standalone
        self.internal_name = line.internal_name
        self.internal = line.internal
        self.current_line = line.raw

        if line.kind == RowType.TOP_LEVEL:
            self.top_level = line.top_level
        elif line.kind == RowType.END_TOP_LEVEL:
            self.top_level = None

    def classify(self, text: str) -> List[Line]:
        """
        Split one physical line into classified rows.

        Args:
            text: Line content without its line terminator

        Returns:
            Rows in input order (at least one)
        """
        stripped = text.strip()
        if not stripped:
            return [Line(RowType.NONE, text)]
        if stripped.startswith("#"):
            return [Line(RowType.COMMENT, text)]

        try:
            tokens = self.tokenize(text)
        except MalformedLineError as e:
            logger.debug(f"Line {self.line_number}: {e}: {stripped!r}")
            return [Line(RowType.MALFORMED, stripped, top_level=self._open_block)]

        # "key value with spaces" on a line of its own
        if (
            self._open_block is not None
            and len(tokens) >= 2
            and not any(token.is_structural for token in tokens)
        ):
            if len(tokens) == 2:
                value = tokens[1].value
            else:
                value = text[tokens[1].start:tokens[-1].end]
            return [Line(
                RowType.STANDALONE,
                stripped,
                top_level=self._open_block,
                standalone=(tokens[0].value, value),
            )]

        return self._split_rows(text, tokens)

    def _split_rows(self, text: str, tokens: List[_Token]) -> List[Line]:
        rows: List[Line] = []
        pos = 0
        count = len(tokens)

        while pos < count:
            token = tokens[pos]
            following = tokens[pos + 1] if pos + 1 < count else None

            if self._open_block is None:
                if not token.is_structural and following is not None and following.is_open:
                    name = token.value.lower()
                    self._open_block = name
                    rows.append(Line(
                        RowType.TOP_LEVEL,
                        text[token.start:following.end],
                        top_level=name,
                    ))
                    pos += 2
                    continue

                rows.append(self._malformed(text, token, "content outside of a block"))
                break

            if token.is_close:
                rows.append(Line(RowType.END_TOP_LEVEL, ")", top_level=self._open_block))
                self._open_block = None
                pos += 1
                continue

            if token.is_open:
                rows.append(self._malformed(text, token, "unexpected '('"))
                break

            # "name (" alone on a line can only open a block; close the
            # previous block that was missing its ")"
            if pos == 0 and count == 2 and not token.is_structural and following.is_open:
                logger.warning(
                    f"Line {self.line_number}: block '{self._open_block}' "
                    f"was not closed before '{token.value}'"
                )
                rows.append(Line(RowType.END_TOP_LEVEL, "", top_level=self._open_block))
                self._open_block = None
                continue

            if following is not None and following.is_open:
                close = self._find_item_close(tokens, pos + 2)
                if close is None:
                    rows.append(self._malformed(text, token, "unterminated item"))
                    break

                values = [entry.value for entry in tokens[pos + 2:close]]
                pairs = []
                for index in range(0, len(values), 2):
                    key = values[index]
                    value = values[index + 1] if index + 1 < len(values) else ""
                    pairs.append((key, value))

                rows.append(Line(
                    RowType.INTERNAL,
                    text[token.start:tokens[close].end],
                    top_level=self._open_block,
                    internal_name=token.value.lower(),
                    internal=pairs,
                ))
                pos = close + 1
                continue

            if following is not None and not following.is_structural:
                rows.append(Line(
                    RowType.STANDALONE,
                    text[token.start:following.end],
                    top_level=self._open_block,
                    standalone=(token.value, following.value),
                ))
                pos += 2
                continue

            # A keyword with nothing after it
            logger.debug(f"Line {self.line_number}: keyword without value: {token.value!r}")
            rows.append(Line(
                RowType.MALFORMED,
                text[token.start:token.end],
                top_level=self._open_block,
            ))
            pos += 1

        return rows

    @staticmethod
    def _find_item_close(tokens: List[_Token], start: int) -> Optional[int]:
        """Index of the ')' ending an item, or None if missing or nested."""
        for index in range(start, len(tokens)):
            if tokens[index].is_open:
                return None
            if tokens[index].is_close:
                return index
        return None

    def _malformed(self, text: str, token: _Token, reason: str) -> Line:
        remainder = text[token.start:].strip()
        logger.debug(f"Line {self.line_number}: {reason}: {remainder!r}")
        return Line(RowType.MALFORMED, remainder, top_level=self._open_block)

    def tokenize(self, text: str) -> List[_Token]:
        """
        Split a line on whitespace.

        With quotes enabled a double-quoted span is a single token with the
        quotes removed; ``\\"`` and ``\\\\`` are escapes inside it.

        Raises:
            MalformedLineError: If a quoted span is not terminated
        """
        tokens: List[_Token] = []
        index = 0
        length = len(text)

        while index < length:
            char = text[index]
            if char.isspace():
                index += 1
                continue

            start = index
            if self.quotes and char == '"':
                index += 1
                chars = []
                while True:
                    if index >= length:
                        raise MalformedLineError("unbalanced quotes")
                    char = text[index]
                    if char == "\\" and index + 1 < length and text[index + 1] in '"\\':
                        chars.append(text[index + 1])
                        index += 2
                        continue
                    index += 1
                    if char == '"':
                        break
                    chars.append(char)
                tokens.append(_Token("".join(chars), start, index, quoted=True))
                continue

            while index < length and not text[index].isspace():
                index += 1
            tokens.append(_Token(text[start:index], start, index))

        return tokens
