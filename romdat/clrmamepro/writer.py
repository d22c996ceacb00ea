"""
Low-level ClrMamePro grammar writer.

Produces the layout the reader accepts:

    game (
    	name "Some Game"
    	rom ( name "a.bin" size "16" )
    )

Blocks are separated by a blank line. Elements opened inside a block are
written on a single line with their attributes.
"""

import logging
from typing import IO, List, Optional

logger = logging.getLogger(__name__)


class RequiredFieldMissingError(ValueError):
    """A field the format cannot omit has no value."""

    def __init__(self, key: str, element: Optional[str] = None):
        self.key = key
        self.element = element
        where = f" on '{element}'" if element else ""
        super().__init__(f"Required field '{key}' is missing{where}")


class ClrMameProWriter:
    """Streaming writer for ClrMamePro text."""

    def __init__(self, stream: IO[str], quotes: bool = True):
        """
        Initialize writer.

        Args:
            stream: Text stream to write to
            quotes: True to wrap every value in double quotes
        """
        self.stream = stream
        self.quotes = quotes
        self._elements: List[str] = []

    @property
    def depth(self) -> int:
        return len(self._elements)

    def write_start_element(self, name: str) -> None:
        """Open a top-level block or an item inside one."""
        if self.depth == 0:
            self.stream.write(f"{name} (\n")
        elif self.depth == 1:
            self.stream.write(f"\t{name} (")
        else:
            raise ValueError(f"Cannot nest '{name}' inside item '{self._elements[-1]}'")
        self._elements.append(name)

    def write_end_element(self) -> None:
        """Close the innermost open element."""
        if not self._elements:
            raise ValueError("No open element to close")

        self._elements.pop()
        if self.depth == 0:
            self.stream.write(")\n\n")
        else:
            self.stream.write(" )\n")

    def write_required_standalone(
        self,
        key: str,
        value: Optional[str],
        throw_on_error: bool = False
    ) -> None:
        """
        Write a ``key value`` line that must be present.

        Raises:
            RequiredFieldMissingError: If there is no writable value and
                throw_on_error is set
        """
        value = self._required(key, value, throw_on_error)
        if value is not None:
            self._write_standalone(key, value)

    def write_optional_standalone(self, key: str, value: Optional[str]) -> None:
        """Write a ``key value`` line, skipping it when there is no writable value."""
        if not self._is_missing(value):
            self._write_standalone(key, value)

    def write_required_attribute(
        self,
        key: str,
        value: Optional[str],
        throw_on_error: bool = False
    ) -> None:
        """
        Write a ``key value`` pair inside the open item.

        Raises:
            RequiredFieldMissingError: If there is no writable value and
                throw_on_error is set
        """
        value = self._required(key, value, throw_on_error)
        if value is not None:
            self._write_attribute(key, value)

    def write_optional_attribute(self, key: str, value: Optional[str]) -> None:
        """Write a ``key value`` pair inside the open item, skipping missing values."""
        if not self._is_missing(value):
            self._write_attribute(key, value)

    def flush(self) -> None:
        self.stream.flush()

    def _is_missing(self, value: Optional[str]) -> bool:
        # An empty value cannot be written without quotes
        return value is None or (not self.quotes and value == "")

    def _required(self, key: str, value: Optional[str], throw_on_error: bool) -> Optional[str]:
        """Return the value to write for a required field, or None to skip it."""
        if not self._is_missing(value):
            return value

        element = self._elements[-1] if self._elements else None
        if throw_on_error:
            raise RequiredFieldMissingError(key, element)

        if not self.quotes:
            logger.warning(f"Skipping required field '{key}' on '{element}': no value to write unquoted")
            return None

        logger.debug(f"Writing empty value for required field '{key}' on '{element}'")
        return ""

    def _write_standalone(self, key: str, value: str) -> None:
        if self.depth != 1:
            raise ValueError(f"Standalone '{key}' must be written inside a block")
        self.stream.write(f"\t{key} {self.format_value(value)}\n")

    def _write_attribute(self, key: str, value: str) -> None:
        if self.depth != 2:
            raise ValueError(f"Attribute '{key}' must be written inside an item")
        self.stream.write(f" {key} {self.format_value(value)}")

    def format_value(self, value: str) -> str:
        """Render one value as it appears on disk."""
        if not self.quotes:
            return value
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
