"""
Dictionary base for internal metadata nodes.

Every node in the internal model is a plain string-keyed dictionary. Values
are strings, lists of strings, nested nodes, or lists of nested nodes. The
typed accessors below never raise on missing or wrong-shaped data.
"""

from typing import Any, List, Optional


class DictBase(dict):
    """
    String-keyed node shared by every internal metadata type.

    Subclasses declare their field names as ``*_KEY`` class constants. Those
    constants are the only contract between format converters; no field is
    ever required at this layer.
    """

    # Raw content a source format could not map to a known field
    ADDITIONAL_ELEMENTS_KEY = "_additional"

    def contains_key(self, key: Optional[str]) -> bool:
        """Check that a key is present and holds a non-None value."""
        if not key or not key.strip():
            return False
        return key in self and self[key] is not None

    def read(self, key: str, kind: type, many: bool = False) -> Optional[Any]:
        """
        Read a key as the given shape.

        Args:
            key: Field name constant
            kind: Expected value type (``str`` or a node class)
            many: True to expect a list of ``kind`` values

        Returns:
            The stored value, or None if missing or of the wrong shape
        """
        if not self.contains_key(key):
            return None

        value = self[key]
        if many:
            if not isinstance(value, (list, tuple)):
                return None
            if not all(isinstance(entry, kind) for entry in value):
                return None
            return list(value)

        return value if isinstance(value, kind) else None

    def read_string(self, key: str) -> Optional[str]:
        """Read a key as a string, joining string lists with commas."""
        if not self.contains_key(key):
            return None

        value = self[key]
        if isinstance(value, str):
            return value
        if isinstance(value, dict):
            return None
        if isinstance(value, (list, tuple)):
            if all(isinstance(entry, str) for entry in value):
                return ','.join(value)
            return None
        return str(value)

    def read_string_array(self, key: str) -> Optional[List[str]]:
        """Read a key as a list of strings, wrapping a single string."""
        as_list = self.read(key, str, many=True)
        if as_list is not None:
            return as_list

        as_string = self.read_string(key)
        if as_string is not None:
            return [as_string]
        return None

    def read_bool(self, key: str) -> Optional[bool]:
        """Read a key as a bool (accepts true/yes/false/no strings)."""
        if not self.contains_key(key):
            return None

        value = self[key]
        if isinstance(value, bool):
            return value

        as_string = self.read_string(key)
        if as_string is None:
            return None
        return {
            'true': True,
            'yes': True,
            'false': False,
            'no': False,
        }.get(as_string.lower())

    def read_long(self, key: str) -> Optional[int]:
        """Read a key as an integer (accepts decimal strings)."""
        if not self.contains_key(key):
            return None

        value = self[key]
        if isinstance(value, bool):
            return None
        if isinstance(value, int):
            return value

        as_string = self.read_string(key)
        if as_string is None:
            return None
        try:
            return int(as_string)
        except ValueError:
            return None

    def additional_elements(self) -> List[str]:
        """Return the raw unrecognized content captured for this node."""
        return self.read(self.ADDITIONAL_ELEMENTS_KEY, str, many=True) or []
