"""
Logiqx XML datafile support.

Reads and writes the internal metadata model directly, so any format that
converts to the internal model can be exported as Logiqx XML.
"""

from .deserializer import LogiqxError, deserialize, deserialize_bytes
from .serializer import serialize, serialize_to_file

__all__ = [
    'LogiqxError',
    'deserialize',
    'deserialize_bytes',
    'serialize',
    'serialize_to_file',
]
