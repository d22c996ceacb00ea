"""
ClrMamePro DAT format support.

Reading, writing and conversion to the internal metadata model for the
line-oriented ClrMamePro text format.
"""

from .convert import from_internal, to_internal
from .deserializer import deserialize, deserialize_stream
from .models import (
    Archive,
    BiosSet,
    Chip,
    ClrMamePro,
    DipSwitch,
    Disk,
    Driver,
    GameBase,
    GameVariant,
    Input,
    Media,
    MetadataFile,
    Release,
    Rom,
    Sample,
    Sound,
    Video,
)
from .reader import ClrMameProReader, Line, RowType
from .serializer import serialize, serialize_to_file
from .writer import ClrMameProWriter, RequiredFieldMissingError

__all__ = [
    'deserialize',
    'deserialize_stream',
    'serialize',
    'serialize_to_file',
    'to_internal',
    'from_internal',
    'ClrMameProReader',
    'ClrMameProWriter',
    'RequiredFieldMissingError',
    'Line',
    'RowType',
    'MetadataFile',
    'ClrMamePro',
    'GameBase',
    'GameVariant',
    'Archive',
    'BiosSet',
    'Chip',
    'DipSwitch',
    'Disk',
    'Driver',
    'Input',
    'Media',
    'Release',
    'Rom',
    'Sample',
    'Sound',
    'Video',
]
