"""
Internal metadata model for romdat.

Schema-agnostic dictionary nodes that mediate conversion between every
supported DAT format.
"""

from .base import DictBase
from .models import (
    Archive,
    BiosSet,
    Chip,
    DatItem,
    DipSwitch,
    Disk,
    Driver,
    Header,
    Input,
    Machine,
    Media,
    MetadataFile,
    Release,
    Rom,
    Sample,
    Sound,
    Video,
)

__all__ = [
    'DictBase',
    'MetadataFile',
    'Header',
    'Machine',
    'DatItem',
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
