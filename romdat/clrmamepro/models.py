"""
Record types for ClrMamePro DAT files.

Each record lists the keywords it recognizes in FIELDS, in the order the
writer emits them, and the keywords a write cannot omit in REQUIRED. Content
the reader could not map lands in ``additional_elements``.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, List, Optional, Tuple


class GameVariant(str, Enum):
    """Block keyword a game record is read from and written as."""
    GAME = "game"
    MACHINE = "machine"
    RESOURCE = "resource"
    SET = "set"


@dataclass
class Release:
    KEYWORD: ClassVar[str] = "release"
    FIELDS: ClassVar[Tuple[str, ...]] = ("name", "region", "language", "date", "default")
    REQUIRED: ClassVar[Tuple[str, ...]] = ("name", "region")

    name: Optional[str] = None
    region: Optional[str] = None
    language: Optional[str] = None
    date: Optional[str] = None
    default: Optional[str] = None
    additional_elements: List[str] = field(default_factory=list)


@dataclass
class BiosSet:
    KEYWORD: ClassVar[str] = "biosset"
    FIELDS: ClassVar[Tuple[str, ...]] = ("name", "description", "default")
    REQUIRED: ClassVar[Tuple[str, ...]] = ("name", "description")

    name: Optional[str] = None
    description: Optional[str] = None
    default: Optional[str] = None
    additional_elements: List[str] = field(default_factory=list)


@dataclass
class Rom:
    KEYWORD: ClassVar[str] = "rom"
    FIELDS: ClassVar[Tuple[str, ...]] = (
        "name", "size", "crc", "md5", "sha1", "sha256", "sha384", "sha512",
        "spamsum", "xxh3_64", "xxh3_128", "merge", "status", "region", "flags",
        "offs", "serial", "header", "date", "inverted", "mia",
    )
    REQUIRED: ClassVar[Tuple[str, ...]] = ("name", "size")

    name: Optional[str] = None
    size: Optional[str] = None
    crc: Optional[str] = None
    md5: Optional[str] = None
    sha1: Optional[str] = None
    sha256: Optional[str] = None
    sha384: Optional[str] = None
    sha512: Optional[str] = None
    spamsum: Optional[str] = None
    xxh3_64: Optional[str] = None
    xxh3_128: Optional[str] = None
    merge: Optional[str] = None
    status: Optional[str] = None
    region: Optional[str] = None
    flags: Optional[str] = None
    offs: Optional[str] = None
    serial: Optional[str] = None
    header: Optional[str] = None
    date: Optional[str] = None
    inverted: Optional[str] = None
    mia: Optional[str] = None
    additional_elements: List[str] = field(default_factory=list)


@dataclass
class Disk:
    KEYWORD: ClassVar[str] = "disk"
    FIELDS: ClassVar[Tuple[str, ...]] = ("name", "md5", "sha1", "merge", "status", "flags")
    REQUIRED: ClassVar[Tuple[str, ...]] = ("name",)

    name: Optional[str] = None
    md5: Optional[str] = None
    sha1: Optional[str] = None
    merge: Optional[str] = None
    status: Optional[str] = None
    flags: Optional[str] = None
    additional_elements: List[str] = field(default_factory=list)


@dataclass
class Media:
    KEYWORD: ClassVar[str] = "media"
    FIELDS: ClassVar[Tuple[str, ...]] = ("name", "md5", "sha1", "sha256", "spamsum")
    REQUIRED: ClassVar[Tuple[str, ...]] = ("name",)

    name: Optional[str] = None
    md5: Optional[str] = None
    sha1: Optional[str] = None
    sha256: Optional[str] = None
    spamsum: Optional[str] = None
    additional_elements: List[str] = field(default_factory=list)


@dataclass
class Sample:
    KEYWORD: ClassVar[str] = "sample"
    FIELDS: ClassVar[Tuple[str, ...]] = ("name",)
    REQUIRED: ClassVar[Tuple[str, ...]] = ("name",)

    name: Optional[str] = None
    additional_elements: List[str] = field(default_factory=list)


@dataclass
class Archive:
    KEYWORD: ClassVar[str] = "archive"
    FIELDS: ClassVar[Tuple[str, ...]] = ("name",)
    REQUIRED: ClassVar[Tuple[str, ...]] = ("name",)

    name: Optional[str] = None
    additional_elements: List[str] = field(default_factory=list)


@dataclass
class Chip:
    KEYWORD: ClassVar[str] = "chip"
    FIELDS: ClassVar[Tuple[str, ...]] = ("type", "name", "flags", "clock")
    REQUIRED: ClassVar[Tuple[str, ...]] = ("type", "name")

    type: Optional[str] = None
    name: Optional[str] = None
    flags: Optional[str] = None
    clock: Optional[str] = None
    additional_elements: List[str] = field(default_factory=list)


@dataclass
class Video:
    KEYWORD: ClassVar[str] = "video"
    FIELDS: ClassVar[Tuple[str, ...]] = ("screen", "orientation", "x", "y", "aspectx", "aspecty", "freq")
    REQUIRED: ClassVar[Tuple[str, ...]] = ("screen", "orientation")

    screen: Optional[str] = None
    orientation: Optional[str] = None
    x: Optional[str] = None
    y: Optional[str] = None
    aspectx: Optional[str] = None
    aspecty: Optional[str] = None
    freq: Optional[str] = None
    additional_elements: List[str] = field(default_factory=list)


@dataclass
class Sound:
    KEYWORD: ClassVar[str] = "sound"
    FIELDS: ClassVar[Tuple[str, ...]] = ("channels",)
    REQUIRED: ClassVar[Tuple[str, ...]] = ("channels",)

    channels: Optional[str] = None
    additional_elements: List[str] = field(default_factory=list)


@dataclass
class Input:
    KEYWORD: ClassVar[str] = "input"
    FIELDS: ClassVar[Tuple[str, ...]] = ("players", "control", "buttons", "coins", "tilt", "service")
    REQUIRED: ClassVar[Tuple[str, ...]] = ("players", "buttons")

    players: Optional[str] = None
    control: Optional[str] = None
    buttons: Optional[str] = None
    coins: Optional[str] = None
    tilt: Optional[str] = None
    service: Optional[str] = None
    additional_elements: List[str] = field(default_factory=list)


@dataclass
class DipSwitch:
    KEYWORD: ClassVar[str] = "dipswitch"
    FIELDS: ClassVar[Tuple[str, ...]] = ("name", "entry", "default")
    REQUIRED: ClassVar[Tuple[str, ...]] = ("name",)

    name: Optional[str] = None
    entry: List[str] = field(default_factory=list)  # repeatable
    default: Optional[str] = None
    additional_elements: List[str] = field(default_factory=list)


@dataclass
class Driver:
    KEYWORD: ClassVar[str] = "driver"
    FIELDS: ClassVar[Tuple[str, ...]] = ("status", "color", "sound", "palettesize", "blit")
    REQUIRED: ClassVar[Tuple[str, ...]] = ("status",)

    status: Optional[str] = None
    color: Optional[str] = None
    sound: Optional[str] = None
    palettesize: Optional[str] = None
    blit: Optional[str] = None
    additional_elements: List[str] = field(default_factory=list)


# Item keyword -> record type, in writer emission order
ITEM_TYPES = {
    item_type.KEYWORD: item_type
    for item_type in (
        Release, BiosSet, Rom, Disk, Media, Sample, Archive, Chip,
        Video, Sound, Input, DipSwitch, Driver,
    )
}

# Items a game holds at most one of; a later line replaces an earlier one
SINGLE_VALUED_ITEMS = frozenset({"video", "sound", "input", "driver"})

# Items a game holds any number of, in input order
MULTI_VALUED_ITEMS = tuple(
    keyword for keyword in ITEM_TYPES if keyword not in SINGLE_VALUED_ITEMS
)


@dataclass
class GameBase:
    """
    Shared field set of game, machine, resource and set blocks.

    ``variant`` only decides the block keyword used on write.
    """
    FIELDS: ClassVar[Tuple[str, ...]] = (
        "name", "description", "year", "manufacturer", "category",
        "cloneof", "romof", "sampleof",
    )

    variant: GameVariant = GameVariant.GAME
    name: Optional[str] = None
    description: Optional[str] = None
    year: Optional[str] = None
    manufacturer: Optional[str] = None
    category: Optional[str] = None
    cloneof: Optional[str] = None
    romof: Optional[str] = None
    sampleof: Optional[str] = None

    release: List[Release] = field(default_factory=list)
    biosset: List[BiosSet] = field(default_factory=list)
    rom: List[Rom] = field(default_factory=list)
    disk: List[Disk] = field(default_factory=list)
    media: List[Media] = field(default_factory=list)
    sample: List[Sample] = field(default_factory=list)
    archive: List[Archive] = field(default_factory=list)
    chip: List[Chip] = field(default_factory=list)
    video: Optional[Video] = None
    sound: Optional[Sound] = None
    input: Optional[Input] = None
    dipswitch: List[DipSwitch] = field(default_factory=list)
    driver: Optional[Driver] = None

    additional_elements: List[str] = field(default_factory=list)


@dataclass
class ClrMamePro:
    """The ``clrmamepro ( ... )`` header block."""
    FIELDS: ClassVar[Tuple[str, ...]] = (
        "name", "description", "rootdir", "category", "version", "date",
        "author", "homepage", "url", "comment", "header", "type",
        "forcemerging", "forcezipping", "forcepacking",
    )

    name: Optional[str] = None
    description: Optional[str] = None
    rootdir: Optional[str] = None
    category: Optional[str] = None
    version: Optional[str] = None
    date: Optional[str] = None
    author: Optional[str] = None
    homepage: Optional[str] = None
    url: Optional[str] = None
    comment: Optional[str] = None
    header: Optional[str] = None
    type: Optional[str] = None
    forcemerging: Optional[str] = None
    forcezipping: Optional[str] = None
    forcepacking: Optional[str] = None
    additional_elements: List[str] = field(default_factory=list)


@dataclass
class MetadataFile:
    """A whole ClrMamePro document."""
    clrmamepro: Optional[ClrMamePro] = None
    game: List[GameBase] = field(default_factory=list)

    # Content found outside any recognized block
    additional_elements: List[str] = field(default_factory=list)
