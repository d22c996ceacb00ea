"""
Format-agnostic internal metadata nodes.

Each class only adds field-name constants to DictBase. The comment above a
constant names the value shape stored under it.
"""

from typing import Optional

from .base import DictBase


class MetadataFile(DictBase):
    """Root of a converted document: one header plus an ordered machine list."""

    # Header
    HEADER_KEY = "header"

    # List[Machine]
    MACHINE_KEY = "machine"


class Header(DictBase):
    """Format-agnostic representation of DAT-level metadata."""

    AUTHOR_KEY = "author"
    CATEGORY_KEY = "category"
    COMMENT_KEY = "comment"
    DATE_KEY = "date"
    DESCRIPTION_KEY = "description"
    FORCE_MERGING_KEY = "forcemerging"
    FORCE_PACKING_KEY = "forcepacking"
    FORCE_ZIPPING_KEY = "forcezipping"
    HEADER_KEY = "header"
    HOMEPAGE_KEY = "homepage"
    NAME_KEY = "name"
    ROOT_DIR_KEY = "rootdir"
    TYPE_KEY = "type"
    URL_KEY = "url"
    VERSION_KEY = "version"


class Machine(DictBase):
    """Format-agnostic representation of game, machine, resource and set data."""

    CATEGORY_KEY = "category"
    CLONE_OF_KEY = "cloneof"
    DESCRIPTION_KEY = "description"
    MANUFACTURER_KEY = "manufacturer"
    NAME_KEY = "name"
    ROM_OF_KEY = "romof"
    SAMPLE_OF_KEY = "sampleof"
    YEAR_KEY = "year"

    # List[Archive]
    ARCHIVE_KEY = "archive"
    # List[BiosSet]
    BIOS_SET_KEY = "biosset"
    # List[Chip]
    CHIP_KEY = "chip"
    # List[DipSwitch]
    DIP_SWITCH_KEY = "dipswitch"
    # List[Disk]
    DISK_KEY = "disk"
    # Driver
    DRIVER_KEY = "driver"
    # Input
    INPUT_KEY = "input"
    # List[Media]
    MEDIA_KEY = "media"
    # List[Release]
    RELEASE_KEY = "release"
    # List[Rom]
    ROM_KEY = "rom"
    # List[Sample]
    SAMPLE_KEY = "sample"
    # Sound
    SOUND_KEY = "sound"
    # List[Video]
    VIDEO_KEY = "video"


class DatItem(DictBase):
    """Base for every item node; records its kind under TYPE_KEY."""

    TYPE_KEY = "_type"
    ITEM_TYPE: Optional[str] = None

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if self.ITEM_TYPE is not None:
            self[self.TYPE_KEY] = self.ITEM_TYPE


class Archive(DatItem):
    ITEM_TYPE = "archive"

    NAME_KEY = "name"


class BiosSet(DatItem):
    ITEM_TYPE = "biosset"

    DEFAULT_KEY = "default"
    DESCRIPTION_KEY = "description"
    NAME_KEY = "name"


class Chip(DatItem):
    ITEM_TYPE = "chip"

    CHIP_TYPE_KEY = "type"
    CLOCK_KEY = "clock"
    FLAGS_KEY = "flags"
    NAME_KEY = "name"


class DipSwitch(DatItem):
    ITEM_TYPE = "dipswitch"

    DEFAULT_KEY = "default"
    # List[str]
    ENTRY_KEY = "entry"
    NAME_KEY = "name"


class Disk(DatItem):
    ITEM_TYPE = "disk"

    FLAGS_KEY = "flags"
    MD5_KEY = "md5"
    MERGE_KEY = "merge"
    NAME_KEY = "name"
    SHA1_KEY = "sha1"
    STATUS_KEY = "status"


class Driver(DatItem):
    ITEM_TYPE = "driver"

    BLIT_KEY = "blit"
    COLOR_KEY = "color"
    PALETTE_SIZE_KEY = "palettesize"
    SOUND_KEY = "sound"
    STATUS_KEY = "status"


class Input(DatItem):
    ITEM_TYPE = "input"

    BUTTONS_KEY = "buttons"
    COINS_KEY = "coins"
    CONTROL_KEY = "control"
    PLAYERS_KEY = "players"
    SERVICE_KEY = "service"
    TILT_KEY = "tilt"


class Media(DatItem):
    ITEM_TYPE = "media"

    MD5_KEY = "md5"
    NAME_KEY = "name"
    SHA1_KEY = "sha1"
    SHA256_KEY = "sha256"
    SPAMSUM_KEY = "spamsum"


class Release(DatItem):
    ITEM_TYPE = "release"

    DATE_KEY = "date"
    DEFAULT_KEY = "default"
    LANGUAGE_KEY = "language"
    NAME_KEY = "name"
    REGION_KEY = "region"


class Rom(DatItem):
    ITEM_TYPE = "rom"

    CRC_KEY = "crc"
    DATE_KEY = "date"
    FLAGS_KEY = "flags"
    HEADER_KEY = "header"
    INVERTED_KEY = "inverted"
    MD5_KEY = "md5"
    MERGE_KEY = "merge"
    MIA_KEY = "mia"
    NAME_KEY = "name"
    OFFSET_KEY = "offset"
    REGION_KEY = "region"
    SERIAL_KEY = "serial"
    SHA1_KEY = "sha1"
    SHA256_KEY = "sha256"
    SHA384_KEY = "sha384"
    SHA512_KEY = "sha512"
    SIZE_KEY = "size"
    SPAMSUM_KEY = "spamsum"
    STATUS_KEY = "status"
    XXHASH364_KEY = "xxh3_64"
    XXHASH3128_KEY = "xxh3_128"


class Sample(DatItem):
    ITEM_TYPE = "sample"

    NAME_KEY = "name"


class Sound(DatItem):
    ITEM_TYPE = "sound"

    CHANNELS_KEY = "channels"


class Video(DatItem):
    ITEM_TYPE = "video"

    ASPECT_X_KEY = "aspectx"
    ASPECT_Y_KEY = "aspecty"
    HEIGHT_KEY = "height"
    ORIENTATION_KEY = "orientation"
    REFRESH_KEY = "refresh"
    SCREEN_KEY = "screen"
    WIDTH_KEY = "width"
