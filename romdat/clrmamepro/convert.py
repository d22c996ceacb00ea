"""
Conversion between ClrMamePro records and the internal metadata model.

Both directions are pure: inputs are never modified and every returned
object is newly built. Every record field is paired explicitly with the
internal key it maps to.
"""

from typing import List, Optional

from romdat import metadata
from .models import (
    ITEM_TYPES,
    SINGLE_VALUED_ITEMS,
    ClrMamePro,
    GameBase,
    GameVariant,
    MetadataFile,
)

# (record field, internal key)
HEADER_FIELDS = (
    ("name", metadata.Header.NAME_KEY),
    ("description", metadata.Header.DESCRIPTION_KEY),
    ("rootdir", metadata.Header.ROOT_DIR_KEY),
    ("category", metadata.Header.CATEGORY_KEY),
    ("version", metadata.Header.VERSION_KEY),
    ("date", metadata.Header.DATE_KEY),
    ("author", metadata.Header.AUTHOR_KEY),
    ("homepage", metadata.Header.HOMEPAGE_KEY),
    ("url", metadata.Header.URL_KEY),
    ("comment", metadata.Header.COMMENT_KEY),
    ("header", metadata.Header.HEADER_KEY),
    ("type", metadata.Header.TYPE_KEY),
    ("forcemerging", metadata.Header.FORCE_MERGING_KEY),
    ("forcezipping", metadata.Header.FORCE_ZIPPING_KEY),
    ("forcepacking", metadata.Header.FORCE_PACKING_KEY),
)

GAME_FIELDS = (
    ("name", metadata.Machine.NAME_KEY),
    ("description", metadata.Machine.DESCRIPTION_KEY),
    ("year", metadata.Machine.YEAR_KEY),
    ("manufacturer", metadata.Machine.MANUFACTURER_KEY),
    ("category", metadata.Machine.CATEGORY_KEY),
    ("cloneof", metadata.Machine.CLONE_OF_KEY),
    ("romof", metadata.Machine.ROM_OF_KEY),
    ("sampleof", metadata.Machine.SAMPLE_OF_KEY),
)

# Item keyword -> (internal node type, machine key, field pairs)
ITEM_FIELDS = {
    "release": (metadata.Release, metadata.Machine.RELEASE_KEY, (
        ("name", metadata.Release.NAME_KEY),
        ("region", metadata.Release.REGION_KEY),
        ("language", metadata.Release.LANGUAGE_KEY),
        ("date", metadata.Release.DATE_KEY),
        ("default", metadata.Release.DEFAULT_KEY),
    )),
    "biosset": (metadata.BiosSet, metadata.Machine.BIOS_SET_KEY, (
        ("name", metadata.BiosSet.NAME_KEY),
        ("description", metadata.BiosSet.DESCRIPTION_KEY),
        ("default", metadata.BiosSet.DEFAULT_KEY),
    )),
    "rom": (metadata.Rom, metadata.Machine.ROM_KEY, (
        ("name", metadata.Rom.NAME_KEY),
        ("size", metadata.Rom.SIZE_KEY),
        ("crc", metadata.Rom.CRC_KEY),
        ("md5", metadata.Rom.MD5_KEY),
        ("sha1", metadata.Rom.SHA1_KEY),
        ("sha256", metadata.Rom.SHA256_KEY),
        ("sha384", metadata.Rom.SHA384_KEY),
        ("sha512", metadata.Rom.SHA512_KEY),
        ("spamsum", metadata.Rom.SPAMSUM_KEY),
        ("xxh3_64", metadata.Rom.XXHASH364_KEY),
        ("xxh3_128", metadata.Rom.XXHASH3128_KEY),
        ("merge", metadata.Rom.MERGE_KEY),
        ("status", metadata.Rom.STATUS_KEY),
        ("region", metadata.Rom.REGION_KEY),
        ("flags", metadata.Rom.FLAGS_KEY),
        ("offs", metadata.Rom.OFFSET_KEY),
        ("serial", metadata.Rom.SERIAL_KEY),
        ("header", metadata.Rom.HEADER_KEY),
        ("date", metadata.Rom.DATE_KEY),
        ("inverted", metadata.Rom.INVERTED_KEY),
        ("mia", metadata.Rom.MIA_KEY),
    )),
    "disk": (metadata.Disk, metadata.Machine.DISK_KEY, (
        ("name", metadata.Disk.NAME_KEY),
        ("md5", metadata.Disk.MD5_KEY),
        ("sha1", metadata.Disk.SHA1_KEY),
        ("merge", metadata.Disk.MERGE_KEY),
        ("status", metadata.Disk.STATUS_KEY),
        ("flags", metadata.Disk.FLAGS_KEY),
    )),
    "media": (metadata.Media, metadata.Machine.MEDIA_KEY, (
        ("name", metadata.Media.NAME_KEY),
        ("md5", metadata.Media.MD5_KEY),
        ("sha1", metadata.Media.SHA1_KEY),
        ("sha256", metadata.Media.SHA256_KEY),
        ("spamsum", metadata.Media.SPAMSUM_KEY),
    )),
    "sample": (metadata.Sample, metadata.Machine.SAMPLE_KEY, (
        ("name", metadata.Sample.NAME_KEY),
    )),
    "archive": (metadata.Archive, metadata.Machine.ARCHIVE_KEY, (
        ("name", metadata.Archive.NAME_KEY),
    )),
    "chip": (metadata.Chip, metadata.Machine.CHIP_KEY, (
        ("type", metadata.Chip.CHIP_TYPE_KEY),
        ("name", metadata.Chip.NAME_KEY),
        ("flags", metadata.Chip.FLAGS_KEY),
        ("clock", metadata.Chip.CLOCK_KEY),
    )),
    "video": (metadata.Video, metadata.Machine.VIDEO_KEY, (
        ("screen", metadata.Video.SCREEN_KEY),
        ("orientation", metadata.Video.ORIENTATION_KEY),
        ("x", metadata.Video.WIDTH_KEY),
        ("y", metadata.Video.HEIGHT_KEY),
        ("aspectx", metadata.Video.ASPECT_X_KEY),
        ("aspecty", metadata.Video.ASPECT_Y_KEY),
        ("freq", metadata.Video.REFRESH_KEY),
    )),
    "sound": (metadata.Sound, metadata.Machine.SOUND_KEY, (
        ("channels", metadata.Sound.CHANNELS_KEY),
    )),
    "input": (metadata.Input, metadata.Machine.INPUT_KEY, (
        ("players", metadata.Input.PLAYERS_KEY),
        ("control", metadata.Input.CONTROL_KEY),
        ("buttons", metadata.Input.BUTTONS_KEY),
        ("coins", metadata.Input.COINS_KEY),
        ("tilt", metadata.Input.TILT_KEY),
        ("service", metadata.Input.SERVICE_KEY),
    )),
    "dipswitch": (metadata.DipSwitch, metadata.Machine.DIP_SWITCH_KEY, (
        ("name", metadata.DipSwitch.NAME_KEY),
        ("entry", metadata.DipSwitch.ENTRY_KEY),
        ("default", metadata.DipSwitch.DEFAULT_KEY),
    )),
    "driver": (metadata.Driver, metadata.Machine.DRIVER_KEY, (
        ("status", metadata.Driver.STATUS_KEY),
        ("color", metadata.Driver.COLOR_KEY),
        ("sound", metadata.Driver.SOUND_KEY),
        ("palettesize", metadata.Driver.PALETTE_SIZE_KEY),
        ("blit", metadata.Driver.BLIT_KEY),
    )),
}


def to_internal(document: Optional[MetadataFile]) -> Optional[metadata.MetadataFile]:
    """
    Convert a ClrMamePro document to the internal model.

    Args:
        document: Parsed ClrMamePro document

    Returns:
        Internal MetadataFile, or None if no document was given
    """
    if document is None:
        return None

    result = metadata.MetadataFile()
    if document.clrmamepro is not None:
        result[metadata.MetadataFile.HEADER_KEY] = header_to_internal(document.clrmamepro)
    if document.game:
        result[metadata.MetadataFile.MACHINE_KEY] = [
            game_to_internal(game) for game in document.game
        ]
    _set_additional(result, document.additional_elements)
    return result


def from_internal(
    document: Optional[metadata.MetadataFile],
    game: bool = False
) -> Optional[MetadataFile]:
    """
    Convert an internal document to ClrMamePro records.

    Args:
        document: Internal MetadataFile
        game: True to emit ``game`` blocks, False for ``machine`` blocks

    Returns:
        ClrMamePro MetadataFile, or None if no document was given
    """
    if document is None:
        return None

    result = MetadataFile()

    header = document.read(metadata.MetadataFile.HEADER_KEY, metadata.Header)
    if header is not None:
        result.clrmamepro = header_from_internal(header)

    machines = document.read(metadata.MetadataFile.MACHINE_KEY, metadata.Machine, many=True)
    variant = GameVariant.GAME if game else GameVariant.MACHINE
    for machine in machines or []:
        result.game.append(game_from_internal(machine, variant))

    result.additional_elements = document.additional_elements()
    return result


def header_to_internal(header: ClrMamePro) -> metadata.Header:
    node = metadata.Header()
    for field_name, key in HEADER_FIELDS:
        _set(node, key, getattr(header, field_name))
    _set_additional(node, header.additional_elements)
    return node


def header_from_internal(node: metadata.Header) -> ClrMamePro:
    header = ClrMamePro()
    for field_name, key in HEADER_FIELDS:
        setattr(header, field_name, node.read_string(key))
    header.additional_elements = node.additional_elements()
    return header


def game_to_internal(game: GameBase) -> metadata.Machine:
    """
    Convert one game block to a Machine node.

    Empty item lists are left out; video, stored singly on the record,
    becomes a one-element list.
    """
    node = metadata.Machine()
    for field_name, key in GAME_FIELDS:
        _set(node, key, getattr(game, field_name))

    for keyword in ITEM_TYPES:
        _, machine_key, _ = ITEM_FIELDS[keyword]
        value = getattr(game, keyword)
        if keyword in SINGLE_VALUED_ITEMS:
            if value is None:
                continue
            converted = item_to_internal(value)
            node[machine_key] = [converted] if machine_key == metadata.Machine.VIDEO_KEY else converted
        elif value:
            node[machine_key] = [item_to_internal(item) for item in value]

    _set_additional(node, game.additional_elements)
    return node


def game_from_internal(node: metadata.Machine, variant: GameVariant = GameVariant.MACHINE) -> GameBase:
    game = GameBase(variant=variant)
    for field_name, key in GAME_FIELDS:
        setattr(game, field_name, node.read_string(key))

    for keyword, item_type in ITEM_TYPES.items():
        node_type, machine_key, _ = ITEM_FIELDS[keyword]

        if machine_key == metadata.Machine.VIDEO_KEY:
            videos = node.read(machine_key, node_type, many=True)
            if videos:
                # One video per game; the last one wins
                game.video = item_from_internal(videos[-1], item_type)
        elif keyword in SINGLE_VALUED_ITEMS:
            item = node.read(machine_key, node_type)
            if item is not None:
                setattr(game, keyword, item_from_internal(item, item_type))
        else:
            items = node.read(machine_key, node_type, many=True) or []
            setattr(game, keyword, [item_from_internal(item, item_type) for item in items])

    game.additional_elements = node.additional_elements()
    return game


def item_to_internal(item) -> metadata.DatItem:
    """Convert one item record to its internal node."""
    node_type, _, fields = ITEM_FIELDS[item.KEYWORD]
    node = node_type()
    for field_name, key in fields:
        value = getattr(item, field_name)
        if isinstance(value, list):
            if value:
                node[key] = list(value)
        else:
            _set(node, key, value)
    _set_additional(node, item.additional_elements)
    return node


def item_from_internal(node: metadata.DatItem, item_type: type):
    """Convert one internal node to an item record of ``item_type``."""
    _, _, fields = ITEM_FIELDS[item_type.KEYWORD]
    item = item_type()
    for field_name, key in fields:
        if isinstance(getattr(item, field_name), list):
            setattr(item, field_name, node.read_string_array(key) or [])
        else:
            setattr(item, field_name, node.read_string(key))
    item.additional_elements = node.additional_elements()
    return item


def _set(node: metadata.DictBase, key: str, value: Optional[str]) -> None:
    if value is not None:
        node[key] = value


def _set_additional(node: metadata.DictBase, elements: List[str]) -> None:
    if elements:
        node[metadata.DictBase.ADDITIONAL_ELEMENTS_KEY] = list(elements)
