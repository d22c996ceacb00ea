"""
Element and attribute names of the Logiqx XML datafile format.

Every table pairs a Logiqx name with the internal metadata key it maps to.
"""

from romdat import metadata

DOCTYPE = (
    '<!DOCTYPE datafile PUBLIC "-//Logiqx//DTD ROM Management Datafile//EN" '
    '"http://www.logiqx.com/Dats/datafile.dtd">'
)

ROOT_ELEMENT = "datafile"
HEADER_ELEMENT = "header"
GAME_ELEMENTS = ("game", "machine")

# <header> child elements, in write order
HEADER_TEXT_FIELDS = (
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
    ("type", metadata.Header.TYPE_KEY),
)

# Attributes of <header><clrmamepro .../></header>
CLRMAMEPRO_ELEMENT = "clrmamepro"
CLRMAMEPRO_ATTRIBUTES = (
    ("header", metadata.Header.HEADER_KEY),
    ("forcemerging", metadata.Header.FORCE_MERGING_KEY),
    ("forcepacking", metadata.Header.FORCE_PACKING_KEY),
)

GAME_ATTRIBUTES = (
    ("name", metadata.Machine.NAME_KEY),
    ("cloneof", metadata.Machine.CLONE_OF_KEY),
    ("romof", metadata.Machine.ROM_OF_KEY),
    ("sampleof", metadata.Machine.SAMPLE_OF_KEY),
)

GAME_TEXT_FIELDS = (
    ("description", metadata.Machine.DESCRIPTION_KEY),
    ("year", metadata.Machine.YEAR_KEY),
    ("manufacturer", metadata.Machine.MANUFACTURER_KEY),
    ("category", metadata.Machine.CATEGORY_KEY),
)

# Item element -> (node type, machine key, attributes in write order)
ITEM_ELEMENTS = {
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
    "driver": (metadata.Driver, metadata.Machine.DRIVER_KEY, (
        ("status", metadata.Driver.STATUS_KEY),
        ("color", metadata.Driver.COLOR_KEY),
        ("sound", metadata.Driver.SOUND_KEY),
        ("palettesize", metadata.Driver.PALETTE_SIZE_KEY),
        ("blit", metadata.Driver.BLIT_KEY),
    )),
}

# Items a game holds at most one of
SINGLE_ITEM_ELEMENTS = frozenset({"driver"})
