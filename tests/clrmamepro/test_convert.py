import copy

import pytest

from romdat import metadata
from romdat.clrmamepro import (
    GameVariant,
    deserialize,
    deserialize_stream,
    from_internal,
    to_internal,
)
from romdat.clrmamepro.convert import GAME_FIELDS, HEADER_FIELDS, ITEM_FIELDS
from romdat.clrmamepro.models import ITEM_TYPES, ClrMamePro, GameBase


@pytest.mark.unit
def test_to_internal_header_and_machines(sample_dat):
    pivot = to_internal(deserialize(sample_dat))

    header = pivot.read(metadata.MetadataFile.HEADER_KEY, metadata.Header)
    assert header.read_string(metadata.Header.NAME_KEY) == "Test Set"
    assert header.read_string(metadata.Header.FORCE_MERGING_KEY) == "full"
    assert header.additional_elements() == ['emulator ( name "mame" )']

    machines = pivot.read(metadata.MetadataFile.MACHINE_KEY, metadata.Machine, many=True)
    assert [m.read_string(metadata.Machine.NAME_KEY) for m in machines] == ["alpha", "beta", "neogeo"]


@pytest.mark.unit
def test_to_internal_items(sample_dat):
    pivot = to_internal(deserialize(sample_dat))
    alpha, beta, _ = pivot[metadata.MetadataFile.MACHINE_KEY]

    roms = alpha.read(metadata.Machine.ROM_KEY, metadata.Rom, many=True)
    assert len(roms) == 2
    assert roms[0].read_string(metadata.Rom.CRC_KEY) == "12345678"
    assert roms[0].read_long(metadata.Rom.SIZE_KEY) == 1024
    assert roms[0][metadata.DatItem.TYPE_KEY] == "rom"

    videos = alpha.read(metadata.Machine.VIDEO_KEY, metadata.Video, many=True)
    assert len(videos) == 1
    assert videos[0].read_string(metadata.Video.WIDTH_KEY) == "224"
    assert videos[0].read_string(metadata.Video.HEIGHT_KEY) == "288"
    assert videos[0].read_string(metadata.Video.REFRESH_KEY) == "60"

    driver = alpha.read(metadata.Machine.DRIVER_KEY, metadata.Driver)
    assert driver.read_string(metadata.Driver.STATUS_KEY) == "good"

    switch = beta.read(metadata.Machine.DIP_SWITCH_KEY, metadata.DipSwitch, many=True)[0]
    assert switch.read_string_array(metadata.DipSwitch.ENTRY_KEY) == ["3", "5"]

    beta_rom = beta.read(metadata.Machine.ROM_KEY, metadata.Rom, many=True)[0]
    assert beta_rom.additional_elements() == ["mystery: 42"]
    assert beta.additional_elements() == ['widget "unknown"']

    # Absent values are left out rather than stored as None
    assert metadata.Rom.MD5_KEY not in roms[0]
    assert metadata.Machine.SOUND_KEY not in alpha


@pytest.mark.unit
def test_rom_offset_renamed(dat_stream):
    document = deserialize_stream(dat_stream(
        'game (\n\tname "x"\n\trom ( name "a" size 1 offs 0x100 )\n)\n'
    ))
    rom = to_internal(document)[metadata.MetadataFile.MACHINE_KEY][0][metadata.Machine.ROM_KEY][0]
    assert rom[metadata.Rom.OFFSET_KEY] == "0x100"

    back = from_internal(to_internal(document))
    assert back.game[0].rom[0].offs == "0x100"


@pytest.mark.unit
def test_media_archive_input_keys(sample_dat):
    alpha = to_internal(deserialize(sample_dat))[metadata.MetadataFile.MACHINE_KEY][0]

    media = alpha.read(metadata.Machine.MEDIA_KEY, metadata.Media, many=True)
    assert media[0].read_string(metadata.Media.NAME_KEY) == "alpha-disc"
    assert media[0][metadata.DatItem.TYPE_KEY] == "media"

    archives = alpha.read(metadata.Machine.ARCHIVE_KEY, metadata.Archive, many=True)
    assert archives[0].read_string(metadata.Archive.NAME_KEY) == "alpha"

    controls = alpha.read(metadata.Machine.INPUT_KEY, metadata.Input)
    assert controls.read_long(metadata.Input.PLAYERS_KEY) == 2
    assert controls.read_long(metadata.Input.BUTTONS_KEY) == 4
    assert controls.read_string(metadata.Input.CONTROL_KEY) == "joy8way"


@pytest.mark.unit
def test_chip_type_uses_chip_type_key(sample_dat):
    beta = to_internal(deserialize(sample_dat))[metadata.MetadataFile.MACHINE_KEY][1]
    chip = beta.read(metadata.Machine.CHIP_KEY, metadata.Chip, many=True)[0]

    assert chip[metadata.Chip.CHIP_TYPE_KEY] == "cpu"
    assert chip[metadata.DatItem.TYPE_KEY] == "chip"


def _key_constants(node_type) -> set:
    return {value for name, value in vars(node_type).items() if name.endswith("_KEY")}


@pytest.mark.unit
def test_header_and_game_tables_cover_records():
    assert [name for name, _ in HEADER_FIELDS] == list(ClrMamePro.FIELDS)
    assert {key for _, key in HEADER_FIELDS} <= _key_constants(metadata.Header)

    assert [name for name, _ in GAME_FIELDS] == list(GameBase.FIELDS)
    assert {key for _, key in GAME_FIELDS} <= _key_constants(metadata.Machine)


@pytest.mark.unit
@pytest.mark.parametrize("keyword", list(ITEM_TYPES))
def test_item_table_covers_record(keyword):
    node_type, machine_key, fields = ITEM_FIELDS[keyword]

    assert [name for name, _ in fields] == list(ITEM_TYPES[keyword].FIELDS)
    assert {key for _, key in fields} <= _key_constants(node_type)
    assert machine_key in _key_constants(metadata.Machine)
    assert node_type.ITEM_TYPE == keyword


@pytest.mark.unit
def test_round_trip_through_pivot(sample_dat):
    original = deserialize(sample_dat)
    back = from_internal(to_internal(original), game=True)

    # The pivot has no notion of block variants
    for game in original.game:
        game.variant = GameVariant.GAME
    assert back == original


@pytest.mark.unit
def test_from_internal_variant_flag():
    pivot = metadata.MetadataFile({
        metadata.MetadataFile.MACHINE_KEY: [metadata.Machine({metadata.Machine.NAME_KEY: "m"})],
    })

    assert from_internal(pivot).game[0].variant == GameVariant.MACHINE
    assert from_internal(pivot, game=True).game[0].variant == GameVariant.GAME
    assert from_internal(pivot).clrmamepro is None


@pytest.mark.unit
def test_from_internal_last_video_wins():
    machine = metadata.Machine({
        metadata.Machine.NAME_KEY: "m",
        metadata.Machine.VIDEO_KEY: [
            metadata.Video({metadata.Video.SCREEN_KEY: "raster"}),
            metadata.Video({metadata.Video.SCREEN_KEY: "vector"}),
        ],
    })
    pivot = metadata.MetadataFile({metadata.MetadataFile.MACHINE_KEY: [machine]})

    assert from_internal(pivot).game[0].video.screen == "vector"


@pytest.mark.unit
def test_from_internal_ignores_wrong_shapes():
    machine = metadata.Machine({
        metadata.Machine.NAME_KEY: "m",
        metadata.Machine.ROM_KEY: "not a list",
        metadata.Machine.SOUND_KEY: ["not", "a", "node"],
    })
    pivot = metadata.MetadataFile({metadata.MetadataFile.MACHINE_KEY: [machine]})

    game = from_internal(pivot).game[0]
    assert game.rom == []
    assert game.sound is None


@pytest.mark.unit
def test_converters_do_not_mutate_inputs(sample_dat):
    document = deserialize(sample_dat)
    snapshot = copy.deepcopy(document)

    pivot = to_internal(document)
    pivot_snapshot = copy.deepcopy(pivot)
    from_internal(pivot)

    assert document == snapshot
    assert pivot == pivot_snapshot


@pytest.mark.unit
def test_none_inputs():
    assert to_internal(None) is None
    assert from_internal(None) is None
