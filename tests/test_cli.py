import logging
from pathlib import Path

import pytest
from lxml import etree

import romdat.cli as cli
from romdat.clrmamepro import deserialize
from romdat.config.loader import ConfigError


@pytest.fixture(autouse=True)
def _restore_logging():
    """main() reconfigures the root logger; put it back afterwards."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def quiet_config(make_config):
    return make_config({"logging": {"console": False}})


@pytest.mark.unit
def test_create_parser_convert_flags():
    parser = cli.create_parser()
    args = parser.parse_args([
        "convert", "in.dat", "out.xml",
        "--to", "logiqx", "--no-quotes", "--game-element", "machine",
    ])

    assert args.command == "convert"
    assert args.output_format == "logiqx"
    assert args.quotes is False
    assert args.game_element == "machine"
    assert args.input_format is None


@pytest.mark.unit
def test_create_parser_requires_command():
    with pytest.raises(SystemExit) as excinfo:
        cli.create_parser().parse_args([])
    assert excinfo.value.code == 2


@pytest.mark.unit
def test_detect_format():
    assert cli.detect_format(Path("set.XML")) == "logiqx"
    assert cli.detect_format(Path("set.dat")) == "clrmamepro"


@pytest.mark.unit
def test_main_handles_config_error(monkeypatch, sample_dat):
    monkeypatch.setattr(cli, "load_config", lambda path=None: (_ for _ in ()).throw(ConfigError("bad config")))
    assert cli.main(["info", str(sample_dat)]) == 1


@pytest.mark.unit
def test_info_prints_summary(sample_dat, quiet_config, capsys):
    code = cli.main(["info", str(sample_dat), "--config", str(quiet_config)])

    assert code == 0
    out = capsys.readouterr().out
    assert "Name: Test Set" in out
    assert "Blocks: 3" in out
    assert "  machine: 1" in out
    assert "  rom: 4" in out
    assert "Unrecognized entries preserved: 3" in out


@pytest.mark.unit
def test_info_missing_input(tmp_path, quiet_config, capsys):
    code = cli.main(["info", str(tmp_path / "missing.dat"), "--config", str(quiet_config)])

    assert code == 1
    assert "Could not read" in capsys.readouterr().err


@pytest.mark.integration
def test_convert_to_logiqx(tmp_path, sample_dat, quiet_config):
    output = tmp_path / "out.xml"

    code = cli.main([
        "convert", str(sample_dat), str(output),
        "--to", "logiqx", "--config", str(quiet_config),
    ])

    assert code == 0
    root = etree.parse(str(output)).getroot()
    assert [game.get("name") for game in root.findall("game")] == ["alpha", "beta", "neogeo"]


@pytest.mark.integration
def test_convert_logiqx_to_clrmamepro(tmp_path, sample_xml, make_config):
    config = make_config({
        "logging": {"console": False},
        "output": {"game_element": "machine"},
    })
    output = tmp_path / "out.dat"

    code = cli.main(["convert", str(sample_xml), str(output), "--config", str(config)])

    assert code == 0
    text = output.read_text(encoding="utf-8")
    assert text.count("machine (\n") == 2
    assert [game.name for game in deserialize(output).game] == ["alpha", "beta"]


@pytest.mark.integration
def test_convert_unquoted(tmp_path, quiet_config):
    source = tmp_path / "in.dat"
    source.write_text('game (\n\tname foo\n\trom ( name a.bin size 1 )\n)\n')
    output = tmp_path / "out.dat"

    code = cli.main([
        "convert", str(source), str(output), "--no-quotes", "--config", str(quiet_config),
    ])

    assert code == 0
    assert "\trom ( name a.bin size 1 )\n" in output.read_text(encoding="utf-8")


@pytest.mark.unit
def test_convert_reports_missing_required_field(tmp_path, quiet_config, capsys):
    source = tmp_path / "in.dat"
    source.write_text('game (\n\tname "foo"\n\trom ( name "a.bin" )\n)\n')
    output = tmp_path / "out.dat"

    code = cli.main(["convert", str(source), str(output), "--config", str(quiet_config)])

    assert code == 1
    assert "size" in capsys.readouterr().err
    assert not output.exists()


@pytest.mark.unit
def test_convert_reports_bad_xml(tmp_path, quiet_config, capsys):
    source = tmp_path / "in.xml"
    source.write_text("<datafile><game></datafile>")

    code = cli.main(["convert", str(source), str(tmp_path / "out.dat"), "--config", str(quiet_config)])

    assert code == 1
    assert "Malformed Logiqx XML" in capsys.readouterr().err
