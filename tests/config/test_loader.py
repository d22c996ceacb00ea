import pytest

from romdat.config.loader import load_config, get_config_value, ConfigError


@pytest.mark.unit
def test_load_config_defaults_without_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    cfg = load_config()

    assert cfg["clrmamepro"]["quotes"] is True
    assert cfg["output"]["format"] == "clrmamepro"
    assert cfg["logging"]["level"] == "INFO"


@pytest.mark.unit
def test_load_config_uses_cwd_file(tmp_path, monkeypatch, make_config):
    make_config({"output": {"format": "logiqx"}})
    monkeypatch.chdir(tmp_path)

    cfg = load_config()

    assert cfg["output"]["format"] == "logiqx"
    # Unset keys keep their defaults
    assert cfg["output"]["game_element"] == "game"


@pytest.mark.unit
def test_load_config_merges_over_defaults(make_config):
    path = make_config({"clrmamepro": {"quotes": False}, "logging": {"level": "DEBUG"}})

    cfg = load_config(str(path))

    assert cfg["clrmamepro"]["quotes"] is False
    assert cfg["logging"]["level"] == "DEBUG"
    assert cfg["logging"]["console"] is True


@pytest.mark.unit
def test_load_config_empty_file(tmp_path):
    path = tmp_path / "romdat.yaml"
    path.write_text("")

    assert load_config(path)["output"]["format"] == "clrmamepro"


@pytest.mark.unit
def test_load_config_missing_file_raises(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "does-not-exist.yaml")


@pytest.mark.unit
def test_load_config_invalid_yaml(tmp_path):
    config_path = tmp_path / "romdat.yaml"
    config_path.write_text("invalid: [unclosed")

    with pytest.raises(ConfigError):
        load_config(str(config_path))


@pytest.mark.unit
def test_load_config_requires_mapping(tmp_path):
    config_path = tmp_path / "romdat.yaml"
    config_path.write_text("- just\n- a list\n")

    with pytest.raises(ConfigError):
        load_config(config_path)


@pytest.mark.unit
def test_get_config_value():
    cfg = {"output": {"format": "logiqx"}}

    assert get_config_value(cfg, "output.format") == "logiqx"
    assert get_config_value(cfg, "output.missing", "x") == "x"
    assert get_config_value(cfg, "output.format.deeper") is None
