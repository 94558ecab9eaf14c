from src.config.settings import EngineConfig, RenderConfig, load_config
from src.utils.result import ConfigError


def test_defaults():
    config = EngineConfig()
    assert config.logging.level == "info"
    assert config.logging.format == "json"
    assert config.render == RenderConfig("fsm", "red", "LR", "#00AA00")
    assert config.validate().is_ok()


def test_from_dict_reads_sections():
    result = EngineConfig.from_dict({
        "logging": {"level": "debug", "format": "text"},
        "render": {"flow_direction": "TD", "flow_highlight": "#123456"},
    })

    config = result.unwrap()
    assert config.logging.level == "debug"
    assert config.logging.format == "text"
    assert config.render.flow_direction == "TD"
    assert config.render.flow_highlight == "#123456"
    assert config.render.graph_highlight == "red"


def test_from_dict_rejects_non_mapping_section():
    result = EngineConfig.from_dict({"render": ["LR"]})
    assert result.is_err()
    assert result.unwrap_err().field == "render"


def test_validate_rejects_bad_direction():
    config = EngineConfig.from_dict({"render": {"flow_direction": "UP"}}).unwrap()
    error = config.validate().unwrap_err()
    assert isinstance(error, ConfigError)
    assert error.field == "render.flow_direction"


def test_validate_rejects_bad_graph_name():
    config = EngineConfig.from_dict({"render": {"graph_name": "my graph"}}).unwrap()
    assert config.validate().unwrap_err().field == "render.graph_name"


def test_validate_rejects_unknown_log_level():
    config = EngineConfig.from_dict({"logging": {"level": "verbose"}}).unwrap()
    assert config.validate().unwrap_err().field == "logging.level"


def test_from_yaml_missing_file(tmp_path):
    result = EngineConfig.from_yaml(tmp_path / "absent.yaml")
    assert result.is_err()
    assert result.unwrap_err().field == "path"


def test_from_yaml_bad_yaml(write_yaml):
    path = write_yaml("render: [unclosed\n", name="config.yaml")
    assert EngineConfig.from_yaml(path).unwrap_err().field == "yaml"


def test_load_config_from_file(write_yaml):
    path = write_yaml("render:\n  graph_highlight: blue\n", name="config.yaml")
    config = load_config(path).unwrap()
    assert config.render.graph_highlight == "blue"


def test_load_config_validates(write_yaml):
    path = write_yaml("logging:\n  format: xml\n", name="config.yaml")
    error = load_config(path).unwrap_err()
    assert error.field == "logging.format"
    assert "xml" in str(error)


def test_load_config_without_file_uses_defaults(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert load_config().unwrap() == EngineConfig()


def test_load_config_picks_up_default_file(tmp_path, monkeypatch):
    (tmp_path / "fsm-table.yaml").write_text("render:\n  flow_direction: RL\n")
    monkeypatch.chdir(tmp_path)
    assert load_config().unwrap().render.flow_direction == "RL"
