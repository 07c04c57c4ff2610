"""Tests for loading and dumping configuration files."""

import json
from pathlib import Path

import pytest
from structlog.testing import capture_logs

from devchain import truffle_config
from devchain.loader import dump_config, dumps, load_config, loads
from infra.exceptions import ConfigDumpError, ConfigLoadError, UnsupportedFormatError


def test_load_json(tmp_path: Path, sample_config):
    cfg = tmp_path / "devchain.json"
    cfg.write_text(json.dumps(sample_config), encoding="utf-8")

    config = load_config(cfg)
    assert sorted(config.networks) == ["local", "sepolia"]
    assert config.compiler("solc").version == "^0.8"


def test_load_yaml(tmp_path: Path):
    cfg = tmp_path / "devchain.yaml"
    cfg.write_text(
        """
networks:
  local:
    host: localhost
    port: 8545
    network_id: "*"
compilers:
  solc:
    version: "^0.8"
""".strip(),
        encoding="utf-8",
    )

    assert load_config(cfg) == load_config()


def test_load_empty_yaml_is_empty_config(tmp_path: Path):
    cfg = tmp_path / "empty.yml"
    cfg.write_text("", encoding="utf-8")

    config = load_config(cfg)
    assert config.networks == {} and config.compilers == {}


def test_load_python_module(tmp_path: Path):
    cfg = tmp_path / "toolchain_config.py"
    cfg.write_text(
        'CONFIG = {"networks": {"local": {"host": "localhost", "port": 9545}}}\n',
        encoding="utf-8",
    )

    config = load_config(str(cfg))
    assert config.network("local").port == 9545
    assert config.network("local").is_wildcard


def test_load_python_module_without_config(tmp_path: Path):
    cfg = tmp_path / "nothing.py"
    cfg.write_text("VALUE = 1\n", encoding="utf-8")

    with pytest.raises(ConfigLoadError, match="CONFIG"):
        load_config(cfg)


def test_load_from_env_path(tmp_path: Path, monkeypatch, sample_config):
    cfg = tmp_path / "from_env.json"
    cfg.write_text(json.dumps(sample_config), encoding="utf-8")
    monkeypatch.setenv("DEVCHAIN_CONFIG_PATH", str(cfg))

    assert "sepolia" in load_config().networks


def test_missing_file(tmp_path: Path):
    with pytest.raises(ConfigLoadError, match="not found"):
        load_config(tmp_path / "absent.json")


def test_unsupported_suffix(tmp_path: Path):
    cfg = tmp_path / "truffle-config.js"
    cfg.write_text("module.exports = {};", encoding="utf-8")

    with pytest.raises(UnsupportedFormatError):
        load_config(cfg)


def test_malformed_json(tmp_path: Path):
    cfg = tmp_path / "broken.json"
    cfg.write_text('{"networks": ', encoding="utf-8")

    with pytest.raises(ConfigLoadError, match="Malformed json"):
        load_config(cfg)


@pytest.mark.parametrize(
    "data",
    [
        ["not", "a", "mapping"],
        {"networks": {"local": {"host": "localhost"}}},
        {"networks": {"local": "localhost:8545"}},
        {"compilers": {"solc": {}}},
    ],
)
def test_wrong_shape(data):
    with pytest.raises(ConfigLoadError):
        load_config(data)


def test_load_logs_outcome(tmp_path: Path):
    with capture_logs() as logs:
        load_config()
        with pytest.raises(ConfigLoadError):
            load_config(tmp_path / "absent.json")

    assert [entry["event"] for entry in logs] == ["config.load.ok", "config.load.failed"]
    assert logs[0]["source"] == "builtin"
    assert logs[0]["networks"] == ["local"]
    assert logs[0]["compilers"] == ["solc"]
    assert logs[1]["log_level"] == "warning"


def test_dump_config_by_suffix(tmp_path: Path, sample_config):
    config = load_config(sample_config)

    for name in ("out.json", "out.yaml", "out.yml"):
        written = dump_config(config, tmp_path / name)
        assert load_config(written) == config


def test_dump_rejects_python_target(tmp_path: Path):
    with pytest.raises(UnsupportedFormatError):
        dump_config(load_config(), tmp_path / "out.py")


def test_dumps_json_uses_snake_case_keys():
    data = json.loads(dumps(loads('{"networks": {"local": {"host": "h", "port": 1, "networkId": "7"}}}')))
    assert data["networks"]["local"] == {"host": "h", "port": 1, "network_id": "7"}


def test_unknown_format_name():
    with pytest.raises(UnsupportedFormatError):
        dumps(load_config(), "toml")
    with pytest.raises(UnsupportedFormatError):
        loads("{}", "toml")


def test_load_yaml_unquoted_compiler_version(tmp_path: Path):
    cfg = tmp_path / "devchain.yaml"
    cfg.write_text("compilers:\n  solc:\n    version: 0.8\n", encoding="utf-8")

    assert load_config(cfg).compiler("solc").version == "0.8"


def test_empty_env_path_falls_back_to_builtin(monkeypatch):
    monkeypatch.setenv("DEVCHAIN_CONFIG_PATH", "")

    assert load_config() == load_config(truffle_config.CONFIG)


def test_tuple_extras_survive_round_trip(tmp_path: Path):
    cfg = tmp_path / "tagged.py"
    cfg.write_text(
        'CONFIG = {"networks": {"local": {"host": "h", "port": 1, "tags": ("a", "b")}}}\n',
        encoding="utf-8",
    )

    config = load_config(cfg)
    assert loads(dumps(config)) == config
    assert loads(dumps(config, "yaml"), "yaml") == config


def test_unserializable_extra_is_a_dump_error(tmp_path: Path):
    cfg = tmp_path / "provider.py"
    cfg.write_text(
        'CONFIG = {"networks": {"sepolia": {"host": "h", "port": 1, "provider": lambda: None}}}\n',
        encoding="utf-8",
    )

    config = load_config(cfg)
    for fmt in ("json", "yaml"):
        with pytest.raises(ConfigDumpError, match="Cannot write config"):
            dumps(config, fmt)
