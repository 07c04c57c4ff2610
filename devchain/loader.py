"""
Loading and dumping of toolchain configuration.

Sources are the built-in artifact (``devchain.truffle_config``), plain
mappings, or files: JSON, YAML, or a Python module exposing ``CONFIG``.
"""

import importlib.util
import json
from pathlib import Path
from typing import Any, Dict, Tuple, Union

import yaml
from pydantic import ValidationError
from pydantic_core import PydanticSerializationError
from yaml.representer import RepresenterError

from devchain import truffle_config
from devchain.config import RuntimeConfig
from devchain.core.models import ConfigRoot
from infra.exceptions import ConfigDumpError, ConfigLoadError, UnsupportedFormatError
from infra.logger import get_logger

log = get_logger("devchain.loader")

FORMATS = ("json", "yaml")

_SUFFIX_FORMATS = {
    ".json": "json",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".py": "python",
}

Source = Union[str, Path, Dict[str, Any], None]


def load_config(source: Source = None) -> ConfigRoot:
    """
    Load a ConfigRoot.

    Args:
        source: mapping, file path, or None for DEVCHAIN_CONFIG_PATH and
            then the built-in artifact

    Raises:
        ConfigLoadError: the source is missing, unreadable or has the wrong shape
    """
    if source is None:
        # An empty DEVCHAIN_CONFIG_PATH means "not set"
        source = RuntimeConfig().CONFIG_PATH or None

    try:
        data, label = _resolve(source)
        config = _validate(data, label)
    except ConfigLoadError as e:
        log.warning("config.load.failed", source=str(source), error=str(e))
        raise

    log.info(
        "config.load.ok",
        source=label,
        networks=sorted(config.networks),
        compilers=sorted(config.compilers),
    )
    return config


def loads(text: str, fmt: str = "json") -> ConfigRoot:
    if fmt not in FORMATS:
        raise UnsupportedFormatError(f"Unsupported format: {fmt!r} (expected one of {FORMATS})")
    return _validate(_parse_text(text, fmt, f"<{fmt} string>"), f"<{fmt} string>")


def dumps(config: ConfigRoot, fmt: str = "json") -> str:
    if fmt not in FORMATS:
        raise UnsupportedFormatError(f"Unsupported format: {fmt!r} (expected one of {FORMATS})")

    try:
        data = config.model_dump(mode="json")
        if fmt == "json":
            return json.dumps(data, indent=2) + "\n"
        return yaml.safe_dump(data, sort_keys=False)
    except (PydanticSerializationError, TypeError, ValueError, RepresenterError) as e:
        raise ConfigDumpError(f"Cannot write config as {fmt}: {e}") from e


def dump_config(config: ConfigRoot, path: Union[str, Path]) -> Path:
    path = Path(path)
    fmt = _format_for(path)
    if fmt not in FORMATS:
        raise UnsupportedFormatError(f"Cannot write {fmt} config: {path}")

    path.write_text(dumps(config, fmt), encoding="utf-8")
    log.info("config.dump.ok", path=str(path), format=fmt)
    return path


def _resolve(source: Source) -> Tuple[Any, str]:
    if source is None:
        return truffle_config.CONFIG, "builtin"
    if not isinstance(source, (str, Path)):
        return source, "<mapping>"

    path = Path(source)
    fmt = _format_for(path)
    if not path.is_file():
        raise ConfigLoadError(f"Config file not found: {path}")

    if fmt == "python":
        return _read_module(path), str(path)

    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigLoadError(f"Cannot read {path}: {e}") from e
    return _parse_text(text, fmt, str(path)), str(path)


def _format_for(path: Path) -> str:
    fmt = _SUFFIX_FORMATS.get(path.suffix.lower())
    if fmt is None:
        raise UnsupportedFormatError(
            f"Unsupported config file type {path.suffix!r}: {path} "
            f"(expected one of {sorted(_SUFFIX_FORMATS)})"
        )
    return fmt


def _parse_text(text: str, fmt: str, label: str) -> Any:
    try:
        if fmt == "json":
            return json.loads(text)
        # An empty YAML document is an empty config
        return yaml.safe_load(text) or {}
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigLoadError(f"Malformed {fmt} in {label}: {e}") from e


def _read_module(path: Path) -> Any:
    spec = importlib.util.spec_from_file_location(f"devchain_user_config_{path.stem}", path)
    if spec is None or spec.loader is None:
        raise ConfigLoadError(f"Cannot import {path}")

    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        raise ConfigLoadError(f"Failed to execute {path}: {e}") from e

    if not hasattr(module, "CONFIG"):
        raise ConfigLoadError(f"{path} does not define CONFIG")
    return module.CONFIG


def _validate(data: Any, label: str) -> ConfigRoot:
    if not isinstance(data, dict):
        raise ConfigLoadError(f"Config from {label} must be a mapping, got {type(data).__name__}")
    try:
        return ConfigRoot.model_validate(data)
    except ValidationError as e:
        raise ConfigLoadError(f"Invalid config in {label}: {e}") from e
