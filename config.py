"""
config.py - Configuration loader for ingestion policy, logging and timeline thresholds
"""

import os
import json
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv

from constants import (
    CONFIG_PATH,
    DEFAULT_CONFIG_FILE,
    DEFAULT_CONSECUTIVE_FILE_ACCESS,
    DEFAULT_FAST_MEAN_GAP_SECONDS,
    DEFAULT_FAST_MIN_ACTIONS,
    DEFAULT_LONG_SESSION_ACTIONS,
    DEFAULT_TOP_K,
    ENCODING_UTF8,
    ENV_CONFIG_PATH,
    ENV_LOG_DIR,
    ENV_LOG_LEVEL,
    ENV_STRICT,
)
from infra.errors import ConfigError
from infra.logging_setup import get_logger

logger = get_logger(__name__)

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class SuspiciousThresholds:
    consecutive_file_access: int = DEFAULT_CONSECUTIVE_FILE_ACCESS
    long_session_actions: int = DEFAULT_LONG_SESSION_ACTIONS
    fast_mean_gap_seconds: float = DEFAULT_FAST_MEAN_GAP_SECONDS
    fast_min_actions: int = DEFAULT_FAST_MIN_ACTIONS


@dataclass(frozen=True)
class ForensicsConfig:
    strict_parsing: bool = False
    log_level: str = "INFO"
    log_dir: Optional[str] = None
    default_top_k: int = DEFAULT_TOP_K
    suspicious: SuspiciousThresholds = field(default_factory=SuspiciousThresholds)


# === File Loaders ===

def load_json_file(path):
    """Helper to load a JSON file, raising ConfigError when it is malformed."""
    if not os.path.exists(path):
        return None
    try:
        with open(path, "r", encoding=ENCODING_UTF8) as f:
            return json.load(f)
    except (json.JSONDecodeError, IOError, UnicodeDecodeError) as e:
        raise ConfigError(f"Failed to load JSON file {path}: {e}") from e


def load_yaml_file(path):
    """Helper to load a YAML file, raising ConfigError when it is malformed."""
    if not os.path.exists(path):
        return None
    try:
        with open(path, "r", encoding=ENCODING_UTF8) as f:
            return yaml.safe_load(f)
    except (yaml.YAMLError, IOError, UnicodeDecodeError) as e:
        raise ConfigError(f"Failed to load YAML file {path}: {e}") from e


def load_config_file(path):
    if path.endswith(".json"):
        return load_json_file(path)
    elif path.endswith((".yaml", ".yml")):
        return load_yaml_file(path)
    raise ConfigError(f"Unsupported config file type: {path}")


# === Config Assembly ===

def _known(cls, data: Dict[str, Any]) -> Dict[str, Any]:
    names = {f.name for f in fields(cls)}
    unknown = set(data) - names
    if unknown:
        logger.warning("Ignoring unknown config keys: %s", ", ".join(sorted(unknown)))
    return {k: v for k, v in data.items() if k in names}


def _section(data: Dict[str, Any], key: str, where: str) -> Dict[str, Any]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"Config section '{where}' must be a mapping")
    return value


def _as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY
    return bool(value)


def config_from_dict(data: Optional[Dict[str, Any]]) -> ForensicsConfig:
    """Build a ForensicsConfig from a parsed mapping (``ingestion``/``logging``/``analysis`` sections)."""
    if not data:
        return ForensicsConfig()
    if not isinstance(data, dict):
        raise ConfigError("Configuration root must be a mapping")

    ingestion = _section(data, "ingestion", "ingestion")
    logging_cfg = _section(data, "logging", "logging")
    analysis = _section(data, "analysis", "analysis")
    suspicious = _section(analysis, "suspicious", "analysis.suspicious")

    try:
        return ForensicsConfig(
            strict_parsing=_as_bool(ingestion.get("strict", False)),
            log_level=str(logging_cfg.get("level", "INFO")).upper(),
            log_dir=logging_cfg.get("dir"),
            default_top_k=int(analysis.get("top_k", DEFAULT_TOP_K)),
            suspicious=SuspiciousThresholds(**_known(SuspiciousThresholds, suspicious)),
        )
    except (TypeError, ValueError, AttributeError) as e:
        raise ConfigError(f"Invalid configuration value: {e}") from e


def _apply_env(cfg: ForensicsConfig) -> ForensicsConfig:
    overrides: Dict[str, Any] = {}
    level = os.getenv(ENV_LOG_LEVEL)
    if level:
        overrides["log_level"] = level.upper()
    strict = os.getenv(ENV_STRICT)
    if strict is not None and strict != "":
        overrides["strict_parsing"] = _as_bool(strict)
    log_dir = os.getenv(ENV_LOG_DIR)
    if log_dir:
        overrides["log_dir"] = log_dir
    return replace(cfg, **overrides) if overrides else cfg


def load_config(path: Optional[str] = None) -> ForensicsConfig:
    """Return the effective configuration.

    Precedence: defaults, then the config file (explicit ``path``, the
    ``FORENSICS_CONFIG`` variable, or ``config/forensics.yaml``), then
    environment overrides. A ``.env`` file is honoured when present.
    """
    load_dotenv()
    explicit = path or os.getenv(ENV_CONFIG_PATH)
    if explicit and not os.path.exists(explicit):
        raise ConfigError(f"Config file not found: {explicit}")
    path = explicit or os.path.join(CONFIG_PATH, DEFAULT_CONFIG_FILE)

    data = None
    if os.path.exists(path):
        data = load_config_file(path)
        logger.debug("Loaded configuration from %s", path)
    cfg = config_from_dict(data)
    return _apply_env(cfg)
