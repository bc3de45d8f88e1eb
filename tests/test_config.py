# tests/test_config.py
import logging
import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import pytest

import config
from config import ForensicsConfig, config_from_dict, load_config
from infra.errors import ConfigError
from infra.logging_setup import get_logger, setup_logging


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, tmp_path):
    for var in ("FORENSICS_CONFIG", "FORENSICS_LOG_LEVEL", "FORENSICS_STRICT", "FORENSICS_LOG_DIR"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setattr(config, "load_dotenv", lambda: None)
    monkeypatch.chdir(tmp_path)


def test_defaults_without_file():
    cfg = load_config()
    assert cfg == ForensicsConfig()
    assert cfg.default_top_k == 5
    assert cfg.suspicious.consecutive_file_access == 5


def test_yaml_file(tmp_path):
    path = tmp_path / "forensics.yaml"
    path.write_text(
        "ingestion:\n  strict: true\n"
        "logging:\n  level: debug\n"
        "analysis:\n  top_k: 3\n  suspicious:\n    long_session_actions: 50\n",
        encoding="utf-8",
    )
    cfg = load_config(str(path))
    assert cfg.strict_parsing is True
    assert cfg.log_level == "DEBUG"
    assert cfg.default_top_k == 3
    assert cfg.suspicious.long_session_actions == 50
    assert cfg.suspicious.fast_min_actions == 10


def test_json_file_via_env(tmp_path, monkeypatch):
    path = tmp_path / "cfg.json"
    path.write_text('{"analysis": {"top_k": 7}}', encoding="utf-8")
    monkeypatch.setenv("FORENSICS_CONFIG", str(path))
    assert load_config().default_top_k == 7


def test_default_location_is_picked_up(tmp_path):
    (tmp_path / "config").mkdir()
    (tmp_path / "config" / "forensics.yaml").write_text("analysis:\n  top_k: 9\n", encoding="utf-8")
    assert load_config().default_top_k == 9


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("FORENSICS_LOG_LEVEL", "warning")
    monkeypatch.setenv("FORENSICS_STRICT", "yes")
    cfg = load_config()
    assert cfg.log_level == "WARNING"
    assert cfg.strict_parsing is True


def test_malformed_yaml_raises(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("ingestion: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(str(path))


def test_missing_explicit_file_raises(tmp_path):
    with pytest.raises(ConfigError):
        load_config(str(tmp_path / "missing.yaml"))


def test_bad_values_raise():
    with pytest.raises(ConfigError):
        config_from_dict({"analysis": {"top_k": "many"}})
    with pytest.raises(ConfigError):
        config_from_dict(["not", "a", "mapping"])


def test_setup_logging_does_not_duplicate_handlers(tmp_path):
    root = setup_logging("DEBUG")
    setup_logging("DEBUG", tmp_path / "logs")
    assert len(root.handlers) == 2
    assert root.level == logging.DEBUG
    assert list((tmp_path / "logs").glob("forensics_*.log"))
    assert get_logger("engine").name == "forensics.engine"
    assert get_logger("forensics.cli").name == "forensics.cli"
    setup_logging("INFO")
    assert len(root.handlers) == 1


@pytest.mark.parametrize("data", [
    {"analysis": "fast"},
    {"ingestion": ["x"]},
    {"logging": "debug"},
    {"analysis": {"suspicious": 3}},
])
def test_non_mapping_sections_raise(data):
    with pytest.raises(ConfigError, match="must be a mapping"):
        config_from_dict(data)


def test_cli_reports_non_mapping_section(tmp_path):
    import cli

    log = tmp_path / "log.csv"
    log.write_text("1000,alice,s1,LOGIN,R1,5,0\n", encoding="utf-8")
    cfg = tmp_path / "bad.yaml"
    cfg.write_text("analysis: fast\n", encoding="utf-8")
    assert cli.main([str(log), "--config", str(cfg)]) == cli.EXIT_INPUT_ERROR


@pytest.mark.parametrize("value, expected", [
    ("false", False),
    ("no", False),
    ("0", False),
    ("True", True),
    ("yes", True),
    (True, True),
    (False, False),
])
def test_strict_flag_parsing(value, expected):
    assert config_from_dict({"ingestion": {"strict": value}}).strict_parsing is expected


def test_quoted_false_in_yaml_keeps_lenient_mode(tmp_path):
    path = tmp_path / "forensics.yaml"
    path.write_text('ingestion:\n  strict: "false"\n', encoding="utf-8")
    assert load_config(str(path)).strict_parsing is False
