#!/usr/bin/env python3
"""
Tests for the profile-based configuration reader.
"""

import json
import os
import sys

# Add the src directory to the path so we can import the modules
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

from config.config import Config
from quake_log_tools.base import FileBasedTool


def write_profile(directory, name, data):
    (directory / f"{name}.json").write_text(json.dumps(data))


def test_default_profile_is_created(tmp_path):
    config = Config(config_dir=str(tmp_path))
    assert config.get() == {}
    assert (tmp_path / "default.json").exists()


def test_dot_notation_access(tmp_path):
    write_profile(tmp_path, "server", {"paths": {"log_file": "games.log"}, "game_report": {"show_ranking": False}})
    config = Config(config_dir=str(tmp_path), profile="server")

    assert config.get("paths.log_file") == "games.log"
    assert config.get("game_report.show_ranking", True) is False
    assert config.get("general.log_level", "INFO") == "INFO"
    assert config.get("paths.log_file.extra", "x") == "x"


def test_local_overrides_are_deep_merged(tmp_path):
    write_profile(tmp_path, "server", {"general": {"log_level": "INFO", "output_path": "out"}})
    write_profile(tmp_path, "server.local", {"general": {"log_level": "DEBUG"}})
    config = Config(config_dir=str(tmp_path), profile="server")

    assert config.get("general") == {"log_level": "DEBUG", "output_path": "out"}


def test_missing_profile_gives_empty_config(tmp_path):
    config = Config(config_dir=str(tmp_path), profile="nope")
    assert config.get() == {}
    assert not (tmp_path / "nope.json").exists()


def test_invalid_profile_gives_empty_config(tmp_path):
    (tmp_path / "broken.json").write_text("{not json")
    config = Config(config_dir=str(tmp_path), profile="broken")
    assert config.get() == {}


def test_list_and_switch_profiles(tmp_path):
    write_profile(tmp_path, "default", {})
    write_profile(tmp_path, "server", {"paths": {"log_file": "server.log"}})
    write_profile(tmp_path, "server.local", {})
    config = Config(config_dir=str(tmp_path))

    assert config.list_profiles() == ["default", "server"]
    assert config.switch_profile("server")
    assert config.get("paths.log_file") == "server.log"
    assert not config.switch_profile("missing")
    assert config.profile == "server"


def test_get_path(tmp_path):
    write_profile(tmp_path, "default", {"paths": {"log_file": "logs/games.log", "abs": "/var/log/q.log"}})
    config = Config(config_dir=str(tmp_path))

    assert config.get_path("paths.abs") == "/var/log/q.log"
    assert config.get_path("paths.log_file") == str(tmp_path.parent / "logs" / "games.log")
    assert config.get_path("paths.none") == ""


def test_file_tool_reads_config_defaults():
    class Probe(FileBasedTool):
        def run(self):
            return None

    probe = Probe({})
    probe.initialize_directories()
    assert probe.log_file == "qgames.log"
    assert probe.output_dir == "output"
    assert probe.get_config("general.log_level", "INFO") == "INFO"
