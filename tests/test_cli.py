"""
Tests for the replay.py command line entry point.
"""

import logging

import pytest

import replay
from GitLogue import *


def test_list_themes(capsys):
    assert replay.main(["--list-themes"]) == 0
    assert capsys.readouterr().out.split() == sorted(THEMES)


def test_save_config_applies_overrides(configFile):
    status = replay.main(["--config", str(configFile), "--save-config",
                          "--theme", "nord", "--speed", "50", "--loop", "yes"])
    assert status == 0

    config = GitLogueConfig.load(configFile)
    assert (config.theme, config.speed, config.loop) == ("nord", 50, True)
    assert config.order == "random"


def test_broken_config_file(configFile, capsys):
    configFile.parent.mkdir(parents=True)
    configFile.write_text("speed = [\n", encoding="utf-8")

    assert replay.main(["--config", str(configFile)]) == 1
    assert "error: Failed to parse config file" in capsys.readouterr().err


def test_invalid_override(configFile, capsys):
    assert replay.main(["--config", str(configFile), "--speed", "0"]) == 1
    assert "speed" in capsys.readouterr().err


def test_unknown_theme(configFile, capsys):
    assert replay.main(["--config", str(configFile), "--theme", "neon"]) == 1
    assert "unknown theme 'neon'" in capsys.readouterr().err


def test_not_a_repository(configFile, tmp_path, capsys):
    pytest.importorskip("pygit2")
    plain = tmp_path / "plain"
    plain.mkdir()

    assert replay.main(["--config", str(configFile), "--path", str(plain)]) == 1
    assert "not a git repository" in capsys.readouterr().err


def test_unknown_commit(configFile, gitRepo, capsys):
    gitRepo.commit({"a.txt": "a\n"}, "First")

    assert replay.main(["--config", str(configFile), "--path", str(gitRepo.path),
                        "--commit", "deadbeef"]) == 1
    assert "unknown commit" in capsys.readouterr().err


def test_log_file(configFile, tmp_path):
    log = tmp_path / "gitlogue.log"
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    try:
        replay.main(["--config", str(configFile), "--theme", "neon",
                     "--log-file", str(log), "--debug", "true"])
    finally:
        for handler in root.handlers[:]:
            if handler not in handlers:
                root.removeHandler(handler)
                handler.close()
        root.setLevel(level)

    assert "No configuration file" in log.read_text(encoding="utf-8")


def test_first_run_writes_the_config_file(configFile, capsys):
    # the unknown theme stops the run after the configuration is loaded
    assert replay.main(["--config", str(configFile), "--theme", "neon"]) == 1

    assert configFile.exists()
    assert GitLogueConfig.load(configFile) == GitLogueConfig()
