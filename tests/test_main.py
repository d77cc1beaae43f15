#!/usr/bin/env python3
"""Test the console entry point: config loading and fatal error exit"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from wslgit import main as main_module
from wslgit.errors import ChildIOError, SpawnError


def test_show_mapping_through_main(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv('WSLGIT_CONFIG_DIR', str(tmp_path))

    assert main_module.main(['wslgit', 'win-show-mapping']) == 0

    assert capsys.readouterr().out == f"{tmp_path / 'mapping.txt'} not found\n"


def test_missing_config_folder_is_fatal(monkeypatch, capsys):
    monkeypatch.delenv('WSLGIT_CONFIG_DIR', raising=False)
    monkeypatch.delenv('LOCALAPPDATA', raising=False)

    assert main_module.main(['wslgit', 'status']) == 1

    assert capsys.readouterr().err.startswith("wslgit: error: Cannot compute config path")


def test_spawn_error_is_fatal(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv('WSLGIT_CONFIG_DIR', str(tmp_path))

    def fail(self, arguments, program=''):
        raise SpawnError(['wsl', 'git', 'status'], FileNotFoundError('wsl'))

    monkeypatch.setattr(main_module.WslGitBridge, 'run', fail)

    assert main_module.main(['wslgit', 'status']) == 1
    assert "Failed to execute command 'wsl git status'" in capsys.readouterr().err


def test_interrupt_exit_code(tmp_path, monkeypatch):
    monkeypatch.setenv('WSLGIT_CONFIG_DIR', str(tmp_path))

    def interrupt(self, arguments, program=''):
        raise KeyboardInterrupt

    monkeypatch.setattr(main_module.WslGitBridge, 'run', interrupt)

    assert main_module.main(['wslgit', 'log']) == 130


def test_lost_output_is_fatal(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv('WSLGIT_CONFIG_DIR', str(tmp_path))

    def fail(self, arguments, program=''):
        raise ChildIOError(['wsl', 'git', 'remote', '-v'], BrokenPipeError(32, 'Broken pipe'))

    monkeypatch.setattr(main_module.WslGitBridge, 'run', fail)

    assert main_module.main(['wslgit', 'remote', '-v']) == 1
    err = capsys.readouterr().err
    assert err.startswith("wslgit: error: Lost output of command 'wsl git remote -v'")
