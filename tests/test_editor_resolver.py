#!/usr/bin/env python3
"""
Test EditorPathResolver

TESTS:
- Executable / arguments split, one layer of quotes removed
- Candidate order: bare, .CMD, .EXE; PATH never searched
- Resolved executable translated, arguments kept verbatim
- Soft fallback: unknown editor passes through untranslated
"""
import os
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from wslgit.config import BridgeConfig
from wslgit.editor_resolver import EditorPathResolver
from wslgit.path_codec import PathCodec


@pytest.fixture
def resolver():
    return EditorPathResolver(PathCodec(BridgeConfig()))


@pytest.mark.parametrize("command, expected", [
    ("vim", ("vim", "")),
    ("code --wait", ("code", "--wait")),
    ("notepad++.exe -multiInst  -nosession", ("notepad++.exe", "-multiInst  -nosession")),
    ('"C:\\Program Files\\Code\\code.exe" --wait', ("C:\\Program Files\\Code\\code.exe", "--wait")),
    ('"C:\\x\\edit.exe"', ("C:\\x\\edit.exe", "")),
    ('"unterminated --wait', ("unterminated", "--wait")),
    ("", ("", "")),
])
def test_split_command(resolver, command, expected):
    assert resolver.split_command(command) == expected


def test_bare_candidate_first(resolver, tmp_path):
    (tmp_path / "edit").write_text("")
    (tmp_path / "edit.CMD").write_text("")

    assert resolver.find_executable(str(tmp_path / "edit")) == os.path.realpath(tmp_path / "edit")


def test_cmd_before_exe(resolver, tmp_path):
    (tmp_path / "edit.CMD").write_text("")
    (tmp_path / "edit.EXE").write_text("")

    assert resolver.find_executable(str(tmp_path / "edit")) == os.path.realpath(tmp_path / "edit.CMD")


def test_symlink_resolved(resolver, tmp_path):
    target = tmp_path / "real.EXE"
    target.write_text("")
    link = tmp_path / "link.EXE"
    try:
        link.symlink_to(target)
    except (OSError, NotImplementedError):
        pytest.skip("symlinks not available")

    assert resolver.find_executable(str(tmp_path / "link")) == os.path.realpath(target)


def test_bare_name_not_looked_up_on_path(resolver, monkeypatch, tmp_path):
    installed = tmp_path / "bin" / "notepad.EXE"
    installed.parent.mkdir()
    installed.write_text("")
    monkeypatch.setenv("PATH", str(installed.parent))
    monkeypatch.chdir(tmp_path)

    assert resolver.find_executable("notepad") is None
    assert resolver.resolve("notepad -multi") == "notepad -multi"


def test_bare_name_found_in_working_directory(resolver, monkeypatch, tmp_path):
    (tmp_path / "notepad.EXE").write_text("")
    monkeypatch.chdir(tmp_path)

    assert resolver.find_executable("notepad") == os.path.realpath(tmp_path / "notepad.EXE")


def test_resolve_translates_executable_and_keeps_arguments(resolver, monkeypatch):
    monkeypatch.setattr(resolver, 'find_executable',
                        lambda executable: "C:\\Program Files\\Code\\bin\\code.CMD")

    result = resolver.resolve('"C:\\Program Files\\Code\\bin\\code" --wait --new-window')

    assert result == "/mnt/c/Program\\ Files/Code/bin/code.CMD --wait --new-window"


def test_resolve_without_arguments(resolver, monkeypatch):
    monkeypatch.setattr(resolver, 'find_executable', lambda executable: "D:\\tools\\vi.EXE")

    assert resolver.resolve("vi") == "/mnt/d/tools/vi.EXE"


def test_missing_editor_passes_through(resolver):
    command = "no-such-editor-3f9c --wait"
    assert resolver.resolve(command) == command
    assert resolver.resolve_executable("no-such-editor-3f9c") is None
