#!/usr/bin/env python3
"""
Test BridgeConfig and the mapping.txt helpers

TESTS:
- Config folder resolution (WSLGIT_CONFIG_DIR, LOCALAPPDATA, neither)
- mapping.txt load / write, `wsl mount` parsing
- Immutability after construction
"""
import dataclasses
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / 'src'))

from wslgit.config import BridgeConfig, get_config_dir
from wslgit.drive_mapping import load_drive_mapping, parse_mount_output, write_drive_mapping
from wslgit.errors import ConfigurationError

MOUNT_OUTPUT = [
    "none on /mnt/wsl type tmpfs (rw,relatime)",
    "drivers on /usr/lib/wsl/drivers type 9p (ro,nosuid,nodev,noatime,dirsync,aname=drivers;fmask=222)",
    "C:\\ on /mnt/c type 9p (rw,noatime,dirsync,aname=drvfs;path=C:\\;uid=1000;gid=1000)",
    "C: on /mnt/c type 9p (rw,noatime,dirsync,aname=drvfs;path=C:\\;uid=1000;gid=1000)",
    "D: on /media/data type 9p (rw,noatime,dirsync,aname=drvfs;path=D:\\)",
    "",
]


# ============================================================================
# CONFIG FOLDER
# ============================================================================

def test_override_wins(tmp_path):
    environ = {'WSLGIT_CONFIG_DIR': str(tmp_path), 'LOCALAPPDATA': 'C:\\Users\\me\\AppData\\Local'}
    assert get_config_dir(environ) == tmp_path


def test_localappdata(tmp_path):
    assert get_config_dir({'LOCALAPPDATA': str(tmp_path)}) == tmp_path / 'wslgit-for-jetbrains'


def test_no_config_folder_is_fatal():
    with pytest.raises(ConfigurationError):
        get_config_dir({})


def test_from_environment_without_mapping(tmp_path):
    config = BridgeConfig.from_environment({'WSLGIT_CONFIG_DIR': str(tmp_path)})

    assert config.config_dir == tmp_path
    assert config.mapping_path == tmp_path / 'mapping.txt'
    assert dict(config.drive_mounts) == {}
    assert config.mount_point_for('C') == '/mnt/c'


def test_from_environment_with_mapping(tmp_path):
    (tmp_path / 'mapping.txt').write_text("c /mnt/c\nd /media/data\n")

    config = BridgeConfig.from_environment({'WSLGIT_CONFIG_DIR': str(tmp_path)})

    assert config.mount_point_for('D') == '/media/data'
    assert config.mount_point_for('e') == '/mnt/e'


# ============================================================================
# VALUE OBJECT
# ============================================================================

def test_drive_keys_normalized_and_read_only():
    source = {'D': '/data/'}
    config = BridgeConfig(drive_mounts=source)
    source['E'] = '/other'

    assert dict(config.drive_mounts) == {'d': '/data/'}
    assert config.mount_point_for('d') == '/data'
    with pytest.raises(TypeError):
        config.drive_mounts['x'] = '/x'


def test_frozen():
    config = BridgeConfig()
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.mount_root = '/win'


def test_mount_root_trailing_slash_stripped():
    assert BridgeConfig(mount_root='/win/').mount_point_for('C') == '/win/c'


def test_no_config_dir_means_no_mapping_path():
    assert BridgeConfig().mapping_path is None


# ============================================================================
# MAPPING FILE
# ============================================================================

def test_parse_mount_output():
    assert parse_mount_output(MOUNT_OUTPUT) == [('c', '/mnt/c'), ('d', '/media/data')]


def test_write_then_load(tmp_path):
    mapping_path = tmp_path / 'nested' / 'mapping.txt'

    write_drive_mapping(mapping_path, [('c', '/mnt/c'), ('d', '/media/data')])

    assert mapping_path.read_text() == "c /mnt/c\nd /media/data\n"
    assert load_drive_mapping(mapping_path) == {'c': '/mnt/c', 'd': '/media/data'}


def test_load_skips_malformed_lines(tmp_path):
    mapping_path = tmp_path / 'mapping.txt'
    mapping_path.write_text("c /mnt/c\nbroken\n\nD /media/with space\n")

    assert load_drive_mapping(mapping_path) == {'c': '/mnt/c', 'd': '/media/with space'}


def test_load_missing_file(tmp_path):
    assert load_drive_mapping(tmp_path / 'mapping.txt') == {}


def test_unreadable_mapping_is_fatal(tmp_path):
    # a directory where the file should be
    (tmp_path / 'mapping.txt').mkdir()
    with pytest.raises(ConfigurationError):
        load_drive_mapping(tmp_path / 'mapping.txt')
