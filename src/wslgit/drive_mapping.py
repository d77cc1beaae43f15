"""
Drive → mount point mapping file

FORMAT (mapping.txt, one line per drive):
    c /mnt/c
    d /mnt/data

The file is produced by `wslgit win-generate-mapping`, which parses the output
of `wsl mount`:
    C: on /mnt/c type 9p (rw,noatime,dirsync,aname=drvfs;path=C:\\;...)
    D: on /mnt/data type 9p (...)

Missing file = no table, PathCodec falls back to <mount_root>/<letter>.
"""
import logging
import re
from pathlib import Path
from typing import Dict, Iterable, List, Tuple

from .errors import ConfigurationError

DRIVE_MAPPING_RE = re.compile(r'^(?P<drive>[a-zA-Z]):\s+on\s+(?P<path>\S+)')

_logger = logging.getLogger('DriveMapping')


def load_drive_mapping(mapping_path: Path, logger: logging.Logger = None) -> Dict[str, str]:
    """
    Read mapping.txt into {drive_letter: mount_point}.

    Lines without a space separator are skipped with a warning.
    Returns an empty dict when the file does not exist.

    Raises:
        ConfigurationError: file exists but cannot be read
    """
    logger = logger or _logger
    mapping = {}
    if not mapping_path.exists():
        logger.debug(f"No mapping file at {mapping_path}, using default mount points")
        return mapping

    try:
        with open(mapping_path, 'r', encoding='utf-8', errors='replace') as f:
            lines = f.read().splitlines()
    except OSError as e:
        raise ConfigurationError(f"Cannot open config file {mapping_path}: {e}") from e

    for line_no, line in enumerate(lines, 1):
        if not line.strip():
            continue
        parts = line.split(' ', 1)
        if len(parts) != 2 or not parts[1]:
            logger.warning(f"{mapping_path}:{line_no}: malformed mapping line skipped: {line!r}")
            continue
        drive, mount_point = parts
        mapping[drive.lower()] = mount_point

    logger.debug(f"Loaded {len(mapping)} drive mapping(s) from {mapping_path}")
    return mapping


def parse_mount_output(lines: Iterable[str]) -> List[Tuple[str, str]]:
    """Extract (lowercase drive, mount point) pairs from `mount` output lines"""
    entries = []
    for line in lines:
        match = DRIVE_MAPPING_RE.match(line)
        if match:
            entries.append((match.group('drive').lower(), match.group('path')))
    return entries


def write_drive_mapping(mapping_path: Path, entries: Iterable[Tuple[str, str]]) -> None:
    """
    Write mapping.txt, creating the config folder if needed.

    Raises:
        ConfigurationError: folder or file cannot be created
    """
    try:
        mapping_path.parent.mkdir(parents=True, exist_ok=True)
        with open(mapping_path, 'w', encoding='utf-8', newline='\n') as f:
            for drive, mount_point in entries:
                f.write(f"{drive} {mount_point}\n")
    except OSError as e:
        raise ConfigurationError(f"Cannot create config file {mapping_path}: {e}") from e
