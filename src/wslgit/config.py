"""
Bridge configuration

ARCHITECTURE:
- Immutable value object built ONCE at process start (BridgeConfig.from_environment)
- Passed into every component at construction (no module-level lazy globals)
- Torn down with the process; each git invocation is a fresh process

RESPONSIBILITIES:
- Locate the per-user config folder (%LOCALAPPDATA%\\wslgit-for-jetbrains)
- Load the drive → mount point table (mapping.txt) if present
- Carry translation knobs (mount root, decode body pattern, undecodable line policy)

NOT RESPONSIBLE FOR:
- Generating mapping.txt (done by WslGitBridge via ExecutionEngine + drive_mapping)
- Path translation (done by PathCodec)

USAGE PATTERN:
    config = BridgeConfig.from_environment()
    codec = PathCodec(config)
    config.mount_point_for('D')   # '/mnt/d' unless mapping.txt says otherwise
"""
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional

from .constants import (
    CONFIG_DIR_ENV,
    CONFIG_FOLDER,
    DEFAULT_MOUNT_ROOT,
    LOCALAPPDATA_ENV,
    MAPPING_FILENAME,
)
from .drive_mapping import load_drive_mapping
from .errors import ConfigurationError


def get_config_dir(environ: Mapping[str, str] = None) -> Path:
    """
    Return the config folder.

    WSLGIT_CONFIG_DIR wins, otherwise %LOCALAPPDATA%\\wslgit-for-jetbrains.

    Raises:
        ConfigurationError: neither variable is set
    """
    environ = os.environ if environ is None else environ
    override = environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override)
    appdata = environ.get(LOCALAPPDATA_ENV)
    if not appdata:
        raise ConfigurationError(
            f"Cannot compute config path: neither {CONFIG_DIR_ENV} nor {LOCALAPPDATA_ENV} is set"
        )
    return Path(appdata) / CONFIG_FOLDER


@dataclass(frozen=True)
class BridgeConfig:
    """
    Read-only translation configuration.

    drive_mounts is wrapped in a MappingProxyType so the table cannot be
    mutated after construction, even through the original dict.
    """

    mount_root: str = DEFAULT_MOUNT_ROOT
    drive_mounts: Mapping[str, str] = field(default_factory=dict)

    # Regex for the path body after <mount_root>/<letter>. Default \S* stops at
    # the first whitespace: "/mnt/c/a b" decodes to "c:/a b" only because the
    # unmatched " b" passes through untouched.
    path_body_pattern: str = r'\S*'

    drop_undecodable_lines: bool = True
    config_dir: Optional[Path] = None

    def __post_init__(self):
        normalized = {letter.lower(): mount for letter, mount in self.drive_mounts.items()}
        object.__setattr__(self, 'drive_mounts', MappingProxyType(normalized))
        object.__setattr__(self, 'mount_root', self.mount_root.rstrip('/'))

    @property
    def mapping_path(self) -> Optional[Path]:
        if self.config_dir is None:
            return None
        return self.config_dir / MAPPING_FILENAME

    def mount_point_for(self, drive_letter: str) -> str:
        """Mount point for a drive letter (case-insensitive), e.g. 'D' → '/mnt/d'"""
        letter = drive_letter.lower()
        mapped = self.drive_mounts.get(letter)
        if mapped:
            # "/" mapped drive → "" so that joining with "/" gives "/dir/file"
            return mapped.rstrip('/')
        return f"{self.mount_root}/{letter}"

    @classmethod
    def from_environment(cls, environ: Mapping[str, str] = None,
                         logger: logging.Logger = None) -> 'BridgeConfig':
        """
        Build the process-wide configuration.

        Raises:
            ConfigurationError: config folder cannot be determined or
                mapping.txt cannot be read
        """
        logger = logger or logging.getLogger('BridgeConfig')
        config_dir = get_config_dir(environ)
        drive_mounts = load_drive_mapping(config_dir / MAPPING_FILENAME, logger=logger)
        logger.debug(f"Config dir: {config_dir} ({len(drive_mounts)} mapped drives)")
        return cls(drive_mounts=drive_mounts, config_dir=config_dir)
