"""
Path Codec - Windows ⇄ WSL mount path translation

ARCHITECTURE:
Pure translation layer, no process spawning, no config loading.
Everything it needs (mount root, drive table, decode body pattern) comes from the
BridgeConfig passed at construction.

Position in hierarchy:
    WslGitBridge
       ↓
    ├── ArgumentRewriter ──→ PathCodec.to_unix()      (arguments, argv[0])
    ├── EditorPathResolver ─→ PathCodec.to_unix()     (GIT_EDITOR executable)
    └── OutputRewriter ────→ PathCodec.to_windows_bytes()  (git stdout)

TRANSLATIONS:
    to_unix (Windows → WSL, one path):
        d:\\test\\file.txt          → /mnt/d/test/file.txt
        C:\\Users\\test\\a space.txt → /mnt/c/Users/test/a\\ space.txt
        .\\src\\main.rs             → ./src/main.rs    (only if it exists)
        HEAD~1                     → HEAD~1           (not a path, unchanged)

    to_windows (WSL → Windows, any text, every occurrence):
        origin  /mnt/c/path/ (fetch) → origin  c:/path/ (fetch)
        /mnt/other/file.sh           → /mnt/other/file.sh (no drive letter)

KNOWN LIMITATION:
The decode body is \\S* by default, so a mount path is only matched up to its
first whitespace. "/mnt/d/some path/x" becomes "d:/some path/x" because the
tail passes through verbatim, but two paths separated by a space inside one
path cannot be told apart. The pattern is BridgeConfig.path_body_pattern.
"""
import logging
import os
import re
from dataclasses import dataclass
from pathlib import PureWindowsPath
from typing import List, Optional, Union

from .config import BridgeConfig
from .constants import SAFE_PATH_CHARS
from .errors import UnsupportedPathError

# "C:" or verbatim "\\?\C:"
_DRIVE_RE = re.compile(r'^(?:\\\\\?\\)?(?P<drive>[A-Za-z]):')
# UNC shares and device namespaces: \\server\share, //server/share, \\.\PIPE
_UNSUPPORTED_PREFIX_RE = re.compile(r'^[\\/]{2}')
_SEPARATOR_RE = re.compile(r'[\\/]+')
_ESCAPE_RE = re.compile(f'[^{SAFE_PATH_CHARS}]')

# Text passed through to_windows() must survive bytes round trip unchanged
_TEXT_ENCODING = 'utf-8'
_TEXT_ERRORS = 'surrogateescape'


# ========== PATH COMPONENTS ==========

@dataclass(frozen=True)
class DrivePrefix:
    letter: str


@dataclass(frozen=True)
class RootMarker:
    pass


@dataclass(frozen=True)
class NamedSegment:
    text: str


PathComponent = Union[DrivePrefix, RootMarker, NamedSegment]


class PathCodec:
    """
    Bidirectional Windows ⇄ WSL mount path translator.

    Stateless after construction: compiled decode regex and config are read-only,
    one instance serves the whole invocation.
    """

    def __init__(self, config: BridgeConfig = None, logger: logging.Logger = None):
        self.config = config or BridgeConfig()
        self.logger = logger or logging.getLogger('PathCodec')

        # mount point → drive letter, only for mounts the default pattern cannot see
        self._mounted_drives = {}
        for letter, mount_point in self.config.drive_mounts.items():
            mount_point = mount_point.rstrip('/')
            if mount_point and mount_point != f"{self.config.mount_root}/{letter}":
                self._mounted_drives[mount_point.encode(_TEXT_ENCODING)] = letter.encode('ascii')

        self._mount_path_re = self._build_mount_path_regex()

    def _build_mount_path_regex(self) -> 're.Pattern':
        root = re.escape(self.config.mount_root.encode(_TEXT_ENCODING))
        body = self.config.path_body_pattern.encode(_TEXT_ENCODING)
        default_form = root + rb'/(?P<drive>[A-Za-z])'

        if self._mounted_drives:
            # Longest first so /mnt/data wins over /mnt/d
            alternatives = b'|'.join(
                re.escape(mount) for mount in sorted(self._mounted_drives, key=len, reverse=True)
            )
            head = rb'(?:(?P<mounted>' + alternatives + rb')|' + default_form + rb')'
        else:
            head = default_form

        return re.compile(head + rb'(?P<path>/' + body + rb')', re.MULTILINE)

    # ========== WINDOWS → UNIX ==========

    def looks_like_windows_path(self, path: str) -> bool:
        """
        True if path is an absolute Windows path or names an existing entry.

        Plain git flags and revision specs (-v, HEAD~2, origin/main) fail both
        checks and are never translated.
        """
        if not path:
            return False
        if PureWindowsPath(path).is_absolute():
            return True
        # Relative paths use \ on the Windows side, check the / form as well
        return os.path.exists(path) or os.path.exists(path.replace('\\', '/'))

    def split_components(self, path: str) -> List[PathComponent]:
        """
        Decompose a Windows path left to right.

        DrivePrefix (if any) → RootMarker (if any) → NamedSegments.
        Repeated separators collapse, "." segments are dropped except a leading
        "." of a plain relative path, ".." is kept.

        Raises:
            UnsupportedPathError: UNC or device prefix
        """
        components: List[PathComponent] = []
        rest = path

        drive_match = _DRIVE_RE.match(path)
        if drive_match:
            components.append(DrivePrefix(drive_match.group('drive')))
            rest = path[drive_match.end():]
        elif _UNSUPPORTED_PREFIX_RE.match(path):
            raise UnsupportedPathError(path)

        if rest[:1] in ('\\', '/'):
            components.append(RootMarker())

        keep_leading_dot = not components
        for index, segment in enumerate(s for s in _SEPARATOR_RE.split(rest) if s):
            if segment == '.' and not (index == 0 and keep_leading_dot):
                continue
            components.append(NamedSegment(segment))

        return components

    def escape_segment(self, segment: str) -> str:
        """Backslash-escape every character outside the safe set ("a b" → "a\\ b")"""
        return _ESCAPE_RE.sub(lambda m: '\\' + m.group(0), segment)

    def to_unix(self, windows_path: str) -> str:
        """
        Translate one Windows path → WSL mount path.

        Input that does not look like a Windows path is returned unchanged.

        Raises:
            UnsupportedPathError: absolute path with a UNC/device prefix
        """
        if not self.looks_like_windows_path(windows_path):
            return windows_path

        parts = []
        has_drive = False
        for component in self.split_components(windows_path):
            if isinstance(component, DrivePrefix):
                has_drive = True
                parts.append(self.config.mount_point_for(component.letter))
            elif isinstance(component, RootMarker):
                # mount point already supplies the leading separator
                continue
            else:
                parts.append(self.escape_segment(component.text))

        unix_path = '/'.join(parts)
        if has_drive and not unix_path:
            # drive mounted at the filesystem root
            unix_path = '/'
        self.logger.debug(f"to_unix: {windows_path!r} → {unix_path!r}")
        return unix_path

    # ========== UNIX → WINDOWS ==========

    def _replace_mount_path(self, match: 're.Match') -> bytes:
        mounted = match.group('mounted') if self._mounted_drives else None
        if mounted is not None:
            drive = self._mounted_drives[mounted]
        else:
            drive = match.group('drive')
        return drive + b':' + match.group('path')

    def to_windows_bytes(self, data: bytes) -> bytes:
        """
        Rewrite every mount path occurrence in raw bytes.

        Bytes outside matches are copied as-is, whatever their encoding.
        """
        return self._mount_path_re.sub(self._replace_mount_path, data)

    def to_windows(self, text: Optional[str]) -> Optional[str]:
        """
        Rewrite every mount path occurrence in text (single argument or whole buffer).

        /mnt/c/path/ → c:/path/, letter case kept as captured.
        """
        if not text:
            return text
        raw = text.encode(_TEXT_ENCODING, _TEXT_ERRORS)
        return self.to_windows_bytes(raw).decode(_TEXT_ENCODING, _TEXT_ERRORS)
