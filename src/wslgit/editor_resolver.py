"""
Editor path resolver

WSL git runs GIT_EDITOR inside Linux, which calls back into this bridge in
`win-cmd` mode. For that callback to work the editor executable must be given
as a mount path, so the Windows editor command is resolved and translated here:

    "C:\\Program Files\\Code\\bin\\code" --wait
        → /mnt/c/Program\\ Files/Code/bin/code.CMD --wait

Resolution never fails hard: when no candidate exists the command is kept as is.
"""
import logging
import os
from typing import Optional, Tuple

from .constants import EXECUTABLE_EXTENSIONS
from .path_codec import PathCodec


class EditorPathResolver:
    """Locate the real Windows executable behind an editor command and translate it"""

    def __init__(self, codec: PathCodec, logger: logging.Logger = None):
        self.codec = codec
        self.logger = logger or logging.getLogger('EditorPathResolver')

    def split_command(self, command: str) -> Tuple[str, str]:
        """
        Split "<executable> <args...>" into (executable, args).

        One layer of double quotes around the executable is removed; a quoted
        executable may contain spaces.
        """
        command = command.strip()
        if command.startswith('"'):
            closing = command.find('"', 1)
            if closing != -1:
                return command[1:closing], command[closing + 1:].lstrip()
            parts = command[1:].split(None, 1)
        else:
            parts = command.split(None, 1)

        if not parts:
            return '', ''
        executable = parts[0]
        arguments = parts[1] if len(parts) > 1 else ''
        return executable, arguments

    def find_executable(self, executable: str) -> Optional[str]:
        """
        Return the absolute, symlink-resolved path of the executable, or None.

        Candidates, first existing wins: executable, executable.CMD,
        executable.EXE, each as a filesystem path (relative to the working
        directory). PATH is not searched.
        """
        if not executable:
            return None

        candidates = [executable + ext for ext in EXECUTABLE_EXTENSIONS]
        for candidate in candidates:
            if os.path.exists(candidate):
                self.logger.debug(f"Editor found: {candidate}")
                return os.path.realpath(candidate)

        return None

    def resolve_executable(self, executable: str) -> Optional[str]:
        """Translated mount path of the executable, None if it cannot be found"""
        found = self.find_executable(executable)
        if found is None:
            return None
        return self.codec.to_unix(found)

    def resolve(self, command: str) -> str:
        """
        Translate an editor command for use inside WSL.

        Returns:
            "<mount path of executable> <original arguments>", or the command
            unchanged when the executable cannot be located
        """
        executable, arguments = self.split_command(command)
        translated = self.resolve_executable(executable)
        if translated is None:
            self.logger.warning(f"Editor executable not found, passing through untranslated: {executable!r}")
            return command

        if arguments:
            return f"{translated} {arguments}"
        return translated
