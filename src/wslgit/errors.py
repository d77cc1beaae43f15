"""
Error taxonomy for the WSL git bridge

All errors derive from BridgeError. Components raise them, only the entry point
(main.py) catches them and turns them into a diagnostic plus non-zero exit.

Soft failures (editor not found, malformed mapping line, undecodable output line)
are NOT exceptions: they are logged and skipped where they happen.
"""


class BridgeError(Exception):
    """Base class for fatal bridge errors"""


class ConfigurationError(BridgeError):
    """Configuration directory or mapping file cannot be used"""


class UnsupportedPathError(BridgeError):
    """Path prefix that has no mount point form (UNC shares, device paths)"""

    def __init__(self, path: str):
        super().__init__(f"Cannot handle path {path!r}")
        self.path = path


class SpawnError(BridgeError):
    """Child process could not be started"""

    def __init__(self, command, cause: Exception = None):
        command_str = ' '.join(command)
        message = f"Failed to execute command '{command_str}'"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.command = list(command)
        self.cause = cause


class ChildIOError(BridgeError):
    """Forwarding the child's output failed (IDE closed the pipe, sink error)"""

    def __init__(self, command, cause: Exception):
        command_str = ' '.join(command)
        super().__init__(f"Lost output of command '{command_str}': {cause}")
        self.command = list(command)
        self.cause = cause
