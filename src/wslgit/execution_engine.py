"""
Execution Engine - Single point for all subprocess operations

ARCHITECTURE:
ALL subprocess calls of the bridge go through this class (no direct
subprocess.Popen() elsewhere), so tests patch ONE place.

Position in hierarchy:
    WslGitBridge
       ↓
    ExecutionEngine ← THIS CLASS
       ↓
    subprocess.Popen()

RESPONSIBILITIES:
1. Build command lines: wsl git ..., cmd /c ..., wsl mount
2. Spawn with inherited stdin/stderr; stdout inherited OR piped through an
   OutputRewriter (blocking read → transform → write loop)
3. Exit code propagation (signal termination never reported as success)
4. Spawn failures → SpawnError, output forwarding failures → ChildIOError
   (child killed and waited on)

NOT RESPONSIBLE FOR:
- Deciding which output transform applies (CommandPolicy)
- Path translation (PathCodec / ArgumentRewriter)
- Environment construction (WslGitBridge)

EXIT CODES:
    child exit code N            → N
    child killed by signal S     → 128 + S  (POSIX shell convention)
"""
import logging
import subprocess
import sys
from typing import BinaryIO, List, Mapping, Optional, Sequence

from .constants import CMD_EXECUTABLE, GIT_EXECUTABLE, WSL_EXECUTABLE
from .errors import ChildIOError, SpawnError
from .output_rewriter import OutputRewriter


class ExecutionEngine:

    def __init__(self, wsl_executable: str = WSL_EXECUTABLE,
                 cmd_executable: str = CMD_EXECUTABLE,
                 logger: logging.Logger = None):
        self.wsl_executable = wsl_executable
        self.cmd_executable = cmd_executable
        self.logger = logger or logging.getLogger('ExecutionEngine')

    # ========== COMMAND LINES ==========

    def git_command(self, arguments: Sequence[str]) -> List[str]:
        return [self.wsl_executable, GIT_EXECUTABLE, *arguments]

    def cmd_command(self, arguments: Sequence[str]) -> List[str]:
        return [self.cmd_executable, '/c', *arguments]

    def mount_command(self) -> List[str]:
        return [self.wsl_executable, 'mount']

    # ========== EXECUTION ==========

    @staticmethod
    def exit_code(returncode: int) -> int:
        """Map Popen.returncode to this process' exit code"""
        if returncode < 0:
            return 128 - returncode
        return returncode

    def _spawn(self, command: List[str], **kwargs) -> subprocess.Popen:
        self.logger.debug(f"Executing: {command}")
        try:
            return subprocess.Popen(command, **kwargs)
        except OSError as e:
            raise SpawnError(command, e) from e

    def run(self, command: List[str], env: Optional[Mapping[str, str]] = None,
            output_rewriter: Optional[OutputRewriter] = None,
            stdout_sink: Optional[BinaryIO] = None) -> int:
        """
        Run command to completion and return the exit code to propagate.

        Args:
            command: Full command line
            env: Child environment (None = inherit)
            output_rewriter: If set, stdout is piped through it, else inherited
            stdout_sink: Where rewritten output goes (default: sys.stdout.buffer)

        Raises:
            SpawnError: command could not be started
            ChildIOError: output could not be forwarded (child is killed)
        """
        process = self._spawn(
            command,
            stdout=subprocess.PIPE if output_rewriter is not None else None,
            env=dict(env) if env is not None else None,
        )

        try:
            if output_rewriter is not None:
                sink = stdout_sink if stdout_sink is not None else sys.stdout.buffer
                with process.stdout:
                    output_rewriter.stream(process.stdout, sink)
        except OSError as e:
            self.logger.debug(f"Output forwarding failed, killing child: {e}")
            process.kill()
            raise ChildIOError(command, e) from e
        finally:
            # child is always reaped, also when streaming failed
            returncode = process.wait()
        self.logger.debug(f"Command exited with {returncode}")
        return self.exit_code(returncode)

    def capture_lines(self, command: List[str]) -> List[str]:
        """
        Run command and return its stdout lines (stderr inherited).

        Raises:
            SpawnError: command could not be started
        """
        process = self._spawn(
            command,
            stdout=subprocess.PIPE,
            text=True,
            encoding='utf-8',
            errors='replace',
        )
        with process.stdout:
            lines = process.stdout.read().splitlines()

        returncode = process.wait()
        if returncode != 0:
            self.logger.warning(f"'{' '.join(command)}' exited with {returncode}")
        return lines
