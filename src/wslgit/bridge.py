"""
WSL git bridge - Main orchestrator (thin layer)

ARCHITECTURE:
TOP-LEVEL ENTRY POINT after main(). Thin dispatcher delegating all real work.

Position in hierarchy:
    main()
       ↓
    WslGitBridge (this class) ← ORCHESTRATOR
       ↓
    ├── ArgumentRewriter ← Windows → WSL argument translation
    ├── CommandPolicy ← which output transform is needed
    ├── EditorPathResolver ← GIT_EDITOR rewrite
    ├── OutputRewriter ← WSL → Windows output translation
    └── ExecutionEngine ← subprocess spawning, exit code

DISPATCH (first argument):
    win-show-mapping      → print mapping.txt
    win-generate-mapping  → rebuild mapping.txt from `wsl mount`
    win-cmd ARGS...       → cmd /c ARGS (mount paths → Windows), editor callback
    anything else         → wsl git ARGS (Windows paths → mount paths)

DATA FLOW (git):
    run(args) →
        1. CommandPolicy.select(args) → OutputBehavior
        2. ArgumentRewriter.translate_arguments(args)
        3. build_environment() → GIT_* shared via WSLENV, GIT_EDITOR rewritten
        4. ExecutionEngine.run(wsl git ..., output_rewriter) → exit code
"""
import logging
import os
import sys
from typing import BinaryIO, Dict, Mapping, Sequence, TextIO

from .argument_rewriter import ArgumentRewriter
from .command_policy import CommandPolicy
from .config import BridgeConfig
from .constants import (
    GIT_EDITOR_ENV,
    GIT_ENV_PREFIX,
    WIN_CMD,
    WIN_GENERATE_MAPPING,
    WIN_SHOW_MAPPING,
    WSLENV_ENV,
    WSLENV_FLAG,
)
from .drive_mapping import parse_mount_output, write_drive_mapping
from .editor_resolver import EditorPathResolver
from .errors import ConfigurationError
from .execution_engine import ExecutionEngine
from .output_rewriter import OutputRewriter
from .path_codec import PathCodec


class WslGitBridge:
    """
    Runs one bridge invocation.

    Every collaborator is built from the single BridgeConfig given at
    construction; nothing is shared between invocations.
    """

    def __init__(self, config: BridgeConfig,
                 engine: ExecutionEngine = None,
                 environ: Mapping[str, str] = None,
                 stdout: TextIO = None,
                 stdout_buffer: BinaryIO = None,
                 logger: logging.Logger = None):
        self.config = config
        self.environ = os.environ if environ is None else environ
        self.stdout = stdout
        self.stdout_buffer = stdout_buffer
        self.logger = logger or logging.getLogger('WslGitBridge')

        self.codec = PathCodec(config)
        self.editor_resolver = EditorPathResolver(self.codec)
        self.argument_rewriter = ArgumentRewriter(self.codec, self.editor_resolver)
        self.command_policy = CommandPolicy()
        self.engine = engine or ExecutionEngine()

    def _print(self, text: str) -> None:
        print(text, file=self.stdout if self.stdout is not None else sys.stdout)

    def run(self, arguments: Sequence[str], program: str = '') -> int:
        """
        Dispatch on the first argument and return the exit code.

        Args:
            arguments: argv[1:]
            program: argv[0], needed to re-enter the bridge from GIT_EDITOR
        """
        first = arguments[0] if arguments else ''

        if first == WIN_SHOW_MAPPING:
            return self.show_mapping()
        if first == WIN_GENERATE_MAPPING:
            return self.generate_mapping()
        if first == WIN_CMD:
            return self.run_windows_command(arguments[1:])
        return self.run_git(arguments, program)

    # ========== GIT ==========

    def run_git(self, arguments: Sequence[str], program: str) -> int:
        behavior = self.command_policy.select(arguments)
        git_arguments = self.argument_rewriter.translate_arguments(arguments)
        env = self.build_environment(program)

        output_rewriter = None
        if behavior.captures_output:
            output_rewriter = OutputRewriter(self.codec, behavior, self.config)

        self.logger.info(f"git {' '.join(git_arguments)} [{behavior.value}]")
        return self.engine.run(
            self.engine.git_command(git_arguments),
            env=env,
            output_rewriter=output_rewriter,
            stdout_sink=self.stdout_buffer,
        )

    def build_environment(self, program: str) -> Dict[str, str]:
        """
        Child environment: parent environment plus GIT_* shared into WSL.

        GIT_EDITOR becomes "<bridge mount path> win-cmd <editor mount path> [args]"
        so that WSL git calls back into this bridge to launch the Windows editor.
        """
        env = dict(self.environ)
        shared = []

        for key, value in self.environ.items():
            if not key.startswith(GIT_ENV_PREFIX):
                continue
            if key == GIT_EDITOR_ENV:
                bridge_command = self.argument_rewriter.translate_program_path(program)
                env[key] = f"{bridge_command} {WIN_CMD} {self.editor_resolver.resolve(value)}"
                self.logger.debug(f"{GIT_EDITOR_ENV}: {value!r} → {env[key]!r}")
            shared.append(key)

        if shared:
            # Entries we add replace any existing flag for the same name
            existing = [
                entry for entry in env.get(WSLENV_ENV, '').split(':')
                if entry and entry.split('/', 1)[0] not in shared
            ]
            env[WSLENV_ENV] = ':'.join(existing + [f"{key}{WSLENV_FLAG}" for key in shared])

        return env

    # ========== WINDOWS COMMAND (editor callback) ==========

    def run_windows_command(self, arguments: Sequence[str]) -> int:
        windows_arguments = self.argument_rewriter.translate_windows_arguments(arguments)
        self.logger.info(f"cmd /c {' '.join(windows_arguments)}")
        return self.engine.run(self.engine.cmd_command(windows_arguments))

    # ========== MAPPING MAINTENANCE ==========

    def _require_mapping_path(self):
        mapping_path = self.config.mapping_path
        if mapping_path is None:
            raise ConfigurationError("Cannot generate config path: no config folder configured")
        return mapping_path

    def show_mapping(self) -> int:
        mapping_path = self._require_mapping_path()
        if not mapping_path.exists():
            self._print(f"{mapping_path} not found")
            return 0

        self._print(str(mapping_path))
        for drive, mount_point in sorted(self.config.drive_mounts.items()):
            self._print(f"{drive} <-> {mount_point}")
        return 0

    def generate_mapping(self) -> int:
        mapping_path = self._require_mapping_path()
        lines = self.engine.capture_lines(self.engine.mount_command())
        entries = parse_mount_output(lines)

        write_drive_mapping(mapping_path, entries)
        self._print(str(mapping_path))
        for drive, mount_point in entries:
            self._print(f"{drive} <-> {mount_point}")
        return 0
