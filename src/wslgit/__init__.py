"""
wslgit - run WSL git from Windows IDEs

Main components:
- WslGitBridge: Main orchestrator
- PathCodec: Windows ⇄ WSL mount path translation
- ArgumentRewriter: Which arguments get translated
- CommandPolicy: Which git output gets translated back
- OutputRewriter: Streaming stdout transform
- EditorPathResolver: GIT_EDITOR executable lookup
- ExecutionEngine: Subprocess management
"""

from .argument_rewriter import ArgumentRewriter
from .bridge import WslGitBridge
from .command_policy import CommandPolicy, OutputBehavior
from .config import BridgeConfig
from .constants import BRIDGE_VERSION as __version__
from .editor_resolver import EditorPathResolver
from .errors import BridgeError, ChildIOError, ConfigurationError, SpawnError, UnsupportedPathError
from .execution_engine import ExecutionEngine
from .output_rewriter import OutputRewriter
from .path_codec import PathCodec

__all__ = [
    'WslGitBridge',
    'PathCodec',
    'ArgumentRewriter',
    'CommandPolicy',
    'OutputBehavior',
    'OutputRewriter',
    'EditorPathResolver',
    'ExecutionEngine',
    'BridgeConfig',
    'BridgeError',
    'ChildIOError',
    'ConfigurationError',
    'SpawnError',
    'UnsupportedPathError',
]
