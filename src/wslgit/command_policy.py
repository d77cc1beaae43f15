"""
Command policy - which output transform a git invocation needs

ARCHITECTURE:
- Closed set of behaviors (OutputBehavior enum), chosen ONCE per invocation
- Consulted by WslGitBridge, result handed to ExecutionEngine/OutputRewriter

TABLE:
    rev-parse, remote  → PATH_DECODE     (output carries /mnt/<d>/ paths)
    version, --version → VERSION_APPEND  (IDE shows which bridge answered)
    anything else      → PASSTHROUGH     (stdout inherited, never buffered)

PRECEDENCE:
Any argument position counts. If both sets match (`git remote --version`),
VERSION_APPEND wins.
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Sequence

from .constants import TRANSLATED_COMMANDS, VERSION_COMMANDS


class OutputBehavior(Enum):
    PASSTHROUGH = 'passthrough'
    PATH_DECODE = 'path_decode'
    VERSION_APPEND = 'version_append'

    @property
    def captures_output(self) -> bool:
        return self is not OutputBehavior.PASSTHROUGH


@dataclass(frozen=True)
class TranslationRule:
    """Command names that select one behavior"""
    behavior: OutputBehavior
    commands: FrozenSet[str]

    def matches(self, arguments: Sequence[str]) -> bool:
        return any(arg in self.commands for arg in arguments)


class CommandPolicy:

    # Checked in order, first match wins
    DEFAULT_RULES = (
        TranslationRule(OutputBehavior.VERSION_APPEND, VERSION_COMMANDS),
        TranslationRule(OutputBehavior.PATH_DECODE, TRANSLATED_COMMANDS),
    )

    def __init__(self, rules: Sequence[TranslationRule] = None, logger: logging.Logger = None):
        self.rules = tuple(rules) if rules is not None else self.DEFAULT_RULES
        self.logger = logger or logging.getLogger('CommandPolicy')

    def select(self, arguments: Sequence[str]) -> OutputBehavior:
        for rule in self.rules:
            if rule.matches(arguments):
                self.logger.debug(f"Output behavior: {rule.behavior.value}")
                return rule.behavior
        return OutputBehavior.PASSTHROUGH
