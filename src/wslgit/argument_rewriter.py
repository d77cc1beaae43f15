"""
Argument rewriter - decides which command-line arguments get path translation

RULES:
- "--name=value": split on the FIRST "=", translate value only, keep "--name=" verbatim
- anything else: whole argument is a candidate
- PathCodec decides if a candidate is a path (absolute or existing), so flags
  and revision specs pass through unchanged

    --file=C:\\some\\path.txt → --file=/mnt/c/some/path.txt
    -m                       → -m
    D:\\repo                  → /mnt/d/repo
"""
import logging
from typing import List, Sequence, Tuple

from .editor_resolver import EditorPathResolver
from .path_codec import PathCodec


class ArgumentRewriter:

    def __init__(self, codec: PathCodec, editor_resolver: EditorPathResolver = None,
                 logger: logging.Logger = None):
        self.codec = codec
        self.editor_resolver = editor_resolver or EditorPathResolver(codec)
        self.logger = logger or logging.getLogger('ArgumentRewriter')

    @staticmethod
    def split_long_option(argument: str) -> Tuple[str, str]:
        """("--name=", "value") for long options with a value, ("", argument) otherwise"""
        if argument.startswith('--') and '=' in argument:
            name, value = argument.split('=', 1)
            return f"{name}=", value
        return '', argument

    def translate_argument(self, argument: str) -> str:
        prefix, value = self.split_long_option(argument)
        return prefix + self.codec.to_unix(value)

    def translate_arguments(self, arguments: Sequence[str]) -> List[str]:
        """Windows → WSL for every argument forwarded to git"""
        translated = [self.translate_argument(arg) for arg in arguments]
        self.logger.debug(f"git arguments: {list(arguments)} → {translated}")
        return translated

    def translate_program_path(self, program: str) -> str:
        """
        Mount path of this program (argv[0]), embedded later into GIT_EDITOR.

        Launchers may report argv[0] without ".exe", so the executable is looked
        up like an editor first; a plain translation is the fallback.
        """
        resolved = self.editor_resolver.resolve_executable(program)
        if resolved is not None:
            return resolved
        return self.codec.to_unix(program)

    def translate_windows_arguments(self, arguments: Sequence[str]) -> List[str]:
        """WSL → Windows for every argument of a win-cmd callback"""
        return [self.codec.to_windows(arg) for arg in arguments]
