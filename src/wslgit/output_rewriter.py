"""
Output rewriter - transforms git stdout on its way to the IDE

DATA FLOW (blocking loop, one line at a time as git produces it):
    child.stdout.readline() → transform_line() → sink.write() → sink.flush()

Works on bytes: line terminators ("\\n" or "\\r\\n") and every byte outside a
rewritten mount path are forwarded untouched.

UNDECODABLE LINES:
With drop_undecodable_lines (default), a line that is not valid UTF-8 is
dropped instead of aborting the stream.
"""
import logging
from typing import BinaryIO

from .command_policy import OutputBehavior
from .config import BridgeConfig
from .constants import BRIDGE_NAME, BRIDGE_VERSION
from .path_codec import PathCodec


def version_suffix() -> str:
    return f" {BRIDGE_NAME}.{BRIDGE_VERSION}"


class OutputRewriter:

    def __init__(self, codec: PathCodec, behavior: OutputBehavior,
                 config: BridgeConfig = None, logger: logging.Logger = None):
        self.codec = codec
        self.behavior = behavior
        self.config = config or codec.config
        self.logger = logger or logging.getLogger('OutputRewriter')
        self.suffix = version_suffix().encode('utf-8')

    @staticmethod
    def _split_terminator(line: bytes):
        if line.endswith(b'\r\n'):
            return line[:-2], b'\r\n'
        if line.endswith(b'\n'):
            return line[:-1], b'\n'
        return line, b''

    def transform_line(self, line: bytes, line_index: int = 0) -> bytes:
        """Apply the selected behavior to one raw line (terminator included)"""
        if self.behavior is OutputBehavior.PATH_DECODE:
            return self.codec.to_windows_bytes(line)
        if self.behavior is OutputBehavior.VERSION_APPEND and line_index == 0:
            content, terminator = self._split_terminator(line)
            return content + self.suffix + terminator
        return line

    def _is_decodable(self, line: bytes) -> bool:
        try:
            line.decode('utf-8')
        except UnicodeDecodeError:
            return False
        return True

    def stream(self, source: BinaryIO, sink: BinaryIO) -> int:
        """
        Copy source → sink line by line, transformed.

        Returns:
            Number of lines written
        """
        written = 0
        dropped = 0
        for line in iter(source.readline, b''):
            if self.config.drop_undecodable_lines and not self._is_decodable(line):
                dropped += 1
                self.logger.debug(f"Dropped undecodable output line: {line[:80]!r}")
                continue
            sink.write(self.transform_line(line, written))
            sink.flush()
            written += 1

        if dropped:
            self.logger.info(f"{dropped} undecodable line(s) dropped from git output")
        return written
