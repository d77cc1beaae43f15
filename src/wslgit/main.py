"""
Main entry point for the wslgit CLI.

Configures logging (stderr only, stdout carries git output), loads the
configuration once, runs the bridge and turns fatal BridgeErrors into a
diagnostic plus exit status 1.
"""
import logging
import os
import sys

from .bridge import WslGitBridge
from .config import BridgeConfig
from .constants import LOG_LEVEL_ENV
from .errors import BridgeError

LOG_FORMAT = '%(levelname)-8s - %(name)-20s - %(message)s'


def configure_logging(environ=None) -> None:
    environ = os.environ if environ is None else environ
    level_name = environ.get(LOG_LEVEL_ENV, 'WARNING').upper()
    level = getattr(logging, level_name, None)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(stream=sys.stderr, level=level, format=LOG_FORMAT)


def main(argv=None) -> int:
    argv = sys.argv if argv is None else argv
    configure_logging()
    logger = logging.getLogger('wslgit')

    program = argv[0] if argv else ''
    try:
        config = BridgeConfig.from_environment()
        bridge = WslGitBridge(config)
        return bridge.run(list(argv[1:]), program)
    except BridgeError as e:
        logger.debug("Fatal error", exc_info=True)
        print(f"wslgit: error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130


def entry_point():
    """
    Invoked when the IDE runs 'wslgit'.
    """
    sys.exit(main())


if __name__ == "__main__":
    entry_point()
