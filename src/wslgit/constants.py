"""
Constants and configuration for the WSL git bridge
"""

BRIDGE_NAME = 'wslgit-for-jetbrains'
BRIDGE_VERSION = '0.4.0'

# ============================================================================
# CONFIGURATION LOCATION
# ============================================================================
# Mapping file lives in %LOCALAPPDATA%\wslgit-for-jetbrains\mapping.txt
# WSLGIT_CONFIG_DIR overrides the whole folder (used by tests and portable setups).

CONFIG_FOLDER = 'wslgit-for-jetbrains'
MAPPING_FILENAME = 'mapping.txt'
CONFIG_DIR_ENV = 'WSLGIT_CONFIG_DIR'
LOCALAPPDATA_ENV = 'LOCALAPPDATA'
LOG_LEVEL_ENV = 'WSLGIT_LOG_LEVEL'

DEFAULT_MOUNT_ROOT = '/mnt'

# ============================================================================
# RESERVED FIRST ARGUMENTS
# ============================================================================
# Anything else as first argument is forwarded to git.

WIN_CMD = 'win-cmd'                        # Run a Windows command (editor callback)
WIN_SHOW_MAPPING = 'win-show-mapping'      # Print mapping.txt content
WIN_GENERATE_MAPPING = 'win-generate-mapping'  # Rebuild mapping.txt from `wsl mount`

# ============================================================================
# OUTPUT TRANSLATION TABLE
# ============================================================================

# git commands printing paths that the IDE must read back as Windows paths
TRANSLATED_COMMANDS = frozenset({
    'rev-parse',   # --show-toplevel, --git-dir
    'remote',      # -v lists local file remotes
})

# git commands whose first output line gets the bridge version appended
VERSION_COMMANDS = frozenset({
    'version',
    '--version',
})

# ============================================================================
# ENVIRONMENT FORWARDING
# ============================================================================

GIT_ENV_PREFIX = 'GIT_'
GIT_EDITOR_ENV = 'GIT_EDITOR'
WSLENV_ENV = 'WSLENV'
WSLENV_FLAG = '/u'      # share Windows → WSL only, no path translation by WSL

# ============================================================================
# EXECUTABLES
# ============================================================================

WSL_EXECUTABLE = 'wsl'
CMD_EXECUTABLE = 'cmd'
GIT_EXECUTABLE = 'git'

# Tried in this order when locating the editor executable
EXECUTABLE_EXTENSIONS = ('', '.CMD', '.EXE')

# Characters left unescaped in a translated path segment
SAFE_PATH_CHARS = r'a-zA-Z0-9,._+@%/-'
