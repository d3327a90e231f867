"""Configuration and constants for the emubox package."""
from __future__ import annotations

# Directory (under $HOME) holding the 86Box configuration files
CONFIG_DIR_NAME = ".emubox"

# Extension given to configurations created by `emubox new`
CONFIG_EXTENSION = ".cfg"

# Where the 86Box binary is expected when nothing else is configured
DEFAULT_EMULATOR = "./86Box.AppImage"
EMULATOR_FALLBACK_NAMES = ("86Box", "86box")

# Environment overrides
ENV_CONFIG_DIR = "EMUBOX_DIR"
ENV_EMULATOR = "EMUBOX_86BOX"
ENV_LOG_FORMAT = "EMUBOX_LOG_FORMAT"

# Menu geometry
PAGE_SIZE = 10
MENU_TITLE = "Select a config"
# Row labels can show at most four digits
MAX_ENTRY_NUMBER = 9999
# Extra rows around the page: border, title, separator
VIEWPORT_EXTRA_ROWS = 5
# Extra columns around the longest name: border, numbering, padding
VIEWPORT_EXTRA_COLUMNS = 13
# Column where entry names start
NAME_COLUMN = 7

# Process exit codes
EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_EXEC_FAILURE = 127
