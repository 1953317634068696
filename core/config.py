"""
config.py - Configured Limits

Input limits and timing constants shared by the core, CLI and GUI
"""

# Input limits
MAX_PATTERN_LENGTH = 1024
MAX_TEMPLATE_LENGTH = 256
MAX_FILES = 10000
MAX_PADDING = 10

# Sequence numbers saturate here (unsigned 32-bit)
MAX_SEQUENCE_NUMBER = 2**32 - 1

# Digit runs in natural sort saturate here (unsigned 64-bit)
MAX_NATURAL_NUMBER = 2**64 - 1

# Placeholder token for iteration templates
PLACEHOLDER = "{n}"

# Delay between the last keystroke and preview regeneration
DEBOUNCE_MS = 300

# Settings database location, relative to the platform data directory
SETTINGS_DIR_NAME = "file-rename-plus"
SETTINGS_FILE_NAME = "settings.db"
