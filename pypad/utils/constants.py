APP_ORG = "PyPad"
APP_NAME = "PyPad"

SETTINGS_GEOMETRY = "window/geometry"
SETTINGS_RECENTS = "file/recent"
MAX_RECENTS = 8

# Elevated writes
DEFAULT_HELPER = "sudo"
CREDENTIAL_TTL_SECONDS = 300
STAGING_FILE_NAME = "pypad_sudo_save.tmp"

# View
ZOOM_DEFAULT = 100
ZOOM_STEP = 10
ZOOM_MIN = 20
ZOOM_MAX = 500
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M"

OPEN_FILTER = "Text Files (*.txt *.md *.markdown);;All files (*)"
SAVE_FILTER = "Text Files (*.txt);;Markdown Files (*.md *.markdown);;All files (*)"
