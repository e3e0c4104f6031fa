# feedbuilder/logging/tags.py
"""Log message prefixes, one per pipeline stage."""

CLI = "[CLI]"
CONFIG = "[CONFIG]"
SCAN = "[SCAN]"
CONDITIONS = "[CONDITIONS]"
MANIFEST = "[MANIFEST]"
STAGING = "[STAGING]"
