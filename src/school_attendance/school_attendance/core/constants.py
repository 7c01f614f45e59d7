"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from datetime import time

# Minutes used for "no check-in data"; ranks as maximally late in both score polarities.
NO_DATA_MINUTES = 9999

DEFAULT_UTC_OFFSET_HOURS = 8  # Asia/Makassar

TIER_COUNT = 5

# Raw codes written by scanners that only mean "this person showed up".
PRESENT_RAW_CODES = frozenset({"datang", "hadir", "present", "masuk"})
CHECK_OUT_RAW_CODES = PRESENT_RAW_CODES | {"pulang"}

# Latest time per punctuality tier when no window is configured.
DEFAULT_WINDOW_UPPER_BOUNDS = {
    "TW": time(7, 30),
    "T1": time(8, 0),
    "T2": time(12, 0),
}
