"""
Default configuration for the rail-documents library.

Every setting the library consumes is declared here. Projects override any
of them through the ``RAIL_DOCUMENTS`` Django setting, using the same
section layout.
"""

from __future__ import annotations

from typing import Any

LIBRARY_VERSION = "0.1.0"

# Built-in profile name that disables filtering.
NOFILTER_ROLE = "nofilter"


# --------------------------------------------------------------------------- #
# Library-wide defaults (grouped by feature area)
# --------------------------------------------------------------------------- #
LIBRARY_DEFAULTS: dict[str, Any] = {
    "filter_settings": {
        "default_filter_role": NOFILTER_ROLE,
        "sanitize": False,
        # "escape" escapes HTML special characters, "clean" strips markup
        "sanitize_mode": "escape",
    },
    "denormalize_settings": {
        "suffix": "",
        "apply_only": True,
    },
}
