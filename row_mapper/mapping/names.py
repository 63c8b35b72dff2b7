"""Column name normalization.

The single matching key between result columns, destination fields and
dynamic row lookups:

    device_id, DEVICEID, deviceId, "Device Id" -> "deviceid"
"""

from __future__ import annotations

from functools import lru_cache


@lru_cache(maxsize=1024)
def normalize_name(name: str) -> str:
    """Lowercase *name* and drop every character that is not a letter or digit.

    Falls back to the original name when nothing is left after stripping.
    """
    stripped = "".join(c.lower() for c in name if c.isalnum())
    return stripped or name
