"""Display helpers shared by the aggregation engine, exports and the week page."""
import re

from planner.utilities.constants import SLOT_MINUTES

_HEX_RE = re.compile(r'^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$', re.IGNORECASE)


def _hhmm(total_minutes: int) -> str:
    return f"{total_minutes // 60:02d}:{total_minutes % 60:02d}"


def time_label_for_row(row_index: int) -> str:
    """Start time of a 5-minute slot, e.g. 287 -> '23:55'."""
    return _hhmm(row_index * SLOT_MINUTES)


def time_range_label(start_row: int, num_rows: int) -> str:
    """Start-end label for a run of slots, e.g. (0, 12) -> '00:00-01:00'."""
    start = start_row * SLOT_MINUTES
    end = (start_row + num_rows) * SLOT_MINUTES
    return f"{_hhmm(start)}-{_hhmm(end)}"


def format_minutes(total_minutes: int) -> str:
    """65 -> '1h 05m'."""
    return f"{total_minutes // 60}h {total_minutes % 60:02d}m"


def hex_with_alpha(hex_colour: str, alpha: float = 0.16) -> str:
    m = _HEX_RE.match(hex_colour or "")
    if not m:
        return f"rgba(0,0,0,{alpha})"
    r, g, b = (int(part, 16) for part in m.groups())
    return f"rgba({r}, {g}, {b}, {alpha})"


def icon_label(key: str) -> str:
    """Human label for an icon key: 'book_open' -> 'Book Open', 'gamepad2' -> 'Gamepad 2'."""
    s = re.sub(r'([a-z])([A-Z])', r'\1 \2', key)
    s = s.replace('_', ' ')
    s = re.sub(r'(\d+)', r' \1', s)
    return " ".join(w[:1].upper() + w[1:] for w in s.split())


__all__ = ["time_label_for_row", "time_range_label", "format_minutes", "hex_with_alpha", "icon_label"]
