from typing import Final

DAYS: Final[list[str]] = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
DAYS_PER_WEEK: Final[int] = 7
SLOTS_PER_DAY: Final[int] = 288
SLOT_MINUTES: Final[int] = 5
WEEK_MINUTES: Final[int] = DAYS_PER_WEEK * SLOTS_PER_DAY * SLOT_MINUTES  # 10080

DOCUMENT_VERSION: Final[int] = 3
PLAN_NAME_MAX_LENGTH: Final[int] = 60

TOOL_PAINT: Final[str] = "paint"
TOOL_ERASE: Final[str] = "erase"
TOOLS: Final[tuple[str, ...]] = (TOOL_PAINT, TOOL_ERASE)

# View scale (minutes per visual row) -> fine slots per visual row
TIME_SCALES: Final[dict[str, int]] = {"5": 1, "15": 3, "60": 12}
GRANULARITIES: Final[tuple[int, ...]] = (1, 3, 12)
DEFAULT_TIME_SCALE: Final[str] = "5"

PRESET_COLOURS: Final[list[str]] = [
    "#E11D48", "#F97316", "#F59E0B", "#EAB308", "#84CC16",
    "#22C55E", "#10B981", "#14B8A6", "#06B6D4", "#0EA5E9",
    "#3B82F6", "#6366F1", "#8B5CF6", "#A855F7", "#D946EF",
    "#EC4899", "#F43F5E", "#64748B", "#A3A3A3", "#F4F4F5",
]

ICON_KEYS: Final[list[str]] = [
    "calendar", "coffee", "dumbbell", "book", "briefcase", "car",
    "utensils", "heart", "home", "users", "music", "phone", "bed",
    "laptop", "gaming", "shower", "walking",
]
DEFAULT_ICON: Final[str] = "calendar"

NEW_ACTIVITY_NAME: Final[str] = "New activity"
NEW_ACTIVITY_COLOUR: Final[str] = "#8B5CF6"

UNKNOWN_ACTIVITY_LABEL: Final[str] = "Unknown"
UNKNOWN_ACTIVITY_COLOUR: Final[str] = "#A3A3A3"
FREE_LABEL: Final[str] = "Free"
FREE_COLOUR: Final[str] = "rgba(255,255,255,0.06)"

DEFAULT_PLAN_NAME: Final[str] = "Default"
DEFAULT_ACTIVITIES: Final[list[dict[str, str]]] = [
    {"id": "a_work", "name": "Work", "colour": "#E11D48", "icon": "briefcase"},
    {"id": "a_family", "name": "Family", "colour": "#0EA5E9", "icon": "users"},
    {"id": "a_sleep", "name": "Sleep", "colour": "#64748B", "icon": "bed"},
    {"id": "a_admin", "name": "Admin", "colour": "#22C55E", "icon": "laptop"},
]
