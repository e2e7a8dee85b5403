"""
Input validation schemas using Pydantic: the exchanged document (version 3)
and the request bodies of the HTTP API.
"""
from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError, field_validator, model_validator
from typing import List, Literal, Optional

from planner.utilities.constants import (
    DAYS_PER_WEEK, SLOTS_PER_DAY, ICON_KEYS, PLAN_NAME_MAX_LENGTH, TIME_SCALES
)

HEX_COLOUR_PATTERN = r'^#[0-9A-Fa-f]{6}$'


class DocumentValidationError(ValueError):
    """A document was rejected as a whole; `reason` is human readable."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


# -------------------- Document --------------------
class ActivityDocument(BaseModel):
    """Schema for one activity inside a plan."""
    id: StrictStr
    name: StrictStr
    colour: StrictStr = "#A3A3A3"
    icon: StrictStr = "calendar"


class PlanDocument(BaseModel):
    """Schema for one plan: 7 x 288 grid of activity ids or null."""
    model_config = ConfigDict(populate_by_name=True)

    id: StrictStr
    name: StrictStr
    activities: List[ActivityDocument]
    grid: List[List[Optional[StrictStr]]]
    selected_activity_id: Optional[StrictStr] = Field(None, alias="selectedActivityId")
    tool: Literal["paint", "erase"] = "paint"

    @field_validator('grid', mode='before')
    @classmethod
    def validate_grid_shape(cls, v):
        """Reject anything that is not exactly 7 columns of 288 entries."""
        if not isinstance(v, list) or len(v) != DAYS_PER_WEEK:
            raise ValueError(f'Expected {DAYS_PER_WEEK} grid columns')
        for col in v:
            if not isinstance(col, list) or len(col) != SLOTS_PER_DAY:
                raise ValueError(f'Expected {SLOTS_PER_DAY} rows per grid column')
        return v

    @model_validator(mode='after')
    def validate_unique_activity_ids(self):
        seen = set()
        for activity in self.activities:
            if activity.id in seen:
                raise ValueError(f"Duplicate activity id '{activity.id}'")
            seen.add(activity.id)
        return self


class PlanStoreDocument(BaseModel):
    """Schema for the whole persisted/exchanged document."""
    model_config = ConfigDict(populate_by_name=True)

    version: int = 3
    active_plan_id: Optional[str] = Field(None, alias="activePlanId")
    plans: List[PlanDocument] = Field(..., min_length=1)

    @field_validator('active_plan_id', mode='before')
    @classmethod
    def ignore_non_string_active_id(cls, v):
        """A non-string active id falls back to the first plan later on."""
        return v if isinstance(v, str) else None


def _describe(error: ValidationError) -> str:
    first = error.errors()[0]
    loc = ".".join(str(part) for part in first.get("loc", ()))
    msg = first.get("msg", "invalid value")
    return f"{loc}: {msg}" if loc else msg


def validate_document(data) -> dict:
    """Validate a decoded document; returns a normalised dict (camelCase keys).

    Raises DocumentValidationError with a readable reason on any failure.
    """
    if not isinstance(data, dict):
        raise DocumentValidationError("JSON must be an object.")
    plans = data.get("plans")
    if not isinstance(plans, list) or not plans:
        raise DocumentValidationError("JSON must include a non-empty 'plans' array.")
    try:
        doc = PlanStoreDocument.model_validate(data)
    except ValidationError as e:
        raise DocumentValidationError(
            f"One or more plans are invalid. Expected 7x288 grid per plan. ({_describe(e)})"
        ) from e
    return doc.model_dump(by_alias=True)


# -------------------- API inputs --------------------
class PlanNameInput(BaseModel):
    """Schema for plan create / rename / duplicate."""
    name: str = Field(..., max_length=200)

    @field_validator('name')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace; length rules are applied by the plan book."""
        return v.strip()


class ActivityInput(BaseModel):
    """Schema for creating an activity."""
    name: str = Field("New activity", min_length=1, max_length=100)
    colour: str = Field("#8B5CF6", pattern=HEX_COLOUR_PATTERN)
    icon: str = "calendar"

    @field_validator('name', mode='before')
    @classmethod
    def strip_name(cls, v):
        """Trim before the length check so a blank name is rejected."""
        return v.strip() if isinstance(v, str) else v

    @field_validator('icon')
    @classmethod
    def validate_icon(cls, v):
        if v not in ICON_KEYS:
            raise ValueError(f'Unknown icon: {v}')
        return v


class ActivityUpdateInput(BaseModel):
    """Schema for a partial activity edit."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    colour: Optional[str] = Field(None, pattern=HEX_COLOUR_PATTERN)
    icon: Optional[str] = None

    @field_validator('name', mode='before')
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator('icon')
    @classmethod
    def validate_icon(cls, v):
        if v is not None and v not in ICON_KEYS:
            raise ValueError(f'Unknown icon: {v}')
        return v


class SelectionInput(BaseModel):
    activity_id: Optional[str] = None


class ToolInput(BaseModel):
    tool: Literal["paint", "erase"]


class ScaleInput(BaseModel):
    scale: str

    @field_validator('scale')
    @classmethod
    def validate_scale(cls, v):
        if v not in TIME_SCALES:
            raise ValueError(f"Scale must be one of {', '.join(TIME_SCALES)}")
        return v


class StrokeBeginInput(BaseModel):
    """Schema for the pointer-down that starts a paint stroke."""
    day: int = Field(..., ge=0, le=DAYS_PER_WEEK - 1)
    slot: int = Field(..., ge=0, le=SLOTS_PER_DAY - 1)
    button: int = Field(0, ge=0, le=4)


class StrokeMoveInput(BaseModel):
    day: int = Field(..., ge=0, le=DAYS_PER_WEEK - 1)
    slot: int = Field(..., ge=0, le=SLOTS_PER_DAY - 1)


class RowRectInput(BaseModel):
    """Measured box of one activity row in the list."""
    id: str
    top: float
    height: float = Field(..., ge=0)
    width: float = Field(0, ge=0)


class ReorderPressInput(BaseModel):
    activity_id: str
    pointer_id: int = 1
    button: int = 0
    client_x: float = 0
    client_y: float
    rows: List[RowRectInput] = Field(default_factory=list)


class ReorderMoveInput(BaseModel):
    pointer_id: int = 1
    client_x: float = 0
    client_y: float
    rows: Optional[List[RowRectInput]] = None


class ReorderPointerInput(BaseModel):
    pointer_id: Optional[int] = None
