from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .pattern import PatternResult


class UploadResponse(BaseModel):
    image_key: str
    filename: Optional[str] = None
    size: int


class CreatePatternRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    image_key: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=200)
    owner_id: Optional[int] = None
    width: int
    height: int
    fabric_type: str = "aida14"
    palette: str = "dmc"
    max_colors: Optional[int] = None  # None means unlimited


class PatternRecordResponse(BaseModel):
    id: int
    owner_id: Optional[int] = None
    name: str
    image_key: str
    width: int
    height: int
    fabric_type: str
    palette: str
    max_colors: Optional[int] = None
    meta: dict[str, Any] = Field(default_factory=dict)
    created_at: float
    result: Optional[PatternResult] = None


class PatternListResponse(BaseModel):
    items: List[PatternRecordResponse]
    total: int
