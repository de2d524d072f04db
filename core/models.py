"""
Pydantic data models for the detection service IO and app state.
"""
from __future__ import annotations
from pydantic import AllowInfNan, BaseModel, Field, Strict, StrictInt, field_validator
from typing import Annotated, List, Optional, Union

# box components: real JSON numbers only (no numeric strings, bools, NaN or Infinity)
Number = Union[StrictInt, Annotated[float, Strict(), AllowInfNan(False)]]

class Detection(BaseModel):
    label: str
    box: List[Number]

    @field_validator("box")
    @classmethod
    def _four_components(cls, v: List[Number]) -> List[Number]:
        if len(v) != 4:
            raise ValueError(f"box must have exactly 4 components, got {len(v)}")
        return v

class DetectRequest(BaseModel):
    image: str

class DetectResponse(BaseModel):
    results: List[Detection] = Field(default_factory=list)


# presentation / app state


class DetectionView(BaseModel):
    label: str
    confidence: Optional[str] = None
    box: List[Number]

class CaptureSession(BaseModel):
    session_id: int
    camera_index: int
    started_at: float
    active: bool = True

class CaptureStatus(BaseModel):
    running: bool
    started_at: float | None = None
    results: List[Detection] | None = None
    last_error: str | None = None
