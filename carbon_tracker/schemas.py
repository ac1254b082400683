from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class EstimationResult(BaseModel):
    carbon_kg: float = Field(..., description="Estimated CO₂ in kilograms (kgCO2e)")
    activity_data: Dict[str, Any] = Field(
        default_factory=dict,
        description="Raw provider payload, or a marker describing a local estimate",
    )
    tip: str = Field(..., description="Short advice for reducing the emission")


class EstimatedActivity(BaseModel):
    activity_type: str
    details: Dict[str, Any]
    carbon_kg: float


class EstimateResponse(BaseModel):
    activity: EstimatedActivity
    activity_data: Dict[str, Any] = Field(default_factory=dict)
    tip: str


class ApiResponse(BaseModel):
    success: bool
    message: str
    data: Optional[Any] = None


def success_response(message: str, data: Any = None) -> Dict[str, Any]:
    return ApiResponse(success=True, message=message, data=data).model_dump(mode="json")


def error_response(message: str, data: Any = None) -> Dict[str, Any]:
    return ApiResponse(success=False, message=message, data=data).model_dump(mode="json")
