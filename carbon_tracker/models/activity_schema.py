from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class ActivityCreate(BaseModel):
    activity_type: Optional[str] = Field(
        default=None, description="One of transport, electricity or food"
    )
    details: Any = Field(
        default=None, description="Per-type details, e.g. {'distance': 10, 'vehicle': 'car'}"
    )
    carbon_kg: Optional[float] = Field(
        default=None,
        description="Known emission in kg CO2e; estimated through the provider when omitted",
    )


class ActivityUpdate(ActivityCreate):
    pass


class ActivityOut(BaseModel):
    id: int
    user_id: int
    activity_type: str
    details: Dict[str, Any]
    carbon_kg: float
    created_at: datetime
