import json
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from ..deps import get_activity_service, get_current_user_id
from ..errors import invalid_input
from ..models.activity_schema import ActivityCreate, ActivityUpdate
from ..schemas import ApiResponse, success_response
from ..services.activity_service import ActivityService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/activities", tags=["activities"])


@router.post("", response_model=ApiResponse, status_code=201)
async def create_activity(
    payload: ActivityCreate,
    user_id: int = Depends(get_current_user_id),
    service: ActivityService = Depends(get_activity_service),
) -> JSONResponse:
    activity = await service.create_activity(
        user_id, payload.activity_type, payload.details, payload.carbon_kg
    )
    return JSONResponse(
        status_code=201,
        content=success_response("Activity created successfully", activity.model_dump(mode="json")),
    )


@router.get("", response_model=ApiResponse)
def get_all_activities(
    user_id: int = Depends(get_current_user_id),
    service: ActivityService = Depends(get_activity_service),
) -> JSONResponse:
    activities = service.get_all_activities(user_id)
    logger.info("Retrieved %s activities for user %s", len(activities), user_id)
    return JSONResponse(
        content=success_response(
            "Activities retrieved successfully",
            [activity.model_dump(mode="json") for activity in activities],
        )
    )


# declared before /{activity_id} so "estimate" is not read as an id
@router.get("/estimate", response_model=ApiResponse)
async def estimate_emissions(
    activity_type: Optional[str] = Query(default=None),
    details: Optional[str] = Query(default=None, description="Activity details as a JSON object"),
    user_id: int = Depends(get_current_user_id),
    service: ActivityService = Depends(get_activity_service),
) -> JSONResponse:
    parsed = None
    if details:
        try:
            parsed = json.loads(details)
        except ValueError:
            raise invalid_input("Invalid details format. Must be valid JSON")

    if not activity_type or parsed is None:
        raise invalid_input("Activity type and details are required")

    estimation = await service.estimate_emissions(activity_type, parsed)
    logger.info("Estimated emissions for %s activity (user %s)", activity_type, user_id)
    return JSONResponse(
        content=success_response("Emissions estimated successfully", estimation.model_dump(mode="json"))
    )


@router.get("/{activity_id}", response_model=ApiResponse)
def get_activity(
    activity_id: int,
    user_id: int = Depends(get_current_user_id),
    service: ActivityService = Depends(get_activity_service),
) -> JSONResponse:
    activity = service.get_activity_by_id(activity_id, user_id)
    return JSONResponse(
        content=success_response("Activity retrieved successfully", activity.model_dump(mode="json"))
    )


@router.put("/{activity_id}", response_model=ApiResponse)
async def update_activity(
    activity_id: int,
    payload: ActivityUpdate,
    user_id: int = Depends(get_current_user_id),
    service: ActivityService = Depends(get_activity_service),
) -> JSONResponse:
    activity = await service.update_activity(
        activity_id, user_id, payload.activity_type, payload.details, payload.carbon_kg
    )
    return JSONResponse(
        content=success_response("Activity updated successfully", activity.model_dump(mode="json"))
    )


@router.delete("/{activity_id}", response_model=ApiResponse)
def delete_activity(
    activity_id: int,
    user_id: int = Depends(get_current_user_id),
    service: ActivityService = Depends(get_activity_service),
) -> JSONResponse:
    service.delete_activity(activity_id, user_id)
    return JSONResponse(content=success_response("Activity deleted successfully"))
