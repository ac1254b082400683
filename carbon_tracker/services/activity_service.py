import asyncio
import logging
from typing import Any, List, Optional

from sqlalchemy.orm import Session

from ..errors import CarbonTrackerError, ErrorKind, not_found
from ..models.activity_schema import ActivityOut
from ..repositories import activity_repository
from ..schemas import EstimatedActivity, EstimateResponse
from .estimation import estimate_emissions
from .providers.base import EmissionsProvider
from .validation import validate_activity

logger = logging.getLogger(__name__)


class ActivityService:
    """Owner-scoped activity records; every lookup matches (id, user_id)."""

    def __init__(self, db: Session, provider: EmissionsProvider):
        self.db = db
        self.provider = provider

    async def _resolve_carbon(
        self, activity_type: str, details: Any, carbon_kg: Optional[float]
    ) -> float:
        if carbon_kg is not None:
            return carbon_kg
        estimation = await estimate_emissions(activity_type, details, self.provider)
        return estimation.carbon_kg

    async def create_activity(
        self, user_id: int, activity_type: Any, details: Any, carbon_kg: Optional[float] = None
    ) -> ActivityOut:
        validate_activity(activity_type, details)
        carbon_kg = await self._resolve_carbon(activity_type, details, carbon_kg)

        activity_id = await asyncio.to_thread(
            activity_repository.insert_activity,
            self.db,
            user_id,
            activity_type,
            dict(details),
            carbon_kg,
        )
        logger.info("Activity created with ID %s for user %s", activity_id, user_id)

        activity = await asyncio.to_thread(
            activity_repository.find_activity_by_id, self.db, activity_id, user_id
        )
        if activity is None:
            raise CarbonTrackerError(ErrorKind.FATAL, f"Activity {activity_id} vanished after insert")
        return activity

    def get_all_activities(self, user_id: int) -> List[ActivityOut]:
        return activity_repository.find_all_activities(self.db, user_id)

    def get_activity_by_id(self, activity_id: int, user_id: int) -> ActivityOut:
        activity = activity_repository.find_activity_by_id(self.db, activity_id, user_id)
        if activity is None:
            raise not_found()
        return activity

    async def update_activity(
        self,
        activity_id: int,
        user_id: int,
        activity_type: Any,
        details: Any,
        carbon_kg: Optional[float] = None,
    ) -> ActivityOut:
        validate_activity(activity_type, details)
        await asyncio.to_thread(self.get_activity_by_id, activity_id, user_id)

        carbon_kg = await self._resolve_carbon(activity_type, details, carbon_kg)
        updated = await asyncio.to_thread(
            activity_repository.update_activity,
            self.db,
            activity_id,
            user_id,
            activity_type,
            dict(details),
            carbon_kg,
        )
        if not updated:
            raise not_found()

        logger.info("Activity %s updated for user %s", activity_id, user_id)
        return await asyncio.to_thread(self.get_activity_by_id, activity_id, user_id)

    def delete_activity(self, activity_id: int, user_id: int) -> None:
        if not activity_repository.delete_activity(self.db, activity_id, user_id):
            raise not_found()
        logger.info("Activity %s deleted for user %s", activity_id, user_id)

    async def estimate_emissions(self, activity_type: Any, details: Any) -> EstimateResponse:
        estimation = await estimate_emissions(activity_type, details, self.provider)
        return EstimateResponse(
            activity=EstimatedActivity(
                activity_type=activity_type,
                details=dict(details),
                carbon_kg=estimation.carbon_kg,
            ),
            activity_data=estimation.activity_data,
            tip=estimation.tip,
        )
