import json
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from ..db.tables import Activity
from ..models.activity_schema import ActivityOut

logger = logging.getLogger(__name__)


def _decode_details(activity_id: int, raw: Any) -> Dict[str, Any]:
    if isinstance(raw, dict):
        return raw

    if isinstance(raw, (str, bytes)):
        try:
            parsed = json.loads(raw)
        except (TypeError, ValueError) as exc:
            logger.warning(
                "Could not parse details for activity %s, defaulting to empty object: %s",
                activity_id,
                exc,
            )
            return {}
        if isinstance(parsed, dict):
            return parsed

    logger.warning(
        "Details for activity %s are not a JSON object, defaulting to empty object", activity_id
    )
    return {}


def _to_record(row: Activity) -> ActivityOut:
    return ActivityOut(
        id=row.id,
        user_id=row.user_id,
        activity_type=row.activity_type,
        details=_decode_details(row.id, row.details),
        carbon_kg=row.carbon_kg,
        created_at=row.created_at,
    )


def insert_activity(
    db: Session, user_id: int, activity_type: str, details: Dict[str, Any], carbon_kg: float
) -> int:
    logger.info("Creating activity for user %s: %s", user_id, activity_type)
    row = Activity(
        user_id=user_id,
        activity_type=activity_type,
        details=json.dumps(details),
        carbon_kg=carbon_kg,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row.id


def find_activity_by_id(db: Session, activity_id: int, user_id: int) -> Optional[ActivityOut]:
    logger.info("Finding activity %s for user %s", activity_id, user_id)
    row = db.execute(
        select(Activity).where(Activity.id == activity_id, Activity.user_id == user_id)
    ).scalar_one_or_none()
    return _to_record(row) if row is not None else None


def find_all_activities(db: Session, user_id: int) -> List[ActivityOut]:
    logger.info("Finding all activities for user %s", user_id)
    rows = db.execute(
        select(Activity)
        .where(Activity.user_id == user_id)
        .order_by(Activity.created_at.desc(), Activity.id.desc())
    ).scalars()
    return [_to_record(row) for row in rows]


def update_activity(
    db: Session,
    activity_id: int,
    user_id: int,
    activity_type: str,
    details: Dict[str, Any],
    carbon_kg: float,
) -> bool:
    logger.info("Updating activity %s for user %s", activity_id, user_id)
    result = db.execute(
        update(Activity)
        .where(Activity.id == activity_id, Activity.user_id == user_id)
        .values(activity_type=activity_type, details=json.dumps(details), carbon_kg=carbon_kg)
    )
    db.commit()
    return result.rowcount > 0


def delete_activity(db: Session, activity_id: int, user_id: int) -> bool:
    logger.info("Deleting activity %s for user %s", activity_id, user_id)
    result = db.execute(
        delete(Activity).where(Activity.id == activity_id, Activity.user_id == user_id)
    )
    db.commit()
    return result.rowcount > 0
