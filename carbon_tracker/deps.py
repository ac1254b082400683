from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from .db.database import get_db
from .errors import unauthorized
from .services.activity_service import ActivityService
from .services.auth_service import verify_token
from .services.providers.base import EmissionsProvider
from .services.providers.registry import get_provider

bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> int:
    if credentials is None or not credentials.credentials:
        raise unauthorized("Authentication token is required")
    return verify_token(credentials.credentials)


def get_activity_service(
    db: Session = Depends(get_db),
    provider: EmissionsProvider = Depends(get_provider),
) -> ActivityService:
    return ActivityService(db, provider)
