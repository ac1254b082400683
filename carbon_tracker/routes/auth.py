from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from ..db.database import get_db
from ..models.auth_schema import LoginRequest, RegisterRequest
from ..schemas import ApiResponse, success_response
from ..services import auth_service

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=ApiResponse, status_code=201)
def register(payload: RegisterRequest, db: Session = Depends(get_db)) -> JSONResponse:
    user_id = auth_service.register(db, payload.username, payload.password, payload.email)
    return JSONResponse(
        status_code=201, content=success_response("Registration successful", {"userId": user_id})
    )


@router.post("/login", response_model=ApiResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)) -> JSONResponse:
    token = auth_service.login(db, payload.username, payload.password)
    return JSONResponse(content=success_response("Login successful", {"token": token}))
