from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from scenario_hub.api import deps
from scenario_hub.models.user import User
from scenario_hub.schemas.auth import CurrentUser, LoginRequest, LoginResponse, SignupRequest, SignupResponse
from scenario_hub.services import auth as auth_service

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/signup", response_model=SignupResponse)
def signup(user_in: SignupRequest, db: Session = Depends(deps.get_db)):
    user = auth_service.create_user(db, name=user_in.username, email=user_in.email, password=user_in.password)
    return SignupResponse(email=user.email)


@router.post("/login", response_model=LoginResponse)
def login(login_req: LoginRequest, db: Session = Depends(deps.get_db)):
    user = auth_service.authenticate(db, email=login_req.email, password=login_req.password)
    return LoginResponse(token=auth_service.issue_token(user), username=user.name)


@router.get("/me", response_model=CurrentUser)
def read_current_user(user: User = Depends(deps.get_current_user)):
    return CurrentUser(username=user.name, email=user.email)
