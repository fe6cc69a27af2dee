from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
from shared.core import auth
from shared.core.database import get_db
from shared.core.schemas import UserToken
from ..schemas import authschema
from ..services import authservices

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/login", response_model=authschema.TokenSuccessResponse)
def login(
        req: authschema.LoginRequest,
        request: Request,
        db: Session = Depends(get_db)):
    return authservices.login(request, db, req)


@router.post("/logout", response_model=authschema.MessageResponse)
def logout(
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(auth.validate_current_token)):
    return authservices.logout_user(db, current_user)


@router.get("/me", response_model=authschema.UserResponse)
def me(
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(auth.validate_current_token)):
    return authservices.get_me(db, current_user)


@router.post("/change-password", response_model=authschema.MessageResponse)
def change_password(
        req: authschema.ChangePasswordRequest,
        db: Session = Depends(get_db),
        current_user: UserToken = Depends(auth.validate_current_token)):
    return authservices.change_password(db, current_user, req)
