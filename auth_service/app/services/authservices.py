import logging
from uuid import UUID

from fastapi import Request, status
from sqlalchemy.orm import Session

from shared.core import auth
from shared.core.exceptions import ValidationError
from shared.core.schemas import UserToken
from shared.helpers.json_response_helper import error_response
from shared.models.user_login_session import UserLoginSession
from shared.models.users import Users
from shared.utils.app_status_code import AppStatusCode
from ..schemas import authschema

logger = logging.getLogger(__name__)


def login(request: Request, db: Session, req: authschema.LoginRequest):
    user = db.query(Users).filter(Users.username == req.username).first()

    if not user or not user.verify_password(req.password):
        logger.info("Failed login for '%s'", req.username)
        return error_response(
            message="Invalid username or password",
            status_code=AppStatusCode.AUTHENTICATION_CREDENTIALS_INVALID,
            http_status=status.HTTP_401_UNAUTHORIZED
        )

    if user.status.lower() != "active":
        return error_response(
            message="User is not active. Access denied",
            status_code=AppStatusCode.AUTHENTICATION_USER_INACTIVE,
            http_status=status.HTTP_403_FORBIDDEN
        )

    session = UserLoginSession(
        user_id=user.id,
        ip_address=request.client.host if request.client else None,
        user_agent=(request.headers.get("user-agent") or "")[:255],
    )
    db.add(session)
    db.commit()
    db.refresh(session)

    token = auth.create_access_token({
        "user_id": user.id,
        "session_id": str(session.id),
    })

    return authschema.TokenSuccessResponse(
        access_token=token,
        user=authschema.UserResponse.model_validate(user)
    )


def logout_user(db: Session, current_user: UserToken):
    session = db.query(UserLoginSession).filter(
        UserLoginSession.id == UUID(current_user.session_id),
        UserLoginSession.user_id == current_user.user_id
    ).first()

    if session:
        session.is_active = False
        db.commit()

    return authschema.MessageResponse(message="Logged out")


def get_me(db: Session, current_user: UserToken):
    user = db.query(Users).filter(Users.id == current_user.user_id).first()
    return authschema.UserResponse.model_validate(user)


def change_password(db: Session, current_user: UserToken, req: authschema.ChangePasswordRequest):
    user = db.query(Users).filter(Users.id == current_user.user_id).first()

    if not user.verify_password(req.current_password):
        raise ValidationError("Current password incorrect",
                              field="current_password")

    user.set_password(req.new_password)
    db.commit()
    logger.info("Password changed for user %s", user.id)

    return authschema.MessageResponse(message="Password updated successfully")
