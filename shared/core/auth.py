from datetime import datetime, timedelta, timezone
from typing import Optional
from uuid import UUID
from fastapi import status, Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from sqlalchemy.orm import Session
from shared.models.user_login_session import UserLoginSession
from shared.models.users import Users
from shared.utils.app_status_code import AppStatusCode
from shared.core.config import settings
from shared.helpers.json_response_helper import error_response
from shared.core.schemas import UserToken
from shared.core.database import get_db

security = HTTPBearer(auto_error=False)

BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}


def create_access_token(data: dict):
    payload = data.copy()
    expires = datetime.now(timezone.utc) + \
        timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    payload['exp'] = expires

    token = jwt.encode(payload, settings.JWT_SECRET,
                       algorithm=settings.JWT_ALGORITHM)
    return token


def _unauthorized(message: str, status_code: str):
    return error_response(
        message=message,
        status_code=status_code,
        http_status=status.HTTP_401_UNAUTHORIZED,
        headers=BEARER_CHALLENGE
    )


def verify_token(db: Session, token: str) -> Optional[UserToken]:
    """Verify and decode a JWT token."""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET,
                             algorithms=[settings.JWT_ALGORITHM])
        user = UserToken(**payload)
    except (JWTError, ValueError):
        return _unauthorized("Invalid or expired token",
                             AppStatusCode.AUTHENTICATION_TOKEN_EXPIRED)

    try:
        session_id = UUID(user.session_id)
    except ValueError:
        return _unauthorized("Invalid token structure",
                             AppStatusCode.AUTHENTICATION_TOKEN_INVALID)

    # ✅ Check session validity
    session = db.query(UserLoginSession).filter(
        UserLoginSession.id == session_id,
        UserLoginSession.user_id == user.user_id
    ).first()

    if not session or not session.is_active:
        return _unauthorized("Session has been logged out or is inactive",
                             AppStatusCode.AUTHENTICATION_SESSION_TIMEOUT)

    return user


def validate_current_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> UserToken:
    if credentials is None:
        return _unauthorized("Unauthorized",
                             AppStatusCode.AUTHENTICATION_TOKEN_INVALID)

    user_data = verify_token(db, credentials.credentials)

    user = db.query(Users).filter(Users.id == user_data.user_id).first()

    if not user:
        return _unauthorized("User not found",
                             AppStatusCode.AUTHENTICATION_USER_INVALID)

    if user.status.lower() != "active":
        return error_response(
            message="User is not active. Access denied",
            status_code=AppStatusCode.AUTHENTICATION_USER_INACTIVE,
            http_status=403
        )

    user_data.username = user.username
    user_data.status = user.status
    return user_data
