from pydantic import BaseModel
from typing import Any, Dict, Generic, List, Optional, TypeVar

# Shared properties
T = TypeVar("T")

# Largest value an INTEGER column holds
DB_INT_MAX = 2**31 - 1


class UserToken(BaseModel):
    user_id: int
    session_id: str
    username: Optional[str] = None
    status: Optional[str] = None
    exp: Optional[int] = None


class ExportResponse(BaseModel):
    filename: str
    data: List[Dict[str, Any]]

    class Config:
        from_attributes = True


class JsonOutResult(BaseModel, Generic[T]):
    data: Optional[T] = None
    status: str
    status_code: str
    message: str
