from typing import List, Literal
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from pydantic import BaseModel, ValidationError
from armenu.core.config import settings
from armenu.core.errors import Forbidden

# Tokens are minted by the identity provider; this service only verifies them.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/login")

Action = Literal["read", "write", "delete", "admin"]
Resource = Literal["menu", "restaurant", "analytics", "settings"]

# Held grant actions that satisfy a requested action
_SATISFIED_BY = {
    "read": {"read", "write", "delete", "admin"},
    "write": {"write", "admin"},
    "delete": {"delete", "admin"},
    "admin": {"admin"},
}

class Permission(BaseModel):
    action: Action
    resource: Resource

class Principal(BaseModel):
    """Validated identity of a restaurant owner or staff member."""
    owner_id: str
    role: Literal["owner", "manager", "staff"] = "staff"
    restaurants: List[str] = []
    permissions: List[Permission] = []

    def can(self, action: Action, resource: Resource = "menu") -> bool:
        if self.role == "owner":
            return True
        allowed = _SATISFIED_BY[action]
        return any(p.resource == resource and p.action in allowed for p in self.permissions)

def principal_from_token(token: str) -> Principal:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
        owner_id: str = payload.get("sub")
        if owner_id is None:
            raise credentials_exception
        return Principal(
            owner_id=owner_id,
            role=payload.get("role", "staff"),
            restaurants=payload.get("restaurants", []),
            permissions=payload.get("permissions", []),
        )
    except (JWTError, ValidationError):
        raise credentials_exception

async def get_current_principal(token: str = Depends(oauth2_scheme)) -> Principal:
    return principal_from_token(token)

def require_access(principal: Principal, restaurant_id: str, action: Action, resource: Resource = "menu") -> None:
    if restaurant_id not in principal.restaurants or not principal.can(action, resource):
        raise Forbidden()
