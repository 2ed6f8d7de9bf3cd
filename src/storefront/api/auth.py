"""Bearer-token authentication for customer and admin routes.

Tokens are HS256 JWTs signed with JWT_SECRET. Claims carry the customer's
id, contact details and role; routes receive them as a Customer.
"""

import os
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import jwt
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

JWT_ALGORITHM = "HS256"
DEFAULT_EXPIRES_IN_MINUTES = 60
ADMIN_ROLE = "admin"
DEFAULT_SECRET = "storefront-development-secret-change-me"

_bearer = HTTPBearer(auto_error=False)


def _secret() -> str:
    return os.environ.get("JWT_SECRET", DEFAULT_SECRET)


@dataclass(frozen=True)
class Customer:
    id: str
    email: str
    username: str | None = None
    phone: str | None = None
    role: str = "customer"

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN_ROLE


def issue_token(
    customer_id: str,
    email: str,
    username: str | None = None,
    phone: str | None = None,
    role: str = "customer",
    expires_in_minutes: int = DEFAULT_EXPIRES_IN_MINUTES,
) -> str:
    now = datetime.now(UTC)
    payload = {
        "id": str(customer_id),
        "email": email,
        "username": username,
        "phone": phone,
        "role": role,
        "iat": now,
        "exp": now + timedelta(minutes=expires_in_minutes),
    }
    return jwt.encode(payload, _secret(), algorithm=JWT_ALGORITHM)


def decode_token(token: str) -> dict | None:
    """Verify and decode a token. Returns None if it is invalid or expired."""
    try:
        return jwt.decode(token, _secret(), algorithms=[JWT_ALGORITHM])
    except jwt.InvalidTokenError:
        return None


def current_customer(credentials: HTTPAuthorizationCredentials | None = Depends(_bearer)) -> Customer:
    if credentials is None:
        raise HTTPException(status_code=401, detail="Missing bearer token")

    claims = decode_token(credentials.credentials)
    if not claims or not claims.get("id") or not claims.get("email"):
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    return Customer(
        id=claims["id"],
        email=claims["email"],
        username=claims.get("username"),
        phone=claims.get("phone"),
        role=claims.get("role") or "customer",
    )


def require_admin(customer: Customer = Depends(current_customer)) -> Customer:
    if not customer.is_admin:
        raise HTTPException(status_code=403, detail="Admin role required")
    return customer
