# storefront/core/auth.py
"""
Request-scoped authentication.

`Authorization: Bearer <Firebase ID token>` is verified with the Firebase Admin SDK and
turned into a `Principal`. Admin gating reads the `admin` custom claim; nothing here is
stored in module globals, every request builds its own principal.
"""
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from firebase_admin import auth as fb_auth

from storefront.config import init_firebase, settings
from storefront.schemas.principal import Principal

MOCK_PREFIX = "mock_jwt_token_"


def _extract_bearer_token(request: Request) -> Optional[str]:
    """
    Return the token from an `Authorization: Bearer <id_token>` header, or None.
    """
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        return None
    parts = auth_header.split()
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1]
    return None


def _decode_mock_token(mock_token: str) -> dict:
    """
    Format: mock_jwt_token_<uid>, or mock_jwt_token_admin_<uid> for an admin.
    """
    uid = mock_token[len(MOCK_PREFIX):]
    if not uid:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid mock token format"
        )
    return {
        "uid": uid,
        "email": None,
        "name": None,
        "firebase": {
            "sign_in_provider": "anonymous" if uid.startswith("anonymous") else "password"
        },
        "admin": uid.startswith("admin_"),
    }


def _decode_id_token(id_token: str) -> dict:
    """
    Verify a Firebase ID token. Invalid, revoked or expired tokens give 401.
    """
    if settings.allow_mock_tokens and id_token.startswith(MOCK_PREFIX):
        return _decode_mock_token(id_token)

    init_firebase()
    try:
        return fb_auth.verify_id_token(id_token, check_revoked=True)
    except fb_auth.ExpiredIdTokenError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token expired")
    except fb_auth.RevokedIdTokenError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Session revoked")
    except (fb_auth.InvalidIdTokenError, ValueError):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid authentication token")


def token_to_principal(decoded: dict) -> Principal:
    """
    - anonymous provider -> role='guest'
    - custom claim admin=True -> role='admin'
    - everything else -> role='user'
    """
    uid = decoded.get("uid") or decoded.get("user_id")
    if not uid:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token missing uid.")

    provider = (decoded.get("firebase") or {}).get("sign_in_provider")
    if provider == "anonymous":
        role = "guest"
    elif decoded.get("admin") is True:
        role = "admin"
    else:
        role = "user"

    return Principal(
        uid=uid,
        role=role,
        email=decoded.get("email"),
        display_name=decoded.get("name"),
    )

# --------- FastAPI Dependencies --------- #

def get_principal(request: Request) -> Principal:
    """Token required (guest, user or admin)."""
    token = _extract_bearer_token(request)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing Authorization header.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return token_to_principal(_decode_id_token(token))


def require_non_guest(principal: Principal = Depends(get_principal)) -> Principal:
    if principal.role == "guest":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Guest users are not allowed for this action."
        )
    return principal


def require_admin(principal: Principal = Depends(get_principal)) -> Principal:
    if not principal.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin privilege required."
        )
    return principal
