# -*- coding: utf-8 -*-
"""Auth: bearer token verification + FastAPI helpers.

Tokens are HS256 JWTs whose `sub` claim is the identity provider's subject
(the user's `auth0_sub`). Identity only ever comes from a verified token.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from ..config import settings
from ..db import get_db
from ..db_models import User
from .storage import get_user_by_sub


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def create_access_token(
    *,
    subject: str,
    email: Optional[str] = None,
    name: Optional[str] = None,
    ttl: Optional[timedelta] = None,
) -> str:
    """Mint a token the way the identity provider does (dev tooling and tests)."""
    now = _utc_now()
    exp = now + (ttl if ttl is not None else timedelta(days=int(settings.token_ttl_days)))
    payload: Dict[str, Any] = {
        "sub": subject,
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
    }
    if email:
        payload["email"] = email
    if name:
        payload["name"] = name
    if settings.jwt_issuer:
        payload["iss"] = settings.jwt_issuer
    if settings.jwt_audience:
        payload["aud"] = settings.jwt_audience
    return _jwt_encode(payload, settings.jwt_secret)


def decode_token(token: str) -> Dict[str, Any]:
    try:
        payload = _jwt_decode(token, settings.jwt_secret)
        exp = int(payload.get("exp") or 0)
    except Exception as exc:
        raise HTTPException(status_code=401, detail="Invalid token") from exc

    if exp and exp < int(_utc_now().timestamp()):
        raise HTTPException(status_code=401, detail="Token expired")
    if settings.jwt_issuer and payload.get("iss") != settings.jwt_issuer:
        raise HTTPException(status_code=401, detail="Invalid token issuer")
    if settings.jwt_audience:
        aud = payload.get("aud")
        audiences = aud if isinstance(aud, list) else [aud]
        if settings.jwt_audience not in audiences:
            raise HTTPException(status_code=401, detail="Invalid token audience")
    if not str(payload.get("sub") or ""):
        raise HTTPException(status_code=401, detail="Invalid token")
    return payload


_JWT_HEADER = {"alg": "HS256", "typ": "JWT"}


def _b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def _b64url_decode(data: str) -> bytes:
    return base64.urlsafe_b64decode((data + "=" * (-len(data) % 4)).encode("ascii"))


def _segment(obj: Dict[str, Any]) -> str:
    return _b64url_encode(json.dumps(obj, separators=(",", ":"), ensure_ascii=False).encode("utf-8"))


def _parse_segment(segment: str) -> Dict[str, Any]:
    obj = json.loads(_b64url_decode(segment).decode("utf-8"))
    if not isinstance(obj, dict):
        raise ValueError("token segment is not an object")
    return obj


def _sign(signing_input: str, secret: str) -> bytes:
    return hmac.new(secret.encode("utf-8"), signing_input.encode("ascii"), hashlib.sha256).digest()


def _jwt_encode(payload: Dict[str, Any], secret: str) -> str:
    signing_input = f"{_segment(_JWT_HEADER)}.{_segment(payload)}"
    return f"{signing_input}.{_b64url_encode(_sign(signing_input, secret))}"


def _jwt_decode(token: str, secret: str) -> Dict[str, Any]:
    try:
        header_b64, payload_b64, sig_b64 = token.split(".")
    except ValueError as exc:
        raise ValueError("token must have three segments") from exc
    if _parse_segment(header_b64).get("alg") != "HS256":
        raise ValueError("unsupported algorithm")
    if not hmac.compare_digest(_sign(f"{header_b64}.{payload_b64}", secret), _b64url_decode(sig_b64)):
        raise ValueError("bad signature")
    return _parse_segment(payload_b64)


def get_token_from_request(request: Request) -> Optional[str]:
    auth = request.headers.get("authorization") or ""
    if auth.lower().startswith("bearer "):
        token = auth.split(" ", 1)[1].strip()
        return token or None
    return None


def get_claims_from_request(request: Request) -> Dict[str, Any]:
    # If the auth gate already verified the token, reuse it.
    claims = getattr(request.state, "claims", None)
    if claims:
        return claims

    token = get_token_from_request(request)
    if not token:
        raise HTTPException(status_code=401, detail="Not authenticated")
    claims = decode_token(token)
    request.state.claims = claims
    return claims


def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    claims = get_claims_from_request(request)
    user = get_user_by_sub(db, str(claims["sub"]))
    if not user:
        raise HTTPException(status_code=404, detail="User not found. Please ensure you are logged in.")
    return user
