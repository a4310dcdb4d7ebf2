"""Authentication: registration, credential checks and bearer tokens."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import InvalidHash, VerificationError, VerifyMismatchError
from sqlmodel import select

from ..errors import Conflict, NotFound, Unauthorized, ValidationFailed
from ..infra.database import SessionFactory
from ..models.family import Family
from ..models.user import User

_hasher = PasswordHasher()
ALGORITHM = "HS256"
MIN_PASSWORD_LENGTH = 6


def register_user(
    *,
    username: str,
    password: str,
    email: str = "",
    family_id: Optional[int] = None,
    family_name: Optional[str] = None,
    session_factory: SessionFactory,
) -> User:
    """Create a user, joining ``family_id`` or founding a new family."""

    username = username.strip()
    errors: dict[str, list[str]] = {}
    if not username:
        errors.setdefault("username", []).append("Username is required.")
    if len(password or "") < MIN_PASSWORD_LENGTH:
        errors.setdefault("password", []).append(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters."
        )
    if errors:
        raise ValidationFailed("Invalid registration", errors)

    password_hash = _hasher.hash(password)
    with session_factory() as session:
        existing = session.exec(select(User).where(User.username == username)).first()
        if existing:
            raise Conflict("Username already exists")

        if family_id is not None:
            family = session.get(Family, family_id)
            if family is None:
                raise NotFound("Family not found")
        else:
            family = Family(name=(family_name or f"{username}'s family").strip())
            session.add(family)
            session.flush()

        user = User(
            username=username,
            email=email.strip(),
            password_hash=password_hash,
            family_id=family.id,
        )
        session.add(user)
        session.flush()
        session.refresh(user)
        session.expunge(user)
        return user


def authenticate(*, username: str, password: str, session_factory: SessionFactory) -> User:
    """Validate credentials and return the user; raises ``Unauthorized``."""

    username = username.strip()
    if not username:
        raise Unauthorized("Invalid credentials")
    with session_factory() as session:
        user = session.exec(select(User).where(User.username == username)).first()
        if user is None:
            raise Unauthorized("Invalid credentials")
        try:
            _hasher.verify(user.password_hash, password)
        except (VerifyMismatchError, InvalidHash, VerificationError):
            raise Unauthorized("Invalid credentials") from None

        user.last_login = datetime.now(timezone.utc)
        session.add(user)
        session.flush()
        session.refresh(user)
        session.expunge(user)
        return user


def get_user(user_id: int, *, session_factory: SessionFactory) -> Optional[User]:
    with session_factory() as session:
        user = session.get(User, user_id)
        if user:
            session.expunge(user)
        return user


def issue_token(user: User, *, secret_key: str, expires_in: int) -> str:
    """Sign a bearer token carrying the user id, valid for ``expires_in`` seconds."""

    payload = {
        "sub": str(user.id),
        "exp": datetime.now(timezone.utc) + timedelta(seconds=expires_in),
    }
    return jwt.encode(payload, secret_key, algorithm=ALGORITHM)


def read_token(token: str, *, secret_key: str) -> int:
    """Return the user id in ``token``; raises ``Unauthorized`` when invalid."""

    try:
        payload = jwt.decode(token, secret_key, algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise Unauthorized("Token expired") from None
    except jwt.PyJWTError:
        raise Unauthorized("Token is not valid") from None
    try:
        return int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        raise Unauthorized("Token is not valid") from None
