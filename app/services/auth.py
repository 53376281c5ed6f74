from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from firebase_admin import auth as firebase_auth
from app.db import get_db
from app.models.user import User, UserRole
from sqlalchemy.orm import Session
from datetime import UTC, datetime
from app.core.settings import settings
from app.exceptions import ForbiddenException, UnauthorizedException

security = HTTPBearer()

# Development and test only; persisted on first use so FK constraints pass
MOCK_TOKENS = {
    "mock-member-token": ("member-1", "Member One", "member@example.com", UserRole.member),
    "mock-church-admin-token": ("church-admin-1", "Church Admin One", "church-admin@example.com", UserRole.church_admin),
    "mock-admin-token": ("admin-1", "Admin One", "admin@example.com", UserRole.admin),
}

def _mock_tokens_enabled() -> bool:
    return settings.is_development or settings.environment.lower() == "test"

def _role_from_claim(claim) -> UserRole:
    try:
        return UserRole(claim)
    except ValueError:
        return UserRole.member

def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    token = credentials.credentials
    if token in MOCK_TOKENS and _mock_tokens_enabled():
        uid, name, email, role = MOCK_TOKENS[token]
        user = db.query(User).filter(User.id == uid).first()
        if not user:
            user = User(id=uid, name=name, email=email, role=role, created_at=datetime.now(UTC))
            db.add(user)
            db.commit()
            db.refresh(user)
        return user

    try:
        decoded_token = firebase_auth.verify_id_token(token)
        user_id = decoded_token["uid"]
        email = decoded_token["email"]
    except Exception:
        raise UnauthorizedException("Invalid or expired Firebase token")
    full_name = decoded_token.get("name")
    if not full_name:
        given = decoded_token.get("given_name", "")
        family = decoded_token.get("family_name", "")
        full_name = (given + " " + family).strip() or email.split('@')[0].title()

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        # Existing accounts created before Firebase linkage are matched by email
        user = db.query(User).filter(User.email == email).first()
        if user:
            user.id = user_id
            db.commit()
            return user
        user = User(
            id=user_id,
            email=email,
            name=full_name,
            role=_role_from_claim(decoded_token.get("role")),
        )
        db.add(user)
        db.commit()
        db.refresh(user)
    return user

def require_admin_or_church_admin(user: User = Depends(get_current_user)) -> User:
    if user.role not in {UserRole.admin, UserRole.church_admin}:
        raise ForbiddenException("Admins or church admins only")
    return user
