from sqlalchemy import Column, String, DateTime, Enum, JSON
from sqlalchemy.orm import relationship
import enum
from datetime import datetime, UTC
from app.db import Base
import uuid

class UserRole(enum.Enum):
    member = "member"
    church_admin = "church_admin"
    admin = "admin"

class User(Base):
    __tablename__ = "users"
    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()), index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    role = Column(Enum(UserRole), nullable=False, default=UserRole.member)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC))
    # Latest scored profile, copied from the most recent submission
    spiritual_profile = Column(JSON, nullable=True)

    assessments = relationship("Assessment", back_populates="user", cascade="all, delete-orphan")
    drafts = relationship("AssessmentDraft", back_populates="user", cascade="all, delete-orphan")
