from sqlalchemy import Column, String, ForeignKey, DateTime, Integer, JSON
from sqlalchemy.orm import relationship
from app.db import Base
from datetime import datetime, UTC
import uuid

class AssessmentDraft(Base):
    __tablename__ = "spiritual_gift_drafts"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    tier = Column(String, nullable=False)
    answers = Column(JSON, nullable=False, default=dict)
    page = Column(Integer, nullable=False, default=0)
    status = Column(String, nullable=False, default="not_started")
    assessment_id = Column(String, ForeignKey("spiritual_gift_assessments.id"), nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC))
    updated_at = Column(DateTime, default=lambda: datetime.now(UTC), onupdate=lambda: datetime.now(UTC))

    user = relationship("User", back_populates="drafts")
