from sqlalchemy import Column, String, JSON, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from app.db import Base
from datetime import datetime, UTC
import uuid

class Assessment(Base):
    __tablename__ = "spiritual_gift_assessments"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    tier = Column(String, nullable=False)  # quick | expanded
    answers = Column(JSON, nullable=False, default=dict)
    # camelCase profile dict as returned to clients
    profile = Column(JSON, nullable=False)
    gift_scores = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), index=True)

    user = relationship("User", back_populates="assessments")
