from app.models import Base
from sqlalchemy.orm import relationship
from sqlalchemy import Column, Integer, ForeignKey, DateTime, String, UniqueConstraint, CheckConstraint
from datetime import datetime, timezone

class Rating(Base):
    __tablename__ = "ratings"

    rating_id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.event_id", ondelete="CASCADE"), nullable=False)
    user_name = Column(String(100), nullable=False)
    rating = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        UniqueConstraint("event_id", "user_name", name="uq_rating_event_user"),
        CheckConstraint("rating >= 1 AND rating <= 5", name="cc_rating_range"),
    )

    event = relationship("Event", back_populates="ratings")
