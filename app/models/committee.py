from sqlalchemy import Column, Integer, String, DateTime, Text
from datetime import datetime, timezone
from app.models import Base


class CommitteeMember(Base):
    __tablename__ = "committee"

    member_id = Column(Integer, primary_key=True, index=True)
    member_name = Column(String(100), nullable=False)
    role = Column(String(100), nullable=False)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    responsibilities = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
