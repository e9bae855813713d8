from sqlalchemy import Column, Integer, String, DateTime, Text, JSON
from sqlalchemy.orm import relationship
from app.models import Base
from app.services.aggregation import EventStatus, classify_event_status


class Event(Base):
    __tablename__ = "events"

    event_id = Column(Integer, primary_key=True, index=True)
    event_title = Column(String, nullable=False)
    start_time = Column(DateTime, nullable=False, index=True)
    end_time = Column(DateTime, nullable=False)
    location = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    photos = Column(JSON, nullable=False, default=list)

    event_categories = relationship("EventCategory", back_populates="event", cascade="all, delete-orphan", lazy="selectin")
    comments = relationship("Comment", back_populates="event", cascade="all, delete-orphan")
    attendance = relationship("Attendance", back_populates="event", cascade="all, delete-orphan")
    ratings = relationship("Rating", back_populates="event", cascade="all, delete-orphan")
    expenses = relationship("Expense", back_populates="event")

    @property
    def categories(self):
        return [link.category for link in self.event_categories if link.category is not None]

    @property
    def status(self) -> EventStatus:
        return classify_event_status(self.start_time, self.end_time)
