from app.models import Base
from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship

class Category(Base):
    __tablename__ = "categories"

    category_id = Column(Integer, primary_key=True, index=True)
    category_name = Column(String, nullable=False, unique=True)

    event_links = relationship("EventCategory", back_populates="category", cascade="all, delete-orphan")


class EventCategory(Base):
    __tablename__ = "event_categories"

    event_id = Column(Integer, ForeignKey("events.event_id", ondelete="CASCADE"), primary_key=True)
    category_id = Column(Integer, ForeignKey("categories.category_id", ondelete="CASCADE"), primary_key=True)

    event = relationship("Event", back_populates="event_categories")
    category = relationship("Category", back_populates="event_links", lazy="joined")
