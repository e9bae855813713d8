from app.models import Base
from sqlalchemy import Column, Integer, String, ForeignKey


class InterestedCategory(Base):
    __tablename__ = "interested_category"

    user_id = Column(String(64), primary_key=True, index=True)
    category_id = Column(Integer, ForeignKey("categories.category_id", ondelete="CASCADE"), primary_key=True)
