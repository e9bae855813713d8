from sqlalchemy.orm import declarative_base

Base = declarative_base()

from app.models.user import User  # noqa: E402,F401
from app.models.category import Category, EventCategory  # noqa: E402,F401
from app.models.event import Event  # noqa: E402,F401
from app.models.comment import Comment  # noqa: E402,F401
from app.models.attendance import Attendance  # noqa: E402,F401
from app.models.rating import Rating  # noqa: E402,F401
from app.models.committee import CommitteeMember  # noqa: E402,F401
from app.models.expense import Expense  # noqa: E402,F401
from app.models.interest import InterestedCategory  # noqa: E402,F401
