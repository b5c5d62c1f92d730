"""User model.

Only the username population matters to the catalog: it is the set a new
music folder is granted to at creation time.
"""

from sqlalchemy import Column, DateTime, String
from sqlalchemy.sql import func

from ..database import Base


class User(Base):
    __tablename__ = "users"

    username = Column(String(255), primary_key=True)
    email = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
