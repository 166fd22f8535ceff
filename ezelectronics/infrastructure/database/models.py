"""SQLAlchemy ORM models."""
from sqlalchemy import Column, String, Text

from .base import Base


class User(Base):
    __tablename__ = "users"

    username = Column(String(50), primary_key=True)
    name = Column(String(100), nullable=False)
    surname = Column(String(100), nullable=False)
    role = Column(String(20), nullable=False, index=True)
    password = Column(String(60))
    salt = Column(String(29))
    address = Column(Text)
    birthdate = Column(String(10))
