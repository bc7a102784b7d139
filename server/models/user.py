# server/models/user.py

from sqlalchemy import Column, Integer, String
from . import Base


# -------------------------------
# User Model
# -------------------------------

class User(Base):
    """
    Blog administrator account.

    A single `admin` row is seeded at startup from ADMIN_PASSWORD and is never
    updated or deleted afterwards. Only the bcrypt hash of the password is kept.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
