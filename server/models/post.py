# server/models/post.py

from sqlalchemy import Column, Integer, String, Text
from . import Base


# Text columns a client may set on create/update. `image` is handled apart.
POST_TEXT_FIELDS = ("title", "date", "category", "excerpt", "content", "author")
REQUIRED_POST_FIELDS = ("title", "excerpt", "content")


class Post(Base):
    __tablename__ = "posts"
    # AUTOINCREMENT keeps ids from being reused after the newest row is deleted
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String)
    date = Column(String)
    image = Column(String, nullable=True)
    category = Column(String)
    excerpt = Column(Text)
    content = Column(Text)
    author = Column(String)
