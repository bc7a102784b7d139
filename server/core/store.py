# server/core/store.py

import logging
from contextlib import contextmanager
from pathlib import Path
from threading import Lock
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.errors import NotFoundError, StoreError, ValidationError
from core.security import get_password_hash
from database import init_db, make_engine, make_session_factory
from models.post import POST_TEXT_FIELDS, REQUIRED_POST_FIELDS, Post
from models.user import User


logger = logging.getLogger("portfolio.store")

ADMIN_USERNAME = "admin"


def check_required_fields(fields: dict):
    if any(not fields.get(name) for name in REQUIRED_POST_FIELDS):
        raise ValidationError("Missing fields")


class PostStore:
    """
    Owns the users and posts tables of a single SQLite file.

    One instance is built per process and handed to request handlers through
    `app.state.store`. Every mutation runs in its own transaction and is
    committed before the method returns. Mutations are serialized by a lock
    since FastAPI runs sync handlers on a thread pool.
    """

    def __init__(self, database_path: Path):
        self.database_path = Path(database_path)
        self.engine = make_engine(self.database_path)
        self.SessionLocal = make_session_factory(self.engine)
        self._write_lock = Lock()

    def init(self):
        self.database_path.parent.mkdir(parents=True, exist_ok=True)
        init_db(self.engine)

    def dispose(self):
        self.engine.dispose()

    @contextmanager
    def _session(self):
        db: Session = self.SessionLocal()
        try:
            yield db
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("Database operation failed: %s", e)
            raise StoreError() from e
        finally:
            db.close()

    @contextmanager
    def _transaction(self):
        with self._write_lock, self._session() as db:
            yield db
            db.commit()

    # -------------------------------
    # Posts
    # -------------------------------

    def list_posts(self) -> list[Post]:
        with self._session() as db:
            return db.query(Post).order_by(Post.id.desc()).all()

    def get_post(self, post_id: int) -> Post:
        with self._session() as db:
            post = db.get(Post, post_id)
        if post is None:
            raise NotFoundError()
        return post

    def create_post(self, fields: dict) -> Post:
        check_required_fields(fields)

        post = Post(**{name: fields.get(name) for name in POST_TEXT_FIELDS})
        post.image = fields.get("image")
        with self._transaction() as db:
            db.add(post)
            db.flush()
        logger.info("Created post %s", post.id)
        return post

    def update_post(self, post_id: int, fields: dict) -> Post:
        """
        Replaces every text field with the supplied values; absent keys become null.
        The image only changes when an `image` key is present.
        """
        with self._transaction() as db:
            post = db.get(Post, post_id)
            if post is None:
                raise NotFoundError()
            for name in POST_TEXT_FIELDS:
                setattr(post, name, fields.get(name))
            if "image" in fields:
                post.image = fields["image"]
        logger.info("Updated post %s", post_id)
        return post

    def delete_post(self, post_id: int) -> bool:
        with self._transaction() as db:
            deleted = db.query(Post).filter(Post.id == post_id).delete()
        logger.info("Deleted post %s (%s row(s) removed)", post_id, deleted)
        return True

    # -------------------------------
    # Users
    # -------------------------------

    def find_user_by_username(self, username: str) -> User | None:
        with self._session() as db:
            return db.query(User).filter(User.username == username).first()

    def seed_admin_if_absent(self, password: str) -> bool:
        if not password:
            raise ValidationError("Admin password is required to seed the admin user")

        with self._transaction() as db:
            exists = db.query(User).filter(User.username == ADMIN_USERNAME).first()
            if exists:
                logger.info("Admin user already exists in database")
                return False
            db.add(User(username=ADMIN_USERNAME, hashed_password=get_password_hash(password)))
        logger.info("Seeded admin user with username=%s", ADMIN_USERNAME)
        return True
