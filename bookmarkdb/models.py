from datetime import datetime, timezone

from flask_login import UserMixin

from bookmarkdb.extensions import db, login_manager


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimestampMixin:
    # Rows with deleted_at set are treated as gone by service lookups.
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = db.Column(
        db.DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )
    deleted_at = db.Column(db.DateTime(timezone=True), nullable=True, index=True)


# Shared entities, used by every user.


class Bookmark(TimestampMixin, db.Model):
    __tablename__ = "bookmarks"

    id = db.Column(db.Integer, primary_key=True)
    url = db.Column(db.Text, nullable=False, unique=True)
    # Only a scraper would fill these in; null is not the same as "".
    title = db.Column(db.String(512), nullable=True, default=None)
    description = db.Column(db.Text, nullable=True, default=None)


class Tag(TimestampMixin, db.Model):
    __tablename__ = "tags"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(64), nullable=False, unique=True)


class AuthMethod(TimestampMixin, db.Model):
    __tablename__ = "auth_methods"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(64), nullable=False, unique=True)


# User-specific entities.


class User(UserMixin, TimestampMixin, db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(120), unique=True, nullable=False, index=True)

    auths = db.relationship("UserAuth", backref="user", lazy=True)
    bookmarks = db.relationship("UserBookmark", backref="user", lazy=True)
    lists = db.relationship("List", backref="user", lazy=True)


@login_manager.user_loader
def load_user(user_id: str):
    return db.session.get(User, int(user_id))


class UserAuth(TimestampMixin, db.Model):
    __tablename__ = "user_auths"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer, db.ForeignKey("users.id"), nullable=False, index=True
    )
    method = db.Column(db.String(64), nullable=False)
    value = db.Column(db.Text, nullable=False)


class UserBookmark(TimestampMixin, db.Model):
    __tablename__ = "user_bookmarks"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer, db.ForeignKey("users.id"), nullable=False, index=True
    )
    bookmark_id = db.Column(
        db.Integer, db.ForeignKey("bookmarks.id"), nullable=False, index=True
    )
    note = db.Column(db.Text, nullable=False, default="")

    bookmark = db.relationship("Bookmark", backref="user_bookmarks")

    __table_args__ = (
        db.UniqueConstraint(
            "user_id", "bookmark_id", name="uq_user_bookmark_user_bookmark"
        ),
    )


class List(TimestampMixin, db.Model):
    __tablename__ = "lists"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer, db.ForeignKey("users.id"), nullable=False, index=True
    )
    name = db.Column(db.String(255), nullable=False)


class ListBookmark(TimestampMixin, db.Model):
    __tablename__ = "list_bookmarks"

    id = db.Column(db.Integer, primary_key=True)
    list_id = db.Column(
        db.Integer, db.ForeignKey("lists.id"), nullable=False, index=True
    )
    bookmark_id = db.Column(
        db.Integer, db.ForeignKey("bookmarks.id"), nullable=False, index=True
    )

    list = db.relationship("List", backref="list_bookmarks")
    bookmark = db.relationship("Bookmark")


class UserBookmarkTag(TimestampMixin, db.Model):
    __tablename__ = "user_bookmark_tags"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(
        db.Integer, db.ForeignKey("users.id"), nullable=False, index=True
    )
    bookmark_id = db.Column(
        db.Integer, db.ForeignKey("bookmarks.id"), nullable=False, index=True
    )
    tag_id = db.Column(db.Integer, db.ForeignKey("tags.id"), nullable=False, index=True)

    user = db.relationship("User")
    bookmark = db.relationship("Bookmark")
    tag = db.relationship("Tag")
