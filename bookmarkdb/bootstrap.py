from __future__ import annotations

from flask import current_app

from bookmarkdb.extensions import db
from bookmarkdb.models import User


def ensure_default_user() -> User:
    username = current_app.config["DEFAULT_USERNAME"]
    user = User.query.filter_by(username=username).first()
    if user is None:
        user = User(username=username)
        db.session.add(user)
        db.session.commit()
        current_app.logger.info("Created default user %r", username)
    elif user.deleted_at is not None:
        user.deleted_at = None
        db.session.commit()
    return user
