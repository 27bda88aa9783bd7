from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import joinedload

from bookmarkdb.extensions import db
from bookmarkdb.models import Bookmark, UserBookmark
from bookmarkdb.services.common import validate_url
from bookmarkdb.services.exceptions import StorageError

DEFAULT_PAGE_LIMIT = 100
# Known quirk: a limit below 1 falls back to 10, not to DEFAULT_PAGE_LIMIT.
FALLBACK_PAGE_LIMIT = 10
MAX_PAGE_LIMIT = 1000
# Largest value SQLite can bind as an INTEGER.
MAX_ROW_ID = 2**63 - 1


@dataclass
class BookmarkPage:
    items: list[UserBookmark]
    last_id: int
    next_id: int
    limit: int
    has_more: bool


def _find_bookmark(url: str) -> Bookmark | None:
    return Bookmark.query.filter_by(url=url).first()


def _find_user_bookmark(user_id: int, bookmark_id: int) -> UserBookmark | None:
    return UserBookmark.query.filter_by(
        user_id=user_id, bookmark_id=bookmark_id
    ).first()


def _apply_note(user_bookmark: UserBookmark, note: str) -> bool:
    if user_bookmark.deleted_at is not None:
        user_bookmark.deleted_at = None
        user_bookmark.note = note
        return True
    # An empty note never blanks out a stored one.
    if note and note != user_bookmark.note:
        user_bookmark.note = note
        return True
    return False


def find_or_create_bookmark(url: str) -> Bookmark:
    validate_url(url)

    try:
        bookmark = _find_bookmark(url)
        if bookmark is not None:
            if bookmark.deleted_at is not None:
                bookmark.deleted_at = None
                db.session.commit()
            return bookmark

        bookmark = Bookmark(url=url)
        db.session.add(bookmark)
        try:
            db.session.commit()
        except IntegrityError:
            # Another request inserted the same URL between our lookup and
            # insert; the unique constraint on url makes theirs the winner.
            db.session.rollback()
            bookmark = _find_bookmark(url)
            if bookmark is None:
                raise
            return bookmark

        current_app.logger.info("Created bookmark %s for %s", bookmark.id, url)
        return bookmark
    except SQLAlchemyError as exc:
        db.session.rollback()
        raise StorageError(f"failed to find or create bookmark: {exc}") from exc


def upsert_user_bookmark(
    user_id: int, bookmark_id: int, note: str = ""
) -> UserBookmark:
    note = note or ""

    try:
        user_bookmark = _find_user_bookmark(user_id, bookmark_id)
        if user_bookmark is None:
            user_bookmark = UserBookmark(
                user_id=user_id, bookmark_id=bookmark_id, note=note
            )
            db.session.add(user_bookmark)
            try:
                db.session.commit()
                return user_bookmark
            except IntegrityError:
                db.session.rollback()
                user_bookmark = _find_user_bookmark(user_id, bookmark_id)
                if user_bookmark is None:
                    raise

        if _apply_note(user_bookmark, note):
            db.session.commit()
            current_app.logger.debug(
                "Updated note on user bookmark %s", user_bookmark.id
            )
        return user_bookmark
    except SQLAlchemyError as exc:
        db.session.rollback()
        raise StorageError(f"failed to save user bookmark: {exc}") from exc


def coerce_page_limit(limit: int | None) -> int:
    if limit is None:
        return DEFAULT_PAGE_LIMIT
    if limit < 1:
        return FALLBACK_PAGE_LIMIT
    return min(limit, MAX_PAGE_LIMIT)


def list_user_bookmarks(
    user_id: int, last_id: int = 0, limit: int | None = None
) -> BookmarkPage:
    limit = coerce_page_limit(limit)
    last_id = min(max(last_id or 0, 0), MAX_ROW_ID)

    query = (
        UserBookmark.query.options(joinedload(UserBookmark.bookmark))
        .filter_by(user_id=user_id)
        .filter(UserBookmark.deleted_at.is_(None))
    )
    if last_id > 0:
        query = query.filter(UserBookmark.id > last_id)

    try:
        rows = query.order_by(UserBookmark.id.asc()).limit(limit + 1).all()
    except SQLAlchemyError as exc:
        db.session.rollback()
        raise StorageError(f"failed to list user bookmarks: {exc}") from exc

    has_more = len(rows) > limit
    items = rows[:limit]
    next_id = items[-1].id if items else 0
    return BookmarkPage(
        items=items,
        last_id=last_id,
        next_id=next_id,
        limit=limit,
        has_more=has_more,
    )


def _isoformat(value: datetime) -> str:
    # SQLite hands timestamps back without their zone; they are stored as UTC.
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


def serialize_user_bookmark(user_bookmark: UserBookmark) -> dict:
    bookmark = user_bookmark.bookmark
    return {
        "bookmark_id": bookmark.id,
        "user_bookmark_id": user_bookmark.id,
        "user_id": user_bookmark.user_id,
        "url": bookmark.url,
        "title": bookmark.title,
        "description": bookmark.description,
        "note": user_bookmark.note,
        "created_at": _isoformat(user_bookmark.created_at),
        "updated_at": _isoformat(user_bookmark.updated_at),
    }
