from __future__ import annotations

import re

from flask import current_app, g, jsonify, request
from werkzeug.exceptions import InternalServerError

from bookmarkdb.api import api_bp
from bookmarkdb.services.bookmarks import (
    DEFAULT_PAGE_LIMIT,
    find_or_create_bookmark,
    list_user_bookmarks,
    serialize_user_bookmark,
    upsert_user_bookmark,
)
from bookmarkdb.services.exceptions import StorageError, ValidationError
from bookmarkdb.services.security import api_auth_required

# The bookmarklet posts from whatever page the user is on.
BOOKMARKLET_CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST",
}
BOOKMARKLET_ENDPOINTS = {"api.my_bookmarks_save", "api.my_bookmarks_preflight"}

# ASCII digits only; signed args may carry one leading sign.
UNSIGNED_ARG_RE = re.compile(r"[0-9]+")
SIGNED_ARG_RE = re.compile(r"[+-]?[0-9]+")
UINT64_MAX = 2**64 - 1
INT64_MIN, INT64_MAX = -(2**63), 2**63 - 1


def _int_arg(name: str, default: int, invalid: int, signed: bool = False) -> int:
    raw = request.args.get(name)
    if raw is None:
        return default
    pattern = SIGNED_ARG_RE if signed else UNSIGNED_ARG_RE
    if not pattern.fullmatch(raw):
        return invalid
    value = int(raw)
    low, high = (INT64_MIN, INT64_MAX) if signed else (0, UINT64_MAX)
    if not low <= value <= high:
        return invalid
    return value


def _empty_listing():
    return jsonify({"data": []})


@api_bp.errorhandler(InternalServerError)
def internal_error(error):
    return jsonify({"error": "internal server error"}), 500


@api_bp.after_request
def allow_bookmarklet_origin(response):
    if request.endpoint in BOOKMARKLET_ENDPOINTS:
        response.headers.update(BOOKMARKLET_CORS_HEADERS)
    return response


@api_bp.route("/health")
def health():
    return jsonify({"status": "ok", "service": "bookmarkdb"})


@api_bp.route("/me/bookmarks", methods=["GET"], provide_automatic_options=False)
@api_auth_required
def my_bookmarks_list():
    user_id = g.api_user.id
    last_id = _int_arg("last_id", default=0, invalid=0)
    # An unparseable limit counts as 0, which the service turns into 10.
    limit = _int_arg("limit", default=DEFAULT_PAGE_LIMIT, invalid=0, signed=True)

    try:
        page = list_user_bookmarks(user_id, last_id=last_id, limit=limit)
    except StorageError:
        current_app.logger.exception("Failed to query bookmarks for user %s", user_id)
        return jsonify({"error": "Internal server error"}), 500

    return jsonify(
        {
            "data": [serialize_user_bookmark(item) for item in page.items],
            "meta": {
                "last_id": page.last_id,
                "next_id": page.next_id,
                "limit": page.limit,
                "has_more": page.has_more,
            },
        }
    )


@api_bp.route("/me/bookmarks", methods=["POST"], provide_automatic_options=False)
@api_auth_required
def my_bookmarks_save():
    user_id = g.api_user.id
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        return jsonify({"error": "request body must be a JSON object"}), 400

    url = payload.get("url")
    note = payload.get("note")
    if not isinstance(url, str) or not url:
        return jsonify({"error": "url is required"}), 400
    if note is None:
        note = ""
    if not isinstance(note, str):
        return jsonify({"error": "note must be a string"}), 400

    try:
        bookmark = find_or_create_bookmark(url)
        user_bookmark = upsert_user_bookmark(user_id, bookmark.id, note)
    except ValidationError as exc:
        return jsonify({"error": exc.message}), 400
    except StorageError:
        current_app.logger.exception(
            "Failed to save bookmark %r for user %s", url, user_id
        )
        return jsonify({"error": "Failed to save bookmark"}), 500

    return jsonify(serialize_user_bookmark(user_bookmark))


@api_bp.route("/me/bookmarks", methods=["OPTIONS"])
def my_bookmarks_preflight():
    response = current_app.make_response(("", 204))
    response.headers["Access-Control-Allow-Headers"] = "Content-Type"
    return response


# Declared for clients, but lists and tags have no behaviour yet.


@api_bp.route("/me/lists")
@api_auth_required
def my_lists():
    return _empty_listing()


@api_bp.route("/me/lists/<int:list_id>")
@api_auth_required
def my_list_bookmarks(list_id: int):
    return _empty_listing()


@api_bp.route("/me/tags")
@api_auth_required
def my_tags():
    return _empty_listing()


@api_bp.route("/lists")
def lists_all():
    return _empty_listing()


@api_bp.route("/bookmarks")
def bookmarks_all():
    return _empty_listing()


@api_bp.route("/tags")
def tags_all():
    return _empty_listing()
