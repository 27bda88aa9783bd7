from functools import wraps

from flask import current_app, g, jsonify
from flask_login import current_user

from bookmarkdb.extensions import login_manager
from bookmarkdb.models import User


@login_manager.request_loader
def load_default_user(request):
    # No authentication yet: every request acts as the configured default user.
    username = current_app.config["DEFAULT_USERNAME"]
    return User.query.filter_by(username=username, deleted_at=None).first()


def get_authenticated_api_user():
    if current_user.is_authenticated:
        return current_user._get_current_object()
    return None


def api_auth_required(func):
    @wraps(func)
    def wrapped(*args, **kwargs):
        user = get_authenticated_api_user()
        if not user:
            return jsonify({"error": "authentication required"}), 401
        g.api_user = user
        return func(*args, **kwargs)

    return wrapped
