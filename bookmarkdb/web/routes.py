from bookmarkdb.web import web_bp

WELCOME_TEXT = "Welcome to the Bookmark API"


@web_bp.route("/")
def landing():
    return WELCOME_TEXT, 200, {"Content-Type": "text/plain; charset=utf-8"}
