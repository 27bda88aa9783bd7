import sys
import logging
import argparse

from sqlalchemy.exc import SQLAlchemyError

from bookmarkdb import create_app

log = logging.getLogger('werkzeug')
log.disabled = True
cli = sys.modules['flask.cli']
cli.show_server_banner = lambda *x: None


def main() -> None:
    p = argparse.ArgumentParser(prog="bookmarkdb")
    p.add_argument("--host", default="0.0.0.0")
    p.add_argument("--port", type=int, default=8080)
    args = p.parse_args()

    try:
        app = create_app()
    except SQLAlchemyError as exc:
        print(f"Failed to open bookmark database: {exc}", file=sys.stderr, flush=True)
        raise SystemExit(1)

    print(f"Bookmark API starting on http://{args.host}:{args.port}", flush=True)
    app.run(host=args.host, port=args.port, debug=False)


if __name__ == "__main__":
    main()
