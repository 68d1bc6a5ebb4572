"""
Flask server exposing the ABI extractor over HTTP.

Usage:
    alkanes-abi-server --port 5000

Then POST a contract to http://localhost:5000/api/abi
"""

import argparse

from flask import Flask

from .config import SERVER_HOST, SERVER_PORT
from .routes import bp


def create_app():
    app = Flask(__name__)
    # ABI field order is part of the output schema.
    app.json.sort_keys = False
    app.register_blueprint(bp)
    return app


def main(argv=None):
    ap = argparse.ArgumentParser(description="Serve the Alkanes ABI extractor over HTTP.")
    ap.add_argument("--host", default=SERVER_HOST)
    ap.add_argument("--port", type=int, default=SERVER_PORT)
    ap.add_argument("--debug", action="store_true")
    args = ap.parse_args(argv)

    app = create_app()
    print(f" Alkanes ABI server running at http://{args.host}:{args.port}")
    app.run(host=args.host, port=args.port, debug=args.debug)


if __name__ == "__main__":
    main()
