"""Local preview server for a generated site."""

from pathlib import Path

from flask import Flask, send_from_directory

DEFAULT_PORT = 5050


def create_app(site_dir: str | Path) -> Flask:
    """Create a Flask app serving the files of a generated site."""
    site_dir = Path(site_dir).resolve()
    app = Flask(__name__, static_folder=None)
    app.config["SITE_DIR"] = site_dir

    @app.route("/")
    def index():
        return send_from_directory(site_dir, "index.html")

    @app.route("/<path:filename>")
    def site_file(filename):
        # send_from_directory rejects paths escaping site_dir and 404s on missing files
        return send_from_directory(site_dir, filename)

    return app


def serve(site_dir: str | Path, port: int = DEFAULT_PORT) -> None:
    """Run the preview server until interrupted."""
    app = create_app(site_dir)
    print(f"Serving {app.config['SITE_DIR']}")
    print(f"Open http://localhost:{port} in your browser")
    app.run(host="127.0.0.1", port=port)
