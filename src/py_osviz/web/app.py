"""Flask application factory for the visualiser API.

The ``create_app`` function builds both engines and returns a Flask app
with these endpoints:

- ``GET /`` — list the simulations and their algorithms.
- ``GET /api/paging`` / ``GET /api/disk`` — current snapshot.
- ``POST /api/paging/step`` / ``POST /api/disk/step`` — advance one step.
- ``POST /api/paging/reset`` / ``POST /api/disk/reset`` — rewind,
  optionally switching algorithm via ``{"algorithm": "..."}``.
- ``GET /api/glossary`` — tooltip texts.
- ``GET /api/log`` — the shared event log.
"""

from __future__ import annotations

from flask import Flask, Response, jsonify, request

from py_osviz.config import SimulatorConfig, build_disk_engine, build_page_engine
from py_osviz.io.disk import DiskAlgorithm, parse_disk_algorithm
from py_osviz.logging import Logger
from py_osviz.memory.replacement import PageAlgorithm, parse_page_algorithm
from py_osviz.narration import (
    GLOSSARY,
    READY_MESSAGE,
    describe,
    narrate_disk_step,
    narrate_page_step,
)

_HTTP_BAD_REQUEST = 400


def _requested_algorithm() -> str | None:
    """Return the ``algorithm`` field of the JSON body, if present."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return None
    value = data.get("algorithm")
    return value if isinstance(value, str) else None


def create_app(config: SimulatorConfig | None = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        config: Simulation settings; defaults reproduce the classroom examples.

    Returns:
        A configured Flask application ready to serve.

    """
    config = config or SimulatorConfig()
    logger = Logger()
    paging = build_page_engine(config.paging, logger=logger)
    disk = build_disk_engine(config.disk, logger=logger)

    app = Flask(__name__)

    @app.route("/")
    def index() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Describe the available simulations."""
        return jsonify(
            {
                "paging": {
                    "algorithms": [describe(a) for a in PageAlgorithm],
                    "interval": config.paging.interval,
                },
                "disk": {
                    "algorithms": [describe(a) for a in DiskAlgorithm],
                    "interval": config.disk.interval,
                },
            }
        )

    @app.route("/api/paging")
    def paging_state() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return the page replacement snapshot."""
        return jsonify(paging.snapshot().to_dict())

    @app.route("/api/paging/step", methods=["POST"])
    def paging_step() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Advance page replacement by one reference."""
        result = paging.step()
        return jsonify(
            {
                "step": result.to_dict(),
                "narration": narrate_page_step(result, paging.algorithm),
                "state": paging.snapshot().to_dict(),
            }
        )

    @app.route("/api/paging/reset", methods=["POST"])
    def paging_reset() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Rewind page replacement, optionally switching algorithm."""
        name = _requested_algorithm()
        try:
            algorithm = parse_page_algorithm(name) if name is not None else None
        except ValueError as e:
            return jsonify({"error": str(e)}), _HTTP_BAD_REQUEST
        paging.reset(algorithm=algorithm)
        return jsonify({"narration": READY_MESSAGE, "state": paging.snapshot().to_dict()})

    @app.route("/api/disk")
    def disk_state() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return the disk scheduling snapshot."""
        return jsonify(disk.snapshot().to_dict())

    @app.route("/api/disk/step", methods=["POST"])
    def disk_step() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Service one disk request."""
        result = disk.step()
        return jsonify(
            {
                "step": result.to_dict(),
                "narration": narrate_disk_step(result, disk.algorithm),
                "state": disk.snapshot().to_dict(),
            }
        )

    @app.route("/api/disk/reset", methods=["POST"])
    def disk_reset() -> tuple[Response, int] | Response:  # pyright: ignore[reportUnusedFunction]
        """Rewind disk scheduling, optionally switching algorithm."""
        name = _requested_algorithm()
        try:
            algorithm = parse_disk_algorithm(name) if name is not None else None
        except ValueError as e:
            return jsonify({"error": str(e)}), _HTTP_BAD_REQUEST
        disk.reset(algorithm=algorithm)
        return jsonify({"state": disk.snapshot().to_dict()})

    @app.route("/api/glossary")
    def glossary() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return tooltip titles and texts."""
        return jsonify({key: {"title": title, "content": content} for key, (title, content) in GLOSSARY.items()})

    @app.route("/api/log")
    def log() -> Response:  # pyright: ignore[reportUnusedFunction]
        """Return the event log, oldest first."""
        return jsonify({"entries": [e.to_dict() for e in logger.entries]})

    return app


def main() -> None:
    """Run the web API development server.

    This is the ``py-osviz-web`` console entry point.
    """
    app = create_app()
    app.run(debug=True, port=8080)
