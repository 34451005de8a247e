"""
Flask app exposing the bin update as an HTTP endpoint
"""

import logging
import sys
from pathlib import Path

from flasgger import Swagger
from flask import Flask, jsonify, request

REPO_ROOT = Path(__file__).resolve().parent.parent.parent
# When running as a script (e.g. `python services/api/app.py`), ensure repo root is on sys.path
# so `import config` (and `services.*`) work the same as when installed.
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

import config  # noqa: E402
from services.common.logging_utils import setup_logging  # noqa: E402
from services.handler import handler  # noqa: E402

setup_logging()
logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config["DEBUG"] = config.DEBUG


swagger_config = {
    "headers": [],
    "specs": [
        {
            "endpoint": "apispec",
            "route": "/apispec.json",
        }
    ],
    "static_url_path": "/flasgger_static",
    "swagger_ui": True,
    "specs_route": "/api-docs/",
}

swagger_template = {
    "swagger": "2.0",
    "info": {
        "title": "Bin Times API",
        "description": "Scrapes the council bin collection lookup and syncs reminders to Google Calendar.",
        "version": "1.0.0",
    },
    "basePath": "/",
    "schemes": ["http", "https"],
}

Swagger(app, config=swagger_config, template=swagger_template)


@app.before_request
def only_get_allowed():
    """Reject all non-GET requests"""
    if request.method != "GET":
        return jsonify({"error": "Only GET method is allowed"}), 405


@app.route("/health", methods=["GET"])
def health():
    """
    Liveness check
    ---
    tags:
      - Health
    responses:
      200:
        description: Service is up
    """
    return jsonify({"status": "ok"})


@app.route("/update", methods=["GET"])
def update():
    """
    Scrape collection dates and sync calendar reminders
    ---
    tags:
      - Bins
    parameters:
      - name: code
        in: query
        type: string
        required: false
        description: Shared access code (required when BINS_ACCESS_CODE is set)
    responses:
      200:
        description: Scrape (and calendar sync) summary
        schema:
          type: object
          properties:
            address:
              type: string
            collectionTimes:
              type: object
              additionalProperties:
                type: string
            timestamp:
              type: string
            calendarEvents:
              type: integer
            calendarError:
              type: string
      401:
        description: Access code missing or wrong
      500:
        description: Scraping failed
    """
    event = {"queryStringParameters": request.args.to_dict()}
    result = handler(event)
    return app.response_class(
        response=result["body"],
        status=result["statusCode"],
        mimetype="application/json",
    )


@app.errorhandler(404)
def not_found(_error):
    return jsonify({"error": "Not found"}), 404


if __name__ == "__main__":
    logger.info("Starting API on port %s", config.API_PORT)
    app.run(host="0.0.0.0", port=config.API_PORT, debug=config.DEBUG)
