"""
ANSI to HTML Server - HTTP endpoints exposing conversion, stripping and detection
The server is the caller that size-limits untrusted input before conversion
"""

import logging
from typing import Optional, Tuple

from sanic import Blueprint, Sanic, response
from sanic.request import Request
from sanic.response import HTTPResponse

from ansi_detect import has_ansi_codes
from ansi_to_html import AnsiToHtml, strip_ansi_codes
from converter_config import ConverterConfig
from port_utils import find_free_port

logger = logging.getLogger(__name__)

DEFAULT_PORT_START = 8000

# Create API blueprint
api_bp = Blueprint("api", url_prefix="/api")


def _read_text(request: Request) -> Tuple[Optional[str], Optional[HTTPResponse]]:
    """Pull the "text" field from a JSON body, or build the error response"""
    payload = request.json
    if not isinstance(payload, dict) or not isinstance(payload.get("text"), str):
        return None, response.json({"error": 'Body must be a JSON object with a string "text" field'}, status=400)

    text = payload["text"]
    limit = request.app.ctx.config.max_input_length
    if len(text) > limit:
        logger.warning(f"Rejected input of {len(text)} characters (limit {limit})")
        return None, response.json({"error": f"Input exceeds {limit} characters"}, status=413)

    return text, None


@api_bp.route("/convert", methods=["POST"])
async def convert_text(request: Request) -> HTTPResponse:
    """Convert ANSI text to HTML"""
    text, error = _read_text(request)
    if error is not None:
        return error

    html = request.app.ctx.converter.convert(text)
    return response.json({"html": html, "has_ansi": has_ansi_codes(text)})


@api_bp.route("/strip", methods=["POST"])
async def strip_text(request: Request) -> HTTPResponse:
    """Remove escape sequences and return plain text"""
    text, error = _read_text(request)
    if error is not None:
        return error

    return response.json({"text": strip_ansi_codes(text)})


@api_bp.route("/detect", methods=["POST"])
async def detect_text(request: Request) -> HTTPResponse:
    """Report whether the text contains ANSI escape sequences"""
    text, error = _read_text(request)
    if error is not None:
        return error

    return response.json({"has_ansi": has_ansi_codes(text)})


@api_bp.route("/health", methods=["GET"])
async def health(_request: Request) -> HTTPResponse:
    """Liveness check"""
    return response.json({"status": "ok"})


def create_app(config: Optional[ConverterConfig] = None, name: str = "AnsiHtml") -> Sanic:
    """Build the Sanic app with converters stored in its context"""
    config = config or ConverterConfig()

    app = Sanic(name)
    app.ctx.config = config
    app.ctx.converter = AnsiToHtml(config)
    app.blueprint(api_bp)

    return app


def run_server(config: ConverterConfig):
    """Run the HTTP server in the current process until interrupted"""
    port = config.port if config.port is not None else find_free_port(config.host, DEFAULT_PORT_START)
    app = create_app(config)

    logger.info(f"Starting ANSI to HTML server on http://{config.host}:{port}")
    app.run(
        host=config.host,
        port=port,
        debug=False,
        auto_reload=False,
        access_log=False,
        single_process=True,
    )
