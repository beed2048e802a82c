#!/usr/bin/env python3
"""
Tests for ANSI to HTML Server
Handlers are awaited directly with mocked requests
"""

import asyncio
import json
import unittest
from unittest.mock import Mock, patch

from sanic import Sanic

from ansi_html_server import (
    api_bp,
    convert_text,
    create_app,
    detect_text,
    health,
    run_server,
    strip_text,
)
from ansi_to_html import AnsiToHtml
from converter_config import ConverterConfig


def make_request(payload, config=None):
    """Build a mock request carrying a JSON payload and app context"""
    config = config or ConverterConfig()
    request = Mock()
    request.json = payload
    request.app.ctx.config = config
    request.app.ctx.converter = AnsiToHtml(config)
    return request


def call(handler, request):
    """Await a handler and decode its JSON body"""
    result = asyncio.run(handler(request))
    return result.status, json.loads(result.body)


class TestApiRoutes(unittest.TestCase):
    """Test cases for the conversion API routes"""

    def test_api_blueprint_creation(self):
        """Test that API blueprint is created correctly"""
        self.assertEqual(api_bp.name, "api")
        self.assertEqual(api_bp.url_prefix, "/api")

    def test_convert(self):
        """Test converting ANSI text"""
        status, body = call(convert_text, make_request({"text": "\x1b[31m<b>red</b>\x1b[0m"}))
        self.assertEqual(status, 200)
        self.assertTrue(body["has_ansi"])
        self.assertEqual(body["html"], '<span style="color: #800000">&lt;b&gt;red&lt;/b&gt;</span>')

    def test_convert_plain(self):
        """Test converting plain text"""
        status, body = call(convert_text, make_request({"text": "hello world"}))
        self.assertEqual(status, 200)
        self.assertFalse(body["has_ansi"])
        self.assertEqual(body["html"], "hello world")

    def test_strip(self):
        """Test stripping escape sequences"""
        status, body = call(strip_text, make_request({"text": "\x1b[31mred\x1b[0m \x1b[32mgreen\x1b[0m"}))
        self.assertEqual(status, 200)
        self.assertEqual(body["text"], "red green")

    def test_detect(self):
        """Test detection endpoint"""
        _, body = call(detect_text, make_request({"text": "\x1b[38;2;136;136;136mgray\x1b[0m"}))
        self.assertTrue(body["has_ansi"])

        _, body = call(detect_text, make_request({"text": "plain text"}))
        self.assertFalse(body["has_ansi"])

    def test_missing_text(self):
        """Test that a body without a string text field is rejected"""
        for payload in (None, [], {}, {"text": 5}):
            status, body = call(convert_text, make_request(payload))
            self.assertEqual(status, 400)
            self.assertIn("error", body)

    def test_input_too_large(self):
        """Test the configured input size limit"""
        config = ConverterConfig(max_input_length=10)
        status, body = call(convert_text, make_request({"text": "x" * 11}, config))
        self.assertEqual(status, 413)
        self.assertIn("error", body)

        status, _ = call(convert_text, make_request({"text": "x" * 10}, config))
        self.assertEqual(status, 200)

    def test_health(self):
        """Test health endpoint"""
        status, body = call(health, Mock())
        self.assertEqual(status, 200)
        self.assertEqual(body, {"status": "ok"})


class TestAppSetup(unittest.TestCase):
    """Test app creation and server start"""

    def test_create_app(self):
        """Test that the app carries config, converter and blueprint"""
        config = ConverterConfig(newline=True)
        app = create_app(config, name="AnsiHtmlCreateAppTest")

        self.assertIsInstance(app, Sanic)
        self.assertIs(app.ctx.config, config)
        self.assertTrue(app.ctx.converter.config.newline)
        self.assertIn("api", app.blueprints)

    @patch("ansi_html_server.create_app")
    def test_run_server_uses_configured_port(self, mock_create_app):
        """Test run_server passes host and port to the app"""
        run_server(ConverterConfig(host="0.0.0.0", port=9123))

        mock_create_app.return_value.run.assert_called_once()
        kwargs = mock_create_app.return_value.run.call_args.kwargs
        self.assertEqual(kwargs["host"], "0.0.0.0")
        self.assertEqual(kwargs["port"], 9123)

    @patch("ansi_html_server.find_free_port", return_value=8042)
    @patch("ansi_html_server.create_app")
    def test_run_server_allocates_port(self, mock_create_app, mock_find_free_port):
        """Test run_server finds a free port when none is configured"""
        run_server(ConverterConfig())

        mock_find_free_port.assert_called_once_with("127.0.0.1", 8000)
        self.assertEqual(mock_create_app.return_value.run.call_args.kwargs["port"], 8042)


if __name__ == "__main__":
    unittest.main()
