#!/usr/bin/env python3
"""
Port utilities for the ANSI to HTML server
Finds an available port when none is configured
"""

import logging
import socket

logger = logging.getLogger(__name__)


def find_free_port(host: str = "127.0.0.1", start_port: int = 8000, max_attempts: int = 100) -> int:
    """Find an available port on host starting from start_port"""
    for port in range(start_port, start_port + max_attempts):
        try:
            with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
                sock.bind((host, port))
                return port
        except OSError:
            logger.debug(f"Port {port} on {host} is busy")
            continue

    raise RuntimeError(f"No available ports found in range {start_port} to {start_port + max_attempts}")
