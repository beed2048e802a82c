#!/usr/bin/env python3
"""Tests for port_utils module."""

import socket
import unittest

from port_utils import find_free_port


class TestPortUtils(unittest.TestCase):
    """Test cases for port utilities"""

    def test_find_free_port(self):
        """Test find_free_port function"""
        port = find_free_port()
        self.assertIsInstance(port, int)
        self.assertGreater(port, 0)
        self.assertLess(port, 65536)

    def test_find_free_port_with_start_port(self):
        """Test find_free_port with custom start port"""
        port = find_free_port(start_port=9000)
        self.assertGreaterEqual(port, 9000)

    def test_busy_port_is_skipped(self):
        """Test that a bound port is not returned"""
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
            sock.bind(("127.0.0.1", 0))
            sock.listen(1)
            busy_port = sock.getsockname()[1]
            if busy_port > 65000:
                self.skipTest("Ephemeral port too close to the top of the range")

            port = find_free_port("127.0.0.1", busy_port, 5)
            self.assertNotEqual(port, busy_port)

    def test_no_port_available(self):
        """Test error when the range is exhausted"""
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
            sock.bind(("127.0.0.1", 0))
            sock.listen(1)
            busy_port = sock.getsockname()[1]

            with self.assertRaises(RuntimeError):
                find_free_port("127.0.0.1", busy_port, 1)


if __name__ == "__main__":
    unittest.main()
