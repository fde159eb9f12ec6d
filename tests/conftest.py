# MIT License
#
# Copyright (c) 2025 Democratize Technology
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""
Shared pytest configuration and fixtures for query-conf tests.

This file contains:
- Fixtures for an isolated registry and session store
- Markers for different test categories
"""

from pathlib import Path
import sys

import pytest

# Add src directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from queryconf import ConfigRegistry, SessionConf, build_conf  # noqa: E402


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "concurrent: Tests that use concurrency/parallelism")


def pytest_collection_modifyitems(config, items):
    """Add markers based on test names."""
    for item in items:
        item.add_marker(pytest.mark.unit)
        if any(keyword in item.name.lower() for keyword in ["concurrent", "parallel", "thread"]):
            item.add_marker(pytest.mark.concurrent)


@pytest.fixture
def registry():
    """A fresh registry so tests never touch the global one."""
    return ConfigRegistry()


@pytest.fixture
def conf(registry):
    """An empty session store backed by the fresh registry."""
    return SessionConf(registry)


@pytest.fixture
def build(registry):
    """Start a declaration that registers into the fresh registry."""

    def _build(key):
        return build_conf(key, registry)

    return _build
