"""
Test configuration for the prefix calculator tests
"""

import pytest
import sys
from pathlib import Path

# Modules live flat under src/
src_root = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_root))

from parser import Parser
from symbols import Environment


@pytest.fixture
def parser():
    """Provide a fresh parser for each test"""
    return Parser()


@pytest.fixture
def env():
    """Provide an empty top-level environment"""
    return Environment()


@pytest.fixture
def run(parser, env):
    """Parse and evaluate one expression against the shared fixtures"""
    def _run(text):
        return parser.parse(text).eval(env)
    return _run
