"""
Pytest configuration and shared fixtures for Lox Language tests.
"""
from pathlib import Path
import sys

import pytest


# Ensure the project root is on the Python path for all tests
PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


@pytest.fixture(name="write_script")
def fixture_write_script(tmp_path: Path):
    """
    Return a helper that saves Lox source to a temporary ``.lox`` file.
    """
    def write(source: str, name: str = "script.lox") -> str:
        script = tmp_path / name
        script.write_text(source, encoding="utf-8")
        return str(script)
    return write
