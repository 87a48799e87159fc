import os
import subprocess
import sys
from pathlib import Path

import pytest

from dart_enum_explorer.codegen.core.generator import EnumCodeGenerator
from dart_enum_explorer.codegen.core.model import EnumModel

FIXTURES = Path(__file__).parent / "fixtures"
ROOT = Path(__file__).parent.parent


@pytest.fixture
def status_model() -> EnumModel:
    """Two-value enum used by most generator tests."""
    return EnumModel("Status", ("active", "inactive"))


@pytest.fixture
def generator() -> EnumCodeGenerator:
    """Generator with the default configuration."""
    return EnumCodeGenerator()


def fixture_text(name: str) -> str:
    """Read a Dart fixture file."""
    return (FIXTURES / name).read_text(encoding="utf-8")


def run_cli(*args: str, input_text: str | None = None) -> subprocess.CompletedProcess:
    """Run the CLI via python -m and capture its output."""
    env = dict(os.environ, COLUMNS="200", PYTHONIOENCODING="utf-8", NO_COLOR="1")
    return subprocess.run(
        [sys.executable, "-m", "dart_enum_explorer", *args],
        capture_output=True,
        text=True,
        encoding="utf-8",
        input=input_text,
        cwd=ROOT,
        env=env,
        timeout=60,
    )
