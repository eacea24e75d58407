import io
import logging
from pathlib import Path

import pytest

import homy
from homy.config import RuntimeConfig


def pytest_configure(config):
    """Register markers for pytest."""
    config.addinivalue_line("markers", "integration: mark test as integration test")


@pytest.fixture(autouse=True)
def reset_homy_logger():
    """The CLI attaches a handler to the ``homy`` logger; undo it between tests."""
    yield
    homy_logger = logging.getLogger("homy")
    for handler in list(homy_logger.handlers):
        homy_logger.removeHandler(handler)
    homy_logger.setLevel(logging.NOTSET)
    homy_logger.propagate = True


@pytest.fixture
def run_source():
    """Run source text and return ``(app, printed_output)``."""
    def _run(source: str, config: RuntimeConfig = None):
        output = io.StringIO()
        app = homy.run(source, path="test.homy", config=config, output=output)
        return app, output.getvalue()
    return _run


@pytest.fixture
def homy_file(tmp_path):
    """Write a source file into a temporary directory and return its path."""
    def _write(source: str, name: str = "app.homy") -> Path:
        path = tmp_path / name
        path.write_text(source, encoding="utf-8")
        return path
    return _write
