from __future__ import annotations

from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest

from lxc_runner import Container, LxcRunner

# TEST CONSTANTS
TEST_CONTAINER_PREFIX = "lxc-runner-test"


@pytest.fixture(scope="session")
def container_prefix() -> str:
    """Expose the test container prefix for advanced use."""
    return TEST_CONTAINER_PREFIX


@pytest.fixture
def make_runner() -> Callable[..., MagicMock]:
    """Build a mocked runner scripted per subcommand.

    Each keyword maps a subcommand to an output string or a list of outputs
    consumed in order (the last one repeats). An exception instance is raised
    instead of returned.
    """

    def factory(**script: Any) -> MagicMock:
        queues = {
            sub: list(out) if isinstance(out, list) else [out] for sub, out in script.items()
        }

        def run(subcommand: str, *args: str) -> str:
            queue = queues.get(subcommand)
            if not queue:
                return ""
            value = queue.pop(0) if len(queue) > 1 else queue[0]
            if isinstance(value, BaseException):
                raise value
            return value

        runner = MagicMock(spec=LxcRunner)
        runner.run.side_effect = run
        return runner

    return factory


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    """Create a template directory holding an ``lxc-ubuntu`` script."""
    tdir = tmp_path / "templates"
    tdir.mkdir()
    script = tdir / "lxc-ubuntu"
    script.write_text("#!/bin/sh\nexit 0\n")
    script.chmod(0o755)
    return tdir


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    """Create a minimal lxc config file."""
    file = tmp_path / "web.conf"
    file.write_text("lxc.uts.name = web\nlxc.net.0.type = empty\n")
    return file


@pytest.fixture(autouse=True)
def reset_default_runner() -> Generator[None, None, None]:
    """Keep the cached default runner from leaking between tests."""
    Container._default_runner = None
    yield
    Container._default_runner = None
