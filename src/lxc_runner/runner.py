from __future__ import annotations

import logging
import os
import re
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from .errors import CommandError

__all__ = ["DEFAULT_TEMPLATE_DIR", "CommandRunner", "LxcRunner", "RunnerConfig"]

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE_DIR = Path("/usr/lib/lxc/templates")

_TRUTHY = {"1", "true", "yes", "on"}


class CommandRunner(Protocol):
    """Anything able to run an lxc subcommand and hand back its stdout."""

    def run(self, subcommand: str, *args: str) -> str:
        """Run ``lxc-<subcommand> args...`` and return stdout verbatim.

        Raises:
            CommandError: If the command exits non-zero.
        """
        ...


@dataclass
class RunnerConfig:
    """Settings for the subprocess-backed runner.

    - ``use_sudo`` → prefix every command with ``sudo``
    - ``template_dir`` → where ``lxc-<template>`` scripts live
    - ``env`` → extra environment variables for the child process
    """

    use_sudo: bool = False
    template_dir: Path = DEFAULT_TEMPLATE_DIR
    env: dict[str, str] | None = None

    @classmethod
    def from_env(cls) -> RunnerConfig:
        """Build a config from ``LXC_USE_SUDO`` and ``LXC_TEMPLATE_DIR``."""
        use_sudo = os.environ.get("LXC_USE_SUDO", "").strip().lower() in _TRUTHY
        template_dir = os.environ.get("LXC_TEMPLATE_DIR")
        return cls(
            use_sudo=use_sudo,
            template_dir=Path(template_dir) if template_dir else DEFAULT_TEMPLATE_DIR,
        )


class LxcRunner:
    """Run the ``lxc-*`` command line tools through :mod:`subprocess`."""

    def __init__(self, config: RunnerConfig | None = None):
        """Initialize a runner."""
        self.config = config or RunnerConfig()

    # --------------------------------------------------------------------- #
    # Command building
    # --------------------------------------------------------------------- #
    def _build_cmd(self, subcommand: str, *args: str) -> list[str]:
        cmd = [f"lxc-{subcommand}", *args]
        if self.config.use_sudo:
            cmd.insert(0, "sudo")
        return cmd

    def _get_env(self) -> dict[str, str] | None:
        if not self.config.env:
            return None
        return {**os.environ, **self.config.env}

    # --------------------------------------------------------------------- #
    # Execution
    # --------------------------------------------------------------------- #
    def run(self, subcommand: str, *args: str) -> str:
        """Run ``lxc-<subcommand>`` and return its stdout."""
        cmd = self._build_cmd(subcommand, *args)
        logger.debug("Running command: %s", " ".join(cmd))
        try:
            result = subprocess.run(  # noqa: S603
                cmd,
                capture_output=True,
                text=True,
                check=True,
                env=self._get_env(),
            )
        except subprocess.CalledProcessError as e:
            raise CommandError(cmd, e.returncode, e.stdout, e.stderr) from e
        except FileNotFoundError as e:
            raise CommandError(cmd, 127, stderr=str(e)) from e

        logger.debug("Command %s exited with %d", cmd[0], result.returncode)
        return result.stdout

    def version(self) -> str | None:
        """Return the installed lxc version (e.g. ``"5.0.2"``), if it can be read."""
        output = self.run("ls", "--version")
        match = re.search(r"(\d+(?:\.\d+)+)", output)
        return match.group(1) if match else None

    def __repr__(self) -> str:
        """Return a string representation of the runner."""
        return f"<LxcRunner sudo={self.config.use_sudo}>"
