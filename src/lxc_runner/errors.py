from __future__ import annotations

__all__ = ["CommandError", "ContainerStateError", "InvalidArgumentError", "LxcError"]


class LxcError(Exception):
    """Base class for every error raised by lxc-runner."""


class InvalidArgumentError(LxcError, ValueError):
    """Malformed or missing input: unknown state, missing config or template file."""


class ContainerStateError(LxcError):
    """The container's existence or running state does not allow the operation."""


class CommandError(LxcError, RuntimeError):
    """An lxc tool exited with a non-zero status."""

    def __init__(
        self,
        cmd: list[str],
        returncode: int,
        stdout: str | None = None,
        stderr: str | None = None,
    ):
        self.cmd = cmd
        self.returncode = returncode
        self.stdout = stdout or ""
        self.stderr = stderr or ""
        super().__init__(
            f"Command failed with exit code {returncode}:\n"
            f"Command: {' '.join(cmd)}\n"
            f"stdout: {self.stdout}\n"
            f"stderr: {self.stderr}"
        )
