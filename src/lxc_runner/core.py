from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from .errors import ContainerStateError, InvalidArgumentError
from .parsers import (
    ProcessRecord,
    Status,
    parse_counter,
    parse_info,
    parse_list,
    parse_process_table,
)
from .runner import CommandRunner, LxcRunner, RunnerConfig
from .specs import CreateSpec, FromTemplate, to_create_spec
from .states import FROZEN, RUNNING, valid_state

__all__ = ["Container", "list_containers"]

PS_FORMAT = "pid,user,%cpu,%mem,args"


class Container:
    """Handle on a named LXC container.

    Nothing is cached between calls: every query runs an lxc tool again.
    Existence and running checks made before an action are best-effort, the
    container can change underneath between the check and the action.
    """

    _default_runner: LxcRunner | None = None

    def __init__(
        self,
        name: str,
        runner: CommandRunner | None = None,
        state_validator: Callable[[str], bool] = valid_state,
        template_dir: Path | None = None,
    ):
        """Initialize a container handle."""
        self.name = name
        self.state: str | None = None
        self.pid: str | None = None
        self._runner = runner
        self.state_validator = state_validator
        self._template_dir = template_dir

    # --------------------------------------------------------------------- #
    # Runner
    # --------------------------------------------------------------------- #
    @property
    def runner(self) -> CommandRunner:
        """Runner used for every lxc invocation, the shared default if none was given."""
        if self._runner is None:
            self._runner = self._get_default_runner()
        return self._runner

    @classmethod
    def _get_default_runner(cls) -> LxcRunner:
        if Container._default_runner is None:
            Container._default_runner = LxcRunner(RunnerConfig.from_env())
        return Container._default_runner

    @property
    def template_dir(self) -> Path:
        """Directory holding the lxc-<template> scripts."""
        if self._template_dir is not None:
            return self._template_dir
        config = getattr(self.runner, "config", None)
        if isinstance(config, RunnerConfig):
            return config.template_dir
        return RunnerConfig.from_env().template_dir

    def _sibling(self, name: str) -> Container:
        return type(self)(
            name,
            runner=self.runner,
            state_validator=self.state_validator,
            template_dir=self._template_dir,
        )

    # --------------------------------------------------------------------- #
    # Queries
    # --------------------------------------------------------------------- #
    def status(self) -> Status:
        """Return the current state and pid, as reported by ``lxc-info``."""
        status = parse_info(self.runner.run("info", "-n", self.name))
        self.state = status["state"]
        self.pid = status["pid"]
        return status

    def exists(self) -> bool:
        """Check if the container is known to lxc."""
        return self.name in parse_list(self.runner.run("ls", "-1"))

    def running(self) -> bool:
        """Check if lxc reports the container as RUNNING."""
        return self.status()["state"] == RUNNING

    def frozen(self) -> bool:
        """Check if lxc reports the container as FROZEN."""
        return self.status()["state"] == FROZEN

    def to_dict(self) -> dict[str, str | None]:
        """Refresh the status and return name, state and pid."""
        self.status()
        return {"name": self.name, "state": self.state, "pid": self.pid}

    # --------------------------------------------------------------------- #
    # Lifecycle
    # --------------------------------------------------------------------- #
    def start(self) -> Status:
        """Start the container in the background.

        The returned status is read right after the request; the container
        may still be ``STARTING``. Use :meth:`wait` to block until it runs.
        """
        self.runner.run("start", "-d", "-n", self.name)
        return self.status()

    def stop(self) -> Status:
        """Stop the container."""
        self.runner.run("stop", "-n", self.name)
        return self.status()

    def restart(self) -> Status:
        """Stop then start the container. Not atomic."""
        self.stop()
        return self.start()

    def freeze(self) -> Status:
        """Freeze every process in the container."""
        self.runner.run("freeze", "-n", self.name)
        return self.status()

    def unfreeze(self) -> Status:
        """Thaw a frozen container."""
        self.runner.run("unfreeze", "-n", self.name)
        return self.status()

    def wait(self, state: str) -> None:
        """Block until lxc reports ``state`` for this container.

        There is no timeout: this returns only when ``lxc-wait`` does.

        Raises:
            InvalidArgumentError: If ``state`` is not a known container state.
        """
        if not self.state_validator(state):
            raise InvalidArgumentError(f"Invalid container state: {state}")
        self.runner.run("wait", "-n", self.name, "-s", state)

    # --------------------------------------------------------------------- #
    # Resources
    # --------------------------------------------------------------------- #
    def _cgroup_counter(self, key: str) -> int:
        return parse_counter(self.runner.run("cgroup", "-n", self.name, key))

    def memory_usage(self) -> int:
        """Current memory usage in bytes."""
        return self._cgroup_counter("memory.usage_in_bytes")

    def memory_limit(self) -> int:
        """Memory limit in bytes."""
        return self._cgroup_counter("memory.limit_in_bytes")

    def processes(self) -> list[ProcessRecord]:
        """List the processes running inside the container, in ``ps`` order."""
        if not self.running():
            raise ContainerStateError("Container is not running")
        output = self.runner.run("ps", "-n", self.name, "--", "-eo", PS_FORMAT)
        return parse_process_table(output)

    # --------------------------------------------------------------------- #
    # Create / clone / destroy
    # --------------------------------------------------------------------- #
    def create(self, spec: CreateSpec | str | os.PathLike[str] | Mapping[str, Any]) -> bool:
        """Create the container from a config file path or a template spec.

        Returns:
            True if lxc lists the container afterwards.

        Raises:
            ContainerStateError: If the container already exists.
            InvalidArgumentError: If a referenced file or template is missing.
        """
        if self.exists():
            raise ContainerStateError("Container already exists.")

        create_spec = to_create_spec(spec)
        if isinstance(create_spec, FromTemplate):
            args = create_spec.build_args(self.name, self.template_dir)
        else:
            args = create_spec.build_args(self.name)

        self.runner.run("create", *args)
        return self.exists()

    def clone_to(self, target: str) -> Container:
        """Clone this container into a new container named ``target``.

        The new handle is returned without checking that the clone exists.
        """
        if not self.exists():
            raise ContainerStateError("Container does not exist.")
        if self._sibling(target).exists():
            raise ContainerStateError("New container already exists.")

        self.runner.run("clone", "-o", self.name, "-n", target)
        return self._sibling(target)

    def clone_from(self, source: str) -> bool:
        """Create this container as a clone of ``source``."""
        if self.exists():
            raise ContainerStateError("Container already exists.")
        if not self._sibling(source).exists():
            raise ContainerStateError("Source container does not exist.")

        self.runner.run("clone", "-o", source, "-n", self.name)
        return self.exists()

    def destroy(self, force: bool = False) -> bool:
        """Destroy the container.

        A running container is only destroyed with ``force=True``, in which
        case lxc stops and removes it in one step.

        Returns:
            True if the container is gone afterwards.
        """
        if not self.exists():
            raise ContainerStateError("Container does not exist.")

        if self.running():
            if not force:
                raise ContainerStateError(
                    "Container is running. Stop it first or use force=True"
                )
            self.runner.run("destroy", "-n", self.name, "-f")
        else:
            self.runner.run("destroy", "-n", self.name)

        return not self.exists()

    # --------------------------------------------------------------------- #
    # Context manager
    # --------------------------------------------------------------------- #
    def __enter__(self) -> Container:
        """Start the container when entering a ``with`` block."""
        self.start()
        return self

    def __exit__(self, *args: Any) -> None:
        """Stop the container when leaving a ``with`` block."""
        self.stop()

    def __repr__(self) -> str:
        """Return a string representation using the last observed state."""
        state = self.state or "unknown"
        return f"<Container {self.name} [{state}]>"


def list_containers(runner: CommandRunner | None = None) -> list[Container]:
    """Return a handle for every container lxc knows about."""
    runner = runner or Container._get_default_runner()
    return [Container(name, runner=runner) for name in parse_list(runner.run("ls", "-1"))]
