from __future__ import annotations

import os
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Union

from .errors import InvalidArgumentError

__all__ = ["CreateSpec", "FromConfigFile", "FromTemplate", "to_create_spec"]


@dataclass(frozen=True)
class FromConfigFile:
    """Create a container from a single lxc configuration file."""

    path: Path

    def build_args(self, name: str) -> list[str]:
        """Return the ``lxc-create`` arguments, validating the file first."""
        if not Path(self.path).is_file():
            raise InvalidArgumentError(f"File {self.path} does not exist.")
        return ["-n", name, "-f", str(self.path)]


@dataclass(frozen=True)
class FromTemplate:
    """Create a container from an lxc template.

    Every field is optional, ``template_options`` are passed to the template
    script after a ``--`` separator.
    """

    template: str | None = None
    backing_store: str | None = None
    config_file: Path | None = None
    template_options: Sequence[str] = field(default_factory=tuple)

    def build_args(self, name: str, template_dir: Path) -> list[str]:
        """Return the ``lxc-create`` arguments in the order the tool expects.

        Raises:
            InvalidArgumentError: If the config file or template script is missing,
                or ``template_options`` is a single string.
        """
        _check_options(self.template_options)
        args = ["-n", name]

        if self.config_file:
            if not Path(self.config_file).is_file():
                raise InvalidArgumentError(f"File {self.config_file} does not exist.")
            args += ["-f", str(self.config_file)]

        if self.template:
            template_path = Path(template_dir) / f"lxc-{self.template}"
            if not template_path.exists():
                raise InvalidArgumentError(f"Template {self.template} does not exist.")
            args += ["-t", self.template]

        if self.backing_store:
            args += ["-B", self.backing_store]

        if self.template_options:
            args += ["--", *self.template_options]

        return args


def _check_options(options: object) -> None:
    if isinstance(options, str):
        raise InvalidArgumentError(
            f"template_options must be a list of strings, not a string: {options!r}"
        )


CreateSpec = Union[FromConfigFile, FromTemplate]


def to_create_spec(spec: CreateSpec | str | os.PathLike[str] | Mapping[str, Any]) -> CreateSpec:
    """Normalise the accepted ``create`` inputs.

    Paths become :class:`FromConfigFile`. Mappings use the keys ``config_file``,
    ``template``, ``backingstore`` and ``template_options``.
    """
    if isinstance(spec, (FromConfigFile, FromTemplate)):
        return spec

    if isinstance(spec, Mapping):
        config_file = spec.get("config_file")
        options = spec.get("template_options") or ()
        _check_options(options)
        return FromTemplate(
            template=spec.get("template"),
            backing_store=spec.get("backingstore"),
            config_file=Path(config_file) if config_file else None,
            template_options=tuple(options),
        )

    if isinstance(spec, (str, os.PathLike)):
        if not str(spec):
            raise InvalidArgumentError("A config file path is required.")
        return FromConfigFile(Path(spec))

    raise InvalidArgumentError(f"Unsupported create specification: {spec!r}")
