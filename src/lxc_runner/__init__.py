from importlib.metadata import PackageNotFoundError, version

from .core import Container, list_containers
from .errors import CommandError, ContainerStateError, InvalidArgumentError, LxcError
from .parsers import ProcessRecord, Status
from .preflight import run_preflight_checks
from .runner import CommandRunner, LxcRunner, RunnerConfig
from .specs import FromConfigFile, FromTemplate
from .states import STATES, valid_state

try:
    __version__ = version("lxc-runner")
except PackageNotFoundError:
    __version__ = "dev"

__all__ = [
    "STATES",
    "CommandError",
    "CommandRunner",
    "Container",
    "ContainerStateError",
    "FromConfigFile",
    "FromTemplate",
    "InvalidArgumentError",
    "LxcError",
    "LxcRunner",
    "ProcessRecord",
    "RunnerConfig",
    "Status",
    "__version__",
    "list_containers",
    "run_preflight_checks",
    "valid_state",
]
