from __future__ import annotations

import os
import shutil
import sys
from collections.abc import Callable

from .errors import CommandError
from .helpers import get_lxc_exe
from .runner import LxcRunner, RunnerConfig

MIN_LXC_VERSION = (1, 0)


# --------------------------------------------------------------------------- #
# Pretty failure printer
# --------------------------------------------------------------------------- #
def _fail(msg: str) -> None:
    header = "=" * 70
    print(f"\n{header}\n[ERROR] {msg}\n{header}\n", file=sys.stderr)  # noqa: T201
    sys.exit(1)


# --------------------------------------------------------------------------- #
# Individual checks
# --------------------------------------------------------------------------- #
def _check_lxc_in_path() -> None:
    try:
        get_lxc_exe("ls")
    except RuntimeError:
        _fail(
            "'lxc-ls' not found in PATH\n"
            "Install: apt install lxc (Debian/Ubuntu) or dnf install lxc (Fedora)"
        )


def _check_lxc_version() -> None:
    try:
        found = LxcRunner(RunnerConfig.from_env()).version()
    except CommandError:
        return  # Already failed in PATH check
    if not found:
        return
    version = tuple(map(int, found.split(".")[:2]))
    if version < MIN_LXC_VERSION:
        _fail(
            f"lxc >= 1.0 required, found {found}\n"
            "Upgrade the lxc package from your distribution"
        )


def _check_template_dir() -> None:
    template_dir = RunnerConfig.from_env().template_dir
    if not template_dir.is_dir():
        _fail(
            f"lxc template directory missing: {template_dir}\n"
            "Install the lxc-templates package or set LXC_TEMPLATE_DIR"
        )


def _check_privileges() -> None:
    if os.geteuid() == 0:
        return
    if not RunnerConfig.from_env().use_sudo:
        _fail(
            "Not running as root and LXC_USE_SUDO is not set\n"
            "Fix:\n"
            "  - Run as root\n"
            "  - Or set: export LXC_USE_SUDO=1"
        )
    if not shutil.which("sudo"):
        _fail("LXC_USE_SUDO is set but 'sudo' not found in PATH")


# --------------------------------------------------------------------------- #
# Public API
# --------------------------------------------------------------------------- #
CHECKS: list[Callable[[], None]] = [
    _check_lxc_in_path,
    _check_lxc_version,
    _check_template_dir,
    _check_privileges,
]


def run_preflight_checks(custom_checks: list[Callable[[], None]] | None = None) -> None:
    """Check the host can run the lxc tools before touching any container."""
    all_checks = CHECKS + (custom_checks or [])
    for check in all_checks:
        try:
            check()
        except Exception as e:
            _fail(str(e))
