import shutil


def get_lxc_exe(subcommand: str) -> str:
    """Find the ``lxc-<subcommand>`` executable."""
    name = f"lxc-{subcommand}"
    exe = shutil.which(name)
    if not exe:
        raise RuntimeError(f"{name} not found in PATH")

    return exe
