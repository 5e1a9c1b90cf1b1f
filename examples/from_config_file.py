"""Create a container from an lxc config file, running the tools through sudo."""

from pathlib import Path

from lxc_runner import Container, LxcRunner, RunnerConfig, list_containers

runner = LxcRunner(RunnerConfig(use_sudo=True))
config = Path(__file__).parent / "web.conf"

web = Container("config-example", runner=runner)
print(f"Created: {web.create(config)}")
print([c.name for c in list_containers(runner)])
print(f"Destroyed: {web.destroy()}")
