"""Basic usage: create a container from a template, start it, inspect it, remove it."""

from lxc_runner import Container, FromTemplate

c = Container("basic-example")
c.create(FromTemplate(template="busybox"))

with c:
    c.wait("RUNNING")
    print(f"Status: {c.status()}")
    print(f"Memory: {c.memory_usage()} / {c.memory_limit()} bytes")

    for proc in c.processes():
        print(f"{proc['pid']:>6} {proc['user']:<8} {proc['command']} {proc['args']}")

c.wait("STOPPED")
c.destroy()
