"""Clone an existing container and freeze the copy."""

from lxc_runner import Container, ContainerStateError

source = Container("basic-example")

try:
    copy = source.clone_to("basic-example-copy")
except ContainerStateError as e:
    raise SystemExit(f"Cannot clone: {e}") from e

copy.start()
copy.wait("RUNNING")
copy.freeze()
print(copy.to_dict())

copy.destroy(force=True)
