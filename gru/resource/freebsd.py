"""Resources managing services and rc.conf variables on FreeBSD."""

from __future__ import annotations

import re
import subprocess
import sys
from dataclasses import dataclass

from gru.resource.base import (
    DEFAULT_RESOURCE_NAMESPACE,
    ProviderItem,
    Resource,
    ResourceError,
    ResourceProperty,
    State,
    logf,
    register_provider,
)

_SYSRC_RE = re.compile(r"(.*): (.*)")


def _run(*args: str) -> subprocess.CompletedProcess:
    return subprocess.run(
        list(args), stdout=subprocess.PIPE, stderr=subprocess.STDOUT, check=False
    )


def _succeeds(*args: str) -> bool:
    """Return True if the command ran and exited with status zero."""
    try:
        return _run(*args).returncode == 0
    except OSError:
        return False


def _check(*args: str) -> None:
    """Run a command, raising ResourceError if it fails."""
    result = _run(*args)
    if result.returncode != 0:
        raise ResourceError(
            f"{' '.join(args)} exited with status {result.returncode}"
        )


@dataclass
class Service(Resource):
    """A service managed through service(8) and sysrc(8).

    ``rcvar`` names the rc.conf variable that enables the service at boot;
    an empty ``rcvar`` leaves boot-time settings alone.
    """

    enable: bool = True
    rcvar: str = ""

    def evaluate(self) -> State:
        """Report whether the service is running or stopped."""
        running = _succeeds("service", self.name, "onestatus")
        return State(current="running" if running else "stopped", want=self.state)

    def create(self) -> None:
        """Start the service."""
        logf("%s starting service", self.id())
        _check("service", self.name, "onestart")

    def delete(self) -> None:
        """Stop the service."""
        logf("%s stopping service", self.id())
        _check("service", self.name, "onestop")

    def _is_enable_synced(self) -> bool:
        enabled = _succeeds("service", self.name, "enabled")
        return enabled == self.enable

    def _set_enable(self) -> None:
        if not self.rcvar:
            return
        value = "YES" if self.enable else "NO"
        _check("sysrc", f"{self.rcvar}={value}")


def new_service(name: str) -> Service:
    """Create a service resource, enabled at boot through ``<name>_enable``."""
    service = Service(
        name=name,
        type="service",
        state="running",
        present_states=["present", "running"],
        absent_states=["absent", "stopped"],
        concurrent=False,
        enable=True,
        rcvar=f"{name}_enable",
    )
    service.properties = [
        ResourceProperty("enable", service._set_enable, service._is_enable_synced)
    ]
    return service


def parse_sysrc_output(out: str) -> tuple[str, str]:
    """Split ``sysrc`` output of the form ``name: value`` into its parts."""
    match = _SYSRC_RE.search(out)
    if match is None:
        raise ResourceError(f"bug: sysrc output {out!r} didn't match regexp")
    return match.group(1), match.group(2)


@dataclass
class SysRC(Resource):
    """An rc.conf variable with a wanted value."""

    value: str = ""

    def evaluate(self) -> State:
        """Report the variable present only if it is set to the wanted value."""
        state = State(current="unknown", want=self.state)
        try:
            result = _run("sysrc", self.name)
        except OSError:
            state.current = "absent"
            return state
        if result.returncode != 0:
            state.current = "absent"
            return state
        state.current = "present"

        key, value = parse_sysrc_output(result.stdout.decode(errors="replace"))
        if key != self.name:
            raise ResourceError(f"bug: expected rcvar {self.name}, got {key}")
        if value != self.value:
            state.current = "absent"
        return state

    def create(self) -> None:
        """Add the variable to rc.conf."""
        logf("%s adding rcvar", self.id())
        _check("sysrc", f"{self.name}={self.value}")

    def delete(self) -> None:
        """Remove the variable from rc.conf."""
        logf("%s removing rcvar", self.id())
        _check("sysrc", "-x", self.name)

    def update(self) -> None:
        """Set the variable in rc.conf to the wanted value."""
        logf("%s setting rcvar to %s", self.id(), self.value)
        _check("sysrc", f"{self.name}={self.value}")


def new_sysrc(name: str) -> SysRC:
    """Create a resource for an rc.conf variable."""
    return SysRC(
        name=name,
        type="sysrc",
        state="present",
        present_states=["present"],
        absent_states=["absent"],
        concurrent=False,
    )


if sys.platform.startswith("freebsd"):
    register_provider(
        ProviderItem(type="service", provider=new_service, namespace=DEFAULT_RESOURCE_NAMESPACE),
        ProviderItem(type="sysrc", provider=new_sysrc, namespace=DEFAULT_RESOURCE_NAMESPACE),
    )