"""A resource that runs a shell command."""

from __future__ import annotations

import os
import subprocess

from gru.resource.base import (
    ProviderItem,
    Resource,
    ResourceError,
    State,
    logf,
    register_provider,
)


class Shell(Resource):
    """Runs a command, optionally guarded by a file it creates.

    The command should be idempotent; otherwise set ``creates`` to a path
    whose existence marks the command as already done.
    """

    def __init__(self, name: str) -> None:
        super().__init__(
            name=name,
            type="shell",
            state="present",
            present_states=["present"],
            absent_states=["absent"],
        )
        self.concurrent = True
        self.command = name
        self.creates = ""
        self.mute = False

    def evaluate(self) -> State:
        """Report absent unless the ``creates`` file exists."""
        current = "absent"
        if self.creates:
            try:
                os.stat(self.creates)
            except FileNotFoundError:
                current = "absent"
            else:
                current = "present"
        return State(current=current, want=self.state)

    def create(self) -> None:
        """Run the command, logging its output unless muted."""
        logf("%s executing command\n", self.id())
        args = self.command.split()
        if not args:
            raise ResourceError(f"{self.id()} has no command to execute")
        try:
            completed = subprocess.run(
                args,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                check=False,
            )
        except OSError as exc:
            raise ResourceError(f"{self.id()} cannot run {args[0]}: {exc}") from exc
        if not self.mute:
            for line in completed.stdout.decode(errors="replace").split("\n"):
                logf("%s %s\n", self.id(), line)
        if completed.returncode != 0:
            raise ResourceError(
                f"{self.id()} command exited with status {completed.returncode}"
            )

    def delete(self) -> None:
        """Do nothing; a command cannot be undone."""

    def update(self) -> None:
        """Do nothing."""


def new_shell(name: str) -> Shell:
    """Create a resource that runs the command given as its name."""
    return Shell(name)


register_provider(ProviderItem(type="shell", provider=new_shell))