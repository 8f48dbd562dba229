"""Resources managing regular files, directories and links."""

from __future__ import annotations

import grp
import os
import pwd
import shutil
import stat
from dataclasses import dataclass

from gru.resource import base
from gru.resource.base import (
    DEFAULT_RESOURCE_NAMESPACE,
    ProviderItem,
    Resource,
    ResourceAbsentError,
    ResourceError,
    ResourceProperty,
    State,
    logf,
    register_provider,
)
from gru.utils.fileutil import FileUtil


def _current_owner() -> tuple[str, str]:
    """Return the name and primary group name of the running user."""
    entry = pwd.getpwuid(os.getuid())
    group = grp.getgrgid(entry.pw_gid)
    return entry.pw_name, group.gr_name


@dataclass
class BaseFile(Resource):
    """Common fields and properties of file, directory and link resources.

    ``path`` defaults to the resource name.
    """

    path: str = ""
    mode: int = 0
    owner: str = ""
    group: str = ""

    def __post_init__(self) -> None:
        if not self.path:
            self.path = self.name

    def _is_mode_synced(self) -> bool:
        dst = FileUtil(self.path)
        if not dst.exists():
            raise ResourceAbsentError()
        return (dst.mode() & 0o777) == self.mode

    def _set_mode(self) -> None:
        logf("%s setting permissions to 0%o", self.id(), self.mode)
        FileUtil(self.path).chmod(self.mode)

    def _is_owner_synced(self) -> bool:
        dst = FileUtil(self.path)
        if not dst.exists():
            raise ResourceAbsentError()
        owner = dst.owner()
        return owner.user == self.owner and owner.group == self.group

    def _set_owner(self) -> None:
        logf("%s setting ownership to %s:%s", self.id(), self.owner, self.group)
        FileUtil(self.path).set_owner(self.owner, self.group)

    def _common_properties(self) -> list[ResourceProperty]:
        return [
            ResourceProperty("mode", self._set_mode, self._is_mode_synced),
            ResourceProperty("ownership", self._set_owner, self._is_owner_synced),
        ]


@dataclass
class File(BaseFile):
    """A regular file, optionally with managed content.

    ``content`` sets the file's bytes; ``source`` names a file in the site
    repository to take them from. Only one of the two may be given.
    """

    content: bytes | None = None
    source: str = ""

    def __post_init__(self) -> None:
        super().__post_init__()
        if not self.properties:
            self.properties = [
                *self._common_properties(),
                ResourceProperty("content", self._set_content, self._is_content_synced),
            ]

    def _write(self) -> None:
        fd = os.open(self.path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, self.mode)
        with os.fdopen(fd, "wb") as handle:
            handle.write(self.content or b"")

    def _is_content_synced(self) -> bool:
        if self.content is None:
            return True
        dst = FileUtil(self.path)
        if not dst.exists():
            raise ResourceAbsentError()
        return FileUtil(self.path).md5() == _md5(self.content)

    def _set_content(self) -> None:
        dst_md5 = FileUtil(self.path).md5()
        logf("%s setting content to md5:%s", self.id(), dst_md5)
        self._write()

    def validate(self) -> None:
        """Check the resource; ``source`` and ``content`` exclude each other."""
        super().validate()
        if self.source and self.content is not None:
            raise ResourceError("cannot use both 'source' and 'content'")

    def initialize(self) -> None:
        """Load the content from the source file in the site repository."""
        if self.source:
            src = os.path.join(base.DEFAULT_CONFIG.site_repo, self.source)
            with open(src, "rb") as handle:
                self.content = handle.read()

    def evaluate(self) -> State:
        """Report whether the file is present; raise if it is not a regular file."""
        state = State(current="unknown", want=self.state)
        try:
            info = os.stat(self.path)
        except FileNotFoundError:
            state.current = "absent"
            return state
        state.current = "present"
        if not stat.S_ISREG(info.st_mode):
            raise ResourceError("path exists, but is not a regular file")
        return state

    def create(self) -> None:
        """Write the file with its content and mode."""
        logf("%s creating file", self.id())
        self._write()

    def delete(self) -> None:
        """Remove the file."""
        logf("%s removing file", self.id())
        os.remove(self.path)


def _md5(data: bytes) -> str:
    import hashlib

    return hashlib.md5(data).hexdigest()


@dataclass
class Directory(BaseFile):
    """A directory; ``parents`` creates and removes whole trees."""

    parents: bool = False

    def __post_init__(self) -> None:
        super().__post_init__()
        if not self.properties:
            self.properties = self._common_properties()

    def evaluate(self) -> State:
        """Report whether the directory is present; raise if it is not a directory."""
        state = State(current="unknown", want=self.state)
        try:
            info = os.stat(self.path)
        except FileNotFoundError:
            state.current = "absent"
            return state
        state.current = "present"
        if not stat.S_ISDIR(info.st_mode):
            raise ResourceError("path exists, but is not a directory")
        return state

    def create(self) -> None:
        """Create the directory, with its parents if requested."""
        logf("%s creating directory", self.id())
        if self.parents:
            os.makedirs(self.path, self.mode, exist_ok=True)
        else:
            os.mkdir(self.path, self.mode)

    def delete(self) -> None:
        """Remove the directory, recursively if ``parents`` is set."""
        logf("%s removing directory", self.id())
        if self.parents:
            try:
                shutil.rmtree(self.path)
            except FileNotFoundError:
                pass
        else:
            os.rmdir(self.path)


@dataclass
class Link(BaseFile):
    """A symbolic link, or a hard link when ``hard`` is set, to ``source``."""

    source: str = ""
    hard: bool = False

    def validate(self) -> None:
        """Check that a source file is given and exists."""
        if not self.source:
            raise ResourceError("must provide source file")
        if not FileUtil(self.source).exists():
            raise ResourceError(f"source file {self.source} does not exist")

    def evaluate(self) -> State:
        """Report whether the link is present; raise if the path is not a link."""
        state = State(current="unknown", want=self.state)
        try:
            os.stat(self.path)
        except FileNotFoundError:
            state.current = "absent"
            return state
        state.current = "present"
        try:
            os.readlink(self.path)
        except OSError as err:
            raise ResourceError(f"path exists, but is not a link: {err}") from err
        return state

    def create(self) -> None:
        """Create the link."""
        logf("%s creating link", self.id())
        if self.hard:
            os.link(self.source, self.path)
        else:
            os.symlink(self.source, self.path)

    def delete(self) -> None:
        """Remove the link."""
        logf("%s removing link", self.id())
        os.remove(self.path)


def new_file(name: str) -> File:
    """Create a file resource owned by the running user, mode 0644."""
    owner, group = _current_owner()
    return File(
        name=name,
        type="file",
        state="present",
        present_states=["present"],
        absent_states=["absent"],
        concurrent=True,
        path=name,
        mode=0o644,
        owner=owner,
        group=group,
    )


def new_directory(name: str) -> Directory:
    """Create a directory resource owned by the running user, mode 0755."""
    owner, group = _current_owner()
    return Directory(
        name=name,
        type="directory",
        state="present",
        present_states=["present"],
        absent_states=["absent"],
        concurrent=True,
        path=name,
        mode=0o755,
        owner=owner,
        group=group,
    )


def new_link(name: str) -> Link:
    """Create a link resource."""
    return Link(
        name=name,
        type="link",
        state="present",
        present_states=["present"],
        absent_states=["absent"],
        concurrent=True,
        path=name,
    )


register_provider(
    ProviderItem(type="file", provider=new_file, namespace=DEFAULT_RESOURCE_NAMESPACE),
    ProviderItem(type="directory", provider=new_directory, namespace=DEFAULT_RESOURCE_NAMESPACE),
    ProviderItem(type="link", provider=new_link, namespace=DEFAULT_RESOURCE_NAMESPACE),
)