"""File helpers: existence, checksums, permissions, ownership and copying."""

from __future__ import annotations

import grp
import hashlib
import os
import pwd
import shutil
import stat
from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class FileOwner:
    """The user and group that own a file."""

    user: str
    uid: int
    group: str
    gid: int


@dataclass
class FileUtil:
    """Operations on the file at a given path."""

    path: str

    def exists(self) -> bool:
        """Return True unless the file is known not to exist."""
        try:
            os.stat(self.path)
        except FileNotFoundError:
            return False
        except OSError:
            return True
        return True

    def abs(self) -> str:
        """Return the absolute path of the file."""
        return os.path.abspath(self.path)

    def _digest(self, algorithm: str) -> str:
        with open(self.path, "rb") as handle:
            data = handle.read()
        return hashlib.new(algorithm, data).hexdigest()

    def md5(self) -> str:
        """Return the hex md5 checksum of the file's contents."""
        return self._digest("md5")

    def sha1(self) -> str:
        """Return the hex sha1 checksum of the file's contents."""
        return self._digest("sha1")

    def sha256(self) -> str:
        """Return the hex sha256 checksum of the file's contents."""
        return self._digest("sha256")

    def remove(self) -> None:
        """Remove the file."""
        os.remove(self.path)

    def chmod(self, mode: int) -> None:
        """Change the permission bits of the file."""
        os.chmod(self.path, mode)

    def mode(self) -> int:
        """Return the full ``st_mode`` of the file, type bits included."""
        return os.stat(self.path).st_mode

    def owner(self) -> FileOwner:
        """Return the user and group owning the file."""
        info = os.stat(self.path)
        user = pwd.getpwuid(info.st_uid)
        group = grp.getgrgid(info.st_gid)
        return FileOwner(
            user=user.pw_name, uid=info.st_uid, group=group.gr_name, gid=info.st_gid
        )

    def set_owner(self, owner: str, group: str) -> None:
        """Set the file's owner and group by name."""
        uid = pwd.getpwnam(owner).pw_uid
        gid = grp.getgrnam(group).gr_gid
        os.chown(self.path, uid, gid)

    def copy_from(self, src_path: str, overwrite: bool = False) -> None:
        """Copy a regular file's contents into this file.

        A new file takes the source's permissions; an overwritten one keeps
        its own.
        """
        src_info = os.stat(src_path)
        if not stat.S_ISREG(src_info.st_mode):
            raise ValueError(f"{src_path} is not a regular file")

        mode = src_info.st_mode
        try:
            dst_info = os.stat(self.path)
        except FileNotFoundError:
            pass
        else:
            if not overwrite:
                raise FileExistsError(f"{self.path} already exists")
            mode = dst_info.st_mode

        with open(src_path, "rb") as src, open(self.path, "wb") as dst:
            shutil.copyfileobj(src, dst)

        os.chmod(self.path, stat.S_IMODE(mode))

    def same_content_with(self, dst: str) -> bool:
        """Return True if this file and ``dst`` have the same content."""
        return self.md5() == FileUtil(dst).md5()


def same_content(src: str, dst: str) -> bool:
    """Return True if the two files have the same content."""
    return FileUtil(src).same_content_with(dst)


def walk_path(root: str, skip: Iterable[str] = ()) -> list[str]:
    """Walk ``root`` in lexical order and return every path found.

    Directories whose name is in ``skip`` are left out together with
    everything beneath them. Symbolic links are not followed.
    """
    skipped = set(skip)
    found: list[str] = []

    def visit(path: str, is_dir: bool) -> None:
        if is_dir and os.path.basename(os.path.normpath(path)) in skipped:
            return
        found.append(path)
        if is_dir:
            for name in sorted(os.listdir(path)):
                child = os.path.join(path, name)
                visit(child, stat.S_ISDIR(os.lstat(child).st_mode))

    visit(root, stat.S_ISDIR(os.lstat(root).st_mode))
    return found


def copy_dir(src_path: str, dst_path: str) -> None:
    """Recursively copy a directory to a destination that does not yet exist."""
    src_info = os.stat(src_path)
    if not stat.S_ISDIR(src_info.st_mode):
        raise NotADirectoryError(f"{src_path} is not a directory")

    try:
        os.stat(dst_path)
    except FileNotFoundError:
        pass
    else:
        raise FileExistsError(f"{dst_path} already exists")

    os.makedirs(dst_path, stat.S_IMODE(src_info.st_mode))

    with os.scandir(src_path) as entries:
        children = [(entry.name, entry.is_dir(follow_symlinks=False)) for entry in entries]

    for name, is_dir in children:
        src_name = os.path.join(src_path, name)
        dst_name = os.path.join(dst_path, name)
        if is_dir:
            copy_dir(src_name, dst_name)
        else:
            FileUtil(dst_name).copy_from(src_name, overwrite=False)