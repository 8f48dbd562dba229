import os
import sys

import pytest

from gru.utils.git import GitError, GitRepo

FAKE_GIT = """#!{python}
import os
import sys

args = sys.argv[1:]
with open(os.environ["FAKE_GIT_LOG"], "a") as log:
    log.write(" ".join(args) + "\\n")

if any("notrepo" in a for a in args):
    print("fatal: not a git repository")
    sys.exit(128)
if "fail" in args:
    print("boom")
    sys.exit(1)
if "rev-parse" in args and "--short" in args:
    print("abc1234")
    sys.exit(0)
print("ok")
"""


@pytest.fixture
def fake_git(tmp_path, monkeypatch):
    bindir = tmp_path / "bin"
    bindir.mkdir()
    script = bindir / "git"
    script.write_text(FAKE_GIT.format(python=sys.executable))
    os.chmod(script, 0o755)
    log = tmp_path / "git.log"
    log.write_text("")
    monkeypatch.setenv("PATH", str(bindir))
    monkeypatch.setenv("FAKE_GIT_LOG", str(log))
    return log


def logged(log):
    return log.read_text().splitlines()


def test_missing_git(tmp_path, monkeypatch):
    empty = tmp_path / "empty"
    empty.mkdir()
    monkeypatch.setenv("PATH", str(empty))
    with pytest.raises(GitError, match="not found"):
        GitRepo("repo", "upstream")


def test_clone(fake_git):
    repo = GitRepo("repo", "upstream")
    assert repo.clone() == b"ok\n"
    assert logged(fake_git) == ["clone upstream repo"]


def test_fetch(fake_git):
    repo = GitRepo("repo", "upstream")
    assert repo.fetch("origin") == b"ok\n"
    assert logged(fake_git) == ["-C repo fetch origin"]


def test_pull_checks_out_first(fake_git):
    repo = GitRepo("repo", "upstream")
    assert repo.pull("origin", "main") == b"ok\n"
    assert logged(fake_git) == ["-C repo checkout main", "-C repo pull origin"]


def test_pull_stops_when_checkout_fails(fake_git):
    repo = GitRepo("repo", "upstream")
    with pytest.raises(GitError) as excinfo:
        repo.pull("origin", "fail")
    assert excinfo.value.returncode == 1
    assert excinfo.value.output == b"boom\n"
    assert logged(fake_git) == ["-C repo checkout fail"]


def test_checkout_detached(fake_git):
    repo = GitRepo("repo", "upstream")
    assert repo.checkout_detached("main") == b"ok\n"
    assert logged(fake_git) == ["-C repo checkout --detach main"]


def test_head(fake_git):
    repo = GitRepo("repo", "upstream")
    assert repo.head() == "abc1234"
    assert logged(fake_git) == ["-C repo rev-parse --short HEAD"]


def test_is_git_repo(fake_git):
    assert GitRepo("repo", "upstream").is_git_repo() is True
    assert GitRepo("notrepo", "upstream").is_git_repo() is False


def test_head_failure_raises(fake_git):
    with pytest.raises(GitError) as excinfo:
        GitRepo("notrepo", "upstream").head()
    assert excinfo.value.returncode == 128