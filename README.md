# gru

Building blocks for configuration management on POSIX systems. Resources
describe the state a system should be in: files, directories, links, shell
commands, and on FreeBSD, services and rc.conf variables. Each resource
knows how to evaluate, create and delete what it manages.

## Installation

```
pip install .
```

## Resources

```python
from gru.resource.files import new_file, new_directory
from gru.resource.shell import new_shell
from gru.resource.collection import create_collection

config_dir = new_directory("/tmp/app")
config = new_file("/tmp/app/config")
config.content = b"listen 8080\n"
config.require.append(config_dir.id())

touch = new_shell("touch /tmp/app/ready")
touch.creates = "/tmp/app/ready"

collection = create_collection([config_dir, config, touch])
graph = collection.dependency_graph()
# {"directory[/tmp/app]": [], "file[/tmp/app/config]": ["directory[/tmp/app]"], ...}
```

Every resource derives from `gru.resource.base.Resource` and offers
`id()`, `validate()`, `initialize()`, `evaluate()`, `create()`,
`delete()` and `close()`. `evaluate()` returns a `State` with `current`
and `want`. Resource properties such as file mode, ownership and content
are `ResourceProperty` objects in `resource.properties`, each with
`is_synced()` and `set()`. Errors are raised as `ResourceError` or one of
its subclasses (`InvalidTypeError`, `InvalidNameError`,
`ResourceAbsentError`).

- `gru.resource.files`: `new_file` (mode 0644, owned by the running user;
  `content` or `source`, the latter read from `DEFAULT_CONFIG.site_repo`),
  `new_directory` (mode 0755; `parents` creates and removes whole trees)
  and `new_link` (`source`, and `hard` for a hard link).
- `gru.resource.shell`: `new_shell` runs a command, split on whitespace and
  run without a shell; `creates` names a file whose existence marks the
  command as done, and `mute` suppresses the logged output.
- `gru.resource.freebsd`: `new_service` drives `service(8)` and sets the
  `<name>_enable` rc.conf variable through `sysrc(8)`; `new_sysrc` manages
  an rc.conf variable's `value`. `parse_sysrc_output` splits `sysrc`
  output of the form `name: value`.
- `gru.resource.collection`: `create_collection` rejects duplicate
  resource ids, and `Collection.dependency_graph()` maps every id to the
  ids it requires or subscribes to, raising `ResourceError` for an unknown
  one.

Events are logged through `gru.resource.base.logf` to the logger in
`DEFAULT_CONFIG`, which writes to standard output.

### Providers

Importing a resource module registers its constructors as providers
(`register_provider`, listed by `providers()`); the FreeBSD ones are
registered only when running on FreeBSD.
`gru.resource.namespace.register_builtin(env)` installs them into a plain
mapping, so that `env["resource"]["file"]["new"]("/tmp/foo")` builds a file
resource, together with functions added by `register_function`, such as
`env["stdlib"]["logf"]`.

## Utilities

- `gru.utils.fileutil`: `FileUtil` for existence, md5/sha1/sha256
  checksums, permissions, ownership and copying, plus `walk_path`,
  `copy_dir` and `same_content`.
- `gru.utils.git`: `GitRepo` for cloning, fetching, pulling and checking
  out branches with the `git` command; failures raise `GitError`.
- `gru.utils.concurrent`: thread-safe `ConcurrentMap` and `ConcurrentSlice`.
- `gru.utils.lists`: `List`, `String` and `new_list`.
- `gru.utils.ids`: `generate_uuid` for name-based UUIDs.
- `gru.task`: `Task`, `TaskState` and `new_task` for tasks processed by
  minions.

## What this package does not do

It has no command-line tool and no scripting language: resources are
built and driven from Python. It does not manage operating-system
packages, nor services on systemd-based Linux systems. It builds a
dependency graph but does not itself walk it to apply resources in order.

## Tests

```
pip install ".[test]"
pytest
```