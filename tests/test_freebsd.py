import subprocess
from unittest import mock

import pytest

from gru.resource.base import ResourceError
from gru.resource.freebsd import new_service, new_sysrc, parse_sysrc_output


def _completed(returncode, stdout=b""):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout)


@pytest.mark.parametrize(
    "text, key, value",
    [
        ("keyrate: fast\n", "keyrate", "fast"),
        ("dumpdev: \n", "dumpdev", ""),
    ],
)
def test_parse_sysrc_output(text, key, value):
    assert parse_sysrc_output(text) == (key, value)


def test_parse_sysrc_output_no_match():
    with pytest.raises(ResourceError, match="didn't match regexp"):
        parse_sysrc_output("garbage\n")


def test_new_service_defaults():
    svc = new_service("nginx")
    assert svc.type == "service"
    assert svc.name == "nginx"
    assert svc.state == "running"
    assert svc.require == []
    assert svc.present_states == ["present", "running"]
    assert svc.absent_states == ["absent", "stopped"]
    assert svc.concurrent is False
    assert svc.enable is True
    assert svc.rcvar == "nginx_enable"
    assert [p.name for p in svc.properties] == ["enable"]
    assert svc.id() == "service[nginx]"


def test_new_sysrc_defaults():
    rc = new_sysrc("keyrate")
    assert rc.type == "sysrc"
    assert rc.state == "present"
    assert rc.present_states == ["present"]
    assert rc.absent_states == ["absent"]
    assert rc.concurrent is False
    assert rc.value == ""


@mock.patch("gru.resource.freebsd.subprocess.run")
def test_service_evaluate_running(run):
    run.return_value = _completed(0)
    state = new_service("nginx").evaluate()
    assert (state.current, state.want) == ("running", "running")
    assert run.call_args[0][0] == ["service", "nginx", "onestatus"]


@mock.patch("gru.resource.freebsd.subprocess.run")
def test_service_evaluate_stopped(run):
    run.return_value = _completed(1)
    assert new_service("nginx").evaluate().current == "stopped"


@mock.patch("gru.resource.freebsd.subprocess.run")
def test_service_evaluate_missing_command(run):
    run.side_effect = FileNotFoundError("service")
    assert new_service("nginx").evaluate().current == "stopped"


@mock.patch("gru.resource.freebsd.subprocess.run")
def test_service_create_failure_raises(run):
    run.return_value = _completed(1)
    with pytest.raises(ResourceError, match="onestart"):
        new_service("nginx").create()


@mock.patch("gru.resource.freebsd.subprocess.run")
def test_service_enable_synced(run):
    run.return_value = _completed(0)
    prop = new_service("nginx").properties[0]
    assert prop.is_synced() is True


@mock.patch("gru.resource.freebsd.subprocess.run")
def test_service_enable_not_synced_when_disabled_wanted(run):
    run.return_value = _completed(0)
    svc = new_service("nginx")
    svc.enable = False
    assert svc.properties[0].is_synced() is False


@mock.patch("gru.resource.freebsd.subprocess.run")
def test_service_set_enable_calls_sysrc(run):
    run.return_value = _completed(0)
    svc = new_service("nginx")
    svc.enable = False
    prop = svc.properties[0]
    prop.set()
    assert run.call_args[0][0] == ["sysrc", "nginx_enable=NO"]
    assert prop.name == "enable"
    assert prop.is_synced() is False


@mock.patch("gru.resource.freebsd.subprocess.run")
def test_service_set_enable_without_rcvar_does_nothing(run):
    svc = new_service("nginx")
    svc.rcvar = ""
    prop = svc.properties[0]
    prop.set()
    assert run.call_count == 0
    run.return_value = _completed(1)
    assert prop.is_synced() is False
    assert run.call_count == 1


@mock.patch("gru.resource.freebsd.subprocess.run")
def test_sysrc_evaluate_present(run):
    run.return_value = _completed(0, b"keyrate: fast\n")
    rc = new_sysrc("keyrate")
    rc.value = "fast"
    assert rc.evaluate().current == "present"


@mock.patch("gru.resource.freebsd.subprocess.run")
def test_sysrc_evaluate_wrong_value_is_absent(run):
    run.return_value = _completed(0, b"keyrate: fast\n")
    rc = new_sysrc("keyrate")
    rc.value = "slow"
    assert rc.evaluate().current == "absent"


@mock.patch("gru.resource.freebsd.subprocess.run")
def test_sysrc_evaluate_unset_is_absent(run):
    run.return_value = _completed(1, b"sysrc: unknown variable\n")
    assert new_sysrc("keyrate").evaluate().current == "absent"


@mock.patch("gru.resource.freebsd.subprocess.run")
def test_sysrc_evaluate_key_mismatch(run):
    run.return_value = _completed(0, b"other: fast\n")
    with pytest.raises(ResourceError, match="expected rcvar keyrate, got other"):
        new_sysrc("keyrate").evaluate()


@mock.patch("gru.resource.freebsd.subprocess.run")
def test_sysrc_create_delete_update_commands(run):
    run.return_value = _completed(0)
    rc = new_sysrc("keyrate")
    rc.value = "fast"
    rc.create()
    assert run.call_args[0][0] == ["sysrc", "keyrate=fast"]
    rc.delete()
    assert run.call_args[0][0] == ["sysrc", "-x", "keyrate"]
    rc.update()
    assert run.call_args[0][0] == ["sysrc", "keyrate=fast"]
    run.return_value = _completed(0, b"keyrate: fast\n")
    assert rc.evaluate().current == "present"