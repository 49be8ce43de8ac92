"""Tests for the ``ctlptl create registry`` command surface."""

import json

import pytest
from click.testing import CliRunner

from conftest import FakeController
from ctlptl import cli
from ctlptl.errors import ControllerError
from ctlptl.registry.models import Registry


@pytest.fixture
def runner(tmp_path):
    return CliRunner(env={"CTLPTL_HOME": str(tmp_path), "CTLPTL_LOG_LEVEL": "WARNING"})


def _use_controller(monkeypatch, controller):
    monkeypatch.setattr(cli, "default_controller", lambda: controller)


def test_create_registry(runner, monkeypatch, controller):
    _use_controller(monkeypatch, controller)

    result = runner.invoke(cli.main, ["create", "registry", "ctlptl-registry"])

    assert result.exit_code == 0, result.output
    assert "registry/ctlptl-registry created" in result.output
    assert controller.applied[0].name == "ctlptl-registry"
    assert controller.applied[0].proxy is None


def test_create_registry_flags(runner, monkeypatch, controller):
    _use_controller(monkeypatch, controller)

    result = runner.invoke(
        cli.main,
        [
            "create",
            "registry",
            "ctlptl-pull-through-registry",
            "--port=5000",
            "--listen-address",
            "0.0.0.0",
            "--proxy-remote-url=https://registry-1.docker.io",
            "--proxy-ttl=24h",
            "-o",
            "json",
        ],
    )

    assert result.exit_code == 0, result.output
    printed = json.loads(result.output)
    assert printed["name"] == "ctlptl-pull-through-registry"
    assert printed["port"] == 5000
    assert printed["proxy"]["remoteURL"] == "https://registry-1.docker.io"
    submitted = controller.applied[0]
    assert submitted.listen_address == "0.0.0.0"
    assert submitted.proxy.ttl == "24h"
    assert submitted.proxy.username == ""


def test_create_registry_requires_name(runner, monkeypatch, controller):
    _use_controller(monkeypatch, controller)

    result = runner.invoke(cli.main, ["create", "registry"])

    assert result.exit_code != 0
    assert controller.get_calls == []


def test_create_registry_rejects_extra_args(runner, monkeypatch, controller):
    _use_controller(monkeypatch, controller)

    result = runner.invoke(cli.main, ["create", "registry", "a", "b"])

    assert result.exit_code != 0
    assert controller.applied == []


def test_create_registry_rejects_negative_port(runner, monkeypatch, controller):
    _use_controller(monkeypatch, controller)

    result = runner.invoke(cli.main, ["create", "registry", "r", "--port=-1"])

    assert result.exit_code != 0
    assert controller.applied == []


def test_create_registry_already_exists(runner, monkeypatch):
    controller = FakeController(existing=[Registry(name="ctlptl-registry")])
    _use_controller(monkeypatch, controller)

    result = runner.invoke(cli.main, ["create", "registry", "ctlptl-registry"])

    assert result.exit_code == 1
    assert result.output.strip() == "Cannot create registry: already exists"
    assert controller.applied == []


def test_create_registry_check_failure(runner, monkeypatch):
    _use_controller(monkeypatch, FakeController(get_error=TimeoutError("timed out")))

    result = runner.invoke(cli.main, ["create", "registry", "ctlptl-registry"])

    assert result.exit_code == 1
    assert result.output.strip() == "Cannot check registry: timed out"


def test_create_registry_controller_unavailable(runner, monkeypatch):
    def fail():
        raise ControllerError("Cannot connect to docker: connection refused")

    monkeypatch.setattr(cli, "default_controller", fail)

    result = runner.invoke(cli.main, ["create", "registry", "ctlptl-registry"])

    assert result.exit_code == 1
    assert "Cannot connect to docker" in result.output


def test_create_registry_bad_output_format(runner, monkeypatch, controller):
    _use_controller(monkeypatch, controller)

    result = runner.invoke(cli.main, ["create", "registry", "r", "-o", "wide"])

    assert result.exit_code == 1
    assert "unable to match a printer" in result.output


def test_create_registry_invalid_flush_timeout(tmp_path, monkeypatch, controller):
    _use_controller(monkeypatch, controller)
    runner = CliRunner(
        env={"CTLPTL_HOME": str(tmp_path), "CTLPTL_ANALYTICS_FLUSH_TIMEOUT": "1s"}
    )

    result = runner.invoke(cli.main, ["create", "registry", "x"])

    assert result.exit_code == 0, result.output
    assert result.exception is None
    assert "registry/x created" in result.output
    assert controller.applied[0].name == "x"


def test_create_registry_unknown_log_level(tmp_path, monkeypatch, controller):
    _use_controller(monkeypatch, controller)
    runner = CliRunner(env={"CTLPTL_HOME": str(tmp_path), "CTLPTL_LOG_LEVEL": "verbose"})

    result = runner.invoke(cli.main, ["create", "registry", "x"])

    assert result.exit_code == 0, result.output
    assert result.exception is None
    assert "registry/x created" in result.output
