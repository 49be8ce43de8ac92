"""Controller contract for querying and provisioning registries."""

from __future__ import annotations

from typing import Protocol

from ctlptl.registry.models import Registry


class RegistryController(Protocol):
    """What registry commands need from a backing controller.

    ``get`` raises :class:`ctlptl.errors.NotFoundError` when no registry with
    that name exists; any other exception means the lookup itself failed.
    ``apply`` provisions the registry and returns it as realized, with the
    status fields filled in.
    """

    def get(self, name: str) -> Registry: ...

    def apply(self, registry: Registry) -> Registry: ...


def default_controller() -> RegistryController:
    """Build the Docker-backed controller for this machine."""
    from ctlptl.registry.docker_controller import DockerController

    return DockerController.from_env()
