"""Defaulting policy for Registry resources."""

from __future__ import annotations

from ctlptl.registry.models import API_VERSION, KIND, Registry

DEFAULT_REGISTRY_NAME = "ctlptl-registry"
DEFAULT_REGISTRY_IMAGE_REF = "docker.io/library/registry:2"
DEFAULT_LISTEN_ADDRESS = "127.0.0.1"

# Port the registry server listens on inside its container.
REGISTRY_CONTAINER_PORT = 5000


def fill_defaults(registry: Registry) -> None:
    """Fill empty fields of ``registry`` in place.

    Port and listen address are left for the controller to decide, and an
    empty proxy TTL falls through to the registry server's own default.
    """
    if not registry.type_meta.kind:
        registry.type_meta.kind = KIND
    if not registry.type_meta.api_version:
        registry.type_meta.api_version = API_VERSION
    if not registry.name:
        registry.name = DEFAULT_REGISTRY_NAME
    if not registry.image:
        registry.image = DEFAULT_REGISTRY_IMAGE_REF
