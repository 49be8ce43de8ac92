"""Docker-backed registry controller.

Each registry is a ``registry:2`` container named after the resource and
labelled ``dev.tilt.ctlptl.role=registry``. Pull-through proxy settings are
passed to the registry server as ``REGISTRY_PROXY_*`` environment variables.
"""

from __future__ import annotations

import logging

import docker
from docker.errors import APIError, DockerException, ImageNotFound, NotFound

from ctlptl.errors import AlreadyExistsError, ControllerError, NotFoundError
from ctlptl.registry.defaults import DEFAULT_LISTEN_ADDRESS, REGISTRY_CONTAINER_PORT
from ctlptl.registry.models import (
    KIND,
    Registry,
    RegistryProxySpec,
    RegistryStatus,
    type_meta,
)

logger = logging.getLogger(__name__)

ROLE_LABEL = "dev.tilt.ctlptl.role"
ROLE_REGISTRY = "registry"

PROXY_ENV = {
    "remote_url": "REGISTRY_PROXY_REMOTEURL",
    "username": "REGISTRY_PROXY_USERNAME",
    "password": "REGISTRY_PROXY_PASSWORD",
    "ttl": "REGISTRY_PROXY_TTL",
}


class DockerController:
    """Queries and creates registry containers through the Docker API."""

    def __init__(self, client: docker.DockerClient):
        self.client = client

    @classmethod
    def from_env(cls) -> DockerController:
        try:
            client = docker.from_env()
            client.ping()
        except DockerException as e:
            raise ControllerError(f"Cannot connect to docker: {e}") from e
        return cls(client)

    def get(self, name: str) -> Registry:
        try:
            container = self.client.containers.get(name)
        except NotFound as e:
            raise NotFoundError(KIND, name) from e

        labels = container.attrs.get("Config", {}).get("Labels") or {}
        if labels.get(ROLE_LABEL) != ROLE_REGISTRY:
            raise NotFoundError(KIND, name)
        return container_to_registry(container)

    def apply(self, registry: Registry) -> Registry:
        self._ensure_image(registry.image)

        listen_address = registry.listen_address or DEFAULT_LISTEN_ADDRESS
        host_port = registry.port or None  # None lets docker pick
        labels = {**registry.labels, ROLE_LABEL: ROLE_REGISTRY}

        logger.info(
            "Creating registry %s on %s:%s", registry.name, listen_address, host_port or "*"
        )
        try:
            container = self.client.containers.run(
                registry.image,
                name=registry.name,
                detach=True,
                ports={f"{REGISTRY_CONTAINER_PORT}/tcp": (listen_address, host_port)},
                environment=proxy_environment(registry.proxy),
                labels=labels,
                restart_policy={"Name": "always"},
            )
        except APIError as e:
            if e.status_code == 409:
                raise AlreadyExistsError(
                    f"Cannot create registry: container {registry.name} already exists"
                ) from e
            raise

        container.reload()
        return container_to_registry(container)

    def _ensure_image(self, image: str) -> None:
        try:
            self.client.images.get(image)
        except ImageNotFound:
            logger.info("Pulling registry image %s", image)
            self.client.images.pull(image)


def proxy_environment(proxy: RegistryProxySpec | None) -> dict[str, str]:
    """Registry server environment for a pull-through proxy. Empty values are omitted."""
    if proxy is None:
        return {}
    env = {}
    for attr, var in PROXY_ENV.items():
        value = getattr(proxy, attr)
        if value:
            env[var] = value
    return env


def container_to_registry(container) -> Registry:
    """Build the realized Registry from an inspected container."""
    attrs = container.attrs
    config = attrs.get("Config", {})
    network_settings = attrs.get("NetworkSettings", {})

    labels = dict(config.get("Labels") or {})
    labels.pop(ROLE_LABEL, None)

    env = {}
    for item in config.get("Env") or []:
        key, _, value = item.partition("=")
        env[key] = value

    proxy = None
    if env.get(PROXY_ENV["remote_url"]):
        proxy = RegistryProxySpec(
            **{attr: env.get(var, "") for attr, var in PROXY_ENV.items()}
        )

    listen_address, host_port = "", 0
    bindings = (network_settings.get("Ports") or {}).get(f"{REGISTRY_CONTAINER_PORT}/tcp") or []
    if bindings:
        listen_address = bindings[0].get("HostIp", "")
        host_port = int(bindings[0].get("HostPort") or 0)

    networks = sorted((network_settings.get("Networks") or {}).keys())
    ip_address = network_settings.get("IPAddress", "")
    if not ip_address and networks:
        ip_address = network_settings["Networks"][networks[0]].get("IPAddress", "")

    warnings = []
    state = attrs.get("State", {}).get("Status", "")
    if state and state != "running":
        warnings.append(f"Unknown status: {state}")

    return Registry(
        type_meta=type_meta(),
        name=attrs.get("Name", "").lstrip("/") or container.name,
        port=host_port,
        listen_address=listen_address,
        image=config.get("Image", ""),
        labels=labels,
        proxy=proxy,
        status=RegistryStatus(
            container_id=attrs.get("Id", ""),
            host_port=host_port,
            container_port=REGISTRY_CONTAINER_PORT,
            listen_address=listen_address,
            ip_address=ip_address,
            networks=networks,
            image=config.get("Image", ""),
            creation_timestamp=attrs.get("Created", ""),
            warnings=warnings,
        ),
    )
