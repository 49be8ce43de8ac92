"""Registry data models — the Registry resource, proxy settings, and status."""

from __future__ import annotations

from dataclasses import dataclass, field

API_VERSION = "ctlptl.dev/v1alpha1"
KIND = "Registry"


@dataclass
class TypeMeta:
    """Kind and API version the controller uses to route a resource."""

    kind: str = ""
    api_version: str = ""


def type_meta() -> TypeMeta:
    return TypeMeta(kind=KIND, api_version=API_VERSION)


@dataclass
class RegistryProxySpec:
    """Pull-through cache settings for a registry."""

    remote_url: str
    username: str = ""
    password: str = ""
    ttl: str = ""  # Duration string, e.g. "168h"


@dataclass
class RegistryStatus:
    """Fields the controller fills in once the registry is running."""

    container_id: str = ""
    host_port: int = 0
    container_port: int = 0
    listen_address: str = ""
    ip_address: str = ""
    networks: list[str] = field(default_factory=list)
    image: str = ""
    creation_timestamp: str = ""  # ISO 8601
    warnings: list[str] = field(default_factory=list)


@dataclass
class Registry:
    """A local container-image registry."""

    type_meta: TypeMeta = field(default_factory=type_meta)

    # Identity
    name: str = ""

    # Host binding
    port: int = 0  # 0 lets the controller choose
    listen_address: str = ""

    image: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    proxy: RegistryProxySpec | None = None

    status: RegistryStatus = field(default_factory=RegistryStatus)

    @property
    def qualified_name(self) -> str:
        return f"{self.type_meta.kind.lower() or 'registry'}/{self.name}"

    @property
    def is_proxy(self) -> bool:
        return self.proxy is not None

    def to_dict(self) -> dict:
        return _registry_to_dict(self)

    @classmethod
    def from_dict(cls, data: dict) -> Registry:
        return _dict_to_registry(data)


def _registry_to_dict(registry: Registry) -> dict:
    data: dict = {
        "apiVersion": registry.type_meta.api_version,
        "kind": registry.type_meta.kind,
        "name": registry.name,
        "port": registry.port,
        "listenAddress": registry.listen_address,
        "image": registry.image,
    }
    if registry.labels:
        data["labels"] = dict(registry.labels)
    if registry.proxy is not None:
        data["proxy"] = {
            "remoteURL": registry.proxy.remote_url,
            "username": registry.proxy.username,
            "password": registry.proxy.password,
            "ttl": registry.proxy.ttl,
        }
    status = registry.status
    data["status"] = {
        "containerId": status.container_id,
        "hostPort": status.host_port,
        "containerPort": status.container_port,
        "listenAddress": status.listen_address,
        "ipAddress": status.ip_address,
        "networks": list(status.networks),
        "image": status.image,
        "creationTimestamp": status.creation_timestamp,
        "warnings": list(status.warnings),
    }
    return data


def _dict_to_registry(data: dict) -> Registry:
    proxy_data = data.get("proxy")
    status_data = data.get("status", {})
    return Registry(
        type_meta=TypeMeta(
            kind=data.get("kind", ""),
            api_version=data.get("apiVersion", ""),
        ),
        name=data.get("name", ""),
        port=data.get("port", 0),
        listen_address=data.get("listenAddress", ""),
        image=data.get("image", ""),
        labels=data.get("labels", {}),
        proxy=RegistryProxySpec(
            remote_url=proxy_data.get("remoteURL", ""),
            username=proxy_data.get("username", ""),
            password=proxy_data.get("password", ""),
            ttl=proxy_data.get("ttl", ""),
        )
        if proxy_data
        else None,
        status=RegistryStatus(
            container_id=status_data.get("containerId", ""),
            host_port=status_data.get("hostPort", 0),
            container_port=status_data.get("containerPort", 0),
            listen_address=status_data.get("listenAddress", ""),
            ip_address=status_data.get("ipAddress", ""),
            networks=status_data.get("networks", []),
            image=status_data.get("image", ""),
            creation_timestamp=status_data.get("creationTimestamp", ""),
            warnings=status_data.get("warnings", []),
        ),
    )
