"""``ctlptl create registry`` — create a named local registry.

The workflow builds a Registry from the parsed flags, fills defaults,
refuses to continue if a registry with that name already exists, then asks
the controller to create it and prints what the controller returns.

Checking before creating is racy against concurrent callers; the check only
gives a friendly error early, and the controller still rejects duplicates.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from typing import TextIO

from ctlptl.analytics import Analytics
from ctlptl.errors import AlreadyExistsError, RegistryCheckError, is_not_found
from ctlptl.printers import PrintFlags
from ctlptl.registry.controller import RegistryController
from ctlptl.registry.defaults import DEFAULT_REGISTRY_IMAGE_REF, fill_defaults
from ctlptl.registry.models import Registry, RegistryProxySpec

logger = logging.getLogger(__name__)

ANALYTICS_EVENT = "cmd.create.registry"


@dataclass
class RegistryFlags:
    """Flag values as parsed from the command line."""

    port: int = 0
    listen_address: str = ""
    image: str = DEFAULT_REGISTRY_IMAGE_REF
    proxy_remote_url: str = ""
    proxy_username: str = ""
    proxy_password: str = ""
    proxy_ttl: str = ""


def build_registry(flags: RegistryFlags, name: str) -> Registry:
    """Assemble the Registry to submit.

    The proxy is built only when a remote URL was given; the other proxy
    fields are copied as-is, empty or not.
    """
    registry = Registry(
        port=flags.port,
        listen_address=flags.listen_address,
        image=flags.image,
    )
    if flags.proxy_remote_url:
        registry.proxy = RegistryProxySpec(
            remote_url=flags.proxy_remote_url,
            username=flags.proxy_username,
            password=flags.proxy_password,
            ttl=flags.proxy_ttl,
        )
    registry.name = name
    return registry


@dataclass
class CreateRegistryOptions:
    """Everything one invocation of ``create registry`` needs."""

    flags: RegistryFlags = field(default_factory=RegistryFlags)
    print_flags: PrintFlags = field(default_factory=lambda: PrintFlags(operation="created"))
    analytics: Analytics = field(default_factory=Analytics)
    out: TextIO = field(default_factory=lambda: sys.stdout)

    def run(self, controller: RegistryController, name: str) -> Registry:
        """Create the registry ``name`` and print it. Returns the realized registry."""
        with self.analytics:
            self.analytics.incr(ANALYTICS_EVENT)

            registry = build_registry(self.flags, name)
            fill_defaults(registry)

            check_not_exists(controller, registry.name)

            logger.debug(
                "applying registry %s (pull-through proxy: %s)", registry.name, registry.is_proxy
            )
            applied = controller.apply(registry)

            printer = self.print_flags.to_printer()
            printer.print_obj(applied, self.out)
            return applied


def check_not_exists(controller: RegistryController, name: str) -> None:
    """Raise unless the controller reports ``name`` as not found."""
    try:
        controller.get(name)
    except Exception as e:
        if is_not_found(e):
            return
        raise RegistryCheckError(f"Cannot check registry: {e}") from e
    raise AlreadyExistsError("Cannot create registry: already exists")
