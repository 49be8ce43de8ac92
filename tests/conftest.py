"""Shared fixtures: an in-memory registry controller."""

from __future__ import annotations

import copy

import pytest

from ctlptl.errors import NotFoundError
from ctlptl.registry.models import KIND, Registry


class FakeController:
    """In-memory controller that records every call."""

    def __init__(self, existing=None, get_error=None, apply_error=None, host_port=5555):
        self.registries: dict[str, Registry] = {r.name: r for r in (existing or [])}
        self.get_error = get_error
        self.apply_error = apply_error
        self.host_port = host_port
        self.get_calls: list[str] = []
        self.applied: list[Registry] = []

    def get(self, name: str) -> Registry:
        self.get_calls.append(name)
        if self.get_error is not None:
            raise self.get_error
        if name not in self.registries:
            raise NotFoundError(KIND, name)
        return self.registries[name]

    def apply(self, registry: Registry) -> Registry:
        self.applied.append(copy.deepcopy(registry))
        if self.apply_error is not None:
            raise self.apply_error
        realized = copy.deepcopy(registry)
        realized.port = registry.port or self.host_port
        realized.status.host_port = realized.port
        realized.status.container_port = 5000
        realized.status.container_id = "abc123"
        self.registries[realized.name] = realized
        return realized


@pytest.fixture
def controller():
    return FakeController()
