"""Errors raised by ctlptl workflows and controllers."""

from __future__ import annotations


class CtlptlError(Exception):
    """Base class for all ctlptl errors."""


class NotFoundError(CtlptlError):
    """The requested resource does not exist."""

    def __init__(self, kind: str, name: str) -> None:
        self.kind = kind
        self.name = name
        super().__init__(f'{kind} "{name}" not found')


class AlreadyExistsError(CtlptlError):
    """A resource with the same name already exists."""


class RegistryCheckError(CtlptlError):
    """Looking up an existing registry failed for a reason other than not-found."""


class ControllerError(CtlptlError):
    """The backing controller could not be reached or constructed."""


class PrinterError(CtlptlError):
    """A resource could not be rendered in the requested output format."""


def is_not_found(err: BaseException) -> bool:
    return isinstance(err, NotFoundError)
