"""Output printers for resources returned by the controller.

``PrintFlags`` carries the ``--output`` choice and the past-tense operation
("created") used by the human-readable format.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Protocol, TextIO

import yaml

from ctlptl.errors import PrinterError
from ctlptl.registry.models import Registry

OUTPUT_FORMATS = ["", "name", "yaml", "json"]


class ResourcePrinter(Protocol):
    def print_obj(self, obj: Registry, out: TextIO) -> None: ...


@dataclass
class NamePrinter:
    """Prints ``kind/name``, followed by the operation when one is set."""

    operation: str = ""

    def print_obj(self, obj: Registry, out: TextIO) -> None:
        line = obj.qualified_name
        if self.operation:
            line = f"{line} {self.operation}"
        out.write(line + "\n")


class YAMLPrinter:
    def print_obj(self, obj: Registry, out: TextIO) -> None:
        out.write(yaml.safe_dump(obj.to_dict(), sort_keys=False))


class JSONPrinter:
    def print_obj(self, obj: Registry, out: TextIO) -> None:
        out.write(json.dumps(obj.to_dict(), indent=2) + "\n")


@dataclass
class PrintFlags:
    """Output selection for a command."""

    operation: str
    output_format: str = ""

    def to_printer(self) -> ResourcePrinter:
        fmt = (self.output_format or "").lower()
        if fmt == "":
            return NamePrinter(operation=self.operation)
        if fmt == "name":
            return NamePrinter()
        if fmt == "yaml":
            return YAMLPrinter()
        if fmt == "json":
            return JSONPrinter()
        allowed = ", ".join(f for f in OUTPUT_FORMATS if f)
        raise PrinterError(
            f'unable to match a printer suitable for the output format "{self.output_format}", '
            f"allowed formats are: {allowed}"
        )
