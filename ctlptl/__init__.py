"""ctlptl — declarative local registries for container development."""

__version__ = "0.1.0"
