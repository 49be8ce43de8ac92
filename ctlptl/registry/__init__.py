"""Registry — local container-image registries managed as named resources.

The registry package provides:
- Models: the Registry resource and its pull-through proxy settings
- Defaults: filling in the fields a user left empty
- Controllers: querying and provisioning registries (Docker-backed)
"""
