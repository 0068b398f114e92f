"""Permission configuration registry (implements IPermissionConfigProvider)."""

from __future__ import annotations

from collections.abc import Iterable

from objectsearch.domain.entities import PermissionConfig


class PermissionConfigRegistry:
    """Per-class permission configuration, declared at startup.

    A class configured with a master is a sub-resource of that master and is
    excluded from search.
    """

    def __init__(self, configs: Iterable[PermissionConfig] = ()) -> None:
        self._configs: dict[type, PermissionConfig] = {}
        for config in configs:
            self.add(config)

    def add(self, config: PermissionConfig) -> None:
        self._configs[config.backing_class] = config

    def has_config(self, backing_class: type) -> bool:
        return backing_class in self._configs

    def get_config(self, backing_class: type) -> PermissionConfig:
        """Return the config of backing_class. Raises KeyError when none is declared."""
        return self._configs[backing_class]
