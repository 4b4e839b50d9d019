"""Registry of command specs keyed by node type."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from remotecontrol.catalog.spec import CommandSpec
from remotecontrol.errors import CatalogError
from remotecontrol.types import CommandInfo

log = logging.getLogger(__name__)


class CommandCatalog:
    """Node-type to command mapping, fixed after startup.

    Command descriptors are derived once at registration and handed out as
    copies, so callers can never mutate the catalog through a listing.
    """

    def __init__(self) -> None:
        self._specs: dict[str, dict[str, CommandSpec]] = {}
        self._infos: dict[str, list[CommandInfo]] = {}

    def register(self, node_type: str, specs: Iterable[CommandSpec]) -> None:
        if node_type in self._specs:
            raise CatalogError(f"node type already registered: {node_type}")

        by_name: dict[str, CommandSpec] = {}
        for spec in specs:
            if spec.name in by_name:
                raise CatalogError(f"duplicate command {spec.name} for node type {node_type}")
            by_name[spec.name] = spec

        self._specs[node_type] = by_name
        self._infos[node_type] = [spec.to_info() for spec in by_name.values()]
        log.debug("Registered %d commands for node type %s", len(by_name), node_type)

    def commands_for(self, node_type: str) -> list[CommandInfo]:
        return [info.model_copy(deep=True) for info in self._infos.get(node_type, [])]

    def lookup(self, node_type: str, name: str) -> CommandSpec | None:
        return self._specs.get(node_type, {}).get(name)

    def has_node_type(self, node_type: str) -> bool:
        return node_type in self._specs

    def node_types(self) -> list[str]:
        return list(self._specs)

    def __contains__(self, node_type: object) -> bool:
        return node_type in self._specs
