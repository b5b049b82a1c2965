"""Ecosystem registry for parsing capabilities.

Each ecosystem (npm, ...) registers its capability bundle here.
"""

import logging
from typing import Dict, List, Optional

from sbomgraph.parsers.base import Ecosystem

logger = logging.getLogger("sbomgraph.parsers.registry")


class EcosystemRegistry:
    """Global registry of ecosystem capability bundles."""

    _instance: Optional["EcosystemRegistry"] = None

    def __init__(self) -> None:
        """Initialize the registry."""
        self._ecosystems: Dict[str, Ecosystem] = {}

    @classmethod
    def get_instance(cls) -> "EcosystemRegistry":
        """Get singleton instance.

        Returns:
            EcosystemRegistry: Global registry instance.
        """
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def register(self, ecosystem: Ecosystem) -> None:
        """Register a capability bundle.

        Args:
            ecosystem: Bundle to register under ``ecosystem.name``.
        """
        if ecosystem.name in self._ecosystems:
            logger.warning("Overwriting existing ecosystem '%s'", ecosystem.name)
        self._ecosystems[ecosystem.name] = ecosystem
        logger.debug("Registered ecosystem '%s'", ecosystem.name)

    def get(self, name: str) -> Ecosystem:
        """Look up a registered ecosystem.

        Args:
            name: Ecosystem identifier.

        Returns:
            Ecosystem: Registered bundle.

        Raises:
            KeyError: If no ecosystem is registered under ``name``.
        """
        try:
            return self._ecosystems[name]
        except KeyError:
            raise KeyError(
                f"Unknown ecosystem '{name}'. Registered: {self.list_ecosystems()}"
            ) from None

    def list_ecosystems(self) -> List[str]:
        """List registered ecosystem identifiers."""
        return sorted(self._ecosystems)
