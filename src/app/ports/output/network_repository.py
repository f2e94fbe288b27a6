from __future__ import annotations

from abc import ABC, abstractmethod

from src.domain.models.network import NetworkSnapshot


class INetworkRepository(ABC):
    """Port for loading a fully cross-referenced transit network."""

    @abstractmethod
    def load_network(self) -> NetworkSnapshot:
        raise NotImplementedError
