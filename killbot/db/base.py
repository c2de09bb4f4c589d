"""Backend-independent interface of the data-access layer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List

from .models import Organization


class Connection(ABC):
    """Operations the rest of the bot uses to read and persist its state.

    Implementations are not safe for concurrent load/mutate/save cycles on the
    same organization; callers must serialize those themselves.
    """

    @abstractmethod
    async def connect(self) -> None: ...

    @abstractmethod
    async def close(self) -> None: ...

    @abstractmethod
    async def raw_query(self, query: str, *params: Any) -> List[Dict[str, Any]]: ...

    @abstractmethod
    async def load_all_organizations(self) -> List[Organization]: ...

    @abstractmethod
    async def load_organization(self, organization_id: int) -> Organization: ...

    @abstractmethod
    async def load_ignored_regions_for_organization(self, organization_id: int) -> List[int]: ...

    @abstractmethod
    async def query_ship_name(self, ship_type_id: int) -> str: ...

    @abstractmethod
    async def query_region_id(self, solar_system_id: int) -> int: ...

    @abstractmethod
    async def save_organization(self, organization: Organization) -> Organization: ...
