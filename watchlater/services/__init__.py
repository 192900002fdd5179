"""List and item services operating on the state store."""

from .items import ItemService
from .lists import ListService

__all__ = ["ItemService", "ListService"]
