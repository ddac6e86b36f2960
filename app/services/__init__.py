"""Services for the building-code self-check system."""

from .cache import DefinitionCache, get_definition_cache
from .definition_store import DefinitionStore, get_definition_store
from .law_store import LawStore, get_law_store
from .checklist_service import ChecklistService, get_checklist_service
from .geo_client import GeoClient, get_geo_client

__all__ = [
    "DefinitionCache",
    "get_definition_cache",
    "DefinitionStore",
    "get_definition_store",
    "LawStore",
    "get_law_store",
    "ChecklistService",
    "get_checklist_service",
    "GeoClient",
    "get_geo_client",
]
