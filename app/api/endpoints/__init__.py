"""API endpoints package."""

from . import health
from . import checklists
from . import laws
from . import rules
from . import geo
from . import calc

__all__ = ["health", "checklists", "laws", "rules", "geo", "calc"]
