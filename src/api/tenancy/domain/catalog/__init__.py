"""Static tenant catalog.

Declaration order is business priority and is preserved by the registry.
"""

from tenancy.domain.catalog.bowlers import BOWLERS
from tenancy.domain.catalog.bunge import BUNGE
from tenancy.domain.catalog.gcpl import GCPL
from tenancy.domain.catalog.samsonite import SAMSONITE

TENANT_CATALOG = (GCPL, SAMSONITE, BOWLERS, BUNGE)

DEFAULT_TENANT_KEY = GCPL.key

__all__ = [
    "BOWLERS",
    "BUNGE",
    "DEFAULT_TENANT_KEY",
    "GCPL",
    "SAMSONITE",
    "TENANT_CATALOG",
]
