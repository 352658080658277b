"""Application wiring layer."""

from .factory import (
    Core,
    Repositories,
    Services,
    UseCases,
    create_core,
    create_local_core,
    create_rate_limiter,
    create_repositories,
    create_services,
    create_sqlite_repositories,
    create_use_cases,
)

__all__ = [
    "Core",
    "Repositories",
    "Services",
    "UseCases",
    "create_core",
    "create_local_core",
    "create_rate_limiter",
    "create_repositories",
    "create_services",
    "create_sqlite_repositories",
    "create_use_cases",
]
