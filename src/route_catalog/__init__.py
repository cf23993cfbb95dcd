from .catalog import (
    DEFAULT_ROUTES_FILE,
    Route,
    RouteCatalog,
    load_default_catalog,
    load_routes,
    normalize_city,
)

__all__ = [
    "DEFAULT_ROUTES_FILE",
    "Route",
    "RouteCatalog",
    "load_default_catalog",
    "load_routes",
    "normalize_city",
]
