"""Network selection and provider network catalogs."""

from .interface import (
    CatalogNetwork,
    CatalogResult,
    CloudNetworkProfile,
    NetworkCatalog,
    NetworkIdentity,
    NetworkNotFound,
    NetworkSelectionError,
    NoNetworkAvailable,
    ProviderCredentials,
    Reachable,
    Unreachable,
)
from .selector import NetworkSelector

__all__ = [
    "CatalogNetwork",
    "CatalogResult",
    "CloudNetworkProfile",
    "NetworkCatalog",
    "NetworkIdentity",
    "NetworkNotFound",
    "NetworkSelectionError",
    "NetworkSelector",
    "NoNetworkAvailable",
    "ProviderCredentials",
    "Reachable",
    "Unreachable",
]
