from __future__ import annotations

from dataclasses import dataclass
from typing import Collection, Optional, Protocol, Sequence, Union


@dataclass(frozen=True)
class ProviderCredentials:
    """Credentials used to open a network catalog session.

    - api_key: password or API key for the tenant user
    - username: tenant user name
    - tenant: project/tenant name
    - endpoint: identity service URL
    - region: optional region name
    - domain: identity domain for user and project
    """

    api_key: str
    username: str
    tenant: str
    endpoint: str
    region: Optional[str] = None
    domain: str = "Default"

    def __repr__(self) -> str:
        return (
            f"ProviderCredentials(username={self.username!r}, tenant={self.tenant!r}, "
            f"endpoint={self.endpoint!r}, region={self.region!r})"
        )


@dataclass(frozen=True)
class CloudNetworkProfile:
    """Networking configuration of a cloud target."""

    cloud_name: str
    default_subnet: str
    credentials: Optional[ProviderCredentials] = None
    enabled_networks: Optional[Sequence[str]] = None

    def candidate_pool(self) -> list[str]:
        """Enabled networks when configured, else the single default subnet."""
        if self.enabled_networks:
            return list(self.enabled_networks)
        return [self.default_subnet]


@dataclass(frozen=True)
class NetworkIdentity:
    """Chosen network. `id` is empty when the provider has no SDN layer."""

    name: str
    id: str = ""


@dataclass(frozen=True)
class CatalogNetwork:
    """One entry of a network catalog listing."""

    name: str
    id: str


@dataclass(frozen=True)
class Reachable:
    """Catalog answered; `networks` is its full listing."""

    networks: Sequence[CatalogNetwork] = ()


@dataclass(frozen=True)
class Unreachable:
    """Catalog could not be queried; treated as "no SDN layer"."""

    reason: str = ""


CatalogResult = Union[Reachable, Unreachable]


class NetworkCatalog(Protocol):
    """Provider directory of named networks."""

    def list_networks(
        self, credentials: Optional[ProviderCredentials]
    ) -> CatalogResult:  # pragma: no cover - protocol
        """Open a session, list networks, release the session.

        Implementations must not raise for provider failures; those are
        reported as `Unreachable`.
        """
        ...


class NetworkSelectionError(RuntimeError):
    """Raised when no usable network can be chosen for an instance."""

    def __init__(self, message: str, *, cloud_name: str) -> None:
        super().__init__(message)
        self.cloud_name = cloud_name


class NoNetworkAvailable(NetworkSelectionError):
    """Every candidate network has already been attempted."""

    def __init__(self, cloud_name: str, attempted: Collection[str]) -> None:
        self.attempted = sorted(attempted)
        super().__init__(
            f"no ip available in enabled networks for cloud {cloud_name}. "
            f"tried: {self.attempted} - escalate to cloud operations team",
            cloud_name=cloud_name,
        )


class NetworkNotFound(NetworkSelectionError):
    """The catalog is reachable but does not know the chosen network."""

    def __init__(self, cloud_name: str, subnet: str, network: str) -> None:
        self.subnet = subnet
        self.network = network
        super().__init__(
            f"Your {cloud_name} cloud is configured to use network: {subnet} "
            f"but is not found.",
            cloud_name=cloud_name,
        )
