from __future__ import annotations

import logging
from typing import Optional

import openstack
from keystoneauth1 import exceptions as ksa_exceptions
from openstack import exceptions as sdk_exceptions
from openstack.connection import Connection

from .. import config as placement_config
from .interface import (
    CatalogNetwork,
    CatalogResult,
    NetworkCatalog,
    ProviderCredentials,
    Reachable,
    Unreachable,
)

logger = logging.getLogger(__name__)

# Failures that mean the networking service cannot be used at all, including
# clouds deployed without neutron.
CATALOG_FAILURES = (sdk_exceptions.SDKException, ksa_exceptions.ClientException)


class OpenStackNetworkCatalog(NetworkCatalog):
    """Network catalog backed by the OpenStack networking (neutron) API.

    Boundary rules:
    - Only this module talks to openstacksdk.
    - A connection is opened per query and closed on every exit path.
    - SDK and auth failures become `Unreachable`; they never propagate.
    """

    def __init__(
        self,
        *,
        timeout: Optional[int] = None,
        interface: Optional[str] = None,
    ) -> None:
        self._timeout = placement_config.catalog_timeout() if timeout is None else timeout
        self._interface = placement_config.catalog_interface() if interface is None else interface

    def list_networks(self, credentials: Optional[ProviderCredentials]) -> CatalogResult:
        if credentials is None:
            return Unreachable("no provider credentials")

        try:
            conn = self._connect(credentials)
        except CATALOG_FAILURES as exc:
            logger.debug("Could not connect to %s: %s", credentials.endpoint, exc)
            return Unreachable(str(exc))

        try:
            networks = tuple(
                CatalogNetwork(name=net.name, id=net.id)
                for net in conn.network.networks()
            )
        except CATALOG_FAILURES as exc:
            logger.debug("Network listing failed on %s: %s", credentials.endpoint, exc)
            return Unreachable(str(exc))
        finally:
            conn.close()

        logger.debug(
            "Catalog at %s listed %d networks", credentials.endpoint, len(networks)
        )
        return Reachable(networks)

    def _connect(self, credentials: ProviderCredentials) -> Connection:
        return openstack.connect(
            auth_url=credentials.endpoint,
            username=credentials.username,
            password=credentials.api_key,
            project_name=credentials.tenant,
            user_domain_name=credentials.domain,
            project_domain_name=credentials.domain,
            region_name=credentials.region,
            interface=self._interface,
            api_timeout=self._timeout,
            load_yaml_config=False,
            load_envvars=False,
        )
