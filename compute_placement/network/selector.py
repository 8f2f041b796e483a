"""Network selection for new compute instances.

Narrows a cloud's usable networks to those not yet attempted, picks one at
random, and resolves its provider id through a network catalog.

Example:
    selector = NetworkSelector(OpenStackNetworkCatalog())
    identity = selector.select_network(profile, attempted={"private-a"})
"""

from __future__ import annotations

import logging
import random
from typing import Collection, Optional

from .interface import (
    CloudNetworkProfile,
    NetworkCatalog,
    NetworkIdentity,
    NetworkNotFound,
    NoNetworkAvailable,
    Unreachable,
)

logger = logging.getLogger(__name__)


class NetworkSelector:
    """Chooses a network for one instance-creation attempt.

    Stateless between calls; the caller owns the attempted set and grows it
    across its own retries.
    """

    def __init__(
        self, catalog: NetworkCatalog, rng: Optional[random.Random] = None
    ) -> None:
        """Initialize NetworkSelector.

        Args:
            catalog: Network catalog used to resolve provider ids
            rng: Random source for the pick (seed it for reproducible choices)
        """
        self.catalog = catalog
        self.rng = rng if rng is not None else random.Random()

    def select_network(
        self, profile: CloudNetworkProfile, attempted: Collection[str] = ()
    ) -> NetworkIdentity:
        """Pick a network not in `attempted` and resolve its id.

        Args:
            profile: Networking configuration of the target cloud
            attempted: Network names already tried in this provisioning attempt

        Returns:
            NetworkIdentity; `id` is empty when the cloud has no SDN layer

        Raises:
            NoNetworkAvailable: every candidate network was already attempted
            NetworkNotFound: the catalog is reachable but lacks the chosen network
        """
        network_name = self.choose_name(profile, attempted)
        logger.info("network_name: %s", network_name)

        result = self.catalog.list_networks(profile.credentials)
        if isinstance(result, Unreachable):
            logger.warning(
                "no SDN networking installed for cloud %s (%s)",
                profile.cloud_name,
                result.reason or "catalog unreachable",
            )
            return NetworkIdentity(name=network_name, id="")

        # The first entry with the chosen name decides; an SDN layer must give an id.
        match = next((net for net in result.networks if net.name == network_name), None)
        if match is not None and match.id:
            logger.info("network_id: %s", match.id)
            return NetworkIdentity(name=network_name, id=match.id)

        raise NetworkNotFound(
            profile.cloud_name, subnet=profile.default_subnet, network=network_name
        )

    def choose_name(
        self, profile: CloudNetworkProfile, attempted: Collection[str] = ()
    ) -> str:
        """Pick a network name from the candidate pool without resolving it."""
        excluded = set(attempted)
        pool = [name for name in profile.candidate_pool() if name not in excluded]
        if not pool:
            raise NoNetworkAvailable(profile.cloud_name, excluded)
        return self.rng.choice(pool)
