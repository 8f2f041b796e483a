"""Network and image choice for one instance-creation attempt."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Any, Collection, Generic, Iterable, Optional, Union

from . import config as placement_config
from .image.selector import ImageSelectionPolicy, ImageSelector, ImageT, NamedImage
from .network.interface import CloudNetworkProfile, NetworkCatalog, NetworkIdentity
from .network.selector import NetworkSelector

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Placement(Generic[ImageT]):
    network: NetworkIdentity
    image: ImageT


def select_placement(
    profile: CloudNetworkProfile,
    attempted: Collection[str],
    images: Iterable[ImageT],
    flavor: Union[NamedImage, str],
    default_image: ImageT,
    *,
    catalog: NetworkCatalog,
    os_type: str,
    custom_image_id: Optional[str] = None,
    fast_image: Any = None,
    testing_mode: Any = None,
    rng: Optional[random.Random] = None,
) -> Placement[ImageT]:
    """Choose network and boot image for a new instance.

    Flags left as None come from config. Network selection errors propagate
    to the caller unchanged.
    """
    if fast_image is None:
        fast_image = placement_config.fast_image_enabled()
    if testing_mode is None:
        testing_mode = placement_config.testing_mode()

    network = NetworkSelector(catalog, rng=rng).select_network(profile, attempted)

    policy = ImageSelectionPolicy.from_flags(
        fast_image, testing_mode, custom_image_id, os_type, flavor
    )
    image = ImageSelector().select_image(
        images, policy.flavor_is_bare_metal, policy, default_image
    )

    logger.info(
        "Placement for cloud %s: network=%s image=%s",
        profile.cloud_name,
        network.name,
        image.name,
    )
    return Placement(network=network, image=image)
