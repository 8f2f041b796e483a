"""Network and boot image selection for compute provisioning."""

from .image import ImageCandidate, ImageSelectionPolicy, ImageSelector
from .network import (
    CloudNetworkProfile,
    NetworkIdentity,
    NetworkNotFound,
    NetworkSelectionError,
    NetworkSelector,
    NoNetworkAvailable,
)
from .placement import Placement, select_placement
from .profile import ProfileError, load_network_profile

__all__ = [
    "CloudNetworkProfile",
    "ImageCandidate",
    "ImageSelectionPolicy",
    "ImageSelector",
    "NetworkIdentity",
    "NetworkNotFound",
    "NetworkSelectionError",
    "NetworkSelector",
    "NoNetworkAvailable",
    "Placement",
    "ProfileError",
    "load_network_profile",
    "select_placement",
]
