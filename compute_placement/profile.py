"""Decoding of cloud compute service records into network profiles."""

from __future__ import annotations

import json
import logging
from typing import Any, Mapping, Optional, Sequence

from .network.interface import CloudNetworkProfile, ProviderCredentials

logger = logging.getLogger(__name__)


class ProfileError(ValueError):
    """Compute service record cannot be turned into a network profile."""


def _decode_enabled_networks(value: Any) -> Optional[Sequence[str]]:
    """Decode `enabled_networks`: JSON list string, list, or empty/None."""
    if value is None or value == "":
        return None
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except json.JSONDecodeError as exc:
            raise ProfileError(f"invalid JSON in enabled_networks: {exc}") from exc
    if value is None:
        return None
    if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
        raise ProfileError(f"enabled_networks must be a list of names, got {value!r}")
    return list(value) or None


def load_credentials(service: Mapping[str, Any]) -> Optional[ProviderCredentials]:
    """Provider credentials from a compute service record, if it carries any."""
    endpoint = service.get("endpoint")
    if not endpoint:
        return None
    return ProviderCredentials(
        api_key=service.get("password", ""),
        username=service.get("username", ""),
        tenant=service.get("tenant", ""),
        endpoint=endpoint,
        region=service.get("region") or None,
    )


def load_network_profile(
    cloud_name: str, service: Mapping[str, Any]
) -> CloudNetworkProfile:
    """Build a CloudNetworkProfile from compute service attributes.

    Args:
        cloud_name: Cloud identity used in selection diagnostics
        service: Compute service attributes (enabled_networks, subnet,
            password, username, tenant, endpoint, region)

    Raises:
        ProfileError: enabled_networks is malformed or no network is configured
    """
    enabled = _decode_enabled_networks(service.get("enabled_networks"))
    subnet = service.get("subnet") or ""
    if not enabled and not subnet:
        raise ProfileError(f"cloud {cloud_name} has neither enabled_networks nor subnet")

    profile = CloudNetworkProfile(
        cloud_name=cloud_name,
        default_subnet=subnet,
        credentials=load_credentials(service),
        enabled_networks=enabled,
    )
    logger.debug(
        "Loaded network profile for cloud %s: enabled=%s subnet=%s",
        cloud_name,
        enabled,
        subnet,
    )
    return profile
