"""Unit tests for OpenStackNetworkCatalog."""

from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest
from keystoneauth1 import exceptions as ksa_exceptions
from openstack import exceptions as sdk_exceptions

from compute_placement.network.interface import (
    CatalogNetwork,
    ProviderCredentials,
    Reachable,
    Unreachable,
)
from compute_placement.network.openstack_catalog import OpenStackNetworkCatalog

CREDENTIALS = ProviderCredentials(
    api_key="secret",
    username="svc",
    tenant="compute",
    endpoint="https://keystone.example.com:5000/v3",
    region="RegionOne",
)


class TestOpenStackNetworkCatalog:
    """Test OpenStackNetworkCatalog.list_networks."""

    @pytest.fixture
    def catalog(self):
        return OpenStackNetworkCatalog(timeout=10, interface="public")

    @pytest.fixture
    def mock_conn(self):
        """Create a mock openstack connection."""
        conn = MagicMock()
        conn.network.networks.return_value = iter(
            [
                SimpleNamespace(name="private-a", id="net-aaa"),
                SimpleNamespace(name="private-b", id="net-bbb"),
            ]
        )
        return conn

    def test_lists_networks(self, catalog, mock_conn):
        """Test that a reachable catalog returns the full listing."""
        with patch("openstack.connect", return_value=mock_conn) as connect:
            result = catalog.list_networks(CREDENTIALS)

        assert result == Reachable(
            (
                CatalogNetwork(name="private-a", id="net-aaa"),
                CatalogNetwork(name="private-b", id="net-bbb"),
            )
        )
        mock_conn.close.assert_called_once()

        kwargs = connect.call_args.kwargs
        assert kwargs["auth_url"] == CREDENTIALS.endpoint
        assert kwargs["username"] == "svc"
        assert kwargs["password"] == "secret"
        assert kwargs["project_name"] == "compute"
        assert kwargs["region_name"] == "RegionOne"
        assert kwargs["api_timeout"] == 10

    def test_connect_failure_is_unreachable(self, catalog):
        """Test that auth/connection errors mean no SDN layer."""
        error = ksa_exceptions.ConnectFailure("connection refused")
        with patch("openstack.connect", side_effect=error):
            result = catalog.list_networks(CREDENTIALS)

        assert isinstance(result, Unreachable)
        assert "connection refused" in result.reason

    def test_missing_network_service_is_unreachable(self, catalog, mock_conn):
        """Test that a cloud without a network endpoint is unreachable."""
        mock_conn.network.networks.side_effect = ksa_exceptions.EndpointNotFound(
            "network endpoint not found"
        )
        with patch("openstack.connect", return_value=mock_conn):
            result = catalog.list_networks(CREDENTIALS)

        assert isinstance(result, Unreachable)
        mock_conn.close.assert_called_once()

    def test_sdk_error_while_listing_is_unreachable(self, catalog, mock_conn):
        """Test that SDK errors during iteration close the session."""

        def broken_listing():
            yield SimpleNamespace(name="private-a", id="net-aaa")
            raise sdk_exceptions.HttpException("503 Service Unavailable")

        mock_conn.network.networks.return_value = broken_listing()
        with patch("openstack.connect", return_value=mock_conn):
            result = catalog.list_networks(CREDENTIALS)

        assert isinstance(result, Unreachable)
        mock_conn.close.assert_called_once()

    def test_unexpected_error_propagates_after_close(self, catalog, mock_conn):
        """Test that programming errors are not hidden but the session is released."""
        mock_conn.network.networks.side_effect = AttributeError("boom")
        with patch("openstack.connect", return_value=mock_conn):
            with pytest.raises(AttributeError):
                catalog.list_networks(CREDENTIALS)
        mock_conn.close.assert_called_once()

    def test_no_credentials_is_unreachable(self, catalog):
        """Test that a profile without credentials never connects."""
        with patch("openstack.connect") as connect:
            result = catalog.list_networks(None)

        assert isinstance(result, Unreachable)
        connect.assert_not_called()

    def test_defaults_from_config(self, monkeypatch):
        """Test that timeout and interface come from config."""
        from compute_placement import config as placement_config

        placement_config.reset_config()
        monkeypatch.setenv("COMPUTE_PLACEMENT_CATALOG_TIMEOUT", "5")
        monkeypatch.setenv("COMPUTE_PLACEMENT_CATALOG_INTERFACE", "internal")
        try:
            catalog = OpenStackNetworkCatalog()
            with patch("openstack.connect") as connect:
                connect.return_value.network.networks.return_value = iter([])
                catalog.list_networks(CREDENTIALS)
            assert connect.call_args.kwargs["api_timeout"] == 5
            assert connect.call_args.kwargs["interface"] == "internal"
        finally:
            placement_config.reset_config()
