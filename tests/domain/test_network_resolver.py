"""Tests for NetworkResolver."""

import pytest
from unittest.mock import AsyncMock

from jumphost.domain.errors import CloudApiError, ConfigurationError, NotFoundError
from jumphost.domain.services.network_resolver import NetworkResolver
from jumphost.domain.value_objects.cloud_resources import Subnet


def _make_resolver(subnets=None, side_effect=None):
    port = AsyncMock()
    port.describe_subnets = AsyncMock(return_value=subnets or [], side_effect=side_effect)
    return NetworkResolver(port), port


class TestNetworkResolver:
    @pytest.mark.asyncio
    async def test_resolves_vpc(self):
        resolver, port = _make_resolver([Subnet("subnet-abc", "vpc-123")])

        assert await resolver.resolve("subnet-abc") == "vpc-123"
        port.describe_subnets.assert_awaited_once_with(["subnet-abc"])

    @pytest.mark.asyncio
    async def test_empty_subnet_id_makes_no_call(self):
        resolver, port = _make_resolver()

        with pytest.raises(ConfigurationError, match="subnet id must not be empty"):
            await resolver.resolve("")
        port.describe_subnets.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_no_match(self):
        resolver, _ = _make_resolver([])

        with pytest.raises(NotFoundError, match="subnet-doesnotexist"):
            await resolver.resolve("subnet-doesnotexist")

    @pytest.mark.asyncio
    async def test_first_match_wins(self):
        resolver, _ = _make_resolver(
            [Subnet("subnet-abc", "vpc-123"), Subnet("subnet-abc", "vpc-999")]
        )
        assert await resolver.resolve("subnet-abc") == "vpc-123"

    @pytest.mark.asyncio
    async def test_provider_error_propagates(self):
        resolver, _ = _make_resolver(side_effect=CloudApiError("denied", code="UnauthorizedOperation"))

        with pytest.raises(CloudApiError) as exc_info:
            await resolver.resolve("subnet-abc")
        assert exc_info.value.code == "UnauthorizedOperation"
