"""Tests for UpdateJumphost use case."""

import asyncio

import pytest
from unittest.mock import AsyncMock, MagicMock

from jumphost.application.dtos.update_dtos import UpdateJumphostRequest
from jumphost.application.use_cases.update_jumphost import PipelineStage, UpdateJumphost
from jumphost.domain.errors import (
    CloudApiError,
    DeadlineExceededError,
    NetworkError,
    NotFoundError,
)
from jumphost.domain.services.ingress_reconciler import (
    IngressReconciler,
    ReconcileOutcome,
    ReconcileResult,
)
from jumphost.domain.value_objects.cloud_resources import SecurityGroup
from jumphost.domain.value_objects.ingress_rule import IngressRuleIntent
from jumphost.domain.value_objects.ip_address import IpAddress
from jumphost.domain.value_objects.tag import default_tags


def _make_use_case(deadline_seconds=None):
    network_resolver = MagicMock()
    network_resolver.resolve = AsyncMock(return_value="vpc-123")
    sg_locator = MagicMock()
    sg_locator.locate = AsyncMock(return_value=SecurityGroup("sg-xyz", "red-hat-sre-jumphost", "vpc-123"))
    ip_resolver = MagicMock()
    ip_resolver.resolve = AsyncMock(return_value=IpAddress("198.51.100.9"))
    reconciler = MagicMock(spec=IngressReconciler)

    async def reconcile(group_id, ip, tags=()):
        intent = IngressRuleIntent(group_id=group_id, source=ip, tags=tuple(tags))
        return ReconcileResult(intent=intent, outcome=ReconcileOutcome.AUTHORIZED, rule_id="sgr-1")

    reconciler.reconcile = AsyncMock(side_effect=reconcile)

    use_case = UpdateJumphost(
        network_resolver,
        sg_locator,
        ip_resolver,
        reconciler,
        tags=default_tags(),
        deadline_seconds=deadline_seconds,
    )
    return use_case, network_resolver, sg_locator, ip_resolver, reconciler


REQUEST = UpdateJumphostRequest(subnet_id="subnet-abc", set_ip="198.51.100.9")


class TestUpdateJumphost:
    @pytest.mark.asyncio
    async def test_successful_update(self):
        use_case, network, locator, ip_resolver, reconciler = _make_use_case()

        response = await use_case.execute(REQUEST)

        assert response.vpc_id == "vpc-123"
        assert response.group_id == "sg-xyz"
        assert response.cidr == "198.51.100.9/32"
        assert response.outcome is ReconcileOutcome.AUTHORIZED
        assert use_case.stage is PipelineStage.RULE_RECONCILED

        network.resolve.assert_awaited_once_with("subnet-abc")
        locator.locate.assert_awaited_once_with("vpc-123", default_tags())
        ip_resolver.resolve.assert_awaited_once_with("198.51.100.9", False)
        reconciler.reconcile.assert_awaited_once_with(
            "sg-xyz", IpAddress("198.51.100.9"), default_tags()
        )

    @pytest.mark.asyncio
    async def test_discovery_tags_used_for_lookup(self):
        use_case, _, locator, _, reconciler = _make_use_case()
        use_case.discovery_tags = default_tags()[:1]

        await use_case.execute(REQUEST)

        locator.locate.assert_awaited_once_with("vpc-123", default_tags()[:1])
        assert reconciler.reconcile.await_args.args[2] == default_tags()

    @pytest.mark.asyncio
    async def test_subnet_not_found_stops_pipeline(self):
        use_case, network, locator, _, reconciler = _make_use_case()
        network.resolve = AsyncMock(side_effect=NotFoundError("found 0 subnets matching subnet-abc"))

        with pytest.raises(NotFoundError):
            await use_case.execute(REQUEST)

        locator.locate.assert_not_awaited()
        reconciler.reconcile.assert_not_awaited()
        assert use_case.stage is PipelineStage.FAILED

    @pytest.mark.asyncio
    async def test_security_group_not_found(self):
        use_case, _, locator, _, reconciler = _make_use_case()
        locator.locate = AsyncMock(side_effect=NotFoundError("no sg"))

        with pytest.raises(NotFoundError, match="no sg"):
            await use_case.execute(REQUEST)
        reconciler.reconcile.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_ip_discovery_failure_is_fatal(self):
        use_case, _, _, ip_resolver, reconciler = _make_use_case()
        ip_resolver.resolve = AsyncMock(side_effect=NetworkError("received error code: 500"))

        with pytest.raises(NetworkError):
            await use_case.execute(
                UpdateJumphostRequest(subnet_id="subnet-abc", set_self_ip=True)
            )
        reconciler.reconcile.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_ip_failure_cancels_network_branch(self):
        use_case, network, locator, ip_resolver, _ = _make_use_case()
        started = asyncio.Event()
        cancelled = asyncio.Event()

        async def slow_resolve(subnet_id):
            started.set()
            try:
                await asyncio.sleep(10)
            except asyncio.CancelledError:
                cancelled.set()
                raise
            return "vpc-123"

        async def failing_ip(set_ip, set_self_ip):
            await started.wait()
            raise NetworkError("unreachable")

        network.resolve = AsyncMock(side_effect=slow_resolve)
        ip_resolver.resolve = AsyncMock(side_effect=failing_ip)

        with pytest.raises(NetworkError):
            await use_case.execute(REQUEST)

        assert cancelled.is_set()
        locator.locate.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_ip_resolution_runs_concurrently(self):
        use_case, network, _, ip_resolver, _ = _make_use_case()
        ip_started = asyncio.Event()

        async def network_waits_for_ip(subnet_id):
            # Only completes if IP resolution is already in flight
            await asyncio.wait_for(ip_started.wait(), timeout=1)
            return "vpc-123"

        async def ip(set_ip, set_self_ip):
            ip_started.set()
            return IpAddress("198.51.100.9")

        network.resolve = AsyncMock(side_effect=network_waits_for_ip)
        ip_resolver.resolve = AsyncMock(side_effect=ip)

        response = await use_case.execute(REQUEST)
        assert response.group_id == "sg-xyz"

    @pytest.mark.asyncio
    async def test_cloud_error_from_reconciler_propagates(self):
        use_case, _, _, _, reconciler = _make_use_case()
        reconciler.reconcile = AsyncMock(side_effect=CloudApiError("throttled", code="RequestLimitExceeded"))

        with pytest.raises(CloudApiError, match="throttled"):
            await use_case.execute(REQUEST)
        assert use_case.stage is PipelineStage.FAILED

    @pytest.mark.asyncio
    async def test_deadline_exceeded(self):
        use_case, network, _, _, reconciler = _make_use_case(deadline_seconds=0.05)

        async def hang(subnet_id):
            await asyncio.sleep(10)

        network.resolve = AsyncMock(side_effect=hang)

        with pytest.raises(DeadlineExceededError, match="0.05s") as exc:
            await use_case.execute(REQUEST)
        assert "may still be applied" not in str(exc.value)
        reconciler.reconcile.assert_not_awaited()
        assert use_case.stage is PipelineStage.FAILED

    @pytest.mark.asyncio
    async def test_deadline_is_a_network_error(self):
        use_case, network, _, _, _ = _make_use_case(deadline_seconds=0.01)

        async def hang(subnet_id):
            await asyncio.sleep(10)

        network.resolve = AsyncMock(side_effect=hang)

        with pytest.raises(NetworkError):
            await use_case.execute(REQUEST)

    @pytest.mark.asyncio
    async def test_deadline_during_authorize_warns_rule_may_land(self):
        use_case, _, _, _, reconciler = _make_use_case(deadline_seconds=0.05)

        async def hang(group_id, ip, tags=()):
            await asyncio.sleep(10)

        reconciler.reconcile = AsyncMock(side_effect=hang)

        with pytest.raises(DeadlineExceededError, match="may still be applied"):
            await use_case.execute(REQUEST)
        reconciler.reconcile.assert_awaited_once()
        assert use_case.stage is PipelineStage.FAILED

    @pytest.mark.asyncio
    async def test_stage_transitions_carry_stage_context(self, caplog):
        use_case, *_ = _make_use_case()

        with caplog.at_level("DEBUG", logger="jumphost"):
            await use_case.execute(REQUEST)

        stages = [r.stage for r in caplog.records if hasattr(r, "stage")]
        assert stages == [
            "NETWORK_RESOLVED",
            "SECURITY_GROUP_LOCATED",
            "IP_RESOLVED",
            "RULE_RECONCILED",
        ]
