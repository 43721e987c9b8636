"""
Update Jumphost Use Case

Architectural Intent:
- The single canonical `update` pipeline:
  Start -> NetworkResolved -> SecurityGroupLocated -> IpResolved -> RuleReconciled
- Any stage may fail with a typed JumphostError; nothing is retried or
  revisited here and the caller decides how to report the failure

Design Decisions:
- IP resolution has no data dependency on the network lookups, so both
  branches run concurrently and are joined before reconciliation
- The whole pipeline runs under one deadline; cancellation reaches every
  awaited port call
- Cancellation stops the awaiting coroutine only. A boto3 call already
  running in the executor finishes in its thread, bounded by the SDK
  timeouts, so an authorize in flight at the deadline can still land. The
  error says so; re-running update is idempotent
"""

import asyncio
import logging
from enum import Enum, auto
from typing import Iterable, Optional

from jumphost.application.dtos.update_dtos import UpdateJumphostRequest, UpdateJumphostResponse
from jumphost.domain.errors import DeadlineExceededError, JumphostError
from jumphost.domain.services.ingress_reconciler import IngressReconciler
from jumphost.domain.services.ip_resolver import IpResolver
from jumphost.domain.services.network_resolver import NetworkResolver
from jumphost.domain.services.security_group_locator import SecurityGroupLocator
from jumphost.domain.value_objects.cloud_resources import SecurityGroup
from jumphost.domain.value_objects.tag import Tag

logger = logging.getLogger(__name__)


class PipelineStage(Enum):
    START = auto()
    NETWORK_RESOLVED = auto()
    SECURITY_GROUP_LOCATED = auto()
    IP_RESOLVED = auto()
    RULE_RECONCILED = auto()
    FAILED = auto()


class UpdateJumphost:
    def __init__(
        self,
        network_resolver: NetworkResolver,
        sg_locator: SecurityGroupLocator,
        ip_resolver: IpResolver,
        reconciler: IngressReconciler,
        tags: Iterable[Tag] = (),
        discovery_tags: Optional[Iterable[Tag]] = None,
        deadline_seconds: Optional[float] = None,
    ):
        self.network_resolver = network_resolver
        self.sg_locator = sg_locator
        self.ip_resolver = ip_resolver
        self.reconciler = reconciler
        self.tags = tuple(tags)
        self.discovery_tags = tuple(discovery_tags) if discovery_tags is not None else self.tags
        self.deadline_seconds = deadline_seconds
        self.stage = PipelineStage.START

    def _advance(self, stage: PipelineStage) -> None:
        logger.debug(
            "update pipeline: %s -> %s",
            self.stage.name,
            stage.name,
            extra={"stage": stage.name},
        )
        self.stage = stage

    async def _locate_group(self, subnet_id: str) -> tuple[str, SecurityGroup]:
        vpc_id = await self.network_resolver.resolve(subnet_id)
        self._advance(PipelineStage.NETWORK_RESOLVED)
        group = await self.sg_locator.locate(vpc_id, self.discovery_tags)
        self._advance(PipelineStage.SECURITY_GROUP_LOCATED)
        return vpc_id, group

    async def _run(self, request: UpdateJumphostRequest) -> UpdateJumphostResponse:
        group_task = asyncio.ensure_future(self._locate_group(request.subnet_id))
        ip_task = asyncio.ensure_future(
            self.ip_resolver.resolve(request.set_ip, request.set_self_ip)
        )
        try:
            (vpc_id, group), ip = await asyncio.gather(group_task, ip_task)
        except BaseException:
            # The first failure wins; stop the other branch before re-raising
            for task in (group_task, ip_task):
                task.cancel()
            await asyncio.gather(group_task, ip_task, return_exceptions=True)
            raise
        self._advance(PipelineStage.IP_RESOLVED)

        result = await self.reconciler.reconcile(group.group_id, ip, self.tags)
        self._advance(PipelineStage.RULE_RECONCILED)

        return UpdateJumphostResponse(
            vpc_id=vpc_id,
            group_id=group.group_id,
            cidr=result.intent.cidr,
            outcome=result.outcome,
        )

    async def execute(self, request: UpdateJumphostRequest) -> UpdateJumphostResponse:
        self.stage = PipelineStage.START
        try:
            async with asyncio.timeout(self.deadline_seconds):
                return await self._run(request)
        except TimeoutError as e:
            in_flight = self.stage is PipelineStage.IP_RESOLVED
            self._advance(PipelineStage.FAILED)
            message = f"update did not finish within {self.deadline_seconds}s"
            if in_flight:
                message += "; the ingress rule may still be applied, re-run update to confirm"
            raise DeadlineExceededError(message) from e
        except JumphostError:
            self._advance(PipelineStage.FAILED)
            raise
