"""
AWS EC2 Adapter

Architectural Intent:
- Implements SubnetLookupPort, SecurityGroupLookupPort and IngressAuthorizerPort
  on top of a boto3 "ec2" client
- Translates botocore exceptions into domain errors so nothing above the
  adapter layer imports the SDK

Design Decisions:
- boto3 is blocking; every call runs in the default executor so the ports
  stay awaitable and can be cancelled by the caller's deadline
- Retries use botocore's "standard" mode: bounded exponential backoff with
  jitter on throttling and transient errors, for reads and for the
  idempotent authorize call alike
- __init__ accepts an existing client so tests can wrap it in a
  botocore Stubber
"""

import asyncio
import functools
import logging
from typing import Any, Callable, Optional

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from jumphost.domain.errors import CloudApiError, DuplicatePermissionError
from jumphost.domain.value_objects.cloud_resources import SecurityGroup, Subnet
from jumphost.domain.value_objects.filter import Filter
from jumphost.domain.value_objects.ingress_rule import IngressRuleIntent
from jumphost.domain.value_objects.tag import Tag

logger = logging.getLogger(__name__)

DUPLICATE_PERMISSION_CODE = "InvalidPermission.Duplicate"
REQUEST_EXPIRED_CODE = "RequestExpired"


# ---------------------------------------------------------------------------
# Response/request translation shared with InMemoryEC2Adapter
# ---------------------------------------------------------------------------

def subnet_from_aws(item: dict) -> Subnet:
    return Subnet(subnet_id=item["SubnetId"], vpc_id=item["VpcId"])


def security_group_from_aws(item: dict) -> SecurityGroup:
    return SecurityGroup(
        group_id=item["GroupId"],
        group_name=item.get("GroupName", ""),
        vpc_id=item.get("VpcId", ""),
        tags=tuple(Tag(t["Key"], t["Value"]) for t in item.get("Tags", [])),
    )


def ip_permission_for(intent: IngressRuleIntent) -> dict:
    """Build the IpPermissions entry for a single-host SSH rule."""
    permission: dict[str, Any] = {
        "IpProtocol": intent.protocol,
        "FromPort": intent.port,
        "ToPort": intent.port,
    }
    if intent.source.is_ipv6:
        permission["Ipv6Ranges"] = [{"CidrIpv6": intent.cidr}]
    else:
        permission["IpRanges"] = [{"CidrIp": intent.cidr}]
    return permission


def translate_client_error(e: ClientError) -> CloudApiError:
    error = e.response.get("Error", {})
    code = error.get("Code", "Unknown")
    message = error.get("Message", str(e))
    operation = e.operation_name

    if code == DUPLICATE_PERMISSION_CODE:
        return DuplicatePermissionError(message, code=code, operation=operation)
    if code == REQUEST_EXPIRED_CODE:
        return CloudApiError(
            "AWS request expired. Ensure your AWS credentials are valid and you're logged in.",
            code=code,
            operation=operation,
        )
    return CloudApiError(f"{operation} failed ({code}): {message}", code=code, operation=operation)


def make_client(
    region: Optional[str] = None,
    profile: Optional[str] = None,
    max_attempts: int = 5,
    connect_timeout: int = 10,
    read_timeout: int = 30,
):
    """Create a boto3 EC2 client from the default credential chain."""
    session = boto3.Session(profile_name=profile or None, region_name=region or None)
    return session.client(
        "ec2",
        config=Config(
            retries={"total_max_attempts": max_attempts, "mode": "standard"},
            connect_timeout=connect_timeout,
            read_timeout=read_timeout,
        ),
    )


# ---------------------------------------------------------------------------
# Public adapter
# ---------------------------------------------------------------------------

class EC2Adapter:
    """
    AWS EC2 adapter for the jumphost `update` pipeline.

    Configuration parameters
    ------------------------
    client : botocore client | None
        Pre-built EC2 client. When omitted one is created with make_client().
    region, profile : str | None
        Passed to boto3.Session when building the client.
    max_attempts : int
        Total attempts per call, including the first (botocore standard mode).
    connect_timeout, read_timeout : int
        Socket timeouts in seconds for every call.
    """

    def __init__(
        self,
        client: Any = None,
        region: Optional[str] = None,
        profile: Optional[str] = None,
        max_attempts: int = 5,
        connect_timeout: int = 10,
        read_timeout: int = 30,
    ) -> None:
        if client is None:
            client = make_client(region, profile, max_attempts, connect_timeout, read_timeout)
        self._client = client
        logger.debug(
            "EC2Adapter initialised (region=%s, profile=%s)",
            self._client.meta.region_name,
            profile,
        )

    @property
    def client(self) -> Any:
        return self._client

    async def _call(self, method: Callable[..., dict], **kwargs: Any) -> dict:
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, functools.partial(method, **kwargs))
        except ClientError as e:
            raise translate_client_error(e) from e
        except BotoCoreError as e:
            raise CloudApiError(f"AWS SDK error: {e}") from e

    # ------------------------------------------------------------------
    # Port implementations
    # ------------------------------------------------------------------

    async def describe_subnets(self, subnet_ids: list[str]) -> list[Subnet]:
        logger.debug("ec2 describe_subnets (subnet_ids=%s)", subnet_ids)
        response = await self._call(self._client.describe_subnets, SubnetIds=subnet_ids)
        return [subnet_from_aws(s) for s in response.get("Subnets", [])]

    async def describe_security_groups(self, filters: list[Filter]) -> list[SecurityGroup]:
        aws_filters = [f.to_aws() for f in filters]
        logger.debug("ec2 describe_security_groups (filters=%s)", aws_filters)
        response = await self._call(self._client.describe_security_groups, Filters=aws_filters)
        return [security_group_from_aws(g) for g in response.get("SecurityGroups", [])]

    async def authorize_ingress(self, intent: IngressRuleIntent) -> Optional[str]:
        params: dict[str, Any] = {
            "GroupId": intent.group_id,
            "IpPermissions": [ip_permission_for(intent)],
        }
        if intent.tags:
            params["TagSpecifications"] = [
                {
                    "ResourceType": "security-group-rule",
                    "Tags": [t.to_aws() for t in intent.tags],
                }
            ]

        logger.debug("ec2 authorize_security_group_ingress (%s)", intent)
        response = await self._call(self._client.authorize_security_group_ingress, **params)

        if response.get("Return") is False:
            raise CloudApiError(
                f"AuthorizeSecurityGroupIngress returned false for {intent}",
                operation="AuthorizeSecurityGroupIngress",
            )

        rules = response.get("SecurityGroupRules", [])
        return rules[0].get("SecurityGroupRuleId") if rules else None
