"""
Ingress Authorizer Port

Architectural Intent:
- The only mutating slice of the cloud compute capability used by `update`
- Implementations raise DuplicatePermissionError when the rule already
  exists and CloudApiError for every other provider failure
"""

from typing import Optional, Protocol, runtime_checkable

from jumphost.domain.value_objects.ingress_rule import IngressRuleIntent


@runtime_checkable
class IngressAuthorizerPort(Protocol):
    """Port for adding ingress rules to a security group."""

    async def authorize_ingress(self, intent: IngressRuleIntent) -> Optional[str]:
        """Add the rule described by intent.

        Returns:
            The provider's id for the new rule, when it reports one
        """
        ...
