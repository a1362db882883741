"""Dependency shortcuts used by the user routes."""

from typing import Annotated

from fastapi import Depends

from vidtube_auth.core.dependencies.auth import CurrentUser, OptionalCurrentUser
from vidtube_auth.core.dependencies.services import Accounts, Sessions

from .cookies import TokenDeliveryPolicy, get_token_delivery_policy

DeliveryPolicy = Annotated[TokenDeliveryPolicy, Depends(get_token_delivery_policy)]

__all__ = ["Accounts", "CurrentUser", "DeliveryPolicy", "OptionalCurrentUser", "Sessions"]
