"""Authorization models."""

from .eperson_component import EPersonComponent
from .resource_policy_component import ResourcePolicyComponent

__all__ = ["EPersonComponent", "ResourcePolicyComponent"]
