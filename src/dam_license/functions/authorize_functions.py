"""Functions for checking and granting actions on repository entities."""

import logging

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from dam_license.core.context import Context
from dam_license.core.exceptions import AuthorizeError
from dam_license.enums import Action
from dam_license.functions import ecs_functions
from dam_license.models.auth import EPersonComponent, ResourcePolicyComponent

logger = logging.getLogger(__name__)


async def create_eperson(session: AsyncSession, email: str, is_admin: bool = False) -> EPersonComponent:
    """Register a new EPerson."""
    entity = await ecs_functions.create_entity(session)
    eperson = await ecs_functions.add_component_to_entity(session, entity.id, EPersonComponent(email=email, is_admin=is_admin))
    logger.info("Created EPerson %s (%s, admin: %s).", entity.id, email, is_admin)
    return eperson


async def add_policy(
    session: AsyncSession, resource_id: int, action: Action, eperson_entity_id: int | None = None
) -> ResourcePolicyComponent:
    """Grant `action` on a resource to one EPerson, or to everybody when `eperson_entity_id` is None."""
    policy = ResourcePolicyComponent(action=action.value, eperson_entity_id=eperson_entity_id)
    return await ecs_functions.add_component_to_entity(session, resource_id, policy)


async def get_policies(session: AsyncSession, resource_id: int) -> list[ResourcePolicyComponent]:
    """Return every policy attached to a resource."""
    return await ecs_functions.get_components(session, resource_id, ResourcePolicyComponent)


async def inherit_policies(session: AsyncSession, source_id: int, target_id: int) -> int:
    """
    Copy the policies of `source_id` onto `target_id`.

    Returns:
        The number of policies copied.

    """
    policies = await get_policies(session, source_id)
    for policy in policies:
        copy = ResourcePolicyComponent(action=policy.action, eperson_entity_id=policy.eperson_entity_id)
        await ecs_functions.add_component_to_entity(session, target_id, copy, flush=False)
    if policies:
        await session.flush()
    return len(policies)


def is_admin(context: Context) -> bool:
    """Whether the current user of the context is an administrator."""
    return context.current_user is not None and context.current_user.is_admin


async def authorize_action_boolean(context: Context, resource_id: int, action: Action) -> bool:
    """Check whether the current user may perform `action` on the resource."""
    if context.ignores_authorization or is_admin(context):
        return True

    grantees = [ResourcePolicyComponent.eperson_entity_id.is_(None)]
    if context.current_user_id is not None:
        grantees.append(ResourcePolicyComponent.eperson_entity_id == context.current_user_id)

    stmt = (
        select(ResourcePolicyComponent.id)
        .where(ResourcePolicyComponent.entity_id == resource_id)
        .where(ResourcePolicyComponent.action == action.value)
        .where(or_(*grantees))
        .limit(1)
    )
    result = await context.session.execute(stmt)
    return result.scalar_one_or_none() is not None


async def authorize_action(context: Context, resource_id: int, action: Action) -> None:
    """
    Ensure the current user may perform `action` on the resource.

    Raises:
        AuthorizeError: If no policy grants the action.

    """
    if not await authorize_action_boolean(context, resource_id, action):
        logger.warning(
            "Denied %s on entity %s for user %s.", action.value, resource_id, context.current_user_id or "anonymous"
        )
        raise AuthorizeError(
            "Authorization denied for action",
            action=action.value,
            resource_id=resource_id,
            user_id=context.current_user_id,
        )
