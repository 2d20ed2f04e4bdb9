"""Fetch-then-filter tenant isolation shared by every tenant-owned entity.

Reads always load candidates first and drop anything owned by another
company afterwards. An entity owned by someone else is reported exactly like
a missing one so callers cannot probe for other tenants' ids.
"""

from typing import Iterable, Optional, TypeVar

from src.core.tenancy.context import TenantContext
from src.core.tenancy.models import TenantInfo, TenantOwned

TOwned = TypeVar("TOwned", bound=TenantOwned)


class TenantError(Exception):
    pass


class MissingTenantError(TenantError):
    pass


class TenantEntityNotFoundError(TenantError):
    pass


def require_company_id(context: TenantContext) -> str:
    if context.company_id is None:
        raise MissingTenantError("TENANT_CONTEXT_MISSING")
    return context.company_id


def scope_entity(
    entity: Optional[TOwned],
    *,
    company_id: str,
    entity_label: str,
    entity_id: str,
) -> TOwned:
    if entity is None or entity.company_id != company_id:
        raise TenantEntityNotFoundError(
            f"{entity_label.upper()}_NOT_FOUND_OR_NOT_ACCESSIBLE: {entity_id}"
        )
    return entity


def scope_entities(
    entities: Iterable[TOwned],
    *,
    company_id: str,
    attribute: Optional[str] = None,
    value: Optional[str] = None,
) -> list[TOwned]:
    rows = [entity for entity in entities if entity.company_id == company_id]
    if attribute is None or not value:
        return rows
    expected = value.casefold()
    return [
        entity
        for entity in rows
        if isinstance(getattr(entity, attribute, None), str)
        and getattr(entity, attribute).casefold() == expected
    ]


def tenant_info(context: TenantContext, *, include_requester: bool = True) -> TenantInfo:
    return TenantInfo(
        company_id=require_company_id(context),
        company_name=context.company_name,
        requested_by=context.user_name if include_requester else None,
    )
