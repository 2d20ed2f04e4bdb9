from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Path, Query, status

from src.api.routers.http_errors import raise_marginiq_http_exception
from src.api.routers.service_registry import get_catalog_query_service
from src.api.tenancy import get_tenant_context
from src.core.catalog import (
    CatalogQueryService,
    CustomerDetailResponse,
    CustomerListResponse,
    ProductDetailResponse,
    ProductListResponse,
)
from src.core.tenancy import TenantContext

router = APIRouter(prefix="/api", tags=["Catalog"])


@router.get(
    "/products",
    response_model=ProductListResponse,
    status_code=status.HTTP_200_OK,
    summary="List Products",
    description="Lists products owned by the caller company, optionally filtered by category.",
)
def list_products(
    context: Annotated[TenantContext, Depends(get_tenant_context)],
    category: Annotated[
        Optional[str],
        Query(description="Case-insensitive category filter.", examples=["Hardware"]),
    ] = None,
    service: Annotated[CatalogQueryService, Depends(get_catalog_query_service)] = None,
) -> ProductListResponse:
    try:
        return service.list_products(context=context, category=category)
    except Exception as exc:
        raise_marginiq_http_exception(exc)


@router.get(
    "/products/{product_id}",
    response_model=ProductDetailResponse,
    status_code=status.HTTP_200_OK,
    summary="Get Product",
    description=(
        "Returns one product of the caller company. Products owned by other companies "
        "are reported as not found."
    ),
)
def get_product(
    product_id: Annotated[str, Path(description="Product identifier.", examples=["prd_widget"])],
    context: Annotated[TenantContext, Depends(get_tenant_context)],
    service: Annotated[CatalogQueryService, Depends(get_catalog_query_service)] = None,
) -> ProductDetailResponse:
    try:
        return service.get_product(context=context, product_id=product_id)
    except Exception as exc:
        raise_marginiq_http_exception(exc)


@router.get(
    "/customers",
    response_model=CustomerListResponse,
    status_code=status.HTTP_200_OK,
    summary="List Customers",
    description="Lists customers owned by the caller company, optionally filtered by segment.",
)
def list_customers(
    context: Annotated[TenantContext, Depends(get_tenant_context)],
    segment: Annotated[
        Optional[str],
        Query(description="Case-insensitive segment filter.", examples=["Enterprise"]),
    ] = None,
    service: Annotated[CatalogQueryService, Depends(get_catalog_query_service)] = None,
) -> CustomerListResponse:
    try:
        return service.list_customers(context=context, segment=segment)
    except Exception as exc:
        raise_marginiq_http_exception(exc)


@router.get(
    "/customers/{customer_id}",
    response_model=CustomerDetailResponse,
    status_code=status.HTTP_200_OK,
    summary="Get Customer",
    description=(
        "Returns one customer of the caller company. Customers owned by other companies "
        "are reported as not found."
    ),
)
def get_customer(
    customer_id: Annotated[
        str, Path(description="Customer identifier.", examples=["cus_initech"])
    ],
    context: Annotated[TenantContext, Depends(get_tenant_context)],
    service: Annotated[CatalogQueryService, Depends(get_catalog_query_service)] = None,
) -> CustomerDetailResponse:
    try:
        return service.get_customer(context=context, customer_id=customer_id)
    except Exception as exc:
        raise_marginiq_http_exception(exc)
