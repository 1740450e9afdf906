# eshop/api/routers/parts.py
from fastapi import APIRouter, Depends, HTTPException, Query, Request

from eshop.domain.errors import ServiceError
from eshop.domain.schemas import (
    CategoriesOut,
    ManufacturersOut,
    Part,
    PartsPage,
    SearchPage,
)
from eshop.services.catalog_service import CatalogService, PartQuery

router = APIRouter(prefix="/api/parts", tags=["parts"])


def get_service(request: Request) -> CatalogService:
    return CatalogService(request.app.state.catalog_reader)


#query params come in as raw strings, PartQuery parses them leniently
@router.get("", response_model=PartsPage)
def list_parts(
    search: str | None = None,
    manufacturer: str | None = None,
    category: str | None = None,
    min_price: str | None = Query(None, alias="minPrice"),
    max_price: str | None = Query(None, alias="maxPrice"),
    in_stock: str | None = Query(None, alias="inStock"),
    page: str | None = None,
    limit: str | None = None,
    svc: CatalogService = Depends(get_service),
):
    query = PartQuery.from_params(
        search=search,
        manufacturer=manufacturer,
        category=category,
        min_price=min_price,
        max_price=max_price,
        in_stock=in_stock,
        page=page,
        limit=limit,
    )
    try:
        parts, pagination = svc.list_parts(query)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_dict())
    return {"parts": parts, "pagination": pagination}


@router.get("/search/{query}", response_model=SearchPage)
def search_parts(
    query: str,
    page: str | None = None,
    limit: str | None = None,
    svc: CatalogService = Depends(get_service),
):
    try:
        parts, pagination = svc.search(query, page, limit)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_dict())
    return {"query": query, "parts": parts, "pagination": pagination}


@router.get("/meta/categories", response_model=CategoriesOut)
def list_categories(svc: CatalogService = Depends(get_service)):
    try:
        return {"categories": svc.categories()}
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_dict())


@router.get("/meta/manufacturers", response_model=ManufacturersOut)
def list_manufacturers(svc: CatalogService = Depends(get_service)):
    try:
        return {"manufacturers": svc.manufacturers()}
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_dict())


@router.get("/{part_id}", response_model=Part)
def get_part(part_id: str, svc: CatalogService = Depends(get_service)):
    try:
        pid = int(part_id)
    except ValueError:
        raise HTTPException(status_code=404, detail="Part not found")

    try:
        part = svc.get_part(pid)
    except ServiceError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_dict())

    if not part:
        raise HTTPException(status_code=404, detail="Part not found")
    return part
