from fastapi import APIRouter, Body, Depends, Query, Response, status
from typing import Any, List, Optional

from api.deps import get_catalog, require_api_key
from schemas.products import ProductOut, ProductPage, ProductStats
from services.catalog import ProductCatalog

# Todas as rotas de /api/products passam pela checagem de API key antes de tocar no store
router = APIRouter(dependencies=[Depends(require_api_key)])

@router.get("/products", response_model=ProductPage)
def list_products(
    category: Optional[str] = Query(None),
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    catalog: ProductCatalog = Depends(get_catalog)
):
    return catalog.list_products(category=category, page=page, limit=limit)

# /search e /stats precisam vir antes de /{product_id}
@router.get("/products/search", response_model=List[ProductOut])
def search_products(
    q: Optional[str] = Query(None),
    catalog: ProductCatalog = Depends(get_catalog)
):
    return catalog.search(q)

@router.get("/products/stats", response_model=ProductStats)
def product_stats(catalog: ProductCatalog = Depends(get_catalog)):
    return catalog.stats()

@router.get("/products/{product_id}", response_model=ProductOut)
def get_product(product_id: str, catalog: ProductCatalog = Depends(get_catalog)):
    return catalog.get(product_id)

@router.post("/products", response_model=ProductOut, status_code=status.HTTP_201_CREATED)
def create_product(
    payload: Any = Body(None),
    catalog: ProductCatalog = Depends(get_catalog)
):
    return catalog.create(payload)

@router.put("/products/{product_id}", response_model=ProductOut)
def update_product(
    product_id: str,
    payload: Any = Body(None),
    catalog: ProductCatalog = Depends(get_catalog)
):
    return catalog.update(product_id, payload)

@router.delete("/products/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(product_id: str, catalog: ProductCatalog = Depends(get_catalog)):
    catalog.delete(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
