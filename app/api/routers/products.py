from fastapi import APIRouter, Depends, Query, status

from app.api.deps import get_storage, require_admin, unwrap
from app.domain.catalog import Product
from app.domain.schemas import MessageOut, ProductIn, ProductOut
from app.services.product_service import ProductService
from app.storage.clients import StorageGateway

router = APIRouter(prefix="/products", tags=["products"])


def get_service(storage: StorageGateway = Depends(get_storage)) -> ProductService:
    return ProductService(storage.products, storage.blobs)


@router.get("/", response_model=list[ProductOut])
def list_products(
    category: str | None = Query(default=None),
    svc: ProductService = Depends(get_service),
):
    return [ProductOut.model_validate(p) for p in svc.list_products(category)]


@router.get("/categories", response_model=list[str])
def list_categories(svc: ProductService = Depends(get_service)):
    return svc.categories()


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: str, svc: ProductService = Depends(get_service)):
    return ProductOut.model_validate(unwrap(svc.get_product(product_id)))


@router.post(
    "/",
    response_model=ProductOut,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_product(payload: ProductIn, svc: ProductService = Depends(get_service)):
    product = unwrap(svc.create_product(Product(**payload.model_dump())))
    return ProductOut.model_validate(product)


@router.put("/{product_id}", response_model=ProductOut, dependencies=[Depends(require_admin)])
def update_product(product_id: str, payload: ProductIn, svc: ProductService = Depends(get_service)):
    product = unwrap(svc.update_product(Product(row_key=product_id, **payload.model_dump())))
    return ProductOut.model_validate(product)


@router.delete("/{product_id}", response_model=MessageOut, dependencies=[Depends(require_admin)])
def delete_product(product_id: str, svc: ProductService = Depends(get_service)):
    result = svc.delete_product(product_id)
    unwrap(result)
    return MessageOut(success=True, message=result.message)
