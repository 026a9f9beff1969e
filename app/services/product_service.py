# app/services/product_service.py
from typing import IO

from app.domain.catalog import Product
from app.services.results import ServiceResult, service_boundary
from app.storage.blobs import BlobStore, MediaKind
from app.storage.tables import ProductTable
from app.utils.logging import get_logger

logger = get_logger(__name__)


class ProductService:
    """Katalog produktow w Table Storage, zdjecia w Blob Storage."""

    def __init__(self, products: ProductTable, blobs: BlobStore | None = None):
        self.products = products
        self.blobs = blobs

    def _upload_image(self, image: tuple[str, bytes | IO[bytes], str | None] | None) -> str | None:
        if not image or self.blobs is None:
            return None
        file_name, data, content_type = image
        return self.blobs.put(MediaKind.IMAGE, file_name, data, content_type)

    #query
    def list_products(self, category: str | None = None) -> list[Product]:
        return self.products.list_products(category)

    def categories(self, products: list[Product] | None = None) -> list[str]:
        if products is None:
            products = self.products.list_products()
        return sorted({p.category for p in products if p.category})

    @service_boundary("Product not found")
    def get_product(self, product_id: str) -> ServiceResult[Product]:
        return ServiceResult.ok("Product loaded", self.products.get_product(product_id))

    #commands
    @service_boundary("Error creating product")
    def create_product(
        self,
        product: Product,
        image: tuple[str, bytes | IO[bytes], str | None] | None = None,
    ) -> ServiceResult[Product]:
        image_url = self._upload_image(image)
        if image_url:
            product = product.model_copy(update={"image_url": image_url})

        created = self.products.create_product(product)
        return ServiceResult.ok("Product created successfully!", created)

    @service_boundary("Error updating product")
    def update_product(
        self,
        product: Product,
        image: tuple[str, bytes | IO[bytes], str | None] | None = None,
    ) -> ServiceResult[Product]:
        # sprawdza czy istnieje, etag bierzemy z aktualnego rekordu gdy brak
        current = self.products.get_product(product.row_key)

        image_url = self._upload_image(image)
        update = {"etag": product.etag or current.etag}
        if image_url:
            update["image_url"] = image_url
        if product.created_date is None:
            update["created_date"] = current.created_date

        updated = self.products.update_product(product.model_copy(update=update))
        logger.info(f"Product {product.row_key} updated")
        return ServiceResult.ok("Product updated successfully!", updated)

    @service_boundary("Error deleting product")
    def delete_product(self, product_id: str) -> ServiceResult[None]:
        self.products.get_product(product_id)
        self.products.delete_product(product_id)
        logger.info(f"Product {product_id} deleted")
        return ServiceResult.ok("Product deleted successfully!")
