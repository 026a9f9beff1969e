# app/utils/settings.py
import os
from dotenv import load_dotenv

from app.domain.errors import ConfigurationError

load_dotenv()

DATABASE_URL = os.getenv("DATABASE_URL")
AZURE_STORAGE_CONNECTION_STRING = os.getenv("AZURE_STORAGE_CONNECTION_STRING")

ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# key-attribute store
PRODUCT_TABLE = "Products"
CUSTOMER_PROFILE_TABLE = "CustomerProfiles"
PRODUCT_PARTITION = "Product"
CUSTOMER_PARTITION = "Customer"

# blob store
MEDIA_CONTAINER = "multimedia"

# queues
ORDER_QUEUE = "order-processing"
INVENTORY_QUEUE = "inventory-management"
IMAGE_QUEUE = "image-processing"
QUEUE_PEEK_DEFAULT = int(os.getenv("QUEUE_PEEK_DEFAULT", 10))

# file share
CONTRACT_SHARE = "contracts"
CONTRACT_DIRECTORY = "customer-contracts"


def validate_settings() -> None:
    missing = [
        name
        for name, value in (
            ("DATABASE_URL", DATABASE_URL),
            ("AZURE_STORAGE_CONNECTION_STRING", AZURE_STORAGE_CONNECTION_STRING),
        )
        if not value
    ]
    if missing:
        raise ConfigurationError(
            f"Missing required configuration: {', '.join(missing)}"
        )
