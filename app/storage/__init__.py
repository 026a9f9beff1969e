from app.storage.clients import StorageGateway

__all__ = ["StorageGateway"]
