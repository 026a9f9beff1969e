# app/services/contract_service.py
from typing import Any

from app.domain.errors import ValidationError
from app.domain.schemas import Contract
from app.services.results import ServiceResult, service_boundary
from app.storage.files import FileShareStore
from app.utils.settings import CONTRACT_DIRECTORY
from app.utils.logging import get_logger

logger = get_logger(__name__)


class ContractService:
    """Umowy klientow jako pliki w udziale 'contracts'."""

    def __init__(self, files: FileShareStore):
        self.files = files

    @staticmethod
    def file_name_for(contract: Contract, original_file_name: str) -> str:
        return f"{contract.contract_id}_{original_file_name}"

    @service_boundary("Error uploading contract")
    def upload_contract(
        self, contract: Contract, original_file_name: str, data: bytes
    ) -> ServiceResult[Contract]:
        if not original_file_name or not data:
            raise ValidationError("Please select a file to upload.")

        path = self.files.put(
            CONTRACT_DIRECTORY, self.file_name_for(contract, original_file_name), data
        )
        uploaded = contract.model_copy(update={"file_path": path})
        logger.info(f"Contract {contract.contract_id} stored at {path}")

        return ServiceResult.ok(
            f"Contract '{contract.contract_name}' uploaded successfully!", uploaded
        )

    def list_contracts(self) -> list[str]:
        return self.files.list(CONTRACT_DIRECTORY)

    @service_boundary("Error downloading contract")
    def download_contract(self, path: str) -> ServiceResult[bytes]:
        return ServiceResult.ok("Contract downloaded", self.files.get(path))

    @service_boundary("Error loading contract")
    def contract_properties(self, path: str) -> ServiceResult[dict[str, Any]]:
        return ServiceResult.ok("Contract loaded", self.files.properties(path))

    @service_boundary("Error deleting contract")
    def delete_contract(self, path: str) -> ServiceResult[None]:
        self.files.delete(path)
        return ServiceResult.ok("Contract deleted successfully!")
