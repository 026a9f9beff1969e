from fastapi import APIRouter, Depends, File, Form, Response, UploadFile, status

from app.api.deps import get_storage, unwrap
from app.domain.schemas import Contract, FileListOut, MessageOut
from app.services.contract_service import ContractService
from app.storage.clients import StorageGateway

router = APIRouter(prefix="/contracts", tags=["contracts"])


def get_service(storage: StorageGateway = Depends(get_storage)) -> ContractService:
    return ContractService(storage.files)


@router.get("/", response_model=FileListOut)
def list_contracts(svc: ContractService = Depends(get_service)):
    return FileListOut(files=svc.list_contracts())


@router.post("/", response_model=Contract, status_code=status.HTTP_201_CREATED)
def upload_contract(
    contract_name: str = Form(...),
    customer_id: str = Form(...),
    contract_type: str = Form(...),
    file: UploadFile = File(...),
    svc: ContractService = Depends(get_service),
):
    contract = Contract(
        contract_name=contract_name,
        customer_id=customer_id,
        contract_type=contract_type,
    )
    return unwrap(svc.upload_contract(contract, file.filename or "", file.file.read()))


@router.get("/{file_name}")
def contract_properties(file_name: str, svc: ContractService = Depends(get_service)):
    return unwrap(svc.contract_properties(file_name))


@router.get("/{file_name}/download")
def download_contract(file_name: str, svc: ContractService = Depends(get_service)):
    data = unwrap(svc.download_contract(file_name))
    return Response(
        content=data,
        media_type="application/octet-stream",
        headers={"Content-Disposition": f'attachment; filename="{file_name}"'},
    )


@router.delete("/{file_name}", response_model=MessageOut)
def delete_contract(file_name: str, svc: ContractService = Depends(get_service)):
    result = svc.delete_contract(file_name)
    unwrap(result)
    return MessageOut(success=True, message=result.message)
