from fastapi import APIRouter, Depends, status

from app.api.deps import get_storage, unwrap
from app.domain.catalog import CustomerProfile
from app.domain.schemas import CustomerProfileIn, CustomerProfileOut, MessageOut
from app.services.profile_service import CustomerProfileService
from app.storage.clients import StorageGateway

router = APIRouter(prefix="/profiles", tags=["profiles"])


def get_service(storage: StorageGateway = Depends(get_storage)) -> CustomerProfileService:
    return CustomerProfileService(storage.profiles)


@router.get("/", response_model=list[CustomerProfileOut])
def list_profiles(svc: CustomerProfileService = Depends(get_service)):
    return [CustomerProfileOut.model_validate(p) for p in svc.list_profiles()]


@router.get("/{profile_id}", response_model=CustomerProfileOut)
def get_profile(profile_id: str, svc: CustomerProfileService = Depends(get_service)):
    return CustomerProfileOut.model_validate(unwrap(svc.get_profile(profile_id)))


@router.post("/", response_model=CustomerProfileOut, status_code=status.HTTP_201_CREATED)
def create_profile(payload: CustomerProfileIn, svc: CustomerProfileService = Depends(get_service)):
    profile = unwrap(svc.create_profile(CustomerProfile(**payload.model_dump())))
    return CustomerProfileOut.model_validate(profile)


@router.put("/{profile_id}", response_model=CustomerProfileOut)
def update_profile(
    profile_id: str,
    payload: CustomerProfileIn,
    svc: CustomerProfileService = Depends(get_service),
):
    profile = unwrap(
        svc.update_profile(CustomerProfile(row_key=profile_id, **payload.model_dump()))
    )
    return CustomerProfileOut.model_validate(profile)


@router.delete("/{profile_id}", response_model=MessageOut)
def delete_profile(profile_id: str, svc: CustomerProfileService = Depends(get_service)):
    result = svc.delete_profile(profile_id)
    unwrap(result)
    return MessageOut(success=True, message=result.message)
