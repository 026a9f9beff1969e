# app/services/profile_service.py
from app.domain.catalog import CustomerProfile
from app.services.results import ServiceResult, service_boundary
from app.storage.tables import CustomerProfileTable
from app.utils.logging import get_logger

logger = get_logger(__name__)


class CustomerProfileService:
    """
    Profile klientow w Table Storage.
    Niezalezne od CustomerModel w bazie relacyjnej, nic ich nie synchronizuje.
    """

    def __init__(self, profiles: CustomerProfileTable):
        self.profiles = profiles

    def list_profiles(self) -> list[CustomerProfile]:
        return self.profiles.list_profiles()

    @service_boundary("Customer not found")
    def get_profile(self, profile_id: str) -> ServiceResult[CustomerProfile]:
        return ServiceResult.ok("Customer loaded", self.profiles.get_profile(profile_id))

    @service_boundary("Error creating customer")
    def create_profile(self, profile: CustomerProfile) -> ServiceResult[CustomerProfile]:
        created = self.profiles.create_profile(profile)
        return ServiceResult.ok("Customer created successfully!", created)

    @service_boundary("Error updating customer")
    def update_profile(self, profile: CustomerProfile) -> ServiceResult[CustomerProfile]:
        current = self.profiles.get_profile(profile.row_key)
        update = {"etag": profile.etag or current.etag}
        if profile.created_date is None:
            update["created_date"] = current.created_date
        updated = self.profiles.update_profile(profile.model_copy(update=update))
        logger.info(f"Customer profile {profile.row_key} updated")
        return ServiceResult.ok("Customer updated successfully!", updated)

    @service_boundary("Error deleting customer")
    def delete_profile(self, profile_id: str) -> ServiceResult[None]:
        self.profiles.get_profile(profile_id)
        self.profiles.delete_profile(profile_id)
        logger.info(f"Customer profile {profile_id} deleted")
        return ServiceResult.ok("Customer deleted successfully!")
