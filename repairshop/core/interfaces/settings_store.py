"""Abstract interface for the business profile."""

from abc import ABC, abstractmethod

from repairshop.core.entities.business_profile import BusinessProfile


class ISettingsStore(ABC):
    """Interface for the single-row business profile."""

    @abstractmethod
    async def get_business_profile(self) -> BusinessProfile | None:
        pass

    @abstractmethod
    async def save_business_profile(self, profile: BusinessProfile) -> BusinessProfile:
        """Create the profile or update the existing row."""
        pass
