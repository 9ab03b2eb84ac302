"""Save Business Profile Use Case: create or update the single profile row."""

from repairshop.application.dto.requests import BusinessProfileRequest
from repairshop.config import get_logger, get_settings
from repairshop.core.entities.business_profile import BusinessProfile
from repairshop.core.interfaces.settings_store import ISettingsStore

logger = get_logger(__name__)


class SaveBusinessProfileUseCase:
    """Create-or-update. An omitted low-stock threshold keeps the stored value."""

    def __init__(self, settings_store: ISettingsStore | None = None):
        self._settings_store = settings_store

    async def _get_store(self) -> ISettingsStore:
        if self._settings_store is None:
            from repairshop.infrastructure.storage.sqlite import get_settings_store

            self._settings_store = await get_settings_store()
        return self._settings_store

    async def execute(self, request: BusinessProfileRequest) -> BusinessProfile:
        store = await self._get_store()
        existing = await store.get_business_profile()

        threshold = request.low_stock_threshold
        if threshold is None:
            threshold = (
                existing.low_stock_threshold
                if existing
                else get_settings().inventory.default_low_stock_threshold
            )

        profile = BusinessProfile(
            id=existing.id if existing else None,
            shop_name=request.shop_name,
            address=request.address,
            phone_number=request.phone_number,
            contact_email=request.contact_email,
            logo_url=request.logo_url,
            low_stock_threshold=threshold,
        )
        saved = await store.save_business_profile(profile)
        logger.info(
            "business_profile_updated" if existing else "business_profile_created",
            low_stock_threshold=saved.low_stock_threshold,
        )
        return saved
