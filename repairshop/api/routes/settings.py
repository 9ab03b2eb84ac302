"""Business profile settings endpoints."""

from fastapi import APIRouter, Depends

from repairshop.api.dependencies import get_business_settings, get_save_profile_use_case
from repairshop.application.dto.requests import BusinessProfileRequest
from repairshop.application.dto.responses import BusinessProfileResponse
from repairshop.application.use_cases.save_business_profile import SaveBusinessProfileUseCase
from repairshop.core.interfaces.settings_store import ISettingsStore

router = APIRouter(prefix="/api/settings", tags=["settings"])


@router.get("/business-profile", response_model=BusinessProfileResponse | None)
async def get_business_profile(
    store: ISettingsStore = Depends(get_business_settings),
) -> BusinessProfileResponse | None:
    """The shop's profile, or null before one has been saved."""
    profile = await store.get_business_profile()
    return BusinessProfileResponse.from_entity(profile) if profile else None


@router.put("/business-profile", response_model=BusinessProfileResponse)
async def save_business_profile(
    request: BusinessProfileRequest,
    use_case: SaveBusinessProfileUseCase = Depends(get_save_profile_use_case),
) -> BusinessProfileResponse:
    """Create the profile on first save, update it afterwards."""
    return BusinessProfileResponse.from_entity(await use_case.execute(request))
