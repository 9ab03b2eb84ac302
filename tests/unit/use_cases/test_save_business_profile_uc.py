"""Tests for SaveBusinessProfileUseCase."""

from unittest.mock import AsyncMock

import pytest

from repairshop.application.dto.requests import BusinessProfileRequest
from repairshop.application.use_cases.save_business_profile import SaveBusinessProfileUseCase
from repairshop.core.entities import BusinessProfile


@pytest.fixture
def store():
    mock = AsyncMock()
    mock.save_business_profile.side_effect = lambda p: p
    return mock


class TestSaveBusinessProfile:
    async def test_first_save_uses_default_threshold(self, store):
        store.get_business_profile.return_value = None

        profile = await SaveBusinessProfileUseCase(store).execute(
            BusinessProfileRequest(shop_name="Fix It")
        )

        assert profile.id is None
        assert profile.low_stock_threshold == 5

    async def test_omitted_threshold_keeps_existing(self, store):
        store.get_business_profile.return_value = BusinessProfile(
            id=1, shop_name="Old", low_stock_threshold=12
        )

        profile = await SaveBusinessProfileUseCase(store).execute(
            BusinessProfileRequest(shop_name="Fix It", contact_email="shop@example.com")
        )

        assert profile.id == 1
        assert profile.shop_name == "Fix It"
        assert profile.low_stock_threshold == 12
        assert profile.contact_email == "shop@example.com"

    async def test_explicit_threshold_wins(self, store):
        store.get_business_profile.return_value = BusinessProfile(
            id=1, shop_name="Old", low_stock_threshold=12
        )

        profile = await SaveBusinessProfileUseCase(store).execute(
            BusinessProfileRequest(shop_name="Fix It", low_stock_threshold=0)
        )

        assert profile.low_stock_threshold == 0
