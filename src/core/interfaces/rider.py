"""Contrato del servicio de pasajero.

`adapters.rider_service.RiderService` es la implementación HTTP.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.envelope import Envelope
from core.domain.models import (
    Promotion,
    PromotionApplied,
    Request,
    RequestDetails,
    RequestMap,
    UserActivity,
    UserProfile,
)


@runtime_checkable
class RiderAPI(Protocol):
    """Una corrutina por endpoint remoto; todas devuelven un `Envelope`."""

    async def request_ride(
        self,
        product_id: str,
        start_latitude: float,
        start_longitude: float,
        end_latitude: float,
        end_longitude: float,
        surge_confirmation_id: str | None = None,
    ) -> Envelope[Request]: ...

    async def get_request_details(self, request_id: str) -> Envelope[RequestDetails]: ...

    async def get_request_map(self, request_id: str) -> Envelope[RequestMap]: ...

    async def cancel_request(self, request_id: str) -> Envelope[bool]: ...

    async def get_promotion(
        self,
        start_latitude: float,
        start_longitude: float,
        end_latitude: float,
        end_longitude: float,
    ) -> Envelope[Promotion]: ...

    async def get_user_profile(self) -> Envelope[UserProfile]: ...

    async def apply_user_promotion(self, promo_code: str) -> Envelope[PromotionApplied]: ...

    async def get_user_activity(self, offset: int, limit: int) -> Envelope[UserActivity]: ...
