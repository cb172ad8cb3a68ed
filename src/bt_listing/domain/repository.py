"""ListingRepository Protocol: listings are read-only reference data here."""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.bt_listing.domain.models import Listing, ListingRef


class ListingRepositoryProtocol(Protocol):
    async def get_by_ref(self, db: AsyncSession, ref: ListingRef) -> Listing | None: ...
