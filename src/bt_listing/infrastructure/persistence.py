"""ListingRepository: raw SQL lookup of listings by internal or external id.

Listing reads take no locks: the order engine treats listings as reference data.
"""

import json
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.bt_common.enums import ListingRefKind
from src.bt_listing.domain.models import Listing, ListingRef

_SELECT_COLUMNS = """
    id, source_id, title, region, asset_type, currency,
    start_price, current_price, min_price, max_price, price, amount, lot_price,
    end_date, source_url, details
"""

# id::text comparison keeps arbitrarily long digit strings away from BIGINT casts
_GET_BY_INTERNAL_REF_SQL = text(f"""
    SELECT {_SELECT_COLUMNS}
    FROM listings
    WHERE id::text = :ref OR source_id = :ref
    ORDER BY (id::text = :ref) DESC
    LIMIT 1
""")

_GET_BY_EXTERNAL_REF_SQL = text(f"""
    SELECT {_SELECT_COLUMNS}
    FROM listings
    WHERE source_id = :ref
    LIMIT 1
""")


def _decode_details(raw: Any) -> Any:
    if raw is None:
        return {}
    if isinstance(raw, (str, bytes)):
        try:
            return json.loads(raw)
        except ValueError:
            return {}
    return raw


def _row_to_listing(row: Any) -> Listing:
    return Listing(
        id=row.id,
        source_id=row.source_id,
        title=row.title,
        region=row.region,
        asset_type=row.asset_type,
        currency=row.currency,
        start_price=row.start_price,
        current_price=row.current_price,
        min_price=row.min_price,
        max_price=row.max_price,
        price=row.price,
        amount=row.amount,
        lot_price=row.lot_price,
        end_date=row.end_date,
        source_url=row.source_url,
        details=_decode_details(row.details),
    )


class ListingRepository:
    """Concrete implementation of ListingRepositoryProtocol."""

    async def get_by_ref(self, db: AsyncSession, ref: ListingRef) -> Listing | None:
        sql = (
            _GET_BY_INTERNAL_REF_SQL
            if ref.kind is ListingRefKind.INTERNAL
            else _GET_BY_EXTERNAL_REF_SQL
        )
        result = await db.execute(sql, {"ref": ref.value})
        row = result.fetchone()
        return _row_to_listing(row) if row else None
