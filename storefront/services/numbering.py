"""Order code generation.

Codes look like ``ORD-1734567890123-K3F9QZ``: the epoch time in milliseconds
plus six random uppercase alphanumerics. Codes are globally unique; a
collision with an existing row is retried with fresh randomness.
"""

import secrets
import string
import time

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.models.order import Order

ORDER_CODE_PREFIX = "ORD"
SUFFIX_ALPHABET = string.ascii_uppercase + string.digits
SUFFIX_LENGTH = 6
MAX_ATTEMPTS = 5


def generate_order_code(now_ms: int | None = None) -> str:
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    suffix = "".join(secrets.choice(SUFFIX_ALPHABET) for _ in range(SUFFIX_LENGTH))
    return f"{ORDER_CODE_PREFIX}-{now_ms}-{suffix}"


async def get_next_order_code(db: AsyncSession) -> str:
    """Return an order code not yet used by any order."""
    for _ in range(MAX_ATTEMPTS):
        code = generate_order_code()
        result = await db.execute(select(Order.id).where(Order.order_code == code))
        if result.first() is None:
            return code
    raise RuntimeError("Could not generate a unique order code")
