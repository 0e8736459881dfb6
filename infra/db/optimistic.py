from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import update
from sqlalchemy.orm import Session

from core.exceptions import ConcurrencyError, NotFoundError

logger = logging.getLogger(__name__)


def update_with_version_check(
    session: Session,
    orm_type: type[Any],
    row_id: str,
    expected_version: int,
    values: dict[str, Any],
    *,
    not_found_message: str,
    stale_message: str,
) -> int:
    """Apply ``values`` only if the stored row still carries ``expected_version``.

    Returns the new version number.
    """
    next_version = int(expected_version) + 1
    result = session.execute(
        update(orm_type)
        .where(orm_type.id == row_id, orm_type.version == expected_version)
        .values(**values, version=next_version)
    )
    if result.rowcount == 1:
        return next_version

    if session.get(orm_type, row_id) is None:
        raise NotFoundError(not_found_message, code=f"{orm_type.__tablename__.upper()}_NOT_FOUND")
    logger.info("Stale write on %s %s at version %s", orm_type.__tablename__, row_id, expected_version)
    raise ConcurrencyError(stale_message, code="STALE_WRITE")
