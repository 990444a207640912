"""
Helpers shared by the session-issuing use cases.
"""

import logging
from datetime import datetime
from typing import Awaitable, Callable, Tuple, TypeVar

from src.app.services.token_codec import ITokenCodec
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Account, SessionRecord
from src.domain.errors import StaleAccountError, StoreError
from src.domain.session_policy import SessionPolicy
from src.domain.session_window import SessionWindow

logger = logging.getLogger(__name__)

T = TypeVar("T")


def issue_session(
    codec: ITokenCodec, policy: SessionPolicy, now: datetime
) -> Tuple[str, SessionRecord]:
    """
    Generate a raw session secret and the record that stores its digest.

    Returns:
        (raw secret for the caller, record to embed in the account)
    """
    raw_secret = codec.generate_session_secret()
    record = SessionRecord(
        secret_digest=codec.digest(raw_secret),
        created_at=now,
        expires_at=now + policy.session_lifetime,
    )
    return raw_secret, record


def add_session(
    account: Account, record: SessionRecord, policy: SessionPolicy, now: datetime
) -> None:
    """Push a record into the account's session window, evicting per policy"""
    window = SessionWindow(account.sessions, policy.max_sessions, policy.eviction)
    evicted = window.push(record, now)
    account.sessions = window.records
    if evicted:
        logger.debug(
            "Evicted %d session record(s) from account %s", len(evicted), account.id
        )


async def run_with_retry(
    uow: UnitOfWork,
    policy: SessionPolicy,
    attempt: Callable[[], Awaitable[T]],
) -> T:
    """
    Run a read-modify-write attempt inside the unit of work, re-running it
    from a fresh read whenever the account replace hits a version conflict.

    Raises:
        StoreError: CONCURRENT_UPDATE once max_write_attempts are used up
    """
    for number in range(1, policy.max_write_attempts + 1):
        try:
            async with uow:
                return await attempt()
        except StaleAccountError:
            logger.warning(
                "Account changed concurrently, retrying (attempt %d of %d)",
                number,
                policy.max_write_attempts,
            )

    raise StoreError(
        "CONCURRENT_UPDATE", "Account is being updated concurrently, try again"
    )
