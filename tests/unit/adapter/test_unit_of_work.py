from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.domain.errors import StoreError


def _failing_session(method):
    session = MagicMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    setattr(
        session,
        method,
        AsyncMock(side_effect=OperationalError("stmt", {}, Exception("disk I/O error"))),
    )
    return session


@pytest.mark.asyncio
async def test_commit_failure_becomes_store_error():
    uow = SqlAlchemyUnitOfWork(_failing_session("commit"))

    with pytest.raises(StoreError) as exc_info:
        async with uow:
            await uow.commit()

    assert exc_info.value.code == "STORE_UNAVAILABLE"


@pytest.mark.asyncio
async def test_rollback_failure_on_exit_becomes_store_error():
    session = _failing_session("rollback")
    uow = SqlAlchemyUnitOfWork(session)

    with pytest.raises(StoreError) as exc_info:
        async with uow:
            pass

    assert exc_info.value.code == "STORE_UNAVAILABLE"
    session.rollback.assert_called_once()
