import logging

import pytest
from fastapi import HTTPException
from fastapi.exceptions import RequestValidationError
from sqlalchemy import func, select

from plantdaddy.modules.plant_care.infrastructure.database.models import LocationModel
from plantdaddy.shared.infrastructure.database.session import session_scope
from tests.helpers import API, bearer, create_plant

SESSION_LOGGER = "plantdaddy.shared.infrastructure.database.session"


@pytest.mark.parametrize("error", [RequestValidationError([]), HTTPException(status_code=401)])
async def test_expected_request_errors_roll_back_quietly(session_factory, caplog, error):
    caplog.set_level(logging.DEBUG, logger=SESSION_LOGGER)

    with pytest.raises(type(error)):
        async with session_scope(session_factory) as session:
            session.add(LocationModel(user_id=1, household_id=1, name="Never saved"))
            await session.flush()
            raise error

    async with session_factory() as session:
        assert await session.scalar(select(func.count()).select_from(LocationModel)) == 0
    assert not [r for r in caplog.records if r.name == SESSION_LOGGER and r.levelno >= logging.ERROR]


async def test_unexpected_error_is_logged(session_factory, caplog):
    with pytest.raises(RuntimeError):
        async with session_scope(session_factory):
            raise RuntimeError("boom")

    assert any(r.name == SESSION_LOGGER and r.levelno == logging.ERROR for r in caplog.records)


async def test_invalid_request_body_is_not_logged_as_unexpected(client, alice, caplog):
    plant = await create_plant(client, bearer(alice), "Fern")
    caplog.clear()

    response = await client.patch(f"{API}/plants/{plant['id']}", json={"wateringFrequency": 0}, headers=bearer(alice))

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"
    assert not [r for r in caplog.records if r.name == SESSION_LOGGER and r.levelno >= logging.ERROR]
