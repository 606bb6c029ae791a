from datetime import timedelta

from sqlalchemy import func, select

from plantdaddy.modules.plant_care.infrastructure.database.models import (
    CareActivityModel,
    PlantHealthRecordModel,
    PlantJournalEntryModel,
)
from plantdaddy.shared.utils.helpers import utcnow
from tests.helpers import API, bearer, create_plant, household_of


async def test_create_plant_derives_watering_status(client, alice):
    plant = await create_plant(client, bearer(alice), "Monstera", days_ago=10, frequency=7, species="Monstera deliciosa")

    assert plant["name"] == "Monstera"
    assert plant["species"] == "Monstera deliciosa"
    assert plant["status"] == "overdue"
    assert plant["isOverdue"] is True
    assert plant["daysUntilWatering"] == -3
    assert plant["userId"] == alice["user"]["id"]


async def test_create_plant_defaults_last_watered_to_now(client, alice):
    response = await client.post(
        f"{API}/plants",
        json={"name": "Pothos", "location": "Kitchen", "wateringFrequency": 5},
        headers=bearer(alice),
    )

    assert response.status_code == 201
    assert response.json()["status"] == "watered"
    assert response.json()["daysUntilWatering"] == 5


async def test_create_plant_adds_new_location(client, alice):
    await create_plant(client, bearer(alice), "Fern", location="Greenhouse")

    response = await client.get(f"{API}/locations", headers=bearer(alice))
    names = [loc["name"] for loc in response.json()]

    assert "Greenhouse" in names
    assert "Living Room" in names


async def test_create_plant_rejects_bad_schedule(client, alice):
    zero = await client.post(
        f"{API}/plants",
        json={"name": "Fern", "location": "Kitchen", "wateringFrequency": 0},
        headers=bearer(alice),
    )
    future = await client.post(
        f"{API}/plants",
        json={
            "name": "Fern",
            "location": "Kitchen",
            "wateringFrequency": 3,
            "lastWatered": (utcnow() + timedelta(days=2)).isoformat(),
        },
        headers=bearer(alice),
    )

    assert zero.status_code == 422
    assert zero.json()["error"]["code"] == "VALIDATION_ERROR"
    assert future.status_code == 422


async def test_update_plant(client, alice):
    plant = await create_plant(client, bearer(alice), "Fern")

    response = await client.patch(
        f"{API}/plants/{plant['id']}",
        json={"name": "Boston Fern", "wateringFrequency": 3},
        headers=bearer(alice),
    )

    assert response.status_code == 200
    assert response.json()["name"] == "Boston Fern"
    assert response.json()["wateringFrequency"] == 3


async def test_update_plant_clears_optional_fields(client, alice):
    plant = await create_plant(
        client, bearer(alice), "Fern", species="Boston Fern", notes="north window", imageUrl="https://img.example/f.jpg"
    )

    response = await client.patch(
        f"{API}/plants/{plant['id']}",
        json={"species": None, "notes": None, "imageUrl": None},
        headers=bearer(alice),
    )

    assert response.status_code == 200
    body = response.json()
    assert (body["species"], body["notes"], body["imageUrl"]) == (None, None, None)
    assert body["name"] == "Fern"


async def test_update_plant_cannot_clear_required_fields(client, alice):
    plant = await create_plant(client, bearer(alice), "Fern", notes="north window")

    for field in ("name", "location", "wateringFrequency", "lastWatered"):
        response = await client.patch(
            f"{API}/plants/{plant['id']}",
            json={field: None, "notes": None},
            headers=bearer(alice),
        )
        assert response.status_code == 422, field
        assert response.json()["error"]["details"]["field"] == field

    unchanged = await client.get(f"{API}/plants/{plant['id']}", headers=bearer(alice))
    assert unchanged.json()["notes"] == "north window"


async def test_water_plant_resets_schedule_and_logs_activity(client, alice):
    plant = await create_plant(client, bearer(alice), "Monstera", days_ago=10)

    response = await client.post(f"{API}/plants/{plant['id']}/water", json={"notes": "deep soak"}, headers=bearer(alice))

    assert response.status_code == 200
    assert response.json()["status"] == "watered"
    assert response.json()["isOverdue"] is False

    activities = await client.get(f"{API}/plants/{plant['id']}/care-activities", headers=bearer(alice))
    assert [(a["activityType"], a["notes"]) for a in activities.json()] == [("watering", "deep soak")]


async def test_snooze_hides_overdue_until_cleared(client, alice):
    plant = await create_plant(client, bearer(alice), "Monstera", days_ago=10)
    until = (utcnow() + timedelta(days=2)).isoformat()

    snoozed = await client.post(f"{API}/plants/{plant['id']}/snooze", json={"snoozedUntil": until}, headers=bearer(alice))
    cleared = await client.delete(f"{API}/plants/{plant['id']}/snooze", headers=bearer(alice))

    assert snoozed.status_code == 200
    assert snoozed.json()["isSnoozed"] is True
    assert snoozed.json()["isOverdue"] is False
    assert cleared.json()["isSnoozed"] is False
    assert cleared.json()["isOverdue"] is True


async def test_snooze_in_the_past_is_rejected(client, alice):
    plant = await create_plant(client, bearer(alice), "Monstera", days_ago=10)
    past = (utcnow() - timedelta(hours=1)).isoformat()

    response = await client.post(f"{API}/plants/{plant['id']}/snooze", json={"snoozedUntil": past}, headers=bearer(alice))

    assert response.status_code == 422


async def test_dashboard_groups_plants(client, alice):
    headers = bearer(alice)
    await create_plant(client, headers, "Thirsty", days_ago=10, frequency=7)
    await create_plant(client, headers, "Soon", days_ago=5, frequency=7)
    await create_plant(client, headers, "Fresh", days_ago=0, frequency=7)

    response = await client.get(f"{API}/plants/dashboard", headers=headers)
    body = response.json()

    assert [p["name"] for p in body["dueToday"]] == ["Thirsty"]
    assert [p["name"] for p in body["upcoming"]] == ["Soon"]
    assert [p["name"] for p in body["recentlyWatered"]] == ["Fresh"]


async def test_water_overdue_waters_only_overdue_plants(client, alice):
    headers = bearer(alice)
    await create_plant(client, headers, "Thirsty", days_ago=10)
    await create_plant(client, headers, "Parched", days_ago=20)
    await create_plant(client, headers, "Fresh", days_ago=1)

    response = await client.post(f"{API}/plants/water-overdue", json={}, headers=headers)

    assert response.json()["watered"] == 2
    assert sorted(p["name"] for p in response.json()["plants"]) == ["Parched", "Thirsty"]


async def test_delete_plant_removes_history(client, alice, session_factory):
    headers = bearer(alice)
    plant = await create_plant(client, headers, "Doomed", days_ago=10)
    await client.post(f"{API}/plants/{plant['id']}/water", json={}, headers=headers)
    await client.post(f"{API}/plants/{plant['id']}/health-records", json={"status": "thriving"}, headers=headers)
    await client.post(
        f"{API}/plants/{plant['id']}/journal",
        json={"imageUrl": "https://img.example/doomed.jpg", "caption": "last photo"},
        headers=headers,
    )

    response = await client.delete(f"{API}/plants/{plant['id']}", headers=headers)
    missing = await client.get(f"{API}/plants/{plant['id']}", headers=headers)

    assert response.status_code == 200
    assert missing.status_code == 404
    async with session_factory() as session:
        for model in (CareActivityModel, PlantHealthRecordModel, PlantJournalEntryModel):
            count = await session.scalar(select(func.count()).select_from(model).where(model.plant_id == plant["id"]))
            assert count == 0


# =============================================================================
# HOUSEHOLD SCOPING
# =============================================================================

async def test_plants_are_invisible_across_households(client, alice, bob):
    plant = await create_plant(client, bearer(alice), "Monstera")

    listed = await client.get(f"{API}/plants", headers=bearer(bob))
    fetched = await client.get(f"{API}/plants/{plant['id']}", headers=bearer(bob))
    watered = await client.post(f"{API}/plants/{plant['id']}/water", json={}, headers=bearer(bob))
    deleted = await client.delete(f"{API}/plants/{plant['id']}", headers=bearer(bob))

    assert listed.json() == []
    assert fetched.status_code == 404
    assert watered.status_code == 404
    assert deleted.status_code == 404


async def test_foreign_household_header_is_not_found(client, alice, bob):
    household = await household_of(client, alice)

    response = await client.get(f"{API}/plants", headers=bearer(bob, household["id"]))

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"


async def test_invalid_household_header_falls_back_to_default(client, alice):
    await create_plant(client, bearer(alice), "Monstera")
    headers = {**bearer(alice), "X-Household-Id": "not-a-number"}

    response = await client.get(f"{API}/plants", headers=headers)

    assert [p["name"] for p in response.json()] == ["Monstera"]


async def test_joined_member_sees_household_plants(client, alice, bob):
    household = await household_of(client, alice)
    await client.post(f"{API}/households/join", json={"inviteCode": household["inviteCode"]}, headers=bearer(bob))
    await create_plant(client, bearer(alice), "Shared Fern")

    own = await client.get(f"{API}/plants", headers=bearer(bob))
    shared = await client.get(f"{API}/plants", headers=bearer(bob, household["id"]))

    assert own.json() == []
    assert [p["name"] for p in shared.json()] == ["Shared Fern"]
