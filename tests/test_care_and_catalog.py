from datetime import datetime, timedelta, timezone

from plantdaddy.modules.plant_care.domain.services.care_stats_service import calculate_streak
from tests.helpers import API, bearer, create_plant

SPECIES = {
    "name": "Monstera",
    "scientificName": "Monstera deliciosa",
    "family": "Araceae",
    "description": "Swiss cheese plant with split leaves",
    "careLevel": "easy",
    "lightRequirements": "Bright indirect light",
    "wateringFrequency": 7,
}


# =============================================================================
# LOCATIONS
# =============================================================================

async def test_location_lifecycle(client, alice):
    headers = bearer(alice)

    created = await client.post(f"{API}/locations", json={"name": "Sunroom"}, headers=headers)
    renamed = await client.patch(f"{API}/locations/{created.json()['id']}", json={"name": "Conservatory"}, headers=headers)
    deleted = await client.delete(f"{API}/locations/{created.json()['id']}", headers=headers)

    assert created.status_code == 201
    assert created.json()["isDefault"] is False
    assert renamed.json()["name"] == "Conservatory"
    assert deleted.status_code == 200


async def test_location_in_use_cannot_be_deleted(client, alice):
    headers = bearer(alice)
    await create_plant(client, headers, "Fern", location="Kitchen")
    kitchen = next(loc for loc in (await client.get(f"{API}/locations", headers=headers)).json() if loc["name"] == "Kitchen")

    response = await client.delete(f"{API}/locations/{kitchen['id']}", headers=headers)

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "BUSINESS_RULE_VIOLATION"


async def test_foreign_location_is_not_found(client, alice, bob):
    created = await client.post(f"{API}/locations", json={"name": "Sunroom"}, headers=bearer(alice))
    location_url = f"{API}/locations/{created.json()['id']}"

    renamed = await client.patch(location_url, json={"name": "Bob's now"}, headers=bearer(bob))
    deleted = await client.delete(location_url, headers=bearer(bob))
    still_there = await client.get(f"{API}/locations", headers=bearer(alice))

    assert renamed.status_code == 404
    assert deleted.status_code == 404
    assert "Sunroom" in [loc["name"] for loc in still_there.json()]


# =============================================================================
# SPECIES
# =============================================================================

async def test_custom_species_is_household_private(client, alice, bob):
    created = await client.post(f"{API}/plant-species", json=SPECIES, headers=bearer(alice))
    species_id = created.json()["id"]

    mine = await client.get(f"{API}/plant-species", params={"q": "deliciosa"}, headers=bearer(alice))
    theirs = await client.get(f"{API}/plant-species/{species_id}", headers=bearer(bob))

    assert created.status_code == 201
    assert created.json()["isGlobal"] is False
    assert [s["id"] for s in mine.json()] == [species_id]
    assert theirs.status_code == 404


async def test_global_species_requires_admin(client, alice):
    response = await client.post(f"{API}/plant-species/global", json=SPECIES, headers=bearer(alice))

    assert response.status_code == 403


async def test_species_update_clears_optional_details_only(client, alice):
    headers = bearer(alice)
    created = await client.post(f"{API}/plant-species", json=SPECIES, headers=headers)
    species_url = f"{API}/plant-species/{created.json()['id']}"

    cleared = await client.patch(species_url, json={"family": None}, headers=headers)
    rejected = await client.patch(species_url, json={"scientificName": None}, headers=headers)

    assert cleared.status_code == 200
    assert cleared.json()["family"] is None
    assert cleared.json()["scientificName"] == "Monstera deliciosa"
    assert rejected.status_code == 422
    assert rejected.json()["error"]["details"]["field"] == "scientificName"


async def test_species_in_use_cannot_be_deleted(client, alice):
    headers = bearer(alice)
    created = await client.post(f"{API}/plant-species", json=SPECIES, headers=headers)
    await create_plant(client, headers, "Big Monstera", species="Monstera")

    response = await client.delete(f"{API}/plant-species/{created.json()['id']}", headers=headers)

    assert response.status_code == 422


# =============================================================================
# CARE HISTORY
# =============================================================================

async def test_log_care_activity(client, alice):
    headers = bearer(alice)
    plant = await create_plant(client, headers, "Fern")

    logged = await client.post(
        f"{API}/plants/{plant['id']}/care-activities",
        json={"activityType": "fertilizing", "notes": "half strength"},
        headers=headers,
    )
    system_only = await client.post(
        f"{API}/plants/{plant['id']}/care-activities",
        json={"activityType": "checked"},
        headers=headers,
    )

    assert logged.status_code == 201
    assert logged.json()["activityType"] == "fertilizing"
    assert logged.json()["userId"] == alice["user"]["id"]
    assert system_only.status_code == 422


async def test_health_record_update_and_delete(client, alice):
    headers = bearer(alice)
    plant = await create_plant(client, headers, "Fern")

    created = await client.post(f"{API}/plants/{plant['id']}/health-records", json={"status": "struggling"}, headers=headers)
    record_id = created.json()["id"]
    updated = await client.patch(f"{API}/health-records/{record_id}", json={"status": "thriving"}, headers=headers)
    deleted = await client.delete(f"{API}/health-records/{record_id}", headers=headers)
    remaining = await client.get(f"{API}/plants/{plant['id']}/health-records", headers=headers)

    assert updated.json()["status"] == "thriving"
    assert deleted.status_code == 200
    assert remaining.json() == []


async def test_foreign_health_record_is_not_found(client, alice, bob):
    plant = await create_plant(client, bearer(alice), "Fern")
    created = await client.post(f"{API}/plants/{plant['id']}/health-records", json={"status": "struggling"}, headers=bearer(alice))
    record_url = f"{API}/health-records/{created.json()['id']}"

    updated = await client.patch(record_url, json={"status": "thriving"}, headers=bearer(bob))
    deleted = await client.delete(record_url, headers=bearer(bob))
    remaining = await client.get(f"{API}/plants/{plant['id']}/health-records", headers=bearer(alice))

    assert updated.status_code == 404
    assert deleted.status_code == 404
    assert [r["status"] for r in remaining.json()] == ["struggling"]


async def test_care_on_foreign_plant_is_not_found(client, alice, bob):
    plant = await create_plant(client, bearer(alice), "Fern")

    response = await client.post(
        f"{API}/plants/{plant['id']}/journal",
        json={"imageUrl": "https://img.example/fern.jpg"},
        headers=bearer(bob),
    )

    assert response.status_code == 404


async def test_care_stats(client, alice):
    headers = bearer(alice)
    thirsty = await create_plant(client, headers, "Thirsty", days_ago=10)
    await create_plant(client, headers, "Also thirsty", days_ago=12)
    await client.post(f"{API}/plants/{thirsty['id']}/water", json={}, headers=headers)

    response = await client.get(f"{API}/care-stats", headers=headers)
    stats = response.json()

    assert stats["streak"] == 1
    assert stats["monthlyTotal"] == 1
    assert stats["monthlyByMember"] == [{"userId": alice["user"]["id"], "username": "alice", "count": 1}]
    assert stats["monthlyByType"] == [{"type": "watering", "count": 1}]
    assert stats["totalPlants"] == 2
    assert stats["plantsNeedingWater"] == 1


def test_streak_survives_until_today_is_logged():
    now = datetime(2024, 5, 10, 7, 0, tzinfo=timezone.utc)
    yesterday_and_before = [now - timedelta(days=1), now - timedelta(days=2), now - timedelta(days=4)]

    assert calculate_streak(yesterday_and_before, now) == 2
    assert calculate_streak(yesterday_and_before + [now], now) == 3
    assert calculate_streak([now - timedelta(days=3)], now) == 0
