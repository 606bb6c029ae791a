from sqlalchemy import func, select

from plantdaddy.modules.households.infrastructure.database.models import HouseholdMemberModel, HouseholdModel
from plantdaddy.modules.notifications.infrastructure.database.models import NotificationSettingsModel
from plantdaddy.modules.plant_care.infrastructure.database.models import CareActivityModel, PlantModel
from tests.helpers import API, admin_bearer, bearer, create_plant, household_of


async def count(session_factory, model, *criteria) -> int:
    async with session_factory() as session:
        return await session.scalar(select(func.count()).select_from(model).where(*criteria))


async def test_admin_lists_users_with_stats(client, alice, bob):
    await create_plant(client, bearer(bob), "Fern")
    await create_plant(client, bearer(bob), "Cactus", days_ago=10)

    response = await client.get(f"{API}/admin/users", headers=admin_bearer(alice))
    users = {user["username"]: user for user in response.json()}

    assert response.status_code == 200
    assert set(users) == {"alice", "bob"}
    assert users["bob"]["plantCount"] == 2
    assert users["bob"]["householdCount"] == 1
    assert users["alice"]["plantCount"] == 0


async def test_admin_routes_require_admin(client, alice, bob):
    listing = await client.get(f"{API}/admin/users", headers=bearer(alice))
    deletion = await client.delete(f"{API}/admin/users/{bob['user']['id']}", headers=bearer(alice))

    assert listing.status_code == 403
    assert deletion.status_code == 403


async def test_admin_cannot_delete_self_or_unknown_user(client, alice):
    own = await client.delete(f"{API}/admin/users/{alice['user']['id']}", headers=admin_bearer(alice))
    unknown = await client.delete(f"{API}/admin/users/9999", headers=admin_bearer(alice))

    assert own.status_code == 422
    assert own.json()["error"]["code"] == "BUSINESS_RULE_VIOLATION"
    assert unknown.status_code == 404


async def test_delete_user_removes_all_their_data(client, alice, bob, session_factory):
    bob_id = bob["user"]["id"]
    bob_home = await household_of(client, bob)
    await create_plant(client, bearer(bob), "Bob's Fern")

    alice_home = await household_of(client, alice)
    await client.post(f"{API}/households/join", json={"inviteCode": alice_home["inviteCode"]}, headers=bearer(bob))
    shared = bearer(bob, household_id=alice_home["id"])
    alice_plant = await create_plant(client, bearer(alice), "Monstera", days_ago=10)
    added_by_bob = await create_plant(client, shared, "Pothos")
    await client.post(f"{API}/plants/{alice_plant['id']}/water", json={}, headers=shared)

    response = await client.delete(f"{API}/admin/users/{bob_id}", headers=admin_bearer(alice))

    assert response.status_code == 200
    assert response.json()["message"] == 'User "bob" and all associated data deleted'

    login = await client.post(f"{API}/auth/login", json={"username": "bob", "password": "secret123"})
    assert login.status_code == 401

    assert await count(session_factory, HouseholdModel, HouseholdModel.id == bob_home["id"]) == 0
    assert await count(session_factory, HouseholdMemberModel, HouseholdMemberModel.user_id == bob_id) == 0
    assert await count(session_factory, NotificationSettingsModel, NotificationSettingsModel.user_id == bob_id) == 0
    assert await count(session_factory, PlantModel, PlantModel.user_id == bob_id) == 0
    assert await count(session_factory, CareActivityModel, CareActivityModel.user_id == bob_id) == 0

    # Plants bob added to alice's household stay there, now owned by alice
    remaining = await client.get(f"{API}/plants", headers=bearer(alice))
    names = {plant["name"]: plant for plant in remaining.json()}
    assert set(names) == {"Monstera", "Pothos"}
    assert names["Pothos"]["id"] == added_by_bob["id"]
    assert names["Pothos"]["userId"] == alice["user"]["id"]
