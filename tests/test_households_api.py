from tests.helpers import API, bearer, create_plant, household_of


async def join(client, auth, invite_code):
    return await client.post(f"{API}/households/join", json={"inviteCode": invite_code}, headers=bearer(auth))


async def test_registration_provisions_owned_household(client, alice):
    household = await household_of(client, alice)

    assert household["name"] == "alice's Home"
    assert household["role"] == "owner"
    assert len(household["inviteCode"]) == 8


async def test_create_household_makes_creator_owner(client, alice):
    response = await client.post(f"{API}/households", json={"name": "  Office  "}, headers=bearer(alice))

    assert response.status_code == 201
    body = response.json()
    assert body["name"] == "Office"
    assert body["role"] == "owner"
    assert body["createdBy"] == alice["user"]["id"]


async def test_join_with_invite_code_as_member(client, alice, bob):
    household = await household_of(client, alice)

    response = await join(client, bob, household["inviteCode"].lower())

    assert response.status_code == 200
    assert response.json()["id"] == household["id"]
    assert response.json()["role"] == "member"

    details = await client.get(f"{API}/households/{household['id']}", headers=bearer(bob))
    members = {m["username"]: m["role"] for m in details.json()["members"]}
    assert members == {"alice": "owner", "bob": "member"}


async def test_join_twice_is_conflict(client, alice, bob):
    household = await household_of(client, alice)
    await join(client, bob, household["inviteCode"])

    response = await join(client, bob, household["inviteCode"])

    assert response.status_code == 409


async def test_unknown_invite_code_is_rejected(client, bob):
    response = await join(client, bob, "ZZZZZZZZ")

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_regenerated_invite_code_replaces_old_one(client, alice, bob):
    household = await household_of(client, alice)

    response = await client.post(f"{API}/households/{household['id']}/invite-code", headers=bearer(alice))
    new_code = response.json()["inviteCode"]

    assert new_code != household["inviteCode"]
    assert (await join(client, bob, household["inviteCode"])).status_code == 422
    assert (await join(client, bob, new_code)).status_code == 200


async def test_only_owner_can_rename(client, alice, bob):
    household = await household_of(client, alice)
    await join(client, bob, household["inviteCode"])

    denied = await client.patch(f"{API}/households/{household['id']}", json={"name": "Bob's now"}, headers=bearer(bob))
    renamed = await client.patch(f"{API}/households/{household['id']}", json={"name": "Plant HQ"}, headers=bearer(alice))

    assert denied.status_code == 403
    assert renamed.status_code == 200
    assert renamed.json()["name"] == "Plant HQ"


async def test_caretaker_can_water_but_not_create(client, alice, bob):
    household = await household_of(client, alice)
    await join(client, bob, household["inviteCode"])
    plant = await create_plant(client, bearer(alice), "Monstera", days_ago=10)

    response = await client.patch(
        f"{API}/households/{household['id']}/members/{bob['user']['id']}",
        json={"role": "caretaker"},
        headers=bearer(alice),
    )
    assert response.status_code == 200
    assert response.json()["role"] == "caretaker"

    bob_here = bearer(bob, household["id"])
    create = await client.post(
        f"{API}/plants",
        json={"name": "Cactus", "location": "Office", "wateringFrequency": 14},
        headers=bob_here,
    )
    water = await client.post(f"{API}/plants/{plant['id']}/water", json={}, headers=bob_here)

    assert create.status_code == 403
    assert create.json()["error"]["code"] == "AUTHORIZATION_ERROR"
    assert water.status_code == 200


async def test_owner_role_cannot_be_assigned(client, alice, bob):
    household = await household_of(client, alice)
    await join(client, bob, household["inviteCode"])

    response = await client.patch(
        f"{API}/households/{household['id']}/members/{bob['user']['id']}",
        json={"role": "owner"},
        headers=bearer(alice),
    )

    assert response.status_code == 422


async def test_owner_cannot_leave(client, alice):
    household = await household_of(client, alice)

    response = await client.delete(
        f"{API}/households/{household['id']}/members/{alice['user']['id']}",
        headers=bearer(alice),
    )

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "BUSINESS_RULE_VIOLATION"


async def test_member_cannot_remove_others_but_can_leave(client, alice, bob):
    household = await household_of(client, alice)
    await join(client, bob, household["inviteCode"])

    kick_owner = await client.delete(
        f"{API}/households/{household['id']}/members/{alice['user']['id']}",
        headers=bearer(bob),
    )
    leave = await client.delete(
        f"{API}/households/{household['id']}/members/{bob['user']['id']}",
        headers=bearer(bob),
    )
    after = await client.get(f"{API}/plants", headers=bearer(bob, household["id"]))

    assert kick_owner.status_code == 403
    assert leave.status_code == 200
    assert after.status_code == 404
