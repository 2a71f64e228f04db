"""Member Routes — addMember/removeMember/leave against the SQL store.

Invariants:
    - addMember appends with role "member" unless a role is given
    - removeMember and leave rebuild the member list without the identity
    - leave only needs an authenticated caller; the others need owner/authorities
"""

from uuid import uuid4

OWNER = "uu5:1234-5678"
FRIEND = "uu5:8765-4321"


async def test_add_member_happy_day(client, seed_list):
    res = await client.post(
        "/shoppingList/addMember",
        json={"listId": str(seed_list.id), "uuIdentity": FRIEND},
    )
    assert res.status_code == 200
    body = res.json()
    assert body["listId"] == str(seed_list.id)
    assert body["member"] == {"uuIdentity": FRIEND, "role": "member"}
    assert body["members"] == [
        {"uuIdentity": OWNER, "role": "owner"},
        {"uuIdentity": FRIEND, "role": "member"},
    ]
    assert body["uuAppErrorMap"] == {}


async def test_add_member_is_persisted(client, seed_list):
    await client.post(
        "/shoppingList/addMember",
        json={"listId": str(seed_list.id), "uuIdentity": FRIEND, "role": "owner"},
    )
    res = await client.get(f"/shoppingList/get/{seed_list.id}")
    assert {"uuIdentity": FRIEND, "role": "owner"} in res.json()["members"]


async def test_add_member_reports_all_invalid_fields(client):
    res = await client.post(
        "/shoppingList/addMember", json={"uuIdentity": 7, "role": "boss"},
    )
    assert res.status_code == 400
    assert set(res.json()["uuAppErrorMap"]) == {
        "shoppingList/addMember/invalidListId",
        "shoppingList/addMember/invalidUuIdentity",
        "shoppingList/addMember/invalidRole",
    }


async def test_add_member_unknown_list(client):
    list_id = str(uuid4())
    res = await client.post(
        "/shoppingList/addMember", json={"listId": list_id, "uuIdentity": FRIEND},
    )
    assert res.status_code == 404
    entry = res.json()["uuAppErrorMap"]["shoppingList/addMember/notFound"]
    assert entry["paramMap"] == {"listId": list_id}


async def test_add_member_unauthorized(client, seed_list):
    res = await client.post(
        "/shoppingList/addMember",
        json={"listId": str(seed_list.id), "uuIdentity": FRIEND},
        headers={"X-UU-Profiles": "User,ShoppingListMember"},
    )
    assert res.status_code == 403
    assert list(res.json()["uuAppErrorMap"]) == ["shoppingList/addMember/unauthorized"]


async def test_remove_member_happy_day(client, seed_list):
    await client.post(
        "/shoppingList/addMember",
        json={"listId": str(seed_list.id), "uuIdentity": FRIEND},
    )
    res = await client.post(
        "/shoppingList/removeMember",
        json={"listId": str(seed_list.id), "uuIdentity": FRIEND},
    )
    assert res.status_code == 200
    body = res.json()
    assert body["removedUuIdentity"] == FRIEND
    assert body["members"] == [{"uuIdentity": OWNER, "role": "owner"}]


async def test_remove_member_missing_fields(client):
    res = await client.post("/shoppingList/removeMember", json={})
    assert res.status_code == 400
    assert set(res.json()["uuAppErrorMap"]) == {
        "shoppingList/removeMember/invalidListId",
        "shoppingList/removeMember/invalidUuIdentity",
    }


async def test_leave_removes_caller(client, seed_list):
    await client.post(
        "/shoppingList/addMember",
        json={"listId": str(seed_list.id), "uuIdentity": FRIEND},
    )
    res = await client.post(
        "/shoppingList/leave",
        json={"listId": str(seed_list.id)},
        headers={"X-UU-Identity": FRIEND, "X-UU-Profiles": "ShoppingListMember"},
    )
    assert res.status_code == 200
    body = res.json()
    assert body["leftUuIdentity"] == FRIEND
    assert FRIEND not in [m["uuIdentity"] for m in body["members"]]


async def test_leave_missing_list_id(client):
    res = await client.post("/shoppingList/leave", json={})
    assert res.status_code == 400
    assert "shoppingList/leave/invalidListId" in res.json()["uuAppErrorMap"]


async def test_leave_requires_identity(client, seed_list):
    res = await client.post(
        "/shoppingList/leave",
        json={"listId": str(seed_list.id)},
        headers={"X-UU-Identity": ""},
    )
    assert res.status_code == 403
    assert list(res.json()["uuAppErrorMap"]) == ["shoppingList/leave/unauthorized"]


async def test_leave_unknown_list(client):
    res = await client.post("/shoppingList/leave", json={"listId": str(uuid4())})
    assert res.status_code == 404
    assert "shoppingList/leave/notFound" in res.json()["uuAppErrorMap"]
