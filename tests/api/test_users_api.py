import re

from tests.data import FAKE_UUID, LIST_USERS, TEST_USER, camel

API = "/api/v1/users"
ISO_MS_Z = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")


async def _create(client, payload=None):
    resp = await client.post(API, json=camel(payload or TEST_USER))
    assert resp.status_code == 201, resp.text
    return resp.json()


async def test_create_user_returns_camel_case_entity(client):
    user = await _create(client)

    assert set(user) == {"id", "username", "email", "fullName", "isActive", "createdAt", "updatedAt"}
    assert user["fullName"] == "Test User"
    assert user["isActive"] is True
    assert ISO_MS_Z.match(user["createdAt"])
    assert user["createdAt"] == user["updatedAt"]


async def test_get_user_round_trip(client):
    user = await _create(client)

    resp = await client.get(f"{API}/{user['id']}")

    assert resp.status_code == 200
    assert resp.json() == user


async def test_get_unknown_user_is_404(client):
    resp = await client.get(f"{API}/{FAKE_UUID}")

    assert resp.status_code == 404
    assert resp.json()["error"] == "User not found"


async def test_get_with_malformed_id_is_400(client):
    resp = await client.get(f"{API}/not-a-uuid")

    assert resp.status_code == 400
    body = resp.json()
    assert 'request/params/id must match format "uuid"' in body["error"]
    assert body["details"][0]["path"] == "request/params/id"


async def test_create_user_rejects_short_username(client):
    resp = await client.post(API, json=camel({**TEST_USER, "username": "ab"}))

    assert resp.status_code == 400
    assert "request/body/username must NOT have fewer than 3 characters" in resp.json()["error"]


async def test_create_user_lists_every_violation(client):
    resp = await client.post(API, json={"username": "ab", "email": "broken"})

    assert resp.status_code == 400
    messages = [d["message"] for d in resp.json()["details"]]
    assert messages == [
        "request/body/username must NOT have fewer than 3 characters",
        'request/body/email must match format "email"',
        "request/body must have required property 'fullName'",
    ]
    assert resp.json()["error"] == ", ".join(messages)


async def test_create_user_with_invalid_json_is_400(client):
    resp = await client.post(API, content=b"{not json", headers={"content-type": "application/json"})

    assert resp.status_code == 400
    assert resp.json()["error"] == "request/body must be valid JSON"


async def test_partial_update(client):
    user = await _create(client)

    resp = await client.put(f"{API}/{user['id']}", json={"isActive": False})

    assert resp.status_code == 200
    updated = resp.json()
    assert updated["isActive"] is False
    assert updated["username"] == user["username"]
    assert updated["email"] == user["email"]
    assert updated["fullName"] == user["fullName"]
    assert updated["createdAt"] == user["createdAt"]
    assert updated["updatedAt"] >= user["updatedAt"]


async def test_update_rejects_bad_field_type(client):
    user = await _create(client)

    resp = await client.put(f"{API}/{user['id']}", json={"isActive": "yes"})

    assert resp.status_code == 400
    assert "request/body/isActive must be boolean" in resp.json()["error"]


async def test_update_unknown_user_is_404(client):
    resp = await client.put(f"{API}/{FAKE_UUID}", json={"fullName": "Nobody"})

    assert resp.status_code == 404


async def test_delete_then_get_is_404(client):
    user = await _create(client)

    resp = await client.delete(f"{API}/{user['id']}")
    assert resp.status_code == 200
    assert resp.json() == {"success": True}

    assert (await client.get(f"{API}/{user['id']}")).status_code == 404
    assert (await client.delete(f"{API}/{user['id']}")).status_code == 404


async def test_list_users_paging_and_order(client):
    created = [await _create(client, u) for u in LIST_USERS]

    resp = await client.get(API, params={"page": 1, "pageSize": 2})

    assert resp.status_code == 200
    body = resp.json()
    assert body["totalCount"] == 3
    assert body["page"] == 1
    assert body["pageSize"] == 2
    assert [u["id"] for u in body["users"]] == [u["id"] for u in created[:2]]


async def test_list_users_sort_and_filter(client):
    for u in LIST_USERS:
        await _create(client, u)

    sorted_resp = await client.get(API, params={"page": 1, "pageSize": 10, "sortBy": "username"})
    filtered_resp = await client.get(API, params={"page": 1, "pageSize": 10, "filter": "JOHNSON"})

    assert [u["username"] for u in sorted_resp.json()["users"]] == ["alice", "bob", "charlie"]
    assert [u["username"] for u in filtered_resp.json()["users"]] == ["bob"]


async def test_list_users_requires_paging(client):
    resp = await client.get(API)

    assert resp.status_code == 400
    messages = [d["message"] for d in resp.json()["details"]]
    assert messages == [
        "request/query must have required property 'page'",
        "request/query must have required property 'pageSize'",
    ]


async def test_list_users_rejects_out_of_range_paging(client):
    resp = await client.get(API, params={"page": 0, "pageSize": "abc"})

    assert resp.status_code == 400
    messages = [d["message"] for d in resp.json()["details"]]
    assert messages == ["request/query/page must be >= 1", "request/query/pageSize must be integer"]
