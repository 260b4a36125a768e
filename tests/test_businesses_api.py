"""
HTTP tests for /businesses, run against the in-memory store.
"""

import pytest


def test_business_lifecycle(client, store, business_payload):
    missing_phone = {k: v for k, v in business_payload.items() if k != "phone"}
    resp = client.post("/businesses", json=missing_phone)
    assert resp.status_code == 400
    assert resp.json() == {"error": "Request body is not a valid business object."}

    resp = client.post("/businesses", json=business_payload)
    assert resp.status_code == 201
    body = resp.json()
    business_id = body["id"]
    assert isinstance(business_id, int)
    assert body["links"] == {"business": f"/businesses/{business_id}", "owner": "/users/1"}

    resp = client.get(f"/businesses/{business_id}")
    assert resp.status_code == 200
    assert resp.json() == {"id": business_id, **business_payload}

    resp = client.delete(f"/businesses/{business_id}")
    assert resp.status_code == 204
    assert resp.content == b""

    resp = client.get(f"/businesses/{business_id}")
    assert resp.status_code == 404
    assert resp.json() == {"error": f"Requested resource /businesses/{business_id} does not exist"}


def test_create_drops_unknown_and_client_ids(client, store, business_payload):
    resp = client.post("/businesses", json={**business_payload, "id": 777, "rating": 5})
    business_id = resp.json()["id"]

    stored = store.tables["businesses"][business_id]
    assert business_id != 777
    assert "rating" not in stored


def test_create_rejects_non_object_body(client):
    resp = client.post("/businesses", json=["not", "a", "business"])
    assert resp.status_code == 400


def test_replace_business(client, store, business_payload):
    business_id = store.seed("businesses", **business_payload)

    resp = client.put(f"/businesses/{business_id}", json={**business_payload, "name": "Block 16"})
    assert resp.status_code == 200
    assert resp.json() == {"links": {"business": f"/businesses/{business_id}", "owner": "/users/1"}}
    assert store.tables["businesses"][business_id]["name"] == "Block 16"


def test_replace_missing_business(client, business_payload):
    resp = client.put("/businesses/404", json=business_payload)
    assert resp.status_code == 404


def test_replace_invalid_business(client, store, business_payload):
    business_id = store.seed("businesses", **business_payload)
    resp = client.put(f"/businesses/{business_id}", json={"name": "only a name"})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Request body does not contain a valid business."}


def test_delete_missing_business(client):
    assert client.delete("/businesses/12").status_code == 404


def test_list_businesses_pages(client, store, business_payload):
    for i in range(25):
        store.seed("businesses", **{**business_payload, "name": f"Business {i}"})

    resp = client.get("/businesses", params={"page": 99})
    assert resp.status_code == 200
    body = resp.json()
    assert body["page"] == 3
    assert body["totalPages"] == 3
    assert body["pageSize"] == 10
    assert body["count"] == 25
    assert [b["id"] for b in body["items"]] == list(range(21, 26))


def test_list_businesses_bad_page_param(client, store, business_payload):
    store.seed("businesses", **business_payload)
    body = client.get("/businesses?page=abc").json()
    assert body["page"] == 1
    assert len(body["items"]) == 1


def test_list_businesses_empty(client):
    body = client.get("/businesses").json()
    assert body == {"items": [], "page": 1, "totalPages": 0, "pageSize": 10, "count": 0}


def test_store_failure_is_500(client, store, business_payload):
    store.fail = True

    resp = client.post("/businesses", json=business_payload)
    assert resp.status_code == 500
    assert resp.json() == {"error": "Error inserting business into DB."}

    resp = client.get("/businesses/1")
    assert resp.status_code == 500
    assert resp.json() == {"error": "Unable to fetch business."}


def test_unknown_route_uses_generic_not_found(client):
    resp = client.get("/restaurants")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Requested resource /restaurants does not exist"}


def test_create_converts_values_to_column_types(client, store, business_payload):
    resp = client.post("/businesses", json={**business_payload, "zip": 97333, "ownerid": "1"})
    assert resp.status_code == 201
    assert resp.json()["links"]["owner"] == "/users/1"

    stored = store.tables["businesses"][resp.json()["id"]]
    assert stored["zip"] == "97333"
    assert stored["ownerid"] == 1


@pytest.mark.parametrize("ownerid", ["abc", 2**63, 1.5, "12a"])
def test_create_rejects_non_integer_owner(client, store, business_payload, ownerid):
    resp = client.post("/businesses", json={**business_payload, "ownerid": ownerid})
    assert resp.status_code == 400
    assert resp.json() == {"error": "Field 'ownerid' must be an integer."}
    assert "businesses" not in store.tables


def test_replace_rejects_non_integer_owner(client, store, business_payload):
    business_id = store.seed("businesses", **business_payload)
    resp = client.put(f"/businesses/{business_id}", json={**business_payload, "ownerid": "abc"})
    assert resp.status_code == 400
    assert store.tables["businesses"][business_id]["ownerid"] == 1


@pytest.mark.parametrize("record_id", ["abc", "99999999999999999999", "-1", "1.5"])
def test_unusable_ids_are_not_found(client, store, business_payload, record_id):
    store.seed("businesses", **business_payload)
    path = f"/businesses/{record_id}"
    expected = {"error": f"Requested resource {path} does not exist"}

    for resp in (client.get(path), client.put(path, json=business_payload), client.delete(path)):
        assert resp.status_code == 404
        assert resp.json() == expected
