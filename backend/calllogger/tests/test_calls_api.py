from calllogger.core.errors import UpstreamFailure


def test_log_call_appends_row(client, store):
    response = client.post(
        "/log-call",
        json={"id": "42", "name": "Zoe", "callType": "Sales", "recordingUrl": "https://x/1.mp3"},
    )
    assert response.status_code == 200
    assert response.json() == {"success": True}
    row = store.rows[-1]
    assert row[0] == "42"
    assert row[2] == "Zoe"
    assert row[6] == "Sales"
    assert row[12] == "https://x/1.mp3"
    assert row[5]


def test_log_call_accepts_numeric_phone(client, store):
    response = client.post("/log-call", json={"name": "Zoe", "phone": 5550100})
    assert response.status_code == 200
    assert store.rows[-1][1] == "5550100"
    assert store.rows[-1][2] == "Zoe"


def test_update_accepts_numeric_phone(client, store):
    response = client.put("/calls/1", json={"phone": 5550199})
    assert response.status_code == 200
    assert store.rows[1][1] == "5550199"


def test_log_call_without_id_generates_one(client, store):
    response = client.post("/log-call", json={"name": "Anon"})
    assert response.status_code == 200
    assert store.rows[-1][0]


def test_list_calls_returns_page_envelope(client):
    response = client.get("/calls")
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["page"] == 1
    assert data["limit"] == 20
    assert data["total"] == 3
    assert [item["id"] for item in data["data"]] == ["1", "2", "3"]
    assert data["data"][0]["callType"] == "Sales"
    assert "firstTime" in data["data"][0]


def test_list_calls_search_filter_and_sort(client):
    response = client.get("/calls", params={"callType": "Sales", "sort": "date_desc"})
    assert [item["id"] for item in response.json()["data"]] == ["3", "1"]
    response = client.get("/calls", params={"search": "SMITH"})
    assert [item["id"] for item in response.json()["data"]] == ["2"]
    response = client.get("/calls", params={"priority": "Urgent", "callType": "Sales"})
    assert [item["id"] for item in response.json()["data"]] == ["3"]


def test_list_calls_priority_sort(client):
    response = client.get("/calls", params={"sort": "priority_asc"})
    assert [item["priority"] for item in response.json()["data"]] == ["Urgent", "Urgent", "Standard"]


def test_list_calls_pagination(client, store):
    for index in range(22):
        client.post("/log-call", json={"id": f"extra-{index}", "name": "Bulk"})
    first = client.get("/calls", params={"search": "bulk", "pageSize": 20}).json()
    second = client.get("/calls", params={"search": "bulk", "limit": 20, "page": 2}).json()
    third = client.get("/calls", params={"search": "bulk", "limit": 20, "page": 3}).json()
    assert (first["total"], len(first["data"])) == (22, 20)
    assert (second["total"], len(second["data"])) == (22, 2)
    assert (third["total"], third["data"], third["page"]) == (22, [], 3)


def test_list_calls_tolerates_bad_parameters(client):
    response = client.get("/calls", params={"page": "abc", "limit": "0", "sort": "random"})
    assert response.status_code == 200
    data = response.json()
    assert data["page"] == 1
    assert data["limit"] == 20
    assert data["total"] == 3


def test_update_call_merges_fields(client, store):
    response = client.put("/calls/1", json={"name": "Janet", "notes": "Follow up"})
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["data"]["name"] == "Janet"
    assert body["data"]["phone"] == "555-0100"
    assert store.rows[1][2] == "Janet"
    assert store.rows[1][9] == "Follow up"


def test_patch_is_accepted_for_updates(client, store):
    response = client.patch("/calls/2", json={"priority": "Low Priority"})
    assert response.status_code == 200
    assert store.rows[2][10] == "Low Priority"


def test_update_unknown_call_returns_not_found(client, store):
    before = store.fetch_all_rows()
    response = client.put("/calls/nope", json={"name": "Ghost"})
    assert response.status_code == 404
    assert response.json() == {"success": False, "error": "Call log nope not found"}
    assert client.get("/calls").json()["total"] == 3
    assert store.fetch_all_rows() == before


def test_export_csv_includes_header_and_matches(client):
    response = client.get("/calls/export", params={"priority": "Urgent"})
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    lines = response.text.strip().splitlines()
    assert lines[0].startswith("id,phone,name,city,firstTime,time")
    assert len(lines) == 3


def test_upstream_failure_is_reported(client, store, monkeypatch):
    def broken():
        raise UpstreamFailure("Quota exceeded for quota metric 'Read requests'")

    monkeypatch.setattr(store, "fetch_all_rows", broken)
    response = client.get("/calls")
    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "error": "Quota exceeded for quota metric 'Read requests'",
    }


def test_invalid_body_uses_error_envelope(client):
    response = client.post("/log-call", json=["not", "an", "object"])
    assert response.status_code == 422
    assert response.json()["success"] is False
