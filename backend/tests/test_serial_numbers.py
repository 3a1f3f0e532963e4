from datetime import datetime, timedelta, timezone


def test_create_serial_number_for_unknown_item_echoes_item_id(client):
    resp = client.post("/serial-numbers", json={"itemId": "missing"})
    assert resp.status_code == 404
    assert resp.json() == {"error": "Item not found", "itemId": "missing"}


def test_create_serial_number_requires_item_id(client):
    resp = client.post("/serial-numbers", json={"serialNumber": "INV/001"})
    assert resp.status_code == 400
    assert resp.json()["error"] == "itemId is required"


def test_create_serial_number_defaults(client, make_item):
    item_id = make_item()["item"]["id"]

    resp = client.post("/serial-numbers", json={"itemId": item_id})
    assert resp.status_code == 201
    code = resp.json()
    assert code["item_id"] == item_id
    assert code["kode_inventaris"] == ""
    assert code["spesifikasi"] == ""
    assert code["status"] == "good"
    assert code["date_added"]


def test_create_serial_number_normalizes_date_added(client, make_item):
    item_id = make_item()["item"]["id"]

    resp = client.post(
        "/serial-numbers",
        json={
            "itemId": item_id,
            "serialNumber": "INV/LAB1/PC/009",
            "specs": "Core i7",
            "status": "broken",
            "dateAdded": "2024-05-01T10:00:00+07:00",
        },
    )
    assert resp.status_code == 201
    code = resp.json()
    assert code["kode_inventaris"] == "INV/LAB1/PC/009"
    assert code["status"] == "broken"
    added = datetime.fromisoformat(code["date_added"])
    assert (added.year, added.month, added.day, added.hour) == (2024, 5, 1, 3)


def test_list_serial_numbers_joins_item(client, make_item):
    created = make_item(name="Proyektor", location="Gudang", quantity=1)

    listed = client.get("/serial-numbers").json()
    assert len(listed) == 1
    assert listed[0]["id"] == created["inventory_codes"][0]["id"]
    assert listed[0]["item_name"] == "Proyektor"
    assert listed[0]["location"] == "Gudang"


def test_update_serial_number_partial(client, make_item):
    code = make_item(quantity=1)["inventory_codes"][0]

    resp = client.put(f"/serial-numbers/{code['id']}", json={"serialNumber": "INV/001"})
    assert resp.status_code == 200
    updated = resp.json()
    assert updated["kode_inventaris"] == "INV/001"
    assert updated["status"] == "good"
    assert datetime.fromisoformat(updated["updated_at"]) > datetime.fromisoformat(code["updated_at"])

    resp = client.put(f"/serial-numbers/{code['id']}", json={"status": "broken", "specs": "layar retak"})
    updated = resp.json()
    assert updated["kode_inventaris"] == "INV/001"
    assert updated["status"] == "broken"
    assert updated["spesifikasi"] == "layar retak"


def test_update_missing_serial_number_returns_404(client):
    resp = client.put("/serial-numbers/missing", json={"status": "good"})
    assert resp.status_code == 404


def test_delete_serial_number(client, make_item):
    created = make_item(quantity=2)
    first, second = created["inventory_codes"]

    resp = client.delete(f"/serial-numbers/{first['id']}")
    assert resp.status_code == 200
    assert client.get(f"/serial-numbers/{first['id']}").status_code == 404
    assert client.get(f"/serial-numbers/{second['id']}").status_code == 200

    assert client.delete(f"/serial-numbers/{first['id']}").status_code == 404


def test_serial_number_timestamps_carry_utc_offset(client, make_item):
    item_id = make_item()["item"]["id"]

    resp = client.post(
        "/serial-numbers",
        json={"itemId": item_id, "dateAdded": "2024-05-01T10:00:00+07:00"},
    )
    code = client.get(f"/serial-numbers/{resp.json()['id']}").json()

    added = datetime.fromisoformat(code["date_added"])
    assert added == datetime(2024, 5, 1, 3, 0, tzinfo=timezone.utc)
    assert datetime.fromisoformat(code["created_at"]).utcoffset() == timedelta(0)
