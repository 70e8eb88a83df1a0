import uuid

from conftest import TOMORROW


def create_client(client, auth_headers, **payload):
    return client.post("/clients", json={"name": "John Smith", **payload}, headers=auth_headers)


def test_create_and_list_clients(client, auth_headers):
    response = create_client(client, auth_headers, phone="555-0100", notes="Regular")

    assert response.status_code == 201
    created = response.json()
    assert created["name"] == "John Smith"
    assert created["phone"] == "555-0100"
    assert created["totalAppointments"] == 0
    assert created["lastVisit"] is None

    clients = client.get("/clients", headers=auth_headers).json()
    assert [c["id"] for c in clients] == [created["id"]]


def test_duplicate_name_rejected_case_insensitively(client, auth_headers):
    create_client(client, auth_headers)

    response = create_client(client, auth_headers, name="  john SMITH ")

    assert response.status_code == 409


def test_blank_name_rejected(client, auth_headers):
    assert create_client(client, auth_headers, name="   ").status_code == 422


def test_get_client(client, auth_headers):
    client_id = create_client(client, auth_headers).json()["id"]

    response = client.get(f"/clients/{client_id}", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["name"] == "John Smith"


def test_get_unknown_client(client, auth_headers):
    assert client.get(f"/clients/{uuid.uuid4()}", headers=auth_headers).status_code == 404
    assert client.get("/clients/not-an-id", headers=auth_headers).status_code == 400


def test_update_client(client, auth_headers):
    client_id = create_client(client, auth_headers).json()["id"]

    response = client.patch(
        f"/clients/{client_id}", json={"phone": "555-0199", "notes": "Likes it short"}, headers=auth_headers
    )

    assert response.status_code == 200
    assert response.json()["phone"] == "555-0199"
    assert response.json()["notes"] == "Likes it short"
    assert response.json()["name"] == "John Smith"


def test_rename_client_changes_case(client, auth_headers):
    client_id = create_client(client, auth_headers).json()["id"]

    response = client.patch(f"/clients/{client_id}", json={"name": "JOHN SMITH"}, headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["name"] == "JOHN SMITH"


def test_rename_onto_existing_name_rejected(client, auth_headers):
    create_client(client, auth_headers)
    other_id = create_client(client, auth_headers, name="Jane Doe").json()["id"]

    response = client.patch(f"/clients/{other_id}", json={"name": "john smith"}, headers=auth_headers)

    assert response.status_code == 409


def test_booking_creates_client_and_history(client, auth_headers, book):
    book("Jane Doe", time="9:00 AM", clientPhone="555-0101")
    book("jane doe", date="2025-03-20", time="10:00 AM")

    clients = client.get("/clients", headers=auth_headers).json()
    assert len(clients) == 1
    jane = clients[0]
    assert jane["name"] == "Jane Doe"
    assert jane["phone"] == "555-0101"
    assert jane["totalAppointments"] == 2
    assert jane["lastVisit"] == "2025-03-20"

    history = client.get(f"/clients/{jane['id']}/history", headers=auth_headers).json()
    assert [r["date"] for r in history] == ["2025-03-20", TOMORROW]


def test_booking_existing_client_keeps_id(client, auth_headers, book):
    client_id = create_client(client, auth_headers).json()["id"]

    reservation = book("john smith").json()

    assert reservation["clientId"] == client_id
    updated = client.get(f"/clients/{client_id}", headers=auth_headers).json()
    assert updated["totalAppointments"] == 1
    assert updated["lastVisit"] == TOMORROW
