from barbershop.models import Client, Reservation


def run_import(client, auth_headers, csv_text):
    return client.post("/import", json={"csv": csv_text}, headers=auth_headers)


def test_import_creates_reservations_and_clients(client, auth_headers, db):
    csv_text = "Emri,Dita,Ora\nArben Krasniqi,18/03/2025,10:00\nDrita Hoxha,19.03.2025,2pm\n"

    response = run_import(client, auth_headers, csv_text)

    assert response.status_code == 200
    assert response.json() == {"success": True, "created": 2, "skipped": 0, "errors": []}

    reservation = db.query(Reservation).filter(Reservation.client_name == "Arben Krasniqi").one()
    assert reservation.date == "2025-03-18"
    assert reservation.time == "10:00 AM"
    assert reservation.service == "Imported"
    assert reservation.notes == "Imported from CSV"

    arben = db.query(Client).filter(Client.name == "Arben Krasniqi").one()
    assert arben.notes == "Imported from CSV"
    assert arben.total_appointments == 1
    assert arben.last_visit == "2025-03-18"
    assert reservation.client_id == arben.id


def test_english_headers_in_any_order_and_case(client, auth_headers):
    csv_text = "TIME,Name,Date,Phone\n9:30 AM,Ana,2025-03-18,555\n"

    assert run_import(client, auth_headers, csv_text).json()["created"] == 1


def test_invalid_rows_are_itemized(client, auth_headers):
    csv_text = "\n".join(
        [
            "Name,Date,Time",
            ",18/03/2025,10:00",
            "Ana,31/02/20x5,10:00",
            "Ana,18/03/2025,25:00",
            "Ana,23/03/2025,10:00",
            "Ana,17/03/2025,9:00",
            "Ana,18/03/2025,10:00",
        ]
    )

    body = run_import(client, auth_headers, csv_text).json()

    assert body["created"] == 1
    assert body["skipped"] == 5
    assert body["errors"] == [
        {"line": 2, "reason": "missing name"},
        {"line": 3, "reason": "invalid date"},
        {"line": 4, "reason": "invalid time"},
        {"line": 5, "reason": "non-working day"},
        {"line": 6, "reason": "past slot"},
    ]


def test_taken_slots_are_counted_but_not_itemized(client, auth_headers, book):
    book("John Smith", date="2025-03-18", time="5:30 PM")
    csv_text = "Name,Date,Time\nAna,18/03/2025,17:30\nBen,18/03/2025,17:00\nCara,18/03/2025,5pm\n"

    body = run_import(client, auth_headers, csv_text).json()

    assert body["created"] == 1
    assert body["skipped"] == 2
    assert body["errors"] == []


def test_skipped_rows_do_not_touch_clients(client, auth_headers, book, db):
    book("Ana", date="2025-03-18", time="10:00 AM")

    run_import(client, auth_headers, "Name,Date,Time\nana,18/03/2025,10:00\n")

    ana = db.query(Client).one()
    assert ana.total_appointments == 1


def test_later_row_matches_client_created_earlier_in_batch(client, auth_headers, db):
    csv_text = "Name,Date,Time\nAna Berisha,18/03/2025,10:00\nANA BERISHA,20/03/2025,11:00\n"

    run_import(client, auth_headers, csv_text)

    clients = db.query(Client).all()
    assert len(clients) == 1
    assert clients[0].total_appointments == 2
    assert clients[0].last_visit == "2025-03-20"
    assert db.query(Reservation).count() == 2


def test_import_matches_existing_client(client, auth_headers, db):
    created = client.post("/clients", json={"name": "Ana", "phone": "555-0101"}, headers=auth_headers).json()

    run_import(client, auth_headers, "Name,Date,Time\nana,18/03/2025,10:00\n")

    reservation = db.query(Reservation).one()
    assert reservation.client_id == created["id"]
    assert reservation.client_phone == "555-0101"
    ana = db.query(Client).one()
    assert ana.notes == ""
    assert ana.total_appointments == 1


def test_duplicate_slot_within_batch_is_skipped(client, auth_headers):
    csv_text = "Name,Date,Time\nAna,18/03/2025,10:00\nBen,18/03/2025,10:00 am\n"

    body = run_import(client, auth_headers, csv_text).json()

    assert body["created"] == 1
    assert body["skipped"] == 1


def test_blank_lines_ignored_and_lines_numbered_physically(client, auth_headers):
    csv_text = "\ufeffName,Date,Time\n\nAna,18/03/2025,10:00\n\n,18/03/2025,11:00\n"

    body = run_import(client, auth_headers, csv_text).json()

    assert body["created"] == 1
    assert body["errors"] == [{"line": 5, "reason": "missing name"}]


def test_quoted_fields(client, auth_headers, db):
    csv_text = 'Name,Date,Time\n"Smith, John",18/03/2025,10:00\n'

    run_import(client, auth_headers, csv_text)

    assert db.query(Client).one().name == "Smith, John"


def test_empty_csv_rejected(client, auth_headers):
    response = run_import(client, auth_headers, "  \n ")

    assert response.status_code == 400
    assert response.json()["detail"] == "CSV is empty"


def test_missing_headers_rejected(client, auth_headers):
    response = run_import(client, auth_headers, "Client,Day\nAna,18/03/2025\n")

    assert response.status_code == 400
    assert response.json()["detail"] == "CSV must include headers for Emri/Name, Dita/Date, Ora/Time"


def test_import_reads_configured_file(client, auth_headers, tmp_path, monkeypatch):
    csv_file = tmp_path / "Oraret.csv"
    csv_file.write_text("Emri,Dita,Ora\nAna,18/03/2025,10:00\n", encoding="utf-8")
    monkeypatch.setattr("barbershop.domain.imports.service.IMPORT_CSV_PATH", str(csv_file))

    response = client.post("/import", headers=auth_headers)

    assert response.status_code == 200
    assert response.json()["created"] == 1


def test_missing_configured_file(client, auth_headers, tmp_path, monkeypatch):
    monkeypatch.setattr("barbershop.domain.imports.service.IMPORT_CSV_PATH", str(tmp_path / "missing.csv"))

    response = client.post("/import", json={}, headers=auth_headers)

    assert response.status_code == 400


def test_command_line_import(tmp_path, db):
    import import_csv

    csv_file = tmp_path / "schedule.csv"
    csv_file.write_text("Name,Date,Time\nAna,2025-03-18,10:00\n")

    result = import_csv.run_import(str(csv_file))

    assert result.created == 1
    assert db.query(Reservation).count() == 1
