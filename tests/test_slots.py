"""
Tests for admin slot management and the public availability queries.
"""

from datetime import datetime

from mentor_booking.models import SLOT_BOOKED, Reservation, Slot


class TestAdminSlots:
    def test_create_slot(self, client, admin_headers, make_service):
        service = make_service()

        response = client.post(
            "/api/admin/slots",
            headers=admin_headers,
            json={"start": "2024-03-05T10:00:00Z", "end": "2024-03-05T10:45:00Z", "serviceId": service.id},
        )

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "free"
        assert body["serviceId"] == service.id
        assert body["start"].startswith("2024-03-05T10:00:00")

    def test_create_slot_converts_offsets_to_utc(self, client, admin_headers, db_session):
        response = client.post(
            "/api/admin/slots", headers=admin_headers, json={"start": "2024-03-05T10:00:00+02:00"}
        )

        assert response.status_code == 201
        slot = db_session.get(Slot, response.json()["id"])
        assert slot.start == datetime(2024, 3, 5, 8, 0)

    def test_create_slot_requires_start(self, client, admin_headers):
        response = client.post("/api/admin/slots", headers=admin_headers, json={})

        assert response.status_code == 400
        assert response.json()["detail"] == "Missing start."

    def test_create_slot_with_blank_start(self, client, admin_headers):
        response = client.post("/api/admin/slots", headers=admin_headers, json={"start": "", "end": " "})

        assert response.status_code == 400
        assert response.json()["detail"] == "Missing start."

    def test_create_slot_rejects_end_before_start(self, client, admin_headers):
        response = client.post(
            "/api/admin/slots",
            headers=admin_headers,
            json={"start": "2024-03-05T10:00:00", "end": "2024-03-05T09:00:00"},
        )

        assert response.status_code == 400

    def test_create_slot_with_unknown_service(self, client, admin_headers):
        response = client.post(
            "/api/admin/slots", headers=admin_headers, json={"start": "2024-03-05T10:00:00", "serviceId": 999}
        )

        assert response.status_code == 400

    def test_list_slots_ordered_by_start(self, client, admin_headers, make_slot):
        make_slot(datetime(2024, 3, 6, 9, 0))
        make_slot(datetime(2024, 3, 5, 9, 0), status=SLOT_BOOKED)

        response = client.get("/api/admin/slots", headers=admin_headers)

        assert response.status_code == 200
        starts = [s["start"] for s in response.json()]
        assert starts == sorted(starts)
        assert len(starts) == 2

    def test_update_slot(self, client, admin_headers, make_slot):
        slot = make_slot(datetime(2024, 3, 5, 9, 0))

        response = client.put(
            f"/api/admin/slots/{slot.id}",
            headers=admin_headers,
            json={"status": "booked", "start": "2024-03-05T11:00:00"},
        )

        assert response.status_code == 200
        assert response.json()["status"] == "booked"
        assert response.json()["start"].startswith("2024-03-05T11:00:00")

    def test_update_slot_clears_end_and_service(self, client, admin_headers, make_service, make_slot, db_session):
        service = make_service()
        slot = make_slot(datetime(2024, 3, 5, 9, 0), end=datetime(2024, 3, 5, 10, 0), service_id=service.id)

        response = client.put(
            f"/api/admin/slots/{slot.id}", headers=admin_headers, json={"end": None, "serviceId": None}
        )

        assert response.status_code == 200
        db_session.expire_all()
        updated = db_session.get(Slot, slot.id)
        assert updated.end is None
        assert updated.service_id is None
        assert updated.start == datetime(2024, 3, 5, 9, 0)

    def test_update_slot_keeps_omitted_fields(self, client, admin_headers, make_service, make_slot, db_session):
        service = make_service()
        slot = make_slot(datetime(2024, 3, 5, 9, 0), end=datetime(2024, 3, 5, 10, 0), service_id=service.id)

        response = client.put(f"/api/admin/slots/{slot.id}", headers=admin_headers, json={"status": "booked"})

        assert response.status_code == 200
        db_session.expire_all()
        updated = db_session.get(Slot, slot.id)
        assert updated.end == datetime(2024, 3, 5, 10, 0)
        assert updated.service_id == service.id

    def test_update_slot_rejects_unknown_status(self, client, admin_headers, make_slot):
        slot = make_slot(datetime(2024, 3, 5, 9, 0))

        response = client.put(f"/api/admin/slots/{slot.id}", headers=admin_headers, json={"status": "gone"})

        assert response.status_code == 422

    def test_update_missing_slot(self, client, admin_headers):
        response = client.put("/api/admin/slots/404", headers=admin_headers, json={"status": "free"})

        assert response.status_code == 404

    def test_delete_slot(self, client, admin_headers, make_slot, db_session):
        slot = make_slot(datetime(2024, 3, 5, 9, 0))

        response = client.delete(f"/api/admin/slots/{slot.id}", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"message": "Slot deleted."}
        db_session.expire_all()
        assert db_session.get(Slot, slot.id) is None

    def test_delete_slot_with_reservation_conflicts(
        self, client, admin_headers, make_slot, make_service, db_session
    ):
        service = make_service()
        slot = make_slot(datetime(2024, 3, 5, 9, 0), status=SLOT_BOOKED)
        db_session.add(
            Reservation(
                service_id=service.id,
                slot_id=slot.id,
                first_name="Ana",
                last_name="Silva",
                phone="+59899123456",
                customer_email="ana@example.com",
            )
        )
        db_session.commit()

        response = client.delete(f"/api/admin/slots/{slot.id}", headers=admin_headers)

        assert response.status_code == 409

    def test_delete_missing_slot(self, client, admin_headers):
        assert client.delete("/api/admin/slots/12345", headers=admin_headers).status_code == 404


class TestPublicSlots:
    def test_slots_for_day_only_free_and_sorted(self, client, make_slot):
        late = make_slot(datetime(2024, 1, 1, 15, 0))
        early = make_slot(datetime(2024, 1, 1, 9, 30))
        make_slot(datetime(2024, 1, 1, 12, 0), status=SLOT_BOOKED)
        make_slot(datetime(2024, 1, 2, 0, 0))
        make_slot(datetime(2023, 12, 31, 23, 59))

        response = client.get("/api/slots", params={"date": "2024-01-01"})

        assert response.status_code == 200
        body = response.json()
        assert [s["id"] for s in body] == [early.id, late.id]
        assert all(s["status"] == "free" for s in body)

    def test_slots_for_day_includes_midnight_start(self, client, make_slot):
        midnight = make_slot(datetime(2024, 1, 1, 0, 0))

        body = client.get("/api/slots", params={"date": "2024-01-01"}).json()

        assert [s["id"] for s in body] == [midnight.id]

    def test_slots_requires_date(self, client):
        response = client.get("/api/slots")

        assert response.status_code == 400
        assert response.json()["detail"] == "Missing date parameter."

    def test_slots_rejects_bad_date(self, client):
        for bad in ("01-01-2024", "2024-13-01", "tomorrow"):
            response = client.get("/api/slots", params={"date": bad})
            assert response.status_code == 400

    def test_summary_groups_free_slots_by_day(self, client, make_slot):
        make_slot(datetime(2024, 1, 2, 9, 0))
        make_slot(datetime(2024, 1, 1, 9, 0))
        make_slot(datetime(2024, 1, 1, 16, 0))
        make_slot(datetime(2024, 1, 1, 18, 0), status=SLOT_BOOKED)
        make_slot(datetime(2024, 1, 3, 9, 0), status=SLOT_BOOKED)

        response = client.get("/api/slots/summary")

        assert response.status_code == 200
        assert response.json() == [
            {"date": "2024-01-01", "availableCount": 2},
            {"date": "2024-01-02", "availableCount": 1},
        ]

    def test_summary_empty(self, client):
        assert client.get("/api/slots/summary").json() == []


def test_services_listing(client, make_service):
    service = make_service(title="Code review")

    response = client.get("/api/services")

    assert response.status_code == 200
    assert response.json() == [
        {
            "id": service.id,
            "title": "Code review",
            "description": "One-on-one session",
            "duration": 45,
            "price": 49.99,
            "mentorEmail": "mentor@mentor.test",
        }
    ]
