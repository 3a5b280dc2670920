def _create_event(client, **overrides):
    payload = {
        "name": "Test Concert",
        "date": "2030-06-01T18:00:00+02:00",
        "total_seats": 10,
        "payment_time_minutes": 30,
    }
    payload.update(overrides)
    response = client.post("/events", json=payload)
    assert response.status_code == 201
    return response.json()


def test_booking_flow(client):
    event = _create_event(client)
    assert event["date"] == "2030-06-01T16:00:00+00:00"

    response = client.post(
        f"/events/{event['id']}/book",
        json={"user_name": "user1", "seats": 10},
    )
    assert response.status_code == 201
    assert response.json()["status"] == "pending"

    confirm_response = client.post(
        f"/events/{event['id']}/confirm",
        json={"user_name": "user1"},
    )
    assert confirm_response.status_code == 200
    assert confirm_response.json() == {"status": "confirmed", "confirmed": 1}

    detail = client.get(f"/events/{event['id']}").json()
    assert detail["available_seats"] == 0
    assert [b["status"] for b in detail["bookings"]] == ["confirmed"]

    overflow = client.post(
        f"/events/{event['id']}/book",
        json={"user_name": "user2", "seats": 1},
    )
    assert overflow.status_code == 409
    assert overflow.json()["detail"] == "not enough seats"


def test_list_events_reports_availability(client):
    later = _create_event(client, name="Later", date="2030-07-01T10:00:00Z", total_seats=20)
    _create_event(client, name="Sooner", date="2030-05-01T10:00:00Z", total_seats=5)
    client.post(f"/events/{later['id']}/book", json={"user_name": "alice", "seats": 4})
    client.post(f"/events/{later['id']}/confirm", json={"user_name": "alice"})

    response = client.get("/events")

    assert response.status_code == 200
    assert [(e["name"], e["available_seats"]) for e in response.json()] == [
        ("Sooner", 5),
        ("Later", 16),
    ]


def test_available_seats_endpoint(client):
    event = _create_event(client, total_seats=100)
    client.post(f"/events/{event['id']}/book", json={"user_name": "bob", "seats": 20})

    response = client.get(f"/events/{event['id']}/available")

    assert response.status_code == 200
    assert response.json() == {"event_id": event["id"], "available_seats": 100}


def test_unknown_event_is_404(client):
    assert client.get("/events/999").status_code == 404
    assert client.get("/events/999/available").status_code == 404
    assert client.post("/events/999/book", json={"user_name": "a", "seats": 1}).status_code == 404


def test_confirm_without_pending_booking_is_404(client):
    event = _create_event(client)

    response = client.post(
        f"/events/{event['id']}/confirm",
        json={"user_name": "nobody"},
    )

    assert response.status_code == 404
    assert response.json()["detail"] == "booking not found"


def test_invalid_payloads_are_rejected(client):
    event = _create_event(client)

    assert client.post(
        f"/events/{event['id']}/book",
        json={"user_name": "user1", "seats": 0},
    ).status_code == 422
    assert client.post(
        "/events",
        json={"name": "Broken", "date": "2030-06-01T18:00:00Z", "total_seats": 0},
    ).status_code == 422


def test_delete_event(client):
    event = _create_event(client)
    client.post(f"/events/{event['id']}/book", json={"user_name": "user1", "seats": 2})

    response = client.delete(f"/events/{event['id']}")

    assert response.status_code == 204
    assert client.get(f"/events/{event['id']}").status_code == 404
    assert client.delete(f"/events/{event['id']}").status_code == 404


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
