from tourism.core.config import settings
from tourism.core.errors import PaymentNotConfigured

ADMIN_EMAIL = settings.admin_email_list[0]

PASSWORD = "s3cret-pass"


def _register(client, email="alice@example.com"):
    resp = client.post(
        "/api/register",
        json={
            "email": email,
            "username": email.split("@")[0],
            "first_name": "Test",
            "last_name": "User",
            "password": PASSWORD,
        },
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


def _login(client, email="alice@example.com") -> dict:
    resp = client.post("/api/login", json={"email": email, "password": PASSWORD})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


def _checkout(client, headers, destination_id="dest_1", travelers=2, **extra):
    payload = {
        "destination_id": destination_id,
        "start_date": "2025-06-01",
        "end_date": "2025-06-07",
        "travelers": travelers,
        "contact_email": "alice@example.com",
        "contact_phone": "555-0100",
    }
    payload.update(extra)
    return client.post("/api/confirm-booking", json=payload, headers=headers)


def test_health(client):
    assert client.get("/health").json()["status"] == "ok"


def test_register_never_returns_password(client):
    body = _register(client)
    assert "password" not in body
    assert "password_hash" not in body


def test_duplicate_registration_conflicts(client):
    _register(client)
    resp = client.post(
        "/api/register",
        json={
            "email": "alice@example.com",
            "username": "alice2",
            "first_name": "A",
            "last_name": "B",
            "password": PASSWORD,
        },
    )
    assert resp.status_code == 409


def test_login_failure_is_generic(client):
    _register(client)
    wrong = client.post("/api/login", json={"email": "alice@example.com", "password": "nope-nope"})
    unknown = client.post("/api/login", json={"email": "ghost@example.com", "password": PASSWORD})
    assert wrong.status_code == unknown.status_code == 401
    assert wrong.json() == unknown.json()


def test_session_cookie_and_logout(client):
    _register(client)
    client.post("/api/login", json={"email": "alice@example.com", "password": PASSWORD})
    assert settings.session_cookie_name in client.cookies
    assert client.get("/api/me").json()["email"] == "alice@example.com"

    client.post("/api/logout")
    client.cookies.clear()
    assert client.get("/api/me").status_code == 401


def test_destination_listing(client):
    assert len(client.get("/api/destinations").json()) == 4
    culture = client.get("/api/destinations", params={"category": "culture"}).json()
    assert [d["name"] for d in culture] == ["Paris"]
    assert client.get("/api/destinations", params={"category": "space"}).status_code == 422
    assert client.get("/api/destinations/dest_3").json()["name"] == "Mount Fuji"
    assert client.get("/api/destinations/nope").status_code == 404


def test_search(client):
    resp = client.post("/api/search", json={"query": "paris"})
    assert [d["id"] for d in resp.json()] == ["dest_1"]


def test_booking_flow_and_ownership(client):
    _register(client, "alice@example.com")
    _register(client, "bob@example.com")
    alice = _login(client, "alice@example.com")
    bob = _login(client, "bob@example.com")

    resp = _checkout(client, alice)
    assert resp.status_code == 201, resp.text
    booking = resp.json()
    assert booking["total_price"] == 5000
    assert booking["status"] == "pending"
    assert booking["payment_status"] == "pending"

    assert client.get(f"/api/bookings/{booking['id']}", headers=bob).status_code == 403
    assert client.get("/api/bookings", headers=bob).json() == []
    assert len(client.get("/api/bookings", headers=alice).json()) == 1

    cancelled = client.patch(
        f"/api/bookings/{booking['id']}/status", json={"status": "cancelled"}, headers=alice
    )
    assert cancelled.json()["status"] == "cancelled"


def test_booking_requires_session(client):
    assert _checkout(client, headers={}).status_code == 401
    assert client.get("/api/bookings").status_code == 401


def test_booking_with_inverted_dates(client):
    _register(client)
    resp = _checkout(client, _login(client), start_date="2025-06-10", end_date="2025-06-01")
    assert resp.status_code == 422


def test_wishlist_endpoints(client):
    _register(client)
    headers = _login(client)

    client.post("/api/wishlist", json={"destination_id": "dest_2"}, headers=headers)
    client.post("/api/wishlist", json={"destination_id": "dest_2"}, headers=headers)
    assert len(client.get("/api/wishlist", headers=headers).json()) == 1

    assert client.delete("/api/wishlist/dest_2", headers=headers).status_code == 200
    assert client.delete("/api/wishlist/dest_2", headers=headers).status_code == 200
    assert client.get("/api/wishlist", headers=headers).json() == []


def test_payment_intent_quotes_destination_price(client, stripe_client):
    stripe_client.create_payment_intent.return_value = {"id": "pi_1", "client_secret": "sec"}
    resp = client.post(
        "/api/create-payment-intent",
        json={
            "destination_id": "dest_4",
            "travelers": 3,
            "start_date": "2025-07-01",
            "end_date": "2025-07-08",
            "contact_email": "alice@example.com",
            "contact_phone": "555",
        },
    )
    assert resp.status_code == 200, resp.text
    assert resp.json() == {"payment_intent_id": "pi_1", "client_secret": "sec", "amount": 16500.0}
    amount = stripe_client.create_payment_intent.call_args.args[0]
    assert amount == 16500.0


def test_payment_intent_without_processor(client, stripe_client):
    stripe_client.create_payment_intent.side_effect = PaymentNotConfigured()
    resp = client.post(
        "/api/create-payment-intent",
        json={
            "destination_id": "dest_1",
            "travelers": 1,
            "start_date": "2025-07-01",
            "end_date": "2025-07-02",
            "contact_email": "alice@example.com",
            "contact_phone": "555",
        },
    )
    assert resp.status_code == 503


def test_record_payment_marks_booking_paid(client, stripe_client):
    _register(client)
    headers = _login(client)
    booking = _checkout(client, headers, payment_intent_id="pi_42").json()

    stripe_client.retrieve_payment_intent.return_value = {
        "id": "pi_42",
        "amount": 500000,
        "status": "succeeded",
    }
    resp = client.post(
        f"/api/bookings/{booking['id']}/payment",
        json={"payment_intent_id": "pi_42"},
        headers=headers,
    )
    assert resp.status_code == 200, resp.text
    assert resp.json()["payment_status"] == "paid"
    assert resp.json()["status"] == "confirmed"


def test_record_payment_rejects_amount_mismatch(client, stripe_client):
    _register(client)
    headers = _login(client)
    booking = _checkout(client, headers).json()

    stripe_client.retrieve_payment_intent.return_value = {"id": "pi_1", "amount": 100, "status": "succeeded"}
    resp = client.post(
        f"/api/bookings/{booking['id']}/payment",
        json={"payment_intent_id": "pi_1"},
        headers=headers,
    )
    assert resp.status_code == 422


def test_payment_intent_cannot_settle_two_bookings(client, stripe_client):
    _register(client)
    headers = _login(client)
    first = _checkout(client, headers).json()
    second = _checkout(client, headers).json()

    stripe_client.retrieve_payment_intent.return_value = {
        "id": "pi_42",
        "amount": 500000,
        "status": "succeeded",
    }
    ok = client.post(
        f"/api/bookings/{first['id']}/payment",
        json={"payment_intent_id": "pi_42"},
        headers=headers,
    )
    assert ok.status_code == 200, ok.text
    resp = client.post(
        f"/api/bookings/{second['id']}/payment",
        json={"payment_intent_id": "pi_42"},
        headers=headers,
    )
    assert resp.status_code == 409
    assert client.get(f"/api/bookings/{second['id']}", headers=headers).json()["payment_status"] == "pending"


def test_refunded_booking_is_not_settled_again(client, stripe_client):
    _register(client, "alice@example.com")
    _register(client, ADMIN_EMAIL)
    alice = _login(client, "alice@example.com")
    admin = _login(client, ADMIN_EMAIL)
    booking = _checkout(client, alice).json()

    stripe_client.retrieve_payment_intent.return_value = {
        "id": "pi_7",
        "amount": 500000,
        "status": "succeeded",
    }
    pay = {"payment_intent_id": "pi_7"}
    assert client.post(f"/api/bookings/{booking['id']}/payment", json=pay, headers=alice).status_code == 200
    refund = client.post(f"/api/bookings/{booking['id']}/refund", headers=admin)
    assert refund.status_code == 200, refund.text

    replay = client.post(f"/api/bookings/{booking['id']}/payment", json=pay, headers=alice)
    assert replay.status_code == 422
    stored = client.get(f"/api/bookings/{booking['id']}", headers=alice).json()
    assert stored["payment_status"] == "refunded"
    assert stored["status"] == "cancelled"
    assert client.get("/api/admin/stats", headers=admin).json()["bookings"]["revenue"] == 0


def test_admin_stats_requires_admin(client):
    _register(client, "alice@example.com")
    _register(client, ADMIN_EMAIL)
    alice = _login(client, "alice@example.com")
    admin = _login(client, ADMIN_EMAIL)
    _checkout(client, alice)

    assert client.get("/api/admin/stats", headers=alice).status_code == 403
    stats = client.get("/api/admin/stats", headers=admin).json()
    assert stats["bookings"]["total"] == 1
    assert stats["bookings"]["revenue"] == 0
    assert stats["users"] == {"total": 2, "active": 1}


def test_admin_manages_destinations(client):
    _register(client, ADMIN_EMAIL)
    admin = _login(client, ADMIN_EMAIL)

    resp = client.post(
        "/api/destinations",
        json={
            "name": "Machu Picchu",
            "country": "Peru",
            "description": "Inca citadel high in the Andes.",
            "coordinates": {"lat": -13.1631, "lng": -72.545},
            "category": "historical",
            "price": 2800,
            "rating": 4.9,
            "difficulty": "moderate",
        },
        headers=admin,
    )
    assert resp.status_code == 201, resp.text
    created = resp.json()

    bad = client.patch(f"/api/destinations/{created['id']}", json={"rating": 7}, headers=admin)
    assert bad.status_code == 422
    assert client.delete(f"/api/destinations/{created['id']}", headers=admin).status_code == 204
