from datetime import datetime

import pytest

from conftest import (
    FUTURE_END, FUTURE_START, approve, rental_status, request_rental, set_stock, stock_quantity, user_id_by_email,
)
from tomenest.errors import AuthorizationError, ConflictError
from tomenest.extensions import db
from tomenest.models.rental import Rental
from tomenest.services.container import services
from tomenest.utils.auth import Principal


def _expire_rental(app, rental_id):
    with app.app_context():
        db.session.query(Rental).filter_by(id=rental_id).update({
            Rental.start_at: datetime(2020, 1, 1, 10, 0),
            Rental.end_at: datetime(2020, 1, 2, 10, 0),
        })
        db.session.commit()


# -----------------------------
# Talep
# -----------------------------
def test_request_creates_pending_rental(app, user_client, stock_id):
    rid = request_rental(user_client, stock_id, note="  hafta sonu  ")

    assert rental_status(app, rid) == "pending"
    rows = user_client.get("/api/rentals/my").get_json()["data"]
    assert [r["rentalid"] for r in rows] == [rid]
    assert rows[0]["note"] == "hafta sonu"
    assert rows[0]["title"] == "Tutunamayanlar"
    assert rows[0]["startat"] is None
    # talep stok ayırmaz
    assert stock_quantity(app, stock_id) == 1


def test_request_requires_existing_stock(user_client):
    r = user_client.post("/api/rentals/request", json={"stockId": 999})
    assert r.status_code == 404
    assert r.get_json()["code"] == "not_found"


def test_request_rejects_invalid_stock_id(user_client):
    for bad in (None, "", "abc", 0, -3, True, 1.5, 10**30, "99999999999999999999999"):
        r = user_client.post("/api/rentals/request", json={"stockId": bad})
        assert r.status_code == 400, bad
        assert r.get_json()["code"] == "validation"


def test_request_allowed_when_out_of_stock(app, admin_client, user_client):
    sid = set_stock(admin_client, quantity=0)
    rid = request_rental(user_client, sid)
    assert rental_status(app, rid) == "pending"


def test_request_requires_login(client, stock_id):
    r = client.post("/api/rentals/request", json={"stockId": stock_id})
    assert r.status_code == 401


# -----------------------------
# Senaryolar
# -----------------------------
def test_second_approval_on_single_copy_conflicts_then_dismiss(app, admin_client, user_client, stock_id):
    r1 = request_rental(user_client, stock_id)
    r2 = request_rental(user_client, stock_id)

    resp = approve(admin_client, r1, "2026-01-16T10:00", "2026-01-20T10:00")
    assert resp.status_code == 200
    assert stock_quantity(app, stock_id) == 0

    resp = approve(admin_client, r2, "2026-01-16T10:00", "2026-01-20T10:00")
    assert resp.status_code == 409
    assert resp.get_json()["code"] == "conflict"
    assert rental_status(app, r2) == "pending"
    assert stock_quantity(app, stock_id) == 0

    resp = admin_client.post("/api/rentals/admin/dismiss", json={"requestId": r2})
    assert resp.status_code == 200
    assert rental_status(app, r2) == "dismissed"


def test_overdue_sweep_then_complete_restores_stock(app, admin_client, user_client, stock_id):
    rid = request_rental(user_client, stock_id)
    assert approve(admin_client, rid).status_code == 200
    _expire_rental(app, rid)

    r = admin_client.post("/api/rentals/admin/sweep")
    assert r.get_json()["updated"] == 1
    assert rental_status(app, rid) == "not_returned"

    # ikinci sweep hiçbir şeyi değiştirmez
    r = admin_client.post("/api/rentals/admin/sweep")
    assert r.get_json()["updated"] == 0
    assert rental_status(app, rid) == "not_returned"

    r = admin_client.post("/api/rentals/admin/complete", json={"rentalId": rid})
    assert r.status_code == 200
    assert rental_status(app, rid) == "completed"
    assert stock_quantity(app, stock_id) == 1


def test_approve_rejects_empty_window(app, admin_client, user_client, stock_id):
    rid = request_rental(user_client, stock_id)

    r = approve(admin_client, rid, "2099-01-16T10:00", "2099-01-16T10:00")
    assert r.status_code == 400
    assert r.get_json()["code"] == "validation"
    assert rental_status(app, rid) == "pending"
    assert stock_quantity(app, stock_id) == 1


def test_approve_rejects_missing_or_bad_dates(app, admin_client, user_client, stock_id):
    rid = request_rental(user_client, stock_id)

    for start, end in ((None, FUTURE_END), (FUTURE_START, None), ("dün", FUTURE_END), (FUTURE_END, FUTURE_START),
                       ("0001-01-01T00:00:00+01:00", FUTURE_END)):
        r = approve(admin_client, rid, start, end)
        assert r.status_code == 400, (start, end)
    assert rental_status(app, rid) == "pending"


def test_non_admin_cannot_approve(app, user_client, stock_id):
    rid = request_rental(user_client, stock_id)

    r = approve(user_client, rid)
    assert r.status_code == 403
    assert r.get_json()["code"] == "forbidden"
    assert rental_status(app, rid) == "pending"
    assert stock_quantity(app, stock_id) == 1


def test_non_admin_principal_rejected_by_service(app, user_client, stock_id):
    rid = request_rental(user_client, stock_id)
    uid = user_id_by_email(app, "user@example.com")

    with app.app_context():
        with pytest.raises(AuthorizationError):
            services().rentals.approve_rental(Principal(id=uid, role="user"), rid, FUTURE_START, FUTURE_END)

    assert rental_status(app, rid) == "pending"


# -----------------------------
# Geçiş hataları
# -----------------------------
def test_approve_unknown_rental(admin_client, stock_id):
    r = approve(admin_client, 4242)
    assert r.status_code == 404


def test_approve_twice_conflicts_and_decrements_once(app, admin_client, user_client):
    sid = set_stock(admin_client, quantity=2)
    rid = request_rental(user_client, sid)

    assert approve(admin_client, rid).status_code == 200
    assert approve(admin_client, rid).status_code == 409
    assert stock_quantity(app, sid) == 1


def test_dismiss_errors(app, admin_client, user_client, stock_id):
    r = admin_client.post("/api/rentals/admin/dismiss", json={"requestId": 777})
    assert r.status_code == 404

    rid = request_rental(user_client, stock_id)
    assert approve(admin_client, rid).status_code == 200
    r = admin_client.post("/api/rentals/admin/dismiss", json={"requestId": rid})
    assert r.status_code == 409
    assert rental_status(app, rid) == "approved"


def test_complete_errors(app, admin_client, user_client, stock_id):
    r = admin_client.post("/api/rentals/admin/complete", json={"rentalId": 777})
    assert r.status_code == 404

    rid = request_rental(user_client, stock_id)
    r = admin_client.post("/api/rentals/admin/complete", json={"rentalId": rid})
    assert r.status_code == 409
    assert rental_status(app, rid) == "pending"
    assert stock_quantity(app, stock_id) == 1


def test_terminal_states_are_closed(app, admin_client, user_client, stock_id):
    dismissed = request_rental(user_client, stock_id)
    assert admin_client.post("/api/rentals/admin/dismiss", json={"requestId": dismissed}).status_code == 200

    completed = request_rental(user_client, stock_id)
    assert approve(admin_client, completed).status_code == 200
    assert admin_client.post("/api/rentals/admin/complete", json={"rentalId": completed}).status_code == 200

    for rid, status in ((dismissed, "dismissed"), (completed, "completed")):
        assert approve(admin_client, rid).status_code == 409
        assert admin_client.post("/api/rentals/admin/dismiss", json={"requestId": rid}).status_code == 409
        assert admin_client.post("/api/rentals/admin/complete", json={"rentalId": rid}).status_code == 409
        if status == "completed":
            _expire_rental(app, rid)
        admin_client.post("/api/rentals/admin/sweep")
        assert rental_status(app, rid) == status

    assert stock_quantity(app, stock_id) == 1


def test_quantity_stays_in_range_over_approve_complete_cycles(app, admin_client, user_client, stock_id):
    for _ in range(3):
        a = request_rental(user_client, stock_id)
        b = request_rental(user_client, stock_id)

        assert approve(admin_client, a).status_code == 200
        assert stock_quantity(app, stock_id) == 0
        assert approve(admin_client, b).status_code == 409
        assert stock_quantity(app, stock_id) == 0

        assert admin_client.post("/api/rentals/admin/complete", json={"rentalId": a}).status_code == 200
        assert stock_quantity(app, stock_id) == 1
        assert admin_client.post("/api/rentals/admin/dismiss", json={"requestId": b}).status_code == 200


def test_failure_inside_transaction_rolls_back(app, admin_client, user_client, stock_id, monkeypatch):
    rid = request_rental(user_client, stock_id)
    svc = app.extensions["tomenest"].rentals

    def boom(stock_id):
        raise RuntimeError("disk dolu")

    # status güncellendikten sonra patlar; hepsi geri alınmalı
    monkeypatch.setattr(svc.stock, "decrement", boom)

    r = approve(admin_client, rid)
    assert r.status_code == 500
    body = r.get_json()
    assert body["code"] == "unexpected"
    assert "disk dolu" not in body["message"]

    assert rental_status(app, rid) == "pending"
    assert stock_quantity(app, stock_id) == 1


# -----------------------------
# Listeler ve overdue
# -----------------------------
def test_listing_runs_overdue_sweep(app, admin_client, user_client, stock_id):
    rid = request_rental(user_client, stock_id)
    assert approve(admin_client, rid).status_code == 200
    _expire_rental(app, rid)

    rows = user_client.get("/api/rentals/my").get_json()["data"]
    assert rows[0]["status"] == "not_returned"
    assert rows[0]["endat"] == "2020-01-02 10:00:00"


def test_sweep_uses_service_clock(app, admin_client, user_client, stock_id, monkeypatch):
    rid = request_rental(user_client, stock_id)
    assert approve(admin_client, rid).status_code == 200

    svc = app.extensions["tomenest"].rentals
    monkeypatch.setattr(svc, "clock", lambda: datetime(2099, 1, 20, 10, 0, 1))

    with app.app_context():
        assert svc.sweep_overdue() == 1
        assert svc.sweep_overdue() == 0
    assert rental_status(app, rid) == "not_returned"


def test_admin_listings(app, admin_client, user_client):
    sid = set_stock(admin_client, quantity=3)
    pending = request_rental(user_client, sid)
    approved = request_rental(user_client, sid)
    overdue = request_rental(user_client, sid)
    assert approve(admin_client, approved).status_code == 200
    assert approve(admin_client, overdue).status_code == 200
    _expire_rental(app, overdue)

    rows = admin_client.get("/api/rentals/admin/requests").get_json()["data"]
    assert [r["rentalid"] for r in rows] == [pending]
    assert rows[0]["useremail"] == "user@example.com"
    assert rows[0]["username"] == "Okur"

    rows = admin_client.get("/api/rentals/admin/approved").get_json()["data"]
    assert [r["rentalid"] for r in rows] == [approved]

    rows = admin_client.get("/api/rentals/admin/active").get_json()["data"]
    # en erken teslim tarihi en üstte
    assert [r["rentalid"] for r in rows] == [overdue, approved]
    assert [r["status"] for r in rows] == ["not_returned", "approved"]


def test_admin_listings_forbidden_for_users(user_client):
    for path in ("/api/rentals/admin/requests", "/api/rentals/admin/approved", "/api/rentals/admin/active"):
        assert user_client.get(path).status_code == 403


def test_my_rentals_only_show_own(app, admin_client, user_client, stock_id):
    request_rental(user_client, stock_id)
    admin_rid = request_rental(admin_client, stock_id)

    mine = admin_client.get("/api/rentals/my").get_json()["data"]
    assert [r["rentalid"] for r in mine] == [admin_rid]


def test_service_conflict_is_value_error():
    assert issubclass(ConflictError, ValueError)
