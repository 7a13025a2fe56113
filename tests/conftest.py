import pytest

from tomenest import create_app
from tomenest.config import Config
from tomenest.errors import NotFoundError
from tomenest.extensions import db

FUTURE_START = "2099-01-16T10:00:00"
FUTURE_END = "2099-01-20T10:00:00"

EDITIONS = {
    "OL1M": {
        "key": "/books/OL1M",
        "title": "Tutunamayanlar",
        "by_statement": "Oğuz Atay",
        "publishers": ["İletişim"],
        "publish_date": "1972",
        "isbn_13": ["9789754700114"],
        "languages": [{"key": "/languages/tur"}],
        "number_of_pages": 724,
    },
    "OL2M": {
        "key": "/books/OL2M",
        "title": "İnce Memed",
        "by_statement": "Yaşar Kemal",
        "publish_date": "March 1955",
        "isbn_10": ["9750807149"],
    },
}


# work -> edition key listesi
WORKS = {
    "OL10W": ["/books/OL1M", "/books/OL3M"],
    "OL20W": [],
}


class StubCatalog:
    """OpenLibrary yerine: ağ yok, çağrılar kaydedilir."""

    def __init__(self, editions=None):
        self.editions = dict(editions or EDITIONS)
        self.calls = []

    def search(self, q, limit=20):
        self.calls.append(("search", q, limit))
        docs = [
            {"key": e["key"], "title": e["title"]}
            for e in self.editions.values()
            if q.lower() in e["title"].lower()
        ]
        return {"numFound": len(docs), "docs": docs[:limit]}

    def work_editions(self, work_id, limit=1):
        self.calls.append(("work_editions", work_id, limit))
        if work_id not in WORKS:
            raise NotFoundError("OpenLibrary kaydı bulunamadı")
        keys = WORKS[work_id][:limit]
        return {"size": len(WORKS[work_id]), "entries": [{"key": k} for k in keys]}

    def edition(self, olid):
        self.calls.append(("edition", olid))
        if olid not in self.editions:
            raise NotFoundError("OpenLibrary kaydı bulunamadı")
        return self.editions[olid]


class SqliteTestingConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret"
    JWT_SECRET_KEY = "test-jwt-secret-key-that-is-long-enough"
    SCHEMA_STRATEGY = "create_all"
    CORS_ORIGINS = ["http://localhost:5173"]
    LOG_LEVEL = "DEBUG"


@pytest.fixture
def catalog():
    return StubCatalog()


@pytest.fixture
def app(tmp_path, catalog):
    # thread testleri için dosya tabanlı sqlite (memory db bağlantıya özel)
    app = create_app(
        SqliteTestingConfig,
        catalog=catalog,
        SQLALCHEMY_DATABASE_URI=f"sqlite:///{tmp_path / 'test.db'}",
    )
    yield app

    with app.app_context():
        db.session.remove()
        db.engine.dispose()


@pytest.fixture
def client(app):
    return app.test_client()


def register(client, email, name="Test", password="password123"):
    return client.post("/api/auth/register", json={"email": email, "name": name, "password": password})


@pytest.fixture
def admin_client(app):
    c = app.test_client()
    # ilk kayıt admin olur
    r = register(c, "admin@example.com", name="Admin")
    assert r.status_code == 201
    assert r.get_json()["user"]["role"] == "admin"
    return c


@pytest.fixture
def user_client(app, admin_client):
    c = app.test_client()
    r = register(c, "user@example.com", name="Okur")
    assert r.status_code == 201
    assert r.get_json()["user"]["role"] == "user"
    return c


def set_stock(admin_client, olid="OL1M", quality=3, quantity=1):
    r = admin_client.post("/api/stock/set", json={"olid": olid, "quality": quality, "quantity": quantity})
    assert r.status_code == 200, r.get_json()
    return r.get_json()["stockid"]


def request_rental(client, stock_id, note=None):
    r = client.post("/api/rentals/request", json={"stockId": stock_id, "note": note})
    assert r.status_code == 201, r.get_json()
    return r.get_json()["rentalid"]


def approve(admin_client, rental_id, start=FUTURE_START, end=FUTURE_END):
    return admin_client.post(
        "/api/rentals/admin/approve",
        json={"requestId": rental_id, "startAt": start, "endAt": end},
    )


@pytest.fixture
def stock_id(admin_client):
    return set_stock(admin_client)


def stock_quantity(app, stock_id):
    from tomenest.models.stock import StockItem
    with app.app_context():
        return db.session.get(StockItem, stock_id).quantity


def rental_status(app, rental_id):
    from tomenest.models.rental import Rental
    with app.app_context():
        return db.session.get(Rental, rental_id).status


def user_id_by_email(app, email):
    from tomenest.models.user import User
    with app.app_context():
        return db.session.query(User).filter_by(email=email).one().id
