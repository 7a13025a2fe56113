from contextlib import contextmanager

from sqlalchemy import event

from tomenest.extensions import db

# metadata'nın dolu olması için tüm modeller burada yüklenir
from tomenest.models import book, rental, stock, user, wishlist  # noqa: F401


def _install_sqlite_hooks(engine, busy_timeout_ms: int):
    """
    SQLite FOR UPDATE desteklemez. Yazma işlemlerinin sıralanması için her
    transaction BEGIN IMMEDIATE ile açılır (SQLAlchemy'nin pysqlite tarifi).
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        # pysqlite'ın kendi BEGIN'ini kapat, transaction'ı biz yöneteceğiz
        dbapi_connection.isolation_level = None
        cur = dbapi_connection.cursor()
        cur.execute("PRAGMA foreign_keys = ON")
        cur.execute(f"PRAGMA busy_timeout = {int(busy_timeout_ms)}")
        cur.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def ensure_schema(app):
    """
    Şema uygulama açılışında bir kez kurulur; request başına kontrol yok.
    SCHEMA_STRATEGY:
      - upgrade    -> Flask-Migrate (alembic) ile migrations/ uygulanır
      - create_all -> modellerden tablo oluşturulur (dev/test)
      - none       -> dokunulmaz
    """
    strategy = (app.config.get("SCHEMA_STRATEGY") or "create_all").lower()

    with app.app_context():
        engine = db.engine
        if engine.dialect.name == "sqlite":
            _install_sqlite_hooks(engine, app.config.get("SQLITE_BUSY_TIMEOUT_MS", 10000))

        if strategy == "upgrade":
            from flask_migrate import upgrade
            upgrade(directory=app.config["MIGRATIONS_DIR"])
        elif strategy == "create_all":
            db.create_all()
        elif strategy != "none":
            raise ValueError(f"Bilinmeyen SCHEMA_STRATEGY: {strategy}")

        app.logger.info(f"[schema] strategy={strategy} dialect={engine.dialect.name}")


@contextmanager
def atomic(session=None):
    """
    Açık transaction sınırı. Başarıda commit, her hata yolunda (beklenmeyen
    exception dahil) hata yukarı çıkmadan önce rollback.
    """
    session = session or db.session()
    # request içinde autobegin ile açılmış okuma transaction'ını kapat
    if session.in_transaction():
        session.commit()
    with session.begin():
        yield session
