from tomenest.extensions import db
from tomenest.utils.clock import utcnow


class WishlistEntry(db.Model):
    __tablename__ = "wishlist"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    openlibraryid = db.Column(db.String(32), nullable=False, index=True)

    # listeyi katalogdan bağımsız çizebilmek için küçük snapshot
    title = db.Column(db.String(300), nullable=False, default="")
    author = db.Column(db.String(300), nullable=False, default="")
    cover_url = db.Column(db.String(500), nullable=True)
    release_year = db.Column(db.Integer, nullable=True)

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)

    __table_args__ = (
        db.UniqueConstraint("user_id", "openlibraryid", name="uq_wishlist_user_olid"),
    )
