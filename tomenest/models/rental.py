from tomenest.extensions import db
from tomenest.utils.clock import utcnow

PENDING = "pending"
APPROVED = "approved"
DISMISSED = "dismissed"
NOT_RETURNED = "not_returned"
COMPLETED = "completed"

STATUSES = (PENDING, APPROVED, DISMISSED, NOT_RETURNED, COMPLETED)
# kopya kullanıcıda: complete ile stoğa döner
OUT_STATUSES = (APPROVED, NOT_RETURNED)
TERMINAL_STATUSES = (DISMISSED, COMPLETED)


class Rental(db.Model):
    __tablename__ = "rentals"

    id = db.Column(db.Integer, primary_key=True)

    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    stock_id = db.Column(db.Integer, db.ForeignKey("stock.id"), nullable=False, index=True)

    # approve anında birlikte set edilir
    start_at = db.Column(db.DateTime, nullable=True)
    end_at = db.Column(db.DateTime, nullable=True, index=True)

    status = db.Column(db.String(20), nullable=False, default=PENDING, index=True)
    note = db.Column(db.String(500), nullable=True)

    created_at = db.Column(db.DateTime, nullable=False, default=utcnow)
    decided_at = db.Column(db.DateTime, nullable=True)
    decided_by = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=True)
    returned_at = db.Column(db.DateTime, nullable=True)
    returned_by = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=True)

    user = db.relationship("User", foreign_keys=[user_id], backref="rentals")
    stock_item = db.relationship("StockItem", backref="rentals")

    __table_args__ = (
        db.CheckConstraint(
            "status IN ('pending', 'approved', 'dismissed', 'not_returned', 'completed')",
            name="ck_rentals_status",
        ),
        db.CheckConstraint(
            "(start_at IS NULL AND end_at IS NULL) OR "
            "(start_at IS NOT NULL AND end_at IS NOT NULL AND end_at > start_at)",
            name="ck_rentals_window",
        ),
    )
