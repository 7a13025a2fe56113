from datetime import datetime

from sqlalchemy.orm import joinedload

from tomenest.extensions import db
from tomenest.models.rental import (
    APPROVED, COMPLETED, DISMISSED, NOT_RETURNED, OUT_STATUSES, PENDING, Rental,
)
from tomenest.models.stock import StockItem


class RentalRepo:
    def __init__(self, session=None):
        self.session = session or db.session

    def get(self, rental_id: int):
        return self.session.get(Rental, rental_id)

    def get_for_update(self, rental_id: int):
        return (
            self.session.query(Rental)
            .filter(Rental.id == rental_id)
            .with_for_update()
            .populate_existing()
            .first()
        )

    def create(self, rental: Rental):
        self.session.add(rental)
        self.session.flush()
        return rental

    # --- koşullu (compare-and-swap) geçişler: etkilenen satır sayısı döner ---

    def mark_approved(self, rental_id: int, start_at: datetime, end_at: datetime,
                      now: datetime, admin_id: int) -> int:
        return (
            self.session.query(Rental)
            .filter(Rental.id == rental_id, Rental.status == PENDING)
            .update({
                Rental.status: APPROVED,
                Rental.start_at: start_at,
                Rental.end_at: end_at,
                Rental.decided_at: now,
                Rental.decided_by: admin_id,
            }, synchronize_session=False)
        )

    def mark_dismissed(self, rental_id: int, now: datetime, admin_id: int) -> int:
        return (
            self.session.query(Rental)
            .filter(Rental.id == rental_id, Rental.status == PENDING)
            .update({
                Rental.status: DISMISSED,
                Rental.decided_at: now,
                Rental.decided_by: admin_id,
            }, synchronize_session=False)
        )

    def mark_completed(self, rental_id: int, now: datetime, admin_id: int) -> int:
        return (
            self.session.query(Rental)
            .filter(Rental.id == rental_id, Rental.status.in_(OUT_STATUSES))
            .update({
                Rental.status: COMPLETED,
                Rental.returned_at: now,
                Rental.returned_by: admin_id,
            }, synchronize_session=False)
        )

    def mark_overdue(self, now: datetime) -> int:
        return (
            self.session.query(Rental)
            .filter(Rental.status == APPROVED, Rental.end_at.isnot(None), Rental.end_at < now)
            .update({Rental.status: NOT_RETURNED}, synchronize_session=False)
        )

    # --- listeler (stok + kitap + kullanıcı ile birlikte) ---

    def _listing(self):
        return self.session.query(Rental).options(
            joinedload(Rental.stock_item).joinedload(StockItem.book),
            joinedload(Rental.user),
        )

    def list_by_user(self, user_id: int):
        return (
            self._listing()
            .filter(Rental.user_id == user_id)
            .order_by(Rental.created_at.desc(), Rental.id.desc())
            .all()
        )

    def list_pending(self):
        # FIFO: en eski talep en üstte
        return (
            self._listing()
            .filter(Rental.status == PENDING)
            .order_by(Rental.created_at.asc(), Rental.id.asc())
            .all()
        )

    def list_approved(self):
        return (
            self._listing()
            .filter(Rental.status == APPROVED)
            .order_by(Rental.decided_at.desc(), Rental.id.desc())
            .all()
        )

    def list_active(self):
        # teslimi en yakın (veya gecikmiş) olan en üstte
        return (
            self._listing()
            .filter(Rental.status.in_(OUT_STATUSES))
            .order_by(Rental.end_at.asc(), Rental.id.asc())
            .all()
        )
