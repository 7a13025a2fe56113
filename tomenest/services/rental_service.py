from flask import current_app

from tomenest.database import atomic
from tomenest.errors import ConflictError, NotFoundError, ValidationError
from tomenest.models.rental import OUT_STATUSES, PENDING, Rental
from tomenest.repositories.rental_repo import RentalRepo
from tomenest.repositories.stock_repo import StockRepo
from tomenest.utils.auth import Principal, ensure_admin
from tomenest.utils.clock import parse_timestamp, utcnow
from tomenest.utils.validation import parse_id

NOTE_MAX_LEN = 500


def parse_window(start_at, end_at):
    start = parse_timestamp(start_at)
    end = parse_timestamp(end_at)
    if start is None or end is None:
        raise ValidationError("startAt ve endAt zorunlu ve geçerli tarih olmalı")
    if end <= start:
        raise ValidationError("endAt, startAt'ten sonra olmalı")
    return start, end


class RentalService:
    """
    Kiralama yaşam döngüsü:

        pending -> approved -> completed
        pending -> dismissed
        approved -> not_returned (end_at geçince, okuma anında) -> completed

    Stok adedi sadece approve (-1) ve complete (+1) içinde, kilitli
    transaction'da değişir. Kilit sırası sabittir: önce rental, sonra stock.
    """

    def __init__(self, rentals: RentalRepo, stock: StockRepo, clock=utcnow):
        self.rentals = rentals
        self.stock = stock
        self.clock = clock

    # -----------------------------
    # User
    # -----------------------------
    def request_rental(self, principal: Principal, stock_id, note=None) -> Rental:
        stock_id = parse_id(stock_id, "stockId")

        note = (str(note).strip() if note is not None else "") or None
        if note and len(note) > NOTE_MAX_LEN:
            raise ValidationError(f"note en fazla {NOTE_MAX_LEN} karakter olabilir")

        with atomic():
            # talep stok ayırmaz; quantity=0 olsa da talep açılabilir
            if self.stock.get(stock_id) is None:
                raise NotFoundError("Stok kaydı bulunamadı")

            rental = self.rentals.create(Rental(
                user_id=principal.id,
                stock_id=stock_id,
                status=PENDING,
                note=note,
                created_at=self.clock(),
            ))
            rental_id = rental.id

        current_app.logger.info(f"[rental] requested id={rental_id} user={principal.id} stock={stock_id}")
        return self.rentals.get(rental_id)

    def list_mine(self, principal: Principal):
        self.sweep_overdue()
        return self.rentals.list_by_user(principal.id)

    # -----------------------------
    # Admin
    # -----------------------------
    def approve_rental(self, principal: Principal, rental_id, start_at, end_at):
        ensure_admin(principal)
        start, end = parse_window(start_at, end_at)
        rental_id = parse_id(rental_id, "requestId")

        with atomic():
            rental = self.rentals.get_for_update(rental_id)
            if rental is None:
                raise NotFoundError("Kiralama talebi bulunamadı")
            if rental.status != PENDING:
                raise ConflictError(f"Talep zaten sonuçlanmış (status={rental.status})")

            stock_id = rental.stock_id
            stock = self.stock.get_for_update(stock_id)
            if stock is None:
                raise NotFoundError("Stok kaydı bulunamadı")
            if stock.quantity <= 0:
                raise ConflictError("Stokta kopya yok")

            now = self.clock()
            # kilit altında bile status/adet tekrar koşul olarak kontrol edilir
            if self.rentals.mark_approved(rental_id, start, end, now, principal.id) != 1:
                raise ConflictError("Talep zaten sonuçlanmış")
            if self.stock.decrement(stock_id) != 1:
                raise ConflictError("Stokta kopya yok")

        current_app.logger.info(
            f"[rental] approved id={rental_id} stock={stock_id} by={principal.id} "
            f"window={start.isoformat()}..{end.isoformat()}"
        )
        return True

    def dismiss_rental(self, principal: Principal, rental_id):
        ensure_admin(principal)
        rental_id = parse_id(rental_id, "requestId")

        with atomic():
            changed = self.rentals.mark_dismissed(rental_id, self.clock(), principal.id)
            if changed != 1:
                if self.rentals.get(rental_id) is None:
                    raise NotFoundError("Kiralama talebi bulunamadı")
                raise ConflictError("Sadece bekleyen talepler reddedilebilir")

        current_app.logger.info(f"[rental] dismissed id={rental_id} by={principal.id}")
        return True

    def complete_rental(self, principal: Principal, rental_id):
        ensure_admin(principal)
        rental_id = parse_id(rental_id, "rentalId")

        with atomic():
            rental = self.rentals.get_for_update(rental_id)
            if rental is None:
                raise NotFoundError("Kiralama bulunamadı")
            if rental.status not in OUT_STATUSES:
                raise ConflictError(f"Sadece approved/not_returned kiralamalar tamamlanabilir (status={rental.status})")

            stock_id = rental.stock_id
            if self.stock.get_for_update(stock_id) is None:
                raise NotFoundError("Stok kaydı bulunamadı")

            if self.rentals.mark_completed(rental_id, self.clock(), principal.id) != 1:
                raise ConflictError("Kiralama zaten tamamlanmış")
            self.stock.increment(stock_id)

        current_app.logger.info(f"[rental] completed id={rental_id} stock={stock_id} by={principal.id}")
        return True

    def sweep_overdue(self) -> int:
        """approved ve end_at geçmiş kiralamaları not_returned yapar. İdempotent."""
        with atomic():
            changed = self.rentals.mark_overdue(self.clock())

        if changed:
            current_app.logger.info(f"[rental] overdue sweep: {changed} kiralama not_returned oldu")
        return changed

    def list_pending_requests(self, principal: Principal):
        ensure_admin(principal)
        self.sweep_overdue()
        return self.rentals.list_pending()

    def list_approved(self, principal: Principal):
        ensure_admin(principal)
        self.sweep_overdue()
        return self.rentals.list_approved()

    def list_active(self, principal: Principal):
        ensure_admin(principal)
        self.sweep_overdue()
        return self.rentals.list_active()
