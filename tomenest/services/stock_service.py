from flask import current_app

from tomenest.database import atomic
from tomenest.errors import ConflictError, NotFoundError
from tomenest.models.stock import StockItem
from tomenest.repositories.stock_repo import StockRepo
from tomenest.services.book_service import BookService, normalize_olid
from tomenest.utils.auth import Principal, ensure_admin
from tomenest.utils.validation import parse_id, parse_int

# MySQL INT sınırı
QUANTITY_MAX = 2**31 - 1


class StockService:
    def __init__(self, stock: StockRepo, books: BookService):
        self.stock = stock
        self.books = books

    def list_stock(self):
        return self.stock.list_with_book()

    def set_stock(self, principal: Principal, olid, quality, quantity, import_if_missing=True) -> int:
        ensure_admin(principal)
        olid = normalize_olid(olid)
        quality = parse_int(quality, "quality", minimum=1, maximum=5)
        quantity = parse_int(quantity, "quantity", minimum=0, maximum=QUANTITY_MAX)

        # dış HTTP çağrısı transaction dışında yapılır
        mapped = self.books.fetch_if_missing(olid) if import_if_missing else None

        with atomic():
            if mapped is not None:
                self.books.upsert(mapped)
            elif not self.books.exists(olid):
                raise NotFoundError(f"Katalogda kitap yok: {olid}")

            item = self.stock.find_for_update(olid, quality)
            if item is None:
                item = self.stock.create(StockItem(openlibraryid=olid, quality=quality, quantity=quantity))
            else:
                item.quantity = quantity
            stock_id = item.id

        current_app.logger.info(f"[stock] set olid={olid} quality={quality} quantity={quantity} id={stock_id}")
        return stock_id

    def delete_stock(self, principal: Principal, stock_id):
        ensure_admin(principal)
        stock_id = parse_id(stock_id, "stockId")

        with atomic():
            item = self.stock.get_for_update(stock_id)
            if item is None:
                raise ConflictError("Stok kaydı bulunamadı")
            if self.stock.has_rentals(stock_id):
                raise ConflictError("Bu stok kaydına bağlı kiralamalar var, silinemez")
            self.stock.delete(item)

        current_app.logger.info(f"[stock] deleted id={stock_id} by={principal.id}")
        return True
