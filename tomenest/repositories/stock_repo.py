from sqlalchemy.orm import joinedload

from tomenest.extensions import db
from tomenest.models.book import Book
from tomenest.models.rental import Rental
from tomenest.models.stock import StockItem


class StockRepo:
    def __init__(self, session=None):
        self.session = session or db.session

    def get(self, stock_id: int):
        return self.session.get(StockItem, stock_id)

    def get_for_update(self, stock_id: int):
        # SELECT ... FOR UPDATE: transaction bitene kadar satır kilitli
        return (
            self.session.query(StockItem)
            .filter(StockItem.id == stock_id)
            .with_for_update()
            .populate_existing()
            .first()
        )

    def find_for_update(self, olid: str, quality: int):
        return (
            self.session.query(StockItem)
            .filter(StockItem.openlibraryid == olid, StockItem.quality == quality)
            .with_for_update()
            .populate_existing()
            .first()
        )

    def create(self, item: StockItem):
        self.session.add(item)
        self.session.flush()
        return item

    def decrement(self, stock_id: int) -> int:
        """quantity > 0 ise 1 düşer. Etkilenen satır sayısını döner."""
        return (
            self.session.query(StockItem)
            .filter(StockItem.id == stock_id, StockItem.quantity > 0)
            .update({StockItem.quantity: StockItem.quantity - 1}, synchronize_session=False)
        )

    def increment(self, stock_id: int) -> int:
        return (
            self.session.query(StockItem)
            .filter(StockItem.id == stock_id)
            .update({StockItem.quantity: StockItem.quantity + 1}, synchronize_session=False)
        )

    def has_rentals(self, stock_id: int) -> bool:
        return self.session.query(Rental.id).filter(Rental.stock_id == stock_id).first() is not None

    def delete(self, item: StockItem):
        self.session.delete(item)
        self.session.flush()

    def list_with_book(self):
        return (
            self.session.query(StockItem)
            .join(Book, Book.openlibraryid == StockItem.openlibraryid)
            .options(joinedload(StockItem.book))
            .order_by(Book.title.asc(), StockItem.quality.asc())
            .all()
        )
