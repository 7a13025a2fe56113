from tomenest.extensions import db


class Book(db.Model):
    __tablename__ = "books"

    openlibraryid = db.Column(db.String(32), primary_key=True)
    isbn = db.Column(db.String(32), nullable=True, index=True)
    title = db.Column(db.String(300), nullable=False, index=True)
    author = db.Column(db.String(300), nullable=False, default="")
    release_year = db.Column(db.Integer, nullable=True)
    publisher = db.Column(db.String(200), nullable=True)
    language = db.Column(db.String(16), nullable=True)
    pages = db.Column(db.Integer, nullable=True)

    stock_items = db.relationship("StockItem", back_populates="book")

    @property
    def cover_url(self) -> str:
        return cover_url_for(self.openlibraryid)


def cover_url_for(olid: str) -> str:
    return f"https://covers.openlibrary.org/b/olid/{olid}-M.jpg?default=false"
