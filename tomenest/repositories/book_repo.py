from tomenest.extensions import db
from tomenest.models.book import Book


class BookRepo:
    def __init__(self, session=None):
        self.session = session or db.session

    def get(self, olid: str):
        return self.session.get(Book, olid)

    def exists(self, olid: str) -> bool:
        return self.session.query(Book.openlibraryid).filter_by(openlibraryid=olid).first() is not None

    def upsert(self, data: dict) -> Book:
        book = self.session.get(Book, data["openlibraryid"], with_for_update=True)
        if book is None:
            book = Book(openlibraryid=data["openlibraryid"])
            self.session.add(book)

        book.isbn = data.get("isbn") or None
        book.title = data["title"]
        book.author = data.get("author") or ""
        book.release_year = data.get("release_year")
        book.publisher = data.get("publisher") or None
        book.language = data.get("language") or None
        book.pages = data.get("pages")

        self.session.flush()
        return book
