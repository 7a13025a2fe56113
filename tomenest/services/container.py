from dataclasses import dataclass

from flask import current_app

from tomenest.repositories.book_repo import BookRepo
from tomenest.repositories.rental_repo import RentalRepo
from tomenest.repositories.stock_repo import StockRepo
from tomenest.repositories.user_repo import UserRepo
from tomenest.repositories.wishlist_repo import WishlistRepo
from tomenest.services.auth_service import AuthService
from tomenest.services.book_service import BookService
from tomenest.services.openlibrary_client import OpenLibraryClient
from tomenest.services.rental_service import RentalService
from tomenest.services.stock_service import StockService
from tomenest.services.user_service import UserService
from tomenest.services.wishlist_service import WishlistService
from tomenest.utils.clock import utcnow

EXTENSION_KEY = "tomenest"


@dataclass
class Services:
    auth: AuthService
    users: UserService
    books: BookService
    stock: StockService
    wishlist: WishlistService
    rentals: RentalService


def build_services(app, catalog: OpenLibraryClient | None = None, clock=utcnow) -> Services:
    """Composition root: repo'lar ve servisler açıkça birbirine bağlanır."""
    catalog = catalog or OpenLibraryClient(
        app.config["OPENLIBRARY_BASE_URL"],
        timeout=app.config["OPENLIBRARY_TIMEOUT"],
    )

    user_repo = UserRepo()
    book_repo = BookRepo()
    stock_repo = StockRepo()

    books = BookService(book_repo, catalog)
    return Services(
        auth=AuthService(user_repo),
        users=UserService(user_repo),
        books=books,
        stock=StockService(stock_repo, books),
        wishlist=WishlistService(WishlistRepo()),
        rentals=RentalService(RentalRepo(), stock_repo, clock=clock),
    )


def services() -> Services:
    return current_app.extensions[EXTENSION_KEY]
