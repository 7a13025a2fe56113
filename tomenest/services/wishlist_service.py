from sqlalchemy.exc import IntegrityError

from tomenest.database import atomic
from tomenest.models.book import cover_url_for
from tomenest.models.wishlist import WishlistEntry
from tomenest.repositories.wishlist_repo import WishlistRepo
from tomenest.services.book_service import normalize_olid
from tomenest.utils.auth import Principal, ensure_admin
from tomenest.utils.book_mapper import extract_year


class WishlistService:
    def __init__(self, wishlist: WishlistRepo):
        self.wishlist = wishlist

    def toggle(self, principal: Principal, olid, snapshot: dict | None = None) -> bool:
        """Varsa siler, yoksa ekler. Yeni durum (wished) döner."""
        olid = normalize_olid(olid)
        snapshot = snapshot or {}

        try:
            with atomic():
                existing = self.wishlist.get(principal.id, olid)
                if existing:
                    self.wishlist.remove(existing)
                    return False

                self.wishlist.add(WishlistEntry(
                    user_id=principal.id,
                    openlibraryid=olid,
                    title=str(snapshot.get("title") or "")[:300],
                    author=str(snapshot.get("author") or "")[:300],
                    cover_url=snapshot.get("coverurl") or cover_url_for(olid),
                    release_year=extract_year(snapshot.get("releaseyear")),
                ))
                return True
        except IntegrityError:
            # aynı anda iki ekleme: kayıt zaten var
            return True

    def ids(self, principal: Principal):
        return self.wishlist.ids_for_user(principal.id)

    def list_mine(self, principal: Principal):
        return self.wishlist.list_for_user(principal.id)

    def admin_summary(self, principal: Principal):
        ensure_admin(principal)
        return self.wishlist.summary()
