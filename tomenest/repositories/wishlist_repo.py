from sqlalchemy import func

from tomenest.extensions import db
from tomenest.models.wishlist import WishlistEntry


class WishlistRepo:
    def __init__(self, session=None):
        self.session = session or db.session

    def get(self, user_id: int, olid: str):
        return self.session.query(WishlistEntry).filter_by(user_id=user_id, openlibraryid=olid).first()

    def add(self, entry: WishlistEntry):
        self.session.add(entry)
        self.session.flush()
        return entry

    def remove(self, entry: WishlistEntry):
        self.session.delete(entry)
        self.session.flush()

    def ids_for_user(self, user_id: int):
        rows = (
            self.session.query(WishlistEntry.openlibraryid)
            .filter(WishlistEntry.user_id == user_id)
            .order_by(WishlistEntry.created_at.desc(), WishlistEntry.id.desc())
            .all()
        )
        return [r[0] for r in rows]

    def list_for_user(self, user_id: int):
        return (
            self.session.query(WishlistEntry)
            .filter(WishlistEntry.user_id == user_id)
            .order_by(WishlistEntry.created_at.desc(), WishlistEntry.id.desc())
            .all()
        )

    def summary(self):
        wishcount = func.count(WishlistEntry.id).label("wishcount")
        return (
            self.session.query(
                WishlistEntry.openlibraryid,
                func.max(WishlistEntry.title).label("title"),
                func.max(WishlistEntry.author).label("author"),
                func.max(WishlistEntry.cover_url).label("cover_url"),
                wishcount,
            )
            .group_by(WishlistEntry.openlibraryid)
            .order_by(wishcount.desc(), func.max(WishlistEntry.title).asc())
            .all()
        )
