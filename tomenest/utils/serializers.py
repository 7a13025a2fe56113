from tomenest.models.book import cover_url_for
from tomenest.utils.clock import iso


def public_user(u):
    return {
        "userid": int(u.id),
        "email": u.email,
        "name": u.name,
        "role": u.role,
        "createdat": iso(u.created_at),
    }


def stock_row(s):
    b = s.book
    return {
        "stockid": int(s.id),
        "openlibraryid": s.openlibraryid,
        "quality": int(s.quality),
        "quantity": int(s.quantity),
        "isbn": getattr(b, "isbn", None),
        "title": getattr(b, "title", None),
        "author": getattr(b, "author", None),
        "releaseyear": getattr(b, "release_year", None),
        "publisher": getattr(b, "publisher", None),
        "language": getattr(b, "language", None),
        "pages": getattr(b, "pages", None),
        "coverurl": cover_url_for(s.openlibraryid),
    }


def rental_row(r, with_user=False):
    s = r.stock_item
    b = s.book if s else None
    data = {
        "rentalid": int(r.id),
        "userid": int(r.user_id),
        "stockid": int(r.stock_id),
        "status": r.status,
        "note": r.note,
        "startat": iso(r.start_at),
        "endat": iso(r.end_at),
        "createdat": iso(r.created_at),
        "decidedat": iso(r.decided_at),
        "decidedby": r.decided_by,
        "returnedat": iso(r.returned_at),
        "returnedby": r.returned_by,
        "openlibraryid": s.openlibraryid if s else None,
        "quality": s.quality if s else None,
        "title": b.title if b else None,
        "author": b.author if b else None,
        "coverurl": cover_url_for(s.openlibraryid) if s else None,
    }
    if with_user:
        data["useremail"] = r.user.email if r.user else None
        data["username"] = r.user.name if r.user else None
    return data


def wishlist_row(w):
    return {
        "openlibraryid": w.openlibraryid,
        "title": w.title,
        "author": w.author,
        "coverurl": w.cover_url or cover_url_for(w.openlibraryid),
        "releaseyear": w.release_year,
        "createdat": iso(w.created_at),
    }
