from flask import current_app

from tomenest.database import atomic
from tomenest.errors import NotFoundError, ValidationError
from tomenest.repositories.book_repo import BookRepo
from tomenest.services.openlibrary_client import OpenLibraryClient
from tomenest.utils.auth import Principal, ensure_admin
from tomenest.utils.book_mapper import map_edition, olid_from_key
from tomenest.utils.validation import required_str

RESOLVE_MAX_WORKS = 50


def normalize_olid(value) -> str:
    return required_str(value, "olid").upper()


class BookService:
    def __init__(self, books: BookRepo, catalog: OpenLibraryClient):
        self.books = books
        self.catalog = catalog

    def search(self, q, limit=20) -> dict:
        q = required_str(q, "q")
        try:
            limit = max(1, min(100, int(limit)))
        except (TypeError, ValueError):
            limit = 20
        return self.catalog.search(q, limit)

    def edition(self, olid) -> tuple[dict, dict]:
        olid = normalize_olid(olid)
        raw = self.catalog.edition(olid)
        return map_edition(raw, olid), raw

    def resolve_editions(self, works) -> dict:
        """
        Arama sonuçları work (OL...W) döner, stok ise edition (OL...M) ister.
        Her work için ilk edition OLID'i; edition yoksa None.
        """
        if not isinstance(works, list) or not works:
            raise ValidationError("works boş olmayan bir liste olmalı")
        if len(works) > RESOLVE_MAX_WORKS:
            raise ValidationError(f"En fazla {RESOLVE_MAX_WORKS} work çözülebilir")

        resolved = {}
        for key in works:
            work_id = olid_from_key(required_str(key, "works")).upper()
            if not work_id:
                raise ValidationError(f"Geçersiz work: {key}")
            if work_id in resolved:
                continue
            try:
                entries = self.catalog.work_editions(work_id, limit=1).get("entries") or []
            except NotFoundError:
                entries = []
            first = entries[0] if entries and isinstance(entries[0], dict) else {}
            resolved[work_id] = olid_from_key(first.get("key")).upper() or None
        return resolved

    def upsert(self, data: dict):
        """Katalog kaydı OLID'e göre eklenir/güncellenir. Çağıran transaction içinde olmalı."""
        if not (data.get("openlibraryid") or "").strip():
            raise ValidationError("openlibraryid zorunlu")
        if not (data.get("title") or "").strip():
            raise ValidationError(f"Kitap başlığı boş olamaz ({data.get('openlibraryid')})")
        return self.books.upsert(data)

    def import_edition(self, principal: Principal, olid) -> str:
        ensure_admin(principal)
        mapped, _raw = self.edition(olid)
        with atomic():
            self.upsert(mapped)

        current_app.logger.info(f"[books] imported olid={mapped['openlibraryid']}")
        return mapped["openlibraryid"]

    def exists(self, olid: str) -> bool:
        return self.books.exists(olid)

    def fetch_if_missing(self, olid: str) -> dict | None:
        """Katalogda yoksa OpenLibrary'den çekip eşlenmiş veriyi döner; varsa None."""
        if self.books.exists(olid):
            return None
        mapped, _raw = self.edition(olid)
        return mapped
