import re

_YEAR_RE = re.compile(r"\b(\d{4})\b")
_LANG_RE = re.compile(r"^/languages/([a-z]{3})", re.IGNORECASE)


def _first_str(value) -> str:
    if isinstance(value, list) and value:
        value = value[0]
    return value.strip() if isinstance(value, str) else ""


def _int_or_none(value):
    try:
        return int(value) if value not in (None, "") else None
    except (TypeError, ValueError):
        return None


def extract_year(value):
    if isinstance(value, int):
        return value
    m = _YEAR_RE.search(str(value or ""))
    return int(m.group(1)) if m else None


def olid_from_key(key) -> str:
    # "/books/OL7353617M" -> "OL7353617M"
    return str(key or "").rstrip("/").rsplit("/", 1)[-1]


def map_edition(edition: dict, olid: str | None = None) -> dict:
    """OpenLibrary edition JSON -> books tablosu alanları (kaba eşleme)."""
    olid = (olid or olid_from_key(edition.get("key"))).strip().upper()

    language = ""
    langs = edition.get("languages")
    if isinstance(langs, list) and langs and isinstance(langs[0], dict):
        m = _LANG_RE.match(str(langs[0].get("key") or ""))
        if m:
            language = m.group(1).lower()

    return {
        "openlibraryid": olid,
        "title": _first_str(edition.get("title")),
        "isbn": _first_str(edition.get("isbn_13")) or _first_str(edition.get("isbn_10")),
        "author": _first_str(edition.get("by_statement")) or _first_str(edition.get("author")),
        "publisher": _first_str(edition.get("publishers")),
        "release_year": extract_year(edition.get("publish_date")),
        "language": language or _first_str(edition.get("language")),
        "pages": _int_or_none(edition.get("number_of_pages")),
    }
