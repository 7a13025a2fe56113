import requests

from tomenest.errors import CatalogLookupError, NotFoundError


class OpenLibraryClient:
    def __init__(self, base_url: str = "https://openlibrary.org", timeout: float = 10, http=None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.http = http or requests.Session()

    def search(self, q: str, limit: int = 20) -> dict:
        return self._get_json(f"{self.base_url}/search.json", params={"q": q, "limit": limit})

    def edition(self, olid: str) -> dict:
        return self._get_json(f"{self.base_url}/books/{requests.utils.quote(olid, safe='')}.json")

    def work_editions(self, work_id: str, limit: int = 1) -> dict:
        return self._get_json(
            f"{self.base_url}/works/{requests.utils.quote(work_id, safe='')}/editions.json",
            params={"limit": limit},
        )

    def _get_json(self, url: str, params=None) -> dict:
        try:
            r = self.http.get(url, params=params, timeout=self.timeout,
                              headers={"Accept": "application/json"})
        except requests.RequestException as e:
            raise CatalogLookupError(f"OpenLibrary isteği başarısız: {e}")

        if r.status_code == 404:
            raise NotFoundError("OpenLibrary kaydı bulunamadı")
        if not r.ok:
            raise CatalogLookupError(f"OpenLibrary HTTP {r.status_code}")

        try:
            data = r.json()
        except ValueError:
            raise CatalogLookupError("OpenLibrary geçersiz JSON döndü")
        if not isinstance(data, dict):
            raise CatalogLookupError("OpenLibrary geçersiz JSON döndü")
        return data
