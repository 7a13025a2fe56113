from datetime import datetime, timezone


def utcnow() -> datetime:
    # DB'de naive UTC tutuyoruz
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_timestamp(value) -> datetime | None:
    """ISO 8601 ('T' veya boşluk ayraçlı) string -> naive UTC datetime. Parse edilemezse None."""
    if value is None:
        return None
    if isinstance(value, datetime):
        dt = value
    else:
        raw = str(value).strip()
        if not raw:
            return None
        if raw.endswith(("Z", "z")):
            raw = raw[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(raw)
        except ValueError:
            return None
    if dt.tzinfo is not None:
        # 0001-01-01T00:00+01:00 gibi değerler UTC aralığının dışına taşar
        try:
            dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
        except (OverflowError, ValueError):
            return None
    return dt


def iso(dt: datetime | None) -> str | None:
    return dt.isoformat(sep=" ", timespec="seconds") if dt else None
