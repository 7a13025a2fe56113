from tomenest.errors import ValidationError


def required_str(value, field: str) -> str:
    text = (str(value) if value is not None else "").strip()
    if not text:
        raise ValidationError(f"{field} zorunlu")
    return text


def parse_int(value, field: str, minimum: int | None = None, maximum: int | None = None) -> int:
    """JSON'dan gelen tam sayı (int veya rakam string). bool kabul edilmez."""
    if value is None or isinstance(value, bool):
        raise ValidationError(f"{field} zorunlu")
    if isinstance(value, str):
        value = value.strip()
        if not value:
            raise ValidationError(f"{field} zorunlu")
    if isinstance(value, float) and not value.is_integer():
        raise ValidationError(f"Geçersiz {field}")
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Geçersiz {field}")

    if minimum is not None and parsed < minimum:
        raise ValidationError(f"Geçersiz {field}")
    if maximum is not None and parsed > maximum:
        raise ValidationError(f"Geçersiz {field}")
    return parsed


# DB integer kolonları 64-bit signed; daha büyük id sürücüde OverflowError verir
ID_MAX = 2**63 - 1


def parse_id(value, field: str) -> int:
    return parse_int(value, field, minimum=1, maximum=ID_MAX)


def parse_bool(value, default: bool = True) -> bool:
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() not in ("0", "false", "no", "off", "")
    return bool(value)
