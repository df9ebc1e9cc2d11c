# core/utils/validator.py
import re

MAX_QUERY_LENGTH = 100

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")
_WHITESPACE = re.compile(r"\s+")


def sanitize_place_query(text: str) -> str:
    """Санитизация названия места: без управляющих символов и лишних пробелов."""
    if not isinstance(text, str):
        raise ValueError("Input must be a string")
    text = _CONTROL_CHARS.sub(" ", text)
    text = _WHITESPACE.sub(" ", text).strip()
    return text[:MAX_QUERY_LENGTH].rstrip()


def validate_coordinates(lat, lon) -> bool:
    """Проверяет, что координаты в допустимом диапазоне."""
    try:
        lat, lon = float(lat), float(lon)
    except (TypeError, ValueError):
        return False
    return -90 <= lat <= 90 and -180 <= lon <= 180
