import math
import re
import unicodedata


def calculate_reading_time(text: str) -> str:
    words = text.split()
    minutes = math.ceil(len(words) / 200) or 1
    return f"{minutes} min"


def slugify(title: str) -> str:
    """URL-safe slug for a post title: lowercase ascii words joined by dashes."""
    normalized = unicodedata.normalize("NFKD", title)
    ascii_title = normalized.encode("ascii", "ignore").decode("ascii").lower()
    ascii_title = re.sub(r"[^a-z0-9\s-]", "", ascii_title)
    return re.sub(r"[\s-]+", "-", ascii_title).strip("-")
