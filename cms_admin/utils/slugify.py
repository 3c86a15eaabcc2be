import re

from unidecode import unidecode


def slugify(text):
    """
    Convert a title into a menu slug.

    Lowercases, transliterates non-ASCII characters and collapses every run of
    punctuation or whitespace into a single dash.
    """
    if not text or not str(text).strip():
        raise ValueError("slugify() requires a non-empty string")

    text = unidecode(str(text)).lower()
    text = re.sub(r"[^a-z0-9]+", "-", text).strip("-")
    return text or "n-a"
