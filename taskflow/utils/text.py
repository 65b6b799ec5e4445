import re

_SPACE_RE = re.compile(r"\s+")


def collapse_whitespace(text: str) -> str:
    return _SPACE_RE.sub(" ", text).strip()


def slugify_title(title: str) -> str:
    """'Home Renovation' -> 'home-renovation', the form typed after pro:"""
    return _SPACE_RE.sub("-", title.lower())
