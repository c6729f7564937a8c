# ABOUTME: Canonicalizes free text (titles, authors, series, genres) for tolerant comparison.
# ABOUTME: Also cleans and validates ISBN strings entered with prefixes, dashes, or spaces.

import re
import unicodedata

# Pre-compiled regexes for normalization.
_WHITESPACE_RE = re.compile(r"\s+")
_LEADING_ARTICLE_RE = re.compile(r"^the\s+", re.IGNORECASE)
# Initials ("J.R.R."), hyphenated and Irish-prefixed names ("O'Brien") are
# formatted inconsistently across catalog sources.
_AUTHOR_PUNCTUATION_RE = re.compile(r"[.,\-'’]")
_ISBN_PREFIX_RE = re.compile(r"^isbn[-:\s]*(10|13)?[-:\s]*", re.IGNORECASE)
_ISBN_SEPARATOR_RE = re.compile(r"[-\s]")
_ISBN_RE = re.compile(r"^(\d{10}|\d{13})$")


def _collapse(text: str) -> str:
    """Collapse runs of whitespace to single spaces and trim."""
    return _WHITESPACE_RE.sub(" ", text).strip()


def strip_diacritics(text: str) -> str:
    """Remove combining marks after NFKD decomposition ("Brontë" -> "Bronte")."""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def normalize_text(text: str | None) -> str:
    """Case-, diacritic- and whitespace-insensitive form of a string.

    Used for search and for collation of titles and authors.
    """
    if not text:
        return ""
    return _collapse(strip_diacritics(text).casefold())


def normalize_title(title: str | None) -> str:
    """Case-fold, collapse internal whitespace, and trim."""
    if not title:
        return ""
    return _collapse(title.casefold())


def normalize_author(name: str | None) -> str:
    """Normalize an author name, ignoring punctuation.

    "J.R.R. Tolkien", "j.r.r. tolkien" and "JRR Tolkien" normalize alike, so
    do "Jean-Paul Sartre" and "JeanPaul Sartre".
    """
    if not name:
        return ""
    return _collapse(_AUTHOR_PUNCTUATION_RE.sub("", name.casefold()))


def normalize_series_name(name: str | None) -> str:
    """Normalize a series name, dropping a leading "The "."""
    if not name:
        return ""
    return _collapse(_LEADING_ARTICLE_RE.sub("", name.strip()).casefold())


def normalize_genre_name(name: str | None) -> str:
    if not name:
        return ""
    return _collapse(name.casefold())


def clean_isbn(value: str | None) -> str:
    """Strip an "ISBN", "ISBN-10:" or "ISBN-13:" prefix, dashes, and spaces."""
    if not value:
        return ""
    return _ISBN_SEPARATOR_RE.sub("", _ISBN_PREFIX_RE.sub("", value.strip()))


def is_isbn(value: str | None) -> bool:
    """Check whether a string is a 10- or 13-digit ISBN once cleaned."""
    return bool(_ISBN_RE.match(clean_isbn(value)))
