# scripts/utils.py
import re
from pathlib import Path

from slugify import slugify

DATE_PREFIX_RE = re.compile(r"^\d\d\d\d-\d\d-\d\d-")
URL_RE = re.compile(r"^http", re.I)

# -------------------------
# String / slug helpers
# -------------------------
def safe_filename(s: str) -> str:
    """
    Lowercase, keep a–z, 0–9, dot, underscore, dash.
    Collapse repeated dashes and trim edges.
    """
    s = (s or "").strip().lower()
    s = re.sub(r"[^a-z0-9._-]+", "-", s)
    s = re.sub(r"-{2,}", "-", s)
    return s.strip("-")

def suggest_filename(path) -> str:
    """
    A name the filename rules would accept:
      "My Post (Draft).PNG" -> "my-post-draft.png"
    The date prefix of a post survives untouched.
    """
    p = Path(path)
    m = DATE_PREFIX_RE.match(p.name)
    prefix = m.group(0) if m else ""
    stem = p.name[len(prefix):]
    suffix = ""
    if "." in stem:
        stem, suffix = stem.rsplit(".", 1)
        suffix = "." + safe_filename(suffix)
    return f"{prefix}{slugify(stem) or 'file'}{suffix}"

def split_slugs(name: str) -> list:
    """Slugs of a post filename after its YYYY-MM-DD- prefix."""
    name = DATE_PREFIX_RE.sub("", name or "")
    name = re.sub(r"\.md$", "", name)
    return name.split("-")

def is_url(reference: str) -> bool:
    return bool(URL_RE.match(reference or ""))
