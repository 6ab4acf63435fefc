# scripts/jekyll_content.py
"""
Site layout and content extractors shared by the lint rules.

Layout (relative to the repository root):
  jekyll/               Jekyll source (JEKYLL_FOLDER.root)
  jekyll/_posts/        blog posts, YYYY-MM-DD-slug-slug-slug.md
  jekyll/_developers/   developer profiles, <author>.md
  jekyll/assets/        images & files, assets/YYYY/MM-slug-slug-slug/...

Site-absolute references such as "/assets/2021/01-a-b-c/teaser.png" are
resolved against JEKYLL_FOLDER.root.
"""

import re
from pathlib import Path
from typing import NamedTuple, Optional, Tuple

import frontmatter
import yaml

from repo_root import REPO_ROOT
from utils import DATE_PREFIX_RE

POST_NAME_RE = re.compile(r"^(\d\d\d\d)-(\d\d)-\d\d-(.+)\.md$")

# ![alt](/assets/x.png "title"), ![alt](</assets/my pic.png>) or <img src="/assets/x.png">
IMAGE_RE = re.compile(
    r"""!\[[^\]]*\]\(\s*(?:<([^>]+)>|([^)\s]+))[^)]*\)"""
    r"""|<img\b[^>]*?\bsrc\s*=\s*["']([^"']+)["']""",
    re.I,
)

# {% include iframe.html src="/assets/2020/11-summer-2020-summit-talks/intro.pdf" %}
IFRAME_INCLUDE_RE = re.compile(r'{%\s+include\s+iframe\.html\s+src="/([^"]+?)"\s+%}')


class ContentError(RuntimeError):
    pass


class FrontMatterError(ContentError):
    pass


class JekyllFolder(NamedTuple):
    repo: Path
    root: Path
    posts: Path
    developers: Path
    assets: Path

    @classmethod
    def from_root(cls, repo_root) -> "JekyllFolder":
        repo = Path(repo_root).resolve()
        root = repo / "jekyll"
        return cls(
            repo=repo,
            root=root,
            posts=root / "_posts",
            developers=root / "_developers",
            assets=root / "assets",
        )


JEKYLL_FOLDER = JekyllFolder.from_root(REPO_ROOT)


# -------------------------
# Filesystem
# -------------------------
def glob_paths(folder: Path, pattern: str) -> list:
    """Sorted glob matches under `folder`, skipping hidden entries (like .DS_Store)."""
    folder = Path(folder)
    out = []
    for p in folder.glob(pattern):
        if any(part.startswith(".") for part in p.relative_to(folder).parts):
            continue
        out.append(p)
    return sorted(out)

def glob_files(folder: Path, pattern: str) -> list:
    return [p for p in glob_paths(folder, pattern) if p.is_file()]

def local_path(folder: JekyllFolder, reference: str) -> Path:
    """'/assets/a.png' -> <jekyll root>/assets/a.png"""
    return folder.root / reference.lstrip("/")


# -------------------------
# Front matter
# -------------------------
def load_front(path) -> dict:
    try:
        post = frontmatter.load(str(path))
    except (yaml.YAMLError, ValueError, TypeError) as e:
        raise FrontMatterError(f"{Path(path).name}: front matter cannot be parsed ({e})") from e
    return dict(post.metadata)

def as_list(value) -> list:
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value] if value else []

def _front_references(path, key: str) -> list:
    front = load_front(path)
    return [str(v) for v in as_list(front.get(key)) if v]

def get_frontmatter_teaser_list(path) -> list:
    return _front_references(path, "image")

def get_avatar_list(path) -> list:
    return _front_references(path, "avatar")


# -------------------------
# Body scans
# -------------------------
def read_text(path) -> str:
    try:
        return Path(path).read_text("utf-8")
    except UnicodeDecodeError as e:
        raise ContentError(f"{Path(path).name}: cannot be read as UTF-8 ({e})") from e

def get_markdown_image_list(path) -> list:
    text = read_text(path)
    return [m.group(1) or m.group(2) or m.group(3) for m in IMAGE_RE.finditer(text)]

def get_include_src_list(path) -> list:
    return IFRAME_INCLUDE_RE.findall(read_text(path))


# -------------------------
# Post filenames
# -------------------------
def get_year_month(path) -> Optional[Tuple[str, str]]:
    name = Path(path).name
    if not DATE_PREFIX_RE.match(name):
        return None
    return name[0:4], name[5:7]

def get_slugs(path) -> str:
    m = POST_NAME_RE.match(Path(path).name)
    if not m:
        raise RuntimeError(f"{path} parse slugs fail")
    return m.group(3)
