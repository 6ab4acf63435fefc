# scripts/lint_rules.py
"""
Publishing rules for blog posts and developer profiles.

The goal of these rules is to help the authors who submit their blog posts
via PRs follow the site conventions, and to catch mistakes early in CI.

Every rule takes a JekyllFolder and returns a list of failure messages;
an empty list means the rule holds.
"""

import re

from PIL import Image, UnidentifiedImageError

from jekyll_content import (
    ContentError,
    FrontMatterError,
    JekyllFolder,
    as_list,
    get_avatar_list,
    get_frontmatter_teaser_list,
    get_include_src_list,
    get_markdown_image_list,
    get_slugs,
    get_year_month,
    glob_files,
    glob_paths,
    load_front,
    local_path,
)
from repo_root import strip_repo_root
from utils import DATE_PREFIX_RE, is_url, split_slugs, suggest_filename

# ======================
# CONFIG
# ======================

MAX_WIDTH = 1920          # HD
MAX_SIZE  = 1024 * 1024   # 1MB
IMAGE_EXTS = ("jpg", "jpeg", "png")

# Posts before this year are left as they are (no teaser / asset folder rules)
TEASER_SINCE_YEAR = 2021

MISPLACED_WHITE_LIST = {"jekyll/README.md"}

DEPRECATED_FOLDERS = {
    "_developer":  "_developer might a typo of `jekyll/_developers`",
    "_developers": "_developers/ has been moved to `jekyll/_developers`",
    "_post":       "_post might a typo of `jekyll/_posts`",
    "_posts":      "_posts/ has been moved to `jekyll/_posts`",
}

FILENAME_RE = re.compile(r"^[a-z0-9/_.-]+$")
FILENAME_WHITE_LIST_RE = [
    re.compile(r"/assets/js/viewer-js"),
]

DEVELOPER_FILENAME_RE = re.compile(r"/[a-z0-9_.-]+\.md$")

TAG_BLACK_LIST = {
    "wechaty",  # everything on this site is related to wechaty
}

PRESET_CATEGORIES = [
    "announcement",
    "article",
    "event",
    "feature",
    "fun",
    "hacking",
    "interview",
    "migration",
    "npm",
    "project",
    "shop",
    "story",
    "tutorial",
]

# Hot-linked images we accept: badges, CI status and our own domains
URL_WHITE_LIST_RE = [
    re.compile(r"badge\.fury\.io", re.I),
    re.compile(r"dockeri\.co/image", re.I),
    re.compile(r"github\.com/.*/workflows/", re.I),
    re.compile(r"githubusercontent\.com", re.I),
    re.compile(r"herokucdn\.com", re.I),
    re.compile(r"images\.microbadger\.com", re.I),
    re.compile(r"img\.shields\.io", re.I),
    re.compile(r"pepy\.tech/badge", re.I),
    re.compile(r"sourcerer\.io", re.I),
    re.compile(r"wechaty\.github\.io", re.I),
    re.compile(r"wechaty\.js\.org", re.I),
]


# ======================
# Helpers
# ======================

def _rel(folder: JekyllFolder, path) -> str:
    return strip_repo_root(path, folder.repo)

def _post_files(folder: JekyllFolder) -> list:
    return glob_files(folder.posts, "**/*")

def _is_recent(path) -> bool:
    ym = get_year_month(path)
    return ym is not None and int(ym[0]) >= TEASER_SINCE_YEAR

def _front_list(folder: JekyllFolder, path, key: str, errors: list):
    try:
        return as_list(load_front(path).get(key))
    except FrontMatterError as e:
        errors.append(f'"{_rel(folder, path)}" {e}')
        return None


# ======================
# Rules
# ======================

def check_image_size(folder: JekyllFolder) -> list:
    """Images should be fit for the web (no more than 1MB and 1920 wide)."""
    images = []
    for ext in IMAGE_EXTS:
        images += glob_files(folder.assets, f"**/*.{ext}")
    if not images:
        return [f'should get image file list from "{_rel(folder, folder.assets)}"']

    errors = []
    for image in sorted(images):
        size = image.stat().st_size
        try:
            with Image.open(image) as im:
                width = im.size[0]
        except (UnidentifiedImageError, OSError) as e:
            errors.append(f'"{_rel(folder, image)}" cannot be probed for its size: {e}')
            continue
        if width <= MAX_WIDTH and size <= MAX_SIZE:
            continue
        errors.append(
            f'"{_rel(folder, image)}" should not exceed the max limit: width: {width}, size: {size}. '
            f'use "scripts/fit_image.py {_rel(folder, image)}" to fit MAX_WIDTH: {MAX_WIDTH} & MAX_SIZE: {MAX_SIZE}'
        )
    return errors

def check_misplaced_files(folder: JekyllFolder) -> list:
    misplaced = [
        _rel(folder, p) for p in glob_paths(folder.root, "*.md")
        if _rel(folder, p) not in MISPLACED_WHITE_LIST
    ]
    if misplaced:
        return [f"should no miss placed files. {', '.join(misplaced)}"]
    return []

def check_deprecated_folders(folder: JekyllFolder) -> list:
    return [
        f"{name}/ should not exist: {memo}"
        for name, memo in DEPRECATED_FOLDERS.items()
        if (folder.repo / name).exists()
    ]

def check_filename_charset(folder: JekyllFolder) -> list:
    """Issue #325 / #585: lowercase filenames & urls, words joined by `-`."""
    paths = (
        glob_paths(folder.assets, "**/*")
        + glob_paths(folder.developers, "**/*")
        + glob_paths(folder.posts, "**/*")
    )
    errors = []
    for p in paths:
        name = _rel(folder, p)
        if any(r.search("/" + name) for r in FILENAME_WHITE_LIST_RE):
            continue
        if not FILENAME_RE.match(name):
            errors.append(
                f'"{name}" should be all lowercase with no special characters '
                f'(try "{suggest_filename(p)}")'
            )
    return errors

def check_tags(folder: JekyllFolder) -> list:
    errors = []
    for post in _post_files(folder):
        tags = _front_list(folder, post, "tags", errors)
        if tags is None:
            continue
        tags = [str(t) for t in tags]
        name = _rel(folder, post)
        if not tags:
            errors.append(f'"{name}" tags(0) should have at least one tag')
        black = [t for t in tags if t in TAG_BLACK_LIST]
        if black:
            errors.append(f'"{name}" tags({",".join(tags)}) should not use black listed tag(s): {",".join(black)}')
        spaced = [t for t in tags if re.search(r"\s", t)]
        if spaced:
            errors.append(f'"{name}" tags({",".join(tags)}) should not include space in tag: {",".join(spaced)}')
    return errors

def check_categories(folder: JekyllFolder) -> list:
    errors = []
    for post in _post_files(folder):
        categories = _front_list(folder, post, "categories", errors)
        if categories is None:
            continue
        categories = [str(c) for c in categories]
        name = _rel(folder, post)
        if not categories:
            errors.append(f'"{name}" categories(0) should have at least one category')
            continue
        if not all(c in PRESET_CATEGORIES for c in categories):
            errors.append(
                f'"{name}" categories({",".join(categories)}) should be in preset({",".join(PRESET_CATEGORIES)})'
            )
    return errors

def check_post_date_prefix(folder: JekyllFolder) -> list:
    return [
        f'"{_rel(folder, p)}" should have name started with YYYY-MM-DD-'
        for p in _post_files(folder)
        if not DATE_PREFIX_RE.match(p.name)
    ]

def check_post_slugs(folder: JekyllFolder) -> list:
    errors = []
    for p in _post_files(folder):
        slugs = split_slugs(p.name)
        if len(slugs) < 3:
            errors.append(
                f'"{p.relative_to(folder.posts).as_posix()}" should have at least 3 slugs (slug1-slug2-slug3), got {len(slugs)}'
            )
    return errors

def check_post_extension(folder: JekyllFolder) -> list:
    return [
        f'"{_rel(folder, p)}" should end with .md'
        for p in _post_files(folder)
        if p.suffix != ".md"
    ]

def check_author(folder: JekyllFolder) -> list:
    errors = []
    for post in _post_files(folder):
        name = _rel(folder, post)
        try:
            author = load_front(post).get("author")
        except FrontMatterError as e:
            errors.append(f'"{name}" {e}')
            continue
        if not author:
            errors.append(f'"{name}" author should be set, got {author!r}')
            continue
        profile = folder.developers / f"{author}.md"
        if not profile.is_file():
            errors.append(f'"{name}" author profile should exist at {_rel(folder, profile)}')
    return errors

def check_developer_filename(folder: JekyllFolder) -> list:
    return [
        f'"{_rel(folder, p)}" should match {DEVELOPER_FILENAME_RE.pattern}'
        for p in glob_paths(folder.developers, "**/*")
        if not DEVELOPER_FILENAME_RE.search("/" + _rel(folder, p))
    ]

def check_teaser(folder: JekyllFolder) -> list:
    """Issue #351: posts should define a teaser image."""
    errors = []
    for post in _post_files(folder):
        if not _is_recent(post):
            continue
        name = _rel(folder, post)
        try:
            image = load_front(post).get("image")
        except FrontMatterError as e:
            errors.append(f'"{name}" {e}')
            continue
        if not image:
            errors.append(f'"{name}" image({image}) should be set to define the teaser image')
    return errors

def check_avatar(folder: JekyllFolder) -> list:
    """Developer avatars live under assets/developers/."""
    errors = []
    for profile in glob_files(folder.developers, "*.md"):
        name = _rel(folder, profile)
        try:
            avatar = load_front(profile).get("avatar")
        except FrontMatterError as e:
            errors.append(f'"{name}" {e}')
            continue
        if not avatar:
            errors.append(f'"{name}" should have avatar("{avatar}")')
            continue
        avatar = str(avatar)
        if not avatar.startswith("/"):
            errors.append(f"\"{avatar}\" should start with '/'")
        if is_url(avatar):
            errors.append(f"{name} should put avatar files to local repo instead of using URL")
            continue
        target = local_path(folder, avatar)
        if not target.is_file():
            errors.append(f"{_rel(folder, target)} should exist")
    return errors

def check_local_images(folder: JekyllFolder) -> list:
    """Linked images should be stored in the repo to prevent 404s in the future."""
    errors = []
    images = []
    for post in glob_files(folder.posts, "*.md"):
        try:
            body = get_markdown_image_list(post)
        except ContentError as e:
            errors.append(f'"{_rel(folder, post)}" {e}')
            continue
        try:
            images += get_frontmatter_teaser_list(post)
        except FrontMatterError as e:
            errors.append(f'"{_rel(folder, post)}" {e}')
        images += body
    for profile in glob_files(folder.developers, "*.md"):
        try:
            images += get_avatar_list(profile)
        except FrontMatterError as e:
            errors.append(f'"{_rel(folder, profile)}" {e}')

    for image in images:
        if any(r.search(image) for r in URL_WHITE_LIST_RE):
            continue
        if is_url(image):
            errors.append(f'"{image}" should put image files to local repo instead of using URL')
        elif not local_path(folder, image).exists():
            errors.append(f'"{image}" should exist')
    return errors

def check_asset_folder(folder: JekyllFolder) -> list:
    """Assets belong in /assets/YYYY/MM-slug-...-slug/ (slugs same as the post)."""
    errors = []
    for post in _post_files(folder):
        if not _is_recent(post):
            continue
        try:
            slugs = get_slugs(post)
        except RuntimeError:
            # not a YYYY-MM-DD-*.md post; the name rules report it
            continue
        year, month = get_year_month(post)
        expected = f"assets/{year}/{month}-{slugs}"
        name = _rel(folder, post)
        try:
            body = get_markdown_image_list(post)
        except ContentError as e:
            errors.append(f'"{name}" {e}')
            continue
        try:
            images = get_frontmatter_teaser_list(post)
        except FrontMatterError as e:
            errors.append(f'"{name}" {e}')
            images = []
        for image in images + body:
            # hot-linked images are the local-images rule's business
            if is_url(image):
                continue
            if expected not in image:
                errors.append(f'"{image}" from "{name}" should be saved to "{expected}/"')
    return errors

def check_iframe_includes(folder: JekyllFolder) -> list:
    """{% include iframe.html src="/..." %} targets must be in the repo."""
    errors = []
    for post in glob_files(folder.posts, "**/*.md"):
        try:
            srcs = get_include_src_list(post)
        except ContentError as e:
            errors.append(f'"{_rel(folder, post)}" {e}')
            continue
        missing = [src for src in srcs if not local_path(folder, src).exists()]
        if missing:
            quoted = ", ".join('"%s"' % s for s in missing)
            errors.append(f'{quoted} from "{_rel(folder, post)}" should exist')
    return errors


# ======================
# Registry
# ======================

RULES = [
    ("image-size", "image size should be fit for the web (no more than 1MB and 1920 wide)", check_image_size),
    ("misplaced-files", "no miss placed files in jekyll/", check_misplaced_files),
    ("deprecated-folders", "folder _developers/ and _posts/ have been moved to jekyll/", check_deprecated_folders),
    ("filename-charset", "filename only allow [a-z0-9-_.]", check_filename_charset),
    ("tags", "front matter key `tags` must contain at least one tag and not black listed", check_tags),
    ("categories", "front matter key `categories` must contain at least one preset category", check_categories),
    ("post-date-prefix", "files in _posts/ must have name prefix with YYYY-MM-DD-", check_post_date_prefix),
    ("post-slugs", "files in _posts/ must contain at least three slugs after the date prefix", check_post_slugs),
    ("post-extension", "files in _posts/ must end with .md file extension", check_post_extension),
    ("author", "front matter key `author` must have a profile in jekyll/_developers/", check_author),
    ("developer-filename", "developer profile filename must match /[a-z0-9_.-]+.md", check_developer_filename),
    ("teaser", "front matter key `image` must define the teaser image", check_teaser),
    ("avatar", "developer avatar should be put under the assets/ folder", check_avatar),
    ("local-images", "all images linked from posts should be stored in the repo", check_local_images),
    ("asset-folder", "post assets should be put into /assets/YYYY/MM-slug-...-slug/", check_asset_folder),
    ("iframe-includes", "{% include iframe.html src=... %} should exist in assets/", check_iframe_includes),
]

RULE_NAMES = [name for name, _, _ in RULES]


def run_rules(folder: JekyllFolder, names=None) -> dict:
    """Run the named rules (all by default); returns {rule name: [failure, ...]}."""
    table = {name: fn for name, _, fn in RULES}
    selected = list(names) if names else RULE_NAMES
    unknown = [n for n in selected if n not in table]
    if unknown:
        raise KeyError(f"unknown rule(s): {', '.join(unknown)}")
    return {name: table[name](folder) for name in selected}
