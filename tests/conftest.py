from __future__ import annotations

import os
import sys
import textwrap

import pytest


def _ensure_scripts_on_path() -> None:
    # The site scripts import each other as top-level modules (they are run as
    # `python scripts/<name>.py`), so make `scripts/` importable for pytest too.
    scripts_dir = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "scripts"))
    if scripts_dir not in sys.path:
        sys.path.insert(0, scripts_dir)


_ensure_scripts_on_path()

from jekyll_content import JekyllFolder  # noqa: E402


class SiteBuilder:
    """Writes a throwaway checkout: <tmp>/jekyll/{_posts,_developers,assets}."""

    def __init__(self, repo):
        self.repo = repo
        self.folder = JekyllFolder.from_root(repo)
        for d in (self.folder.posts, self.folder.developers, self.folder.assets):
            d.mkdir(parents=True, exist_ok=True)

    def write(self, relpath: str, text: str = ""):
        path = self.folder.root / relpath
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(text).lstrip("\n"), encoding="utf-8")
        return path

    def raw(self, relpath: str, data: bytes):
        path = self.folder.root / relpath
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return path

    def post(self, name: str, front: str, body: str = "Hello.\n"):
        return self.write(f"_posts/{name}", f"---\n{textwrap.dedent(front).strip()}\n---\n\n{body}")

    def developer(self, name: str, front: str):
        return self.write(f"_developers/{name}", f"---\n{textwrap.dedent(front).strip()}\n---\n")

    def image(self, relpath: str, size=(16, 16), fmt: str = "PNG"):
        from PIL import Image

        path = self.folder.root / relpath
        path.parent.mkdir(parents=True, exist_ok=True)
        Image.new("RGB", size, (200, 30, 30)).save(path, fmt)
        return path


@pytest.fixture
def site(tmp_path) -> SiteBuilder:
    return SiteBuilder(tmp_path)


@pytest.fixture
def good_site(site) -> SiteBuilder:
    """A small site that passes every rule."""
    site.developer("huan.md", "name: Huan\navatar: /assets/developers/huan/avatar.png")
    site.image("assets/developers/huan/avatar.png")
    site.image("assets/2021/01-hello-world-again/teaser.png")
    site.image("assets/2021/01-hello-world-again/step-1.jpg", fmt="JPEG")
    site.write("assets/2021/01-hello-world-again/slides.pdf", "%PDF-1.4\n")
    site.post(
        "2021-01-15-hello-world-again.md",
        """
        title: Hello World Again
        author: huan
        categories: article
        tags:
          - chatbot
          - python
        image: /assets/2021/01-hello-world-again/teaser.png
        """,
        body=(
            "![step one](/assets/2021/01-hello-world-again/step-1.jpg)\n\n"
            "![build](https://img.shields.io/badge/build-passing-green.svg)\n\n"
            '{% include iframe.html src="/assets/2021/01-hello-world-again/slides.pdf" %}\n'
        ),
    )
    site.post(
        "2020-06-01-legacy-post-without-teaser.md",
        """
        title: Old
        author: huan
        categories: [story, event]
        tags: history
        """,
    )
    site.write("README.md", "# jekyll\n")
    return site
