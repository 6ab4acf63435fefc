# scripts/repo_root.py
import os
from pathlib import Path

# JEKYLL_REPO_ROOT lets CI (and tests) lint a checkout that lives elsewhere
REPO_ROOT = Path(
    os.environ.get("JEKYLL_REPO_ROOT") or Path(__file__).resolve().parents[1]
).resolve()


def strip_repo_root(path, repo_root: Path = REPO_ROOT) -> str:
    """
    Repo-relative POSIX path for messages:
      /work/site/jekyll/_posts/2021-01-01-a-b-c.md -> jekyll/_posts/2021-01-01-a-b-c.md
    Paths outside the repo come back unchanged.
    """
    p = Path(path)
    try:
        return p.resolve().relative_to(Path(repo_root).resolve()).as_posix()
    except ValueError:
        return p.as_posix()
