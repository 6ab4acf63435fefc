# scripts/validate_jekyll.py
"""
Run the publishing rules against a checkout and report every violation.

    python scripts/validate_jekyll.py
    python scripts/validate_jekyll.py --rule tags --rule author
    python scripts/validate_jekyll.py --summary "$GITHUB_STEP_SUMMARY"

Exit status is 1 when any rule fails.
"""

import argparse, sys
from pathlib import Path

import jinja2

from jekyll_content import JekyllFolder
from lint_rules import RULES, run_rules
from repo_root import REPO_ROOT

def log(*args): print("[validate]", *args, flush=True)

SUMMARY_TEMPLATE = """## Jekyll content lint

{% if errors %}:x: **{{ errors }}** problem(s) found in `{{ root }}`{% else %}:white_check_mark: all rules passed{% endif %}

| Rule | Result |
|---|---|
{% for name, failures in results.items() -%}
| {{ descriptions[name] }} | {% if failures %}{{ failures|length }} failure(s){% else %}ok{% endif %} |
{% endfor %}
{% for name, failures in results.items() if failures %}
### {{ name }}

{% for f in failures -%}
- {{ f }}
{% endfor %}
{% endfor %}
"""

def render_summary(results: dict, root) -> str:
    descriptions = {name: desc for name, desc, _ in RULES}
    return jinja2.Template(SUMMARY_TEMPLATE).render(
        results=results,
        descriptions=descriptions,
        errors=sum(len(f) for f in results.values()),
        root=root,
    )

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Lint jekyll/ posts, developer profiles and assets")
    ap.add_argument("--root", type=Path, default=REPO_ROOT, help="Repository root (default: this checkout)")
    ap.add_argument("--rule", action="append", dest="rules", metavar="NAME", help="Only run this rule (repeatable)")
    ap.add_argument("--list", action="store_true", help="List the rules and exit")
    ap.add_argument("--summary", type=Path, help="Append a Markdown report to this file")
    args = ap.parse_args(argv)

    if args.list:
        for name, desc, _ in RULES:
            print(f"{name:20} {desc}")
        return 0

    folder = JekyllFolder.from_root(args.root)
    try:
        results = run_rules(folder, args.rules)
    except KeyError as e:
        ap.error(e.args[0])

    errors = 0
    for name, failures in results.items():
        for f in failures:
            print(f"[ERR] {name}: {f}")
        errors += len(failures)

    if args.summary:
        with args.summary.open("a", encoding="utf-8") as fh:
            fh.write(render_summary(results, folder.root))
        log(f"summary appended to {args.summary}")

    log(f"done; errors={errors}")
    return 1 if errors else 0

if __name__ == "__main__":
    sys.exit(main())
