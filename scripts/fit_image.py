# scripts/fit_image.py
"""
Shrink images in place so they pass the image-size rule.

- Scales anything wider than MAX_WIDTH down to MAX_WIDTH (aspect kept)
- Re-encodes with lower JPEG quality / PNG optimisation until <= MAX_SIZE

    python scripts/fit_image.py jekyll/assets/2021/01-my-first-post/teaser.jpg
"""

import io, sys
from pathlib import Path

from PIL import Image

from lint_rules import MAX_SIZE, MAX_WIDTH

JPEG_QUALITY_STEPS = (90, 85, 80, 75, 70, 60, 50)

def log(*args): print("[fit-image]", *args, flush=True)

def fits(path: Path) -> bool:
    with Image.open(path) as im:
        width = im.size[0]
    return width <= MAX_WIDTH and path.stat().st_size <= MAX_SIZE

def _encode(im: Image.Image, fmt: str, quality: int) -> bytes:
    buf = io.BytesIO()
    if fmt == "JPEG":
        im.convert("RGB").save(buf, "JPEG", quality=quality, optimize=True, progressive=True)
    else:
        im.save(buf, fmt, optimize=True)
    return buf.getvalue()

def fit_image(path: Path) -> bool:
    """Returns True when the file was rewritten; raises RuntimeError if it cannot be fitted."""
    if fits(path):
        return False

    with Image.open(path) as im:
        fmt = im.format
        im.load()
        if im.size[0] > MAX_WIDTH:
            height = round(im.size[1] * MAX_WIDTH / im.size[0])
            im = im.resize((MAX_WIDTH, height), Image.LANCZOS)

        steps = JPEG_QUALITY_STEPS if fmt == "JPEG" else (None,)
        data = b""
        for quality in steps:
            data = _encode(im, fmt, quality)
            if len(data) <= MAX_SIZE:
                break

    if len(data) > MAX_SIZE:
        raise RuntimeError(f"{path}: still {len(data)} bytes after fitting (max {MAX_SIZE})")
    path.write_bytes(data)
    return True

def main(argv=None) -> int:
    files = [Path(a) for a in (sys.argv[1:] if argv is None else argv)]
    if not files:
        print("usage: fit_image.py <FILE> [<FILE> ...]", file=sys.stderr)
        return 2

    errors = 0
    for f in files:
        try:
            changed = fit_image(f)
        except (RuntimeError, OSError) as e:
            log(f"ERR {e}")
            errors += 1
            continue
        log(("fitted" if changed else "already fits") + f": {f}")
    return 1 if errors else 0

if __name__ == "__main__":
    sys.exit(main())
