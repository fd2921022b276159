"""Guard against matplotlib imports in core modules.

Run this script in CI or locally to ensure the scale computation and
placement modules remain free of rendering dependencies.
"""

from __future__ import annotations

from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]

CORE_MODULES = [
    "src/scalebar_overlay/config.py",
    "src/scalebar_overlay/controller.py",
    "src/scalebar_overlay/coordinate_transforms.py",
    "src/scalebar_overlay/nice_scale.py",
    "src/scalebar_overlay/placement.py",
    "src/scalebar_overlay/scalebar.py",
    "src/scalebar_overlay/units.py",
    "src/scalebar_overlay/viewer.py",
]

FORBIDDEN = ("matplotlib", "PyQt", "PySide")


def find_violations(root: Path = ROOT) -> list:
    bad = []
    for rel in CORE_MODULES:
        path = root / rel
        if not path.exists():
            bad.append(f"{rel} is missing")
            continue
        text = path.read_text(encoding="utf-8", errors="ignore")
        for token in FORBIDDEN:
            if token in text:
                bad.append(f"{rel} contains '{token}'")
                break
    return bad


def main() -> int:
    bad = find_violations()
    if bad:
        sys.stderr.write("Core import guard failed:\n")
        sys.stderr.write("\n".join(bad))
        sys.stderr.write("\n")
        return 2
    print("Core import guard passed.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
