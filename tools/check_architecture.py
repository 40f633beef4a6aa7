"""Architecture boundary checks.

Static import scan that keeps the engine layers free of I/O, reporting and
application wiring.

Usage:
    python tools/check_architecture.py

Exit code:
    0 = OK
    1 = violations found
"""

from __future__ import annotations

import ast
import sys
from pathlib import Path
from typing import List, Optional, Tuple

ROOT = Path(__file__).resolve().parents[1]

_UPPER = {"services", "storage", "infra", "app", "loadcalc", "main"}

LAYER_RULES = {
    "core": {"forbidden": _UPPER | {"matplotlib"}},
    "domain": {"forbidden": _UPPER | {"matplotlib"}},
    "storage": {"forbidden": {"services", "app", "loadcalc", "main", "matplotlib"}},
    "services": {"forbidden": {"app", "loadcalc", "main"}},
}


def top_package(modname: str) -> Optional[str]:
    if not modname:
        return None
    return modname.split(".")[0]


def file_layer(path: Path) -> Optional[str]:
    # layer is the first directory under root (core/domain/services...)
    try:
        rel = path.relative_to(ROOT)
    except ValueError:
        return None
    if len(rel.parts) < 2:
        return None
    return rel.parts[0]


def scan_file(path: Path) -> List[Tuple[str, str]]:
    """Return list of (imported_top_pkg, detail)"""
    tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    imports: List[Tuple[str, str]] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                pkg = top_package(alias.name)
                if pkg:
                    imports.append((pkg, alias.name))
        elif isinstance(node, ast.ImportFrom) and node.module and not node.level:
            pkg = top_package(node.module)
            if pkg:
                imports.append((pkg, node.module))
    return imports


def find_violations(root: Path = ROOT) -> List[str]:
    violations: List[str] = []
    for f in sorted(root.rglob("*.py")):
        if "__pycache__" in f.parts:
            continue
        layer = file_layer(f)
        if layer not in LAYER_RULES:
            continue
        forbidden = LAYER_RULES[layer]["forbidden"]
        for pkg, detail in scan_file(f):
            if pkg in forbidden:
                violations.append(f"{f.relative_to(root)} imports forbidden '{detail}' (layer={layer})")
    return violations


def main() -> int:
    violations = find_violations()
    if violations:
        print("Architecture violations found:\n")
        for v in violations:
            print(" -", v)
        print("\nFix: move logic to lower layers or pass the dependency in from a service.")
        return 1

    print("OK: no architecture boundary violations.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
