#!/usr/bin/env python3

import argparse
import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Tuple

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.insert(0, str(ROOT_DIR))

from hingeboxgen import generate_hinged_box
from hingeboxgen.box import MODES
from hingeboxgen.geometry import PANEL_NAMES


@dataclass
class Case:
    name: str
    mode: str
    params: Dict[str, Any]
    expect_errors: bool
    source_file: Path


def _read_case(path: Path) -> Case:
    data = json.loads(path.read_text(encoding="utf-8"))
    mode = str(data.get("mode", "parametric")).strip()
    params = data.get("params")
    if mode not in MODES:
        raise ValueError(f"{path}: unknown mode: {mode!r}")
    if not isinstance(params, dict):
        raise TypeError(f"{path}: params must be an object/dict")
    return Case(
        name=path.stem,
        mode=mode,
        params=params,
        expect_errors=bool(data.get("expect_errors", False)),
        source_file=path,
    )


def _iter_cases(params_dir: Path) -> List[Case]:
    if not params_dir.exists():
        raise FileNotFoundError(f"Params dir not found: {params_dir}")

    cases = [_read_case(p) for p in sorted(params_dir.glob("*.json"))]
    if not cases:
        raise FileNotFoundError(f"No *.json found in: {params_dir}")
    return cases


def _run_case(c: Case, out_dir: Path) -> None:
    res = generate_hinged_box(c.params, mode=c.mode)

    svgs = res["svgs"]
    if sorted(svgs) != sorted(PANEL_NAMES):
        raise ValueError(f"panel set mismatch: {sorted(svgs)}")

    checks = res["checks"]
    if not checks["passed"]:
        failed = [f"{ch['name']}: {ch['message']}" for ch in checks["checks"] if not ch["passed"]]
        raise ValueError(f"regression checks failed: {failed}")

    if bool(res["errors"]) != c.expect_errors:
        raise ValueError(f"validation errors {res['errors']!r}, expected errors: {c.expect_errors}")

    case_dir = out_dir / c.name
    case_dir.mkdir(parents=True, exist_ok=True)
    for name, svg in svgs.items():
        (case_dir / f"{name}.svg").write_text(svg, encoding="utf-8")
    (case_dir / "meta.json").write_text(json.dumps(res["meta"], indent=2, sort_keys=True), encoding="utf-8")


def main(argv: List[str]) -> int:
    ap = argparse.ArgumentParser(description="Generate and check hinged-box panel sets for each regression case.")
    ap.add_argument(
        "--params-dir",
        default="examples/regression_params",
        help="Directory containing *.json files with {mode, params, expect_errors} (default: %(default)s)",
    )
    ap.add_argument(
        "--out-dir",
        default="artifacts/regression_hinged",
        help="Output directory for generated SVGs (default: %(default)s)",
    )
    args = ap.parse_args(argv)

    cases = _iter_cases(Path(args.params_dir))
    out_dir = Path(args.out_dir)

    failures: List[Tuple[str, str]] = []
    for c in cases:
        try:
            _run_case(c, out_dir)
            print(f"OK  {c.name} ({c.mode}) -> {out_dir / c.name}")
        except Exception as e:
            failures.append((c.name, str(e)))
            print(f"FAIL {c.name}: {e}", file=sys.stderr)

    if failures:
        print("\nFailures:", file=sys.stderr)
        for name, msg in failures:
            print(f"- {name}: {msg}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
