"""
Golden-case runner.

Evaluates cases with a fresh cache each, compares against the recorded
checksum, and optionally writes a results CSV plus a manifest with provenance
metadata so runs can be compared later.
"""
from __future__ import annotations

import csv
import hashlib
import json
import logging
import sys
import time
from dataclasses import asdict, dataclass, field, fields
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from .board import serialize_board
from .cases import Case, discover_cases, load_case
from .paths import fixtures_dir, get_git_commit
from .search import MemoCache, SearchStats, search
from .tracking import log_artifact, log_metrics, log_params

MANIFEST_VERSION = "1.0.0"


@dataclass
class CheckArgs:
    paths: List[Path] = field(default_factory=list)
    out: Optional[Path] = None
    cli_argv: List[str] | None = None


@dataclass
class CaseResult:
    source: str
    depth: int
    board: str
    expected: Optional[int]
    result: int
    passed: Optional[bool]
    cache_size: int
    nodes: int
    elapsed_s: float


def run_case(case: Case) -> CaseResult:
    cache = MemoCache()
    stats = SearchStats()
    t0 = time.perf_counter()
    result = search(case.board, case.depth, cache=cache, stats=stats)
    elapsed = time.perf_counter() - t0
    passed = None if case.expected is None else result == case.expected
    return CaseResult(
        source=case.source or "<input>",
        depth=case.depth,
        board=serialize_board(case.board),
        expected=case.expected,
        result=result,
        passed=passed,
        cache_size=len(cache),
        nodes=stats.nodes,
        elapsed_s=elapsed,
    )


def _expand(paths: List[Path]) -> List[Path]:
    if not paths:
        paths = [fixtures_dir()]
    files: List[Path] = []
    for p in paths:
        if p.is_dir():
            files.extend(discover_cases(p))
        else:
            files.append(p)
    return files


def _sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open('rb') as f:
        for chunk in iter(lambda: f.read(8192), b''):
            h.update(chunk)
    return h.hexdigest()


def _package_version() -> str | None:
    from importlib.metadata import PackageNotFoundError, version

    try:
        return version("cephalopod")
    except PackageNotFoundError:
        return None


def write_report(out: Path, results: List[CaseResult], files: List[Path],
                 cli_argv: List[str] | None = None) -> Path:
    out.mkdir(parents=True, exist_ok=True)
    results_csv = out / "results.csv"
    fieldnames = [f.name for f in fields(CaseResult)]
    with results_csv.open('w', newline='') as f:
        w = csv.DictWriter(f, fieldnames=fieldnames)
        w.writeheader()
        for r in sorted(results, key=lambda r: r.source):
            w.writerow(asdict(r))

    manifest: Dict[str, Any] = {
        "manifest_version": MANIFEST_VERSION,
        "created_at": datetime.now(timezone.utc).isoformat(),
        "package_version": _package_version(),
        "python_version": sys.version.split(" ")[0],
        "git_commit": get_git_commit(),
        "cli_argv": cli_argv,
        "cases": len(results),
        "passed": sum(1 for r in results if r.passed),
        "failed": sum(1 for r in results if r.passed is False),
        "inputs": {str(p): _sha256_file(p) for p in files},
        "results_sha256": _sha256_file(results_csv),
    }
    manifest_path = out / "manifest.json"
    manifest_path.write_text(json.dumps(manifest, indent=2))
    logging.info("Wrote %s and %s", results_csv, manifest_path)
    log_artifact(results_csv)
    log_artifact(manifest_path)
    return manifest_path


def run_check(args: CheckArgs) -> List[CaseResult]:
    files = _expand(args.paths)
    logging.info("Checking %d case file(s)", len(files))
    results: List[CaseResult] = []
    for path in files:
        res = run_case(load_case(path))
        results.append(res)
        if res.passed:
            logging.info("PASS %s depth=%d result=%d (%.3fs, %d cached)",
                         path.name, res.depth, res.result, res.elapsed_s, res.cache_size)
        else:
            logging.error("FAIL %s depth=%d expected=%s got=%d",
                          path.name, res.depth, res.expected, res.result)

    passed = sum(1 for r in results if r.passed)
    logging.info("%d/%d cases passed", passed, len(results))
    log_params({"cases": len(results)})
    log_metrics({
        "passed": float(passed),
        "total_elapsed_s": sum(r.elapsed_s for r in results),
    })
    if args.out is not None:
        write_report(args.out, results, files, cli_argv=args.cli_argv)
    return results
