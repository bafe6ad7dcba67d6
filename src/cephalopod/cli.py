from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .analysis import frontier_summary
from .board import InvalidInput, deserialize_board
from .cases import load_case, parse_case
from .paths import reports_dir
from .runner import CheckArgs, run_check
from .search import MemoCache, SearchStats, search, validate_depth
from .tracking import log_params, maybe_mlflow_run


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="cephalopod", description="3x3 capture puzzle state explorer")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument(
        "--info",
        action="store_true",
        help="Print environment and dependency info and exit",
    )

    p_sol = sub.add_parser(
        "solve",
        help="Read a case (depth, 3 board rows, optional expected) and print its checksum",
    )
    p_sol.add_argument("--file", type=Path, help="Case file to read (default: read the case from stdin)")

    p_chk = sub.add_parser("check", help="Run golden case files and compare against their expected checksum")
    p_chk.add_argument(
        "paths", nargs="*", type=Path,
        help="Case files or directories (default: bundled fixtures directory)",
    )
    p_chk.add_argument(
        "--out", type=Path, default=None,
        help="Write results.csv and manifest.json to this directory",
    )
    p_chk.add_argument(
        "--report",
        action="store_true",
        help="Write the report to the default reports directory (ignored with --out)",
    )
    p_chk.add_argument(
        "--tracking",
        choices=["none", "mlflow"],
        default="none",
        help="Experiment tracking backend",
    )
    p_chk.add_argument(
        "--log-dir",
        type=Path,
        default=Path("runs"),
        help="Directory for tracking logs/artifacts (for mlflow local backend)",
    )

    p_exp = sub.add_parser(
        "explore",
        help="Summarize the terminal boards reachable from a board "
             "(keeps a frontier per cached state; memory grows quickly past depth ~10 on open boards)",
    )
    p_exp.add_argument("--board", required=True, help="Board string, 9 digits 0..6, e.g. 060222161")
    p_exp.add_argument("--depth", type=int, required=True, help="Search depth")

    return p


def _print_info() -> None:
    import importlib.util
    import platform

    print(f"python={sys.version.split()[0]} platform={platform.platform()}")
    for pkg in ["numpy", "mlflow"]:
        spec = importlib.util.find_spec(pkg)
        if spec is None:
            print(f"{pkg}=<not installed>")
        else:
            mod = __import__(pkg)
            ver = getattr(mod, "__version__", "?")
            print(f"{pkg}={ver}")


def _solve(ns: argparse.Namespace) -> int:
    if ns.file is not None:
        case = load_case(ns.file, require_expected=False)
    else:
        case = parse_case(sys.stdin.read(), source="<stdin>")
    cache = MemoCache()
    stats = SearchStats()
    result = search(case.board, case.depth, cache=cache, stats=stats)
    print(result)
    logging.debug("nodes=%d terminals=%d cached=%d hits=%d",
                  stats.nodes, stats.terminals, len(cache), stats.cache_hits)
    if case.expected is not None:
        if result != case.expected:
            logging.error("Expected %d, got %d", case.expected, result)
            return 1
        logging.info("Matches expected %d", case.expected)
    return 0


def _check(ns: argparse.Namespace, argv: list[str] | None) -> int:
    out = ns.out
    if out is None and ns.report:
        out = reports_dir()
    with maybe_mlflow_run(ns.tracking == "mlflow", run_name="check", log_dir=ns.log_dir):
        log_params({"paths": ",".join(str(p) for p in ns.paths) or "<fixtures>"})
        results = run_check(CheckArgs(
            paths=list(ns.paths),
            out=out,
            cli_argv=list(argv) if argv is not None else sys.argv[1:],
        ))
    if not results:
        logging.error("No case files found")
        return 2
    return 0 if all(r.passed for r in results) else 1


def _explore(ns: argparse.Namespace) -> int:
    board = deserialize_board(ns.board)
    depth = validate_depth(ns.depth)
    summary = frontier_summary(board, depth)
    logging.info(
        "distinct_terminals=%d paths=%d full_boards=%d checksum=%d",
        summary['distinct_terminals'],
        summary['paths'],
        summary['full_boards'],
        summary['checksum'],
    )
    for row in summary['cell_means']:
        logging.info("cell_means %s", " ".join(f"{v:.3f}" for v in row))
    logging.info("value_histogram %s", [int(v) for v in summary['value_histogram']])
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if getattr(ns, "verbose", False) else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    if getattr(ns, "version", False):
        from importlib.metadata import PackageNotFoundError, version as _ver

        try:
            print(_ver("cephalopod"))
        except PackageNotFoundError:
            print("unknown")
        return 0
    if getattr(ns, "info", False):
        _print_info()
        return 0

    try:
        if ns.cmd == "solve":
            return _solve(ns)
        if ns.cmd == "check":
            return _check(ns, argv)
        if ns.cmd == "explore":
            return _explore(ns)
    except InvalidInput as e:
        logging.error("Invalid input: %s", e)
        return 2
    except OSError as e:
        logging.error("%s", e)
        return 2

    parser.print_help()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
