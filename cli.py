"""
cli.py - Command-line front end: load a forensic CSV log and print the analyses
"""

import sys

from analysis.engine import ForensicAnalyzer
from analysis.session import invalid_sessions_by_window, users_with_most_invalid_sessions
from analysis.timeline import analyze_timeline, find_suspicious_patterns, render_ascii_timeline
from config import load_config
from infra.errors import ConfigError, ForensicsError
from infra.logging_setup import get_logger, setup_logging
from report import render_summary, render_timeline_report

EXIT_OK = 0
EXIT_INPUT_ERROR = 2


def build_parser():
    import argparse
    ap = argparse.ArgumentParser(description="Forensic analysis of security event logs")
    ap.add_argument("log_file", help="CSV log (TIMESTAMP,USER_ID,SESSION_ID,ACTION_TYPE,TARGET_RESOURCE,SEVERITY_LEVEL,BYTES_TRANSFERRED)")
    ap.add_argument("--session", help="Session id whose timeline should be reconstructed")
    ap.add_argument("--top", type=int, default=None, help="Number of most severe alerts to list")
    ap.add_argument("--entry", help="Entry resource for contamination tracing")
    ap.add_argument("--target", help="Target resource for contamination tracing")
    ap.add_argument("--top-users", type=int, default=0, help="Rank users by events in invalid sessions")
    ap.add_argument("--window", type=int, default=None, help="Bucket invalid-session events into windows of this many seconds")
    ap.add_argument("--config", default=None, help="YAML/JSON config file")
    ap.add_argument("--strict", action="store_true", help="Fail on malformed rows instead of skipping them")
    ap.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return ap


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        print(f"Config error: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    setup_logging("DEBUG" if args.verbose else cfg.log_level, cfg.log_dir)
    logger = get_logger("cli")

    if args.window is not None and args.window <= 0:
        logger.error("--window must be a positive number of seconds")
        return EXIT_INPUT_ERROR

    if (args.entry is None) != (args.target is None):
        logger.warning("Both --entry and --target are required for contamination tracing; skipping it")

    try:
        analyzer = ForensicAnalyzer.from_file(args.log_file, strict=args.strict or cfg.strict_parsing)
    except ForensicsError as e:
        logger.error("Failed to load %s: %s", args.log_file, e)
        return EXIT_INPUT_ERROR

    top_k = args.top if args.top is not None else cfg.default_top_k
    summary = analyzer.run_all(top_k, session_id=args.session, entry=args.entry, target=args.target)
    print(render_summary(summary))

    if args.session is not None:
        detail = analyze_timeline(analyzer.events, args.session)
        print(render_timeline_report(detail))
        print(render_ascii_timeline(detail, args.session))
        for pattern in find_suspicious_patterns(analyzer.events, args.session, cfg.suspicious):
            print(f"[SUSPICIOUS] {pattern}")

    if args.top_users > 0:
        print("--- Users with most invalid-session events ---")
        for user, count in users_with_most_invalid_sessions(list(analyzer.events), args.top_users).items():
            print(f"  {user}: {count}")

    if args.window is not None:
        print(f"--- Invalid-session events per {args.window}s window ---")
        for start, count in invalid_sessions_by_window(list(analyzer.events), args.window).items():
            print(f"  {start}: {count}")

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
