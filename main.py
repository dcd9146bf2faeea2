"""
Day Progress – desktop widget showing how far through the day window you are.

Usage:
    python main.py              run the widget
    python main.py --settings   open only the settings window
    python main.py --status     print the active window and progress, then exit
    python main.py --logs 20    print the latest log entries, then exit
"""
from __future__ import annotations

import argparse
import sys
from typing import List, Optional


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="dayprogress", description="Day progress desktop widget")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--settings", action="store_true", help="open only the settings window")
    group.add_argument("--status", action="store_true", help="print the active window and progress")
    group.add_argument("--logs", type=int, metavar="N", help="print the N latest log entries")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.logs is not None:
        from core.logging.logic.logger import logger
        for entry in logger.fetch_logs(limit=max(args.logs, 0)):
            print(entry)
        return 0

    if args.status:
        from dayprogress.app import status_text
        print(status_text())
        return 0

    from dayprogress import app
    if args.settings:
        app.run_settings()
    else:
        app.run_widget()
    return 0


if __name__ == "__main__":
    sys.exit(main())
