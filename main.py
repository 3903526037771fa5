#!/usr/bin/env python3
"""Thin entrypoint for schoolcal."""

from __future__ import annotations

import getpass
import json
import logging
import os
import sys
from typing import Sequence

from _version import __version__
from calendar_service import CalendarService
from config import load_config
from loader import LoadError
from orchestrator import Orchestrator, build_service

PASSWORD_ENV = "SCHOOLCAL_PASSWORD"


class UsageError(Exception):
    pass


class JsonFormatter(logging.Formatter):
    """One JSON object per log line."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        return json.dumps(log_data)


def setup_logging(handler: logging.Handler, log_level: str = "INFO") -> None:
    root_logger = logging.getLogger()
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    handler.setFormatter(JsonFormatter())
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))


def _print_help() -> None:
    print(
        "schoolcal - password-gated school events calendar\n\n"
        "Usage:\n"
        "  schoolcal                Launch curses UI\n"
        "  schoolcal -h             Show this help\n"
        "  schoolcal -v             Show installed version\n"
        "  schoolcal -f <source>    Read events from a path or http(s) URL\n"
        "  schoolcal -l             Print upcoming events and exit\n\n"
        f"The -l mode reads the password from ${PASSWORD_ENV} or prompts for it.\n"
    )


def parse_args(argv: Sequence[str]) -> tuple[str | None, bool, bool, bool]:
    source: str | None = None
    show_version = False
    show_help = False
    list_mode = False

    idx = 0
    while idx < len(argv):
        arg = argv[idx]
        if arg == "-h":
            show_help = True
            idx += 1
            continue
        if arg == "-v":
            show_version = True
            idx += 1
            continue
        if arg == "-l":
            list_mode = True
            idx += 1
            continue
        if arg == "-f":
            idx += 1
            if idx >= len(argv):
                raise UsageError("-f requires a path or URL argument")
            source = argv[idx]
            idx += 1
            continue
        raise UsageError(f"Unknown flag '{arg}'")
    return source, show_version, show_help, list_mode


def format_upcoming(service: CalendarService) -> str:
    table = service.render().table
    if table.is_empty:
        return table.empty_message or ""
    lines = []
    for row in table.rows:
        mark = " (hidden)" if row.hidden else ""
        lines.append(f"{row.date_label:<12} {row.event.title}{mark}")
    return "\n".join(lines)


def _run_list(service: CalendarService) -> int:
    password = os.environ.get(PASSWORD_ENV)
    if password is None and not service.try_resume():
        password = getpass.getpass("Password: ")
    if password is not None:
        try:
            service.unlock(password)
        except LoadError as exc:
            print(str(exc), file=sys.stderr)
            return 1
    print(format_upcoming(service))
    return 0


def main(argv: list[str] | None = None) -> int:
    # Make ESC detection snappy inside curses.
    os.environ.setdefault("ESCDELAY", "25")

    if argv is None:
        argv = sys.argv[1:]

    try:
        source, show_version, show_help, list_mode = parse_args(argv)
    except UsageError as exc:
        print(str(exc))
        return 1

    if show_version:
        print(__version__)
        return 0

    if show_help:
        _print_help()
        return 0

    config = load_config()
    setup_logging(logging.FileHandler(config.log_path), config.log_level)
    if source:
        config.data_source = source

    try:
        if list_mode:
            return _run_list(build_service(config))
        orchestrator = Orchestrator(config)
    except LoadError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    return orchestrator.run()


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        sys.exit(130)
