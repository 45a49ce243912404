#!/usr/bin/env python3
"""Terminal dashboard for a running sams control server.

Connects to the server's status channel, prints every render command and
log line, and optionally saves a configuration and starts or stops the
purchase run first.

Examples:
    python scripts/watch_dashboard.py --origin http://127.0.0.1:8080
    python scripts/watch_dashboard.py --config-token "$SAMS_AUTH_TOKEN" --start
"""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import html
import logging
import re
import sys
from pathlib import Path

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pysams import (  # noqa: E402
    PanelCommand,
    SamsClient,
    SamsConfig,
    SubmissionConfig,
    ViewCommand,
)
from pysams.view.surface import RenderCommand  # noqa: E402

_TAG_RE = re.compile(r"<[^>]+>")


class ConsoleSurface:
    """Render surface that prints to stdout."""

    def render(self, command: RenderCommand) -> None:
        if isinstance(command, ViewCommand):
            step = command.step.descriptor
            controls = f"start={'on' if command.start_enabled else 'off'} stop={'on' if command.stop_enabled else 'off'}"
            print(f"[{command.status_text}] {step.icon} {step.title} - {step.description} ({controls})")
        elif isinstance(command, PanelCommand):
            if not command.visible:
                print(f"  ({command.panel.value} hidden)")
                return
            print(f"  {command.panel.value}:")
            for line in command.lines:
                print(f"    {line}")

    def append_log(self, markup: str) -> None:
        # Lines arrive escaped for markup; strip tags and unescape for a terminal.
        print("  log:", html.unescape(" ".join(_TAG_RE.sub(" ", markup).split())))

    def clear_log(self) -> None:
        print("  (log cleared)")

    def alert(self, message: str) -> None:
        print(f"!! {message}", file=sys.stderr)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--origin", help="Control server origin (default: SAMS_ORIGIN or http://127.0.0.1:8080)")
    parser.add_argument("--config-token", help="Save a configuration with this auth token before watching")
    parser.add_argument("--address-id", default="", help="Address id to use with --config-token")
    action = parser.add_mutually_exclusive_group()
    action.add_argument("--start", action="store_true", help="Start the purchase run")
    action.add_argument("--stop", action="store_true", help="Stop the purchase run")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable DEBUG logging")
    return parser.parse_args(argv)


async def _run(args: argparse.Namespace) -> int:
    overrides = {"origin": args.origin} if args.origin else {}
    config = SamsConfig.from_env(**overrides)

    async with SamsClient(config, surface=ConsoleSurface()) as client:
        if args.config_token:
            result = await client.save_config(
                SubmissionConfig(auth_token=args.config_token, address_id=args.address_id)
            )
            if result is None:
                return 1
        if args.start and not await client.start():
            return 1
        if args.stop and not await client.stop():
            return 1

        with contextlib.suppress(asyncio.CancelledError):
            await asyncio.Event().wait()
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        return asyncio.run(_run(args))
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
