"""Command-line entry point for the VWS target client."""

from __future__ import annotations

import argparse
import json
import logging
from dataclasses import asdict
from pathlib import Path
from typing import List, Optional

from config.settings import (
    LOG_DIR,
    LOG_LEVEL,
    VUFORIA_ACCESS_KEY,
    VUFORIA_SECRET_KEY,
    VWS_HOST,
    VWS_TIMEOUT,
    WAIT_DEFAULT_INTERVAL,
    WAIT_EXTENDED_INTERVAL,
    WAIT_TIMEOUT,
)
from utils.logger import setup_logging
from utils.validators import validate_environment
from vws.api_client import VwsClient
from vws.errors import VwsError
from vws.models import (
    DeleteTargetRequest,
    GetTargetRequest,
    PostTargetRequest,
    TargetSummaryRequest,
    UpdateTargetRequest,
    encode_image,
    encode_metadata,
)
from vws.waiter import wait_until_processed


def _print(response) -> None:
    print(json.dumps(asdict(response), indent=2))


def _read_image(path: Optional[str]) -> Optional[str]:
    if path is None:
        return None
    return encode_image(Path(path).expanduser().read_bytes())


def _metadata(raw: Optional[str]) -> Optional[str]:
    return None if raw is None else encode_metadata(raw)


def _wait(client: VwsClient, target_id: str, logger: logging.Logger) -> None:
    logger.info("Waiting for target=%s to finish processing", target_id)
    response = wait_until_processed(
        client,
        target_id,
        timeout=WAIT_TIMEOUT,
        default_interval=WAIT_DEFAULT_INTERVAL,
        extended_interval=WAIT_EXTENDED_INTERVAL,
    )
    _print(response)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Manage Vuforia cloud targets.")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("database-summary", help="Show the database summary.")

    for name, help_text in (
        ("get", "Show a target record."),
        ("summary", "Show a target summary report."),
        ("delete", "Delete a target."),
        ("wait", "Wait until a target has been processed."),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("target_id")

    post = sub.add_parser("post", help="Upload a new target.")
    post.add_argument("--name", required=True)
    post.add_argument("--width", type=float, required=True)
    post.add_argument("--image", required=True, help="Path to a JPEG or PNG file.")
    post.add_argument("--inactive", action="store_true")
    post.add_argument("--metadata", help="Application metadata (plain text).")
    post.add_argument("--wait", action="store_true")

    update = sub.add_parser("update", help="Update fields of a target.")
    update.add_argument("target_id")
    update.add_argument("--name")
    update.add_argument("--width", type=float)
    update.add_argument("--image", help="Path to a JPEG or PNG file.")
    active = update.add_mutually_exclusive_group()
    active.add_argument("--active", dest="active", action="store_true", default=None)
    active.add_argument("--inactive", dest="active", action="store_false")
    update.add_argument("--metadata", help="Application metadata (plain text).")
    update.add_argument("--wait", action="store_true")

    return parser


def run(args: argparse.Namespace, client: VwsClient, logger: logging.Logger) -> None:
    if args.command == "database-summary":
        _print(client.database_summary())
    elif args.command == "get":
        _print(client.get_target(GetTargetRequest(target_id=args.target_id)))
    elif args.command == "summary":
        _print(client.target_summary(TargetSummaryRequest(target_id=args.target_id)))
    elif args.command == "delete":
        _print(client.delete_target(DeleteTargetRequest(target_id=args.target_id)))
    elif args.command == "wait":
        _wait(client, args.target_id, logger)
    elif args.command == "post":
        response = client.post_target(
            PostTargetRequest(
                name=args.name,
                width=args.width,
                image=_read_image(args.image),
                active=False if args.inactive else None,
                metadata=_metadata(args.metadata),
            )
        )
        _print(response)
        if args.wait:
            _wait(client, response.target_id, logger)
    elif args.command == "update":
        _print(
            client.update_target(
                UpdateTargetRequest(
                    target_id=args.target_id,
                    name=args.name,
                    width=args.width,
                    image=_read_image(args.image),
                    active=args.active,
                    metadata=_metadata(args.metadata),
                )
            )
        )
        if args.wait:
            _wait(client, args.target_id, logger)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logger = setup_logging(LOG_DIR, level=LOG_LEVEL)
    validate_environment(VUFORIA_ACCESS_KEY, VUFORIA_SECRET_KEY, logger)

    client = VwsClient(
        VUFORIA_ACCESS_KEY,
        VUFORIA_SECRET_KEY,
        timeout=VWS_TIMEOUT,
        host=VWS_HOST,
        logger=logger,
    )
    try:
        run(args, client, logger)
    except VwsError as exc:
        logger.error("%s", exc)
        return 1
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        return 130
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
