from __future__ import annotations

"""CLI entrypoint: send one detection notification to the configured webhooks."""

import argparse
from dataclasses import replace
import logging
from typing import Optional, List

from webhook_notifier.config import Config, ConfigurationError
from webhook_notifier.container import Container
from webhook_notifier.logging_utils import setup_logging
from webhook_notifier.schemas.detection import DetectionEvent

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None):
    p = argparse.ArgumentParser(description="Send a detection notification to the configured webhooks")
    p.add_argument("--image", type=str, required=True, help="Path of the processed image to send")
    p.add_argument("--camera", type=str, default="Camera", help="Camera name used in log messages")
    p.add_argument("--types", nargs="*", default=[], help="Detected object types, e.g. person car")
    p.add_argument("--notifiers-file", type=str, default=None, help="JSON file with a 'Notifiers' list")
    p.add_argument("--log-level", type=str, default=None)
    p.add_argument("--log-file", type=str, default=None)
    p.add_argument("--timeout", type=float, default=None, help="HTTP timeout in seconds")
    return p.parse_args(argv)


def build_config_from_env_and_args(args) -> Config:
    # Start with env defaults; overlay CLI overrides if provided
    cfg = Config.from_env()
    kwargs = dict(
        log_level=cfg.log_level if args.log_level is None else args.log_level,
        log_file=cfg.log_file if args.log_file is None else args.log_file,
        notifiers_file=cfg.notifiers_file if args.notifiers_file is None else args.notifiers_file,
        http_timeout=cfg.http_timeout if args.timeout is None else args.timeout,
    )
    return replace(cfg, **kwargs)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    try:
        cfg = build_config_from_env_and_args(args)
        setup_logging(cfg.log_level, cfg.log_file)
        container = Container(cfg)
    except ConfigurationError as exc:
        logger.error("Configuration error: %s", exc)
        return 2

    try:
        if not container.notifiers:
            logger.error("No notifiers configured (set NOTIFIERS_FILE or WEBHOOK_URL)")
            return 2
        event = DetectionEvent.create(args.camera, args.image, args.types)
        completed = container.service.notify(event)
    finally:
        container.close()
    return 0 if completed == len(container.notifiers) else 1


if __name__ == "__main__":
    raise SystemExit(main())
