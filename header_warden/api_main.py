# Copyright (c) 2025 Dave Tofflemire, SigilDERG Project
# Licensed under the GNU Affero General Public License v3.0 (AGPLv3).
# Commercial licenses are available. Contact: davetmire85@gmail.com

import argparse
import logging
from pathlib import Path

import uvicorn

from .cli import setup_logging
from .config import load_config
from .api import app as api_app

logger = logging.getLogger("header_warden.api_main")


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="header-warden-api",
        description="Serve the header-warden analysis API.",
    )
    parser.add_argument("--config", type=Path, help="path to a JSON config file")
    args = parser.parse_args()

    cfg = load_config(args.config)
    setup_logging(cfg.log_level, cfg.log_file)

    if not cfg.api_enabled:
        logger.warning("Analysis API is disabled in config (api.enabled=false)")
        return

    host = cfg.api_host
    port = cfg.api_port

    logger.info("Starting header-warden analysis API on %s:%s", host, port)
    if not cfg.api_key:
        logger.info("No api.api_key configured; access is limited by api.allowed_ips only.")

    uvicorn.run(
        api_app,
        host=host,
        port=port,
        log_level=cfg.log_level.lower(),
    )


if __name__ == "__main__":
    main()
