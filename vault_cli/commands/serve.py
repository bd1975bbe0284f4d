"""
CLI Serve Command

Run the vault HTTP service under uvicorn.

Usage:
    vault serve [--host HOST] [--port PORT]
"""

from __future__ import annotations

import logging
from argparse import Namespace


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0


def serve_cmd(args: Namespace) -> int:
    """
    Execute the serve command.

    Blocks until uvicorn shuts down (it owns signal handling).
    """
    import uvicorn

    from api.app import create_app

    config = args.cli_config
    if args.host:
        config.server.host = args.host
    if args.port:
        config.server.port = args.port

    app = create_app(config=config)
    logger.info(f"Starting vault service on {config.server.address}")
    uvicorn.run(
        app,
        host=config.server.host,
        port=config.server.port,
        log_level=config.log_level.lower(),
    )
    return EXIT_SUCCESS
