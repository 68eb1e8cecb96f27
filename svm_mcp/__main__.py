"""Entry point: ``python -m svm_mcp`` or the ``svm-mcp`` console script."""

from __future__ import annotations

import logging
import sys

from svm_mcp.config import SvmConfig, default_config
from svm_mcp.logging_setup import configure_logging

logger = logging.getLogger("svm_mcp")


def run_http(config: SvmConfig) -> int:
    """
    Serve svm_mcp.server:app with uvicorn.

    Only the bind address and log options come from ``config``; the app
    imports its RPC clients from the environment-driven default_config.
    """
    import uvicorn

    configure_logging(config)
    logger.info("Starting HTTP gateway on %s:%s", config.http_host, config.http_port)
    try:
        uvicorn.run(
            "svm_mcp.server:app",
            host=config.http_host,
            port=config.http_port,
            log_level=config.log_level.lower(),
        )
    except Exception:
        logger.exception("There was an error starting the HTTP gateway")
        return 1
    return 0


def main(config: SvmConfig = default_config) -> int:
    if config.transport == "http":
        return run_http(config)

    from svm_mcp.stdio_server import main as run_stdio

    return run_stdio(config)


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()
