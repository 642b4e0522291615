"""Entry point: build the execution context or exit with a diagnostic."""

from __future__ import annotations

import asyncio
import logging
import os

from dotenv import load_dotenv

from .context import bootstrap
from .exceptions import BootstrapError, MissingConfigurationError
from .utils import redact_url

logger = logging.getLogger("arb_bootstrap")

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_MISSING_CONFIGURATION = 2


async def _run() -> None:
    context = await bootstrap()
    try:
        logger.info(
            "Bootstrap complete for %s on chain %s",
            redact_url(context.node_endpoint_address),
            context.chain_id,
        )
    finally:
        await context.close()


def main() -> int:
    load_dotenv()

    logging.basicConfig(
        level=os.getenv("LOGLEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        asyncio.run(_run())
    except MissingConfigurationError as exc:
        logger.error("Bootstrap failed at %s: %s", exc.step, exc.message)
        return EXIT_MISSING_CONFIGURATION
    except BootstrapError as exc:
        logger.error("Bootstrap failed at %s: %s", exc.step, exc.message)
        if exc.details:
            logger.debug("Failure details: %s", exc.details)
        return EXIT_FAILURE

    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
