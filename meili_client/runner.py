"""Connectivity check entry point.

Reads the connection from SEARCH_MEILI_HOST / SEARCH_MEILI_API_KEY, reports
health and version of the service and the indexes it holds.

Usage:
    python -m meili_client.runner
"""

import asyncio

from meili_client.clients.meili.MeiliClient import MeiliClient
from meili_client.errors import MeiliApiError
from meili_client.helper.HelperConfig import HelperConfig
from meili_client.logging.logging_setup import setup_logging


async def main() -> int:
    """Run the connectivity check. Returns the process exit code."""
    logger = setup_logging()
    config = HelperConfig(logger=logger)

    async with MeiliClient.from_env(helper_config=config) as client:
        try:
            await client.is_healthy()
        except MeiliApiError as e:
            logger.error("Service at %s reports itself unhealthy (status %d)", client.config.host, e.status_code)
            return 1

        version = await client.version()
        logger.info("Connected to %s, version %s", client.config.host, version.pkg_version, color="green")

        for index in await client.list_indexes():
            stats = await client.get_index(index.uid).get_stats()
            logger.info("  %s: %s documents", index.uid, stats.number_of_documents)
    return 0


if __name__ == "__main__":
    raise SystemExit(asyncio.run(main()))
