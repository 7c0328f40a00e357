"""Smart Library Server - FastMCP Implementation

Serves the catalog over stdio. The record files are loaded once at startup
and written back when the server stops, however it stops.

Features exposed:
- Resources: Book listings, user registry, circulation reports
- Tools: Add/remove books and users, issue and return, catalog search
"""

import logging
import signal
import sys
from typing import Any

from fastmcp import FastMCP

from .config import get_config
from .library import open_library, set_library
from .resources import all_resources
from .tools import all_tools

# Initialize logging - stderr for logs, stdout for MCP protocol
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stderr)],
)

logger = logging.getLogger(__name__)

config = get_config()

mcp = FastMCP(
    name=config.server_name,
    version=config.server_version,
    instructions=(
        "Smart Library - a small library catalog. Books are keyed by ISBN and "
        "users by a numeric id assigned at registration. Use resources to browse "
        "books, users and reports; use tools to add or remove records, issue and "
        "return books, and search the catalog."
    ),
)

for resource in all_resources:
    uri = resource.get("uri_template", resource.get("uri"))
    if not uri:
        logger.error("Resource missing URI: %s", resource)
        continue

    logger.debug("Registering resource: %s with URI: %s", resource["name"], uri)
    try:
        mcp.resource(
            uri=uri,
            name=resource["name"],
            description=resource["description"],
            mime_type=resource["mime_type"],
        )(resource["handler"])
    except Exception:
        logger.exception("Failed to register resource %s", resource["name"])
        raise

logger.info("Registered %d resources", len(all_resources))

for tool in all_tools:
    logger.debug("Registering tool: %s", tool["name"])
    try:
        mcp.tool(
            name=tool["name"],
            description=tool["description"],
        )(tool["handler"])
    except Exception:
        logger.exception("Failed to register tool %s", tool["name"])
        raise

logger.info("Registered %d tools", len(all_tools))


def run_stdio_server() -> None:
    """Run the server on stdio with the library loaded from its record files.

    The library is saved when ``mcp.run`` returns or raises, including the
    ``SystemExit`` raised by the signal handlers.
    """
    logger.info("Starting %s v%s on stdio transport", config.server_name, config.server_version)

    if config.debug:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.debug("Debug mode enabled - verbose protocol logging active")
    else:
        logging.getLogger().setLevel(config.log_level)
        logging.getLogger("fastmcp").setLevel(logging.WARNING)

    def signal_handler(signum: int, _frame: Any) -> None:
        logger.info("Received signal %s, saving and shutting down...", signum)
        sys.exit(0)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    with open_library(config) as library:
        set_library(library)
        logger.info(
            "Catalog loaded: %d books, %d users", len(library.books), len(library.users)
        )
        try:
            logger.info("Server ready and waiting for connections...")
            mcp.run(transport="stdio")
        except Exception:
            logger.exception("Fatal error in server")
            raise


def main() -> None:
    """Entry point for the ``smart-library`` command."""
    try:
        logger.info("=" * 60)
        logger.info("Smart Library")
        logger.info("Version: %s", config.server_version)
        logger.info("Books file: %s", config.books_file)
        logger.info("Users file: %s", config.users_file)
        logger.info("Debug Mode: %s", config.debug)
        logger.info("=" * 60)

        if config.transport == "stdio":
            run_stdio_server()
        else:
            logger.error("Unsupported transport: %s", config.transport)
            sys.exit(1)

    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except Exception:
        logger.exception("Failed to run server")
        sys.exit(1)


if __name__ == "__main__":
    main()
