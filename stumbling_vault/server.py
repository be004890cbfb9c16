"""FastMCP server initialization and startup."""

import logging
import os

from mcp.server.fastmcp import FastMCP

from stumbling_vault.config import get_vault
from stumbling_vault.constants import LOG_LEVEL, LOG_LEVEL_ENV
from stumbling_vault.core.vault_operations import cleanup_orphaned_temp_files

# Initialize logger
logging.basicConfig(level=os.environ.get(LOG_LEVEL_ENV, LOG_LEVEL).upper())
logger = logging.getLogger(__name__)

# Initialize FastMCP server
mcp = FastMCP(
    "stumbling_vault",
    instructions="MCP server for reading and searching markdown notes in a local vault.",
)

# Tool modules are imported in __init__.py to register all @mcp.tool() decorators


def run_server():
    """Validate configuration, sweep stale temp files and serve over stdio."""
    vault = get_vault()
    removed = cleanup_orphaned_temp_files(vault.path)
    logger.info(
        "Starting Stumbling vault MCP server for '%s' at %s (removed %d orphaned temp file(s))",
        vault.name,
        vault.path,
        removed,
    )
    mcp.run(transport="stdio")


if __name__ == "__main__":
    run_server()
