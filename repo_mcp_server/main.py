# repo_mcp_server/main.py
import logging

from fastmcp import FastMCP
from repo_mcp.config import Settings
from repo_mcp.di import build_container
from repo_mcp.logging import configure_logging
from repo_mcp_server.registry import bind_runner, build_tool_registry
from repo_mcp_server.tools.files import register_file_tools

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastMCP:
    """
    Build DI container, create FastMCP host, and register tools.
    Keep the server (protocol) separate from tool/service logic.
    """
    container = build_container(settings)
    registry = build_tool_registry(container)

    mcp = FastMCP("repo-mcp-server", version="1.0.0")

    # Register tools (thin adapters over the registry boundary)
    register_file_tools(mcp, bind_runner(registry))

    logger.info("repository root: %s", container.resolver.root)
    return mcp


def main():
    settings = Settings()
    configure_logging(settings.LOG_LEVEL)
    app = create_app(settings)
    logger.info("Repo MCP server running on stdio")
    try:
        # stdio transport: client (agent/IDE) launches this process and speaks JSON-RPC on stdin/stdout
        app.run(transport="stdio")
    except KeyboardInterrupt:
        logger.info("interrupted, shutting down")


if __name__ == "__main__":
    main()
