"""Entry point for running the cashbook MCP server."""
from .mcp_server import main


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    main()
