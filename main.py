# =============================================================================
# main.py  —  Entry Point for the Referencime MCP Server
# =============================================================================
#
# HOW TO RUN:
#   referencime-mcp start          (installed console script)
#   python main.py start           (from a checkout)
#
# WHAT HAPPENS ON `start`:
#   1. Loads .env (if any) into the environment
#   2. Reads REFERENCIME_API_KEY; exits with status 1 when it is missing
#   3. Builds the tool registry, the backend gateway and the dispatcher
#   4. Serves MCP over stdin/stdout until the client disconnects
#
# ANY OTHER INVOCATION:
#   Prints usage and a sample MCP client configuration, exits 0.
# =============================================================================

import json
import logging
import sys

from dotenv import load_dotenv

from referencime.config import API_KEY_ENV, load_settings
from referencime.errors import ConfigError, MissingCredentialError
from referencime.gateway import BackendGateway
from referencime.registry import ToolRegistry
from referencime_mcp.dispatcher import Dispatcher
from referencime_mcp.logs import setup_logging
from referencime_mcp.mcp_server import build_server

logger = logging.getLogger("referencime_mcp")

USAGE = "Usage: referencime-mcp start"

SAMPLE_CONFIG = {
    "mcpServers": {
        "referencime": {
            "command": "referencime-mcp",
            "args": ["start"],
            "env": {
                API_KEY_ENV: "your_api_key_here",
            },
        }
    }
}


def print_usage() -> None:
    print(USAGE)
    print()
    print("MCP client configuration (e.g. Claude Desktop):")
    print(json.dumps(SAMPLE_CONFIG, indent=2))


def start() -> int:
    """Check the credential, then serve MCP over stdio.

    Returns the process exit status.
    """
    # Environment first: the API key may live in a .env file.
    load_dotenv()
    setup_logging()
    logger.info("🚀 Starting the Referencime MCP server...")

    try:
        settings = load_settings()
    except MissingCredentialError as exc:
        logger.error(f"❌ {exc}!")
        logger.error("💡 Add your API key to the MCP client configuration:")
        logger.error(f'   "env": {{ "{exc.variable}": "your_api_key" }}')
        return 1
    except ConfigError as exc:
        logger.error(f"❌ Invalid configuration: {exc}")
        return 1

    logging.getLogger().setLevel(settings.log_level)
    logger.info("✅ Referencime API key found")

    registry = ToolRegistry.default()
    dispatcher = Dispatcher(registry, BackendGateway(settings))
    server = build_server(dispatcher)

    logger.info(f"🛠️  {len(registry)} SEO analysis tools available")
    logger.info(f"🔗 Backend: {settings.api_url} (timeout {settings.timeout:g}s)")
    server.run()
    return 0


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if args and args[0] == "start":
        return start()
    print_usage()
    return 0


def cli() -> None:
    """Console-script entry point."""
    sys.exit(main())


# =============================================================================
# Script entry point
# =============================================================================
if __name__ == "__main__":
    cli()
