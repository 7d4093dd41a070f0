# =============================================================================
# referencime_mcp/logs.py  —  Logging to STDERR
# =============================================================================
# The MCP server talks to its client over STDOUT.  Anything else written to
# stdout would corrupt the JSON-RPC stream, so every log line goes to STDERR.
#
# ANSI COLORS:
#   CYAN    incoming tool calls (name + arguments)
#   YELLOW  intermediate status
#   GREEN   successful responses
#   RED     errors turned into error reports
# =============================================================================

import json
import logging
import sys

_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RED = "\033[31m"
_RESET = "\033[0m"

logger = logging.getLogger("referencime_mcp")


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger once, at process start."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )


def log_request(tool_name: str, arguments) -> None:
    """Log an incoming tool call with its arguments in CYAN."""
    if isinstance(arguments, dict):
        param_str = ", ".join(f"{k}={v!r}" for k, v in arguments.items())
    else:
        param_str = repr(arguments)
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def log_response(tool_name: str, text: str) -> None:
    """Log the size and first line of a report in GREEN."""
    first_line = text.splitlines()[0] if text else ""
    logger.info(f"{_GREEN}  ← {tool_name} report ({len(text)} chars): {first_line}{_RESET}")


def log_error(tool_name: str, message: str) -> None:
    """Log a failed call in RED; the only place a failure is logged."""
    logger.error(f"{_RED}  ✗ {tool_name} failed: {message}{_RESET}")


def dump(value) -> str:
    """Compact JSON for log lines; falls back to repr for odd values."""
    try:
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    except (TypeError, ValueError):
        return repr(value)
