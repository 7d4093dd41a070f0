# =============================================================================
# referencime/errors.py  —  Error taxonomy
# =============================================================================
#
# Every failure a tool call can run into has its own class.  All of them
# derive from ReferencimeError so the dispatcher can turn any of them into
# an error-flagged report with a single except clause.
#
# Two members are startup-only and never reach the dispatcher:
#   - MissingCredentialError  (no API key in the environment)
#   - ConfigError             (an environment value cannot be parsed)
# =============================================================================


class ReferencimeError(Exception):
    """Base class for every error raised by this project."""


class ConfigError(ReferencimeError):
    """An environment setting is present but unusable."""


class MissingCredentialError(ConfigError):
    """The API key environment variable is not set."""

    def __init__(self, variable: str):
        self.variable = variable
        super().__init__(f"{variable} is not configured")


class UnknownToolError(ReferencimeError):
    """The requested tool name is not in the registry."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class ValidationError(ReferencimeError):
    """Caller-supplied arguments do not match the tool's schema.

    ``problems`` is a list of ``(field, reason)`` pairs, in the order the
    validator reported them.
    """

    def __init__(self, tool: str, problems: list[tuple[str, str]]):
        self.tool = tool
        self.problems = problems
        details = "; ".join(f"{field}: {reason}" for field, reason in problems)
        super().__init__(f"Invalid arguments for {tool}: {details}")

    @property
    def fields(self) -> list[str]:
        return [field for field, _ in self.problems]


class UpstreamHttpError(ReferencimeError):
    """The backend answered with a status outside the 2xx range."""

    def __init__(self, status: int, status_text: str = ""):
        self.status = status
        self.status_text = status_text
        super().__init__(f"Referencime API error: {status} {status_text}".rstrip())


class UpstreamApplicationError(ReferencimeError):
    """The backend answered, but reported a logical failure."""

    def __init__(self, message: str | None = None):
        self.message = message or "Unknown error"
        super().__init__(f"Referencime API returned an error: {self.message}")


class UpstreamConnectionError(ReferencimeError):
    """The backend could not be reached (DNS, refused connection, timeout)."""


class MalformedPayloadError(ReferencimeError):
    """The backend's ``data`` does not have the shape a formatter expects."""

    def __init__(self, tool: str, detail: str):
        self.tool = tool
        self.detail = detail
        super().__init__(f"Unexpected response shape for {tool}: {detail}")
