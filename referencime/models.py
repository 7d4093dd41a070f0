# =============================================================================
# referencime/models.py  —  Data Models (the "nouns" of a tool call)
# =============================================================================
#
# A tool call moves through four shapes, one per stage:
#
#   ToolDefinition   static, built once at startup by the registry
#   ToolInvocation   what the caller asked for (name + raw arguments)
#   BackendEnvelope  what the backend answered ({success, data, message})
#   Report           what the caller gets back (text + error flag)
#
# None of them outlives a single call, except ToolDefinition which is
# immutable and shared.
# =============================================================================

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

from pydantic import BaseModel

from referencime.errors import UpstreamApplicationError

# A formatter takes the backend's ``data`` and the normalized arguments and
# returns the report text.
Formatter = Callable[[Any, dict], str]


@dataclass(frozen=True)
class FieldSpec:
    """One declared argument of a tool, as advertised to callers."""

    name: str
    type: str
    required: bool
    default: Any = None
    description: str = ""


@dataclass(frozen=True)
class ToolDefinition:
    """A named operation: what it is called, what it takes, where it goes."""

    name: str
    description: str
    path: str                                  # appended to the API base URL
    arguments: type[BaseModel]                 # strict pydantic argument model
    formatter: Formatter = field(repr=False)

    def fields(self) -> list[FieldSpec]:
        """Declared arguments in declaration order."""
        properties = self.input_schema()["properties"]
        specs = []
        for name, info in self.arguments.model_fields.items():
            schema = properties.get(name, {})
            required = info.is_required()
            specs.append(FieldSpec(
                name=name,
                type=_schema_type(schema),
                required=required,
                default=None if required else info.default,
                description=info.description or "",
            ))
        return specs

    def input_schema(self) -> dict:
        """JSON Schema of the arguments, as sent in the MCP tool listing."""
        schema = self.arguments.model_json_schema()
        schema.pop("title", None)
        for prop in schema.get("properties", {}).values():
            prop.pop("title", None)
        schema.setdefault("properties", {})
        schema["type"] = "object"
        return schema


def _schema_type(schema: dict) -> str:
    if "type" in schema:
        return schema["type"]
    # Optional[X] renders as anyOf [X, null]
    types = [s.get("type") for s in schema.get("anyOf", []) if s.get("type") != "null"]
    return types[0] if types else "any"


@dataclass
class ToolInvocation:
    """A single incoming call."""

    name: str
    arguments: dict = field(default_factory=dict)


@dataclass(frozen=True)
class BackendEnvelope:
    """The outer JSON object every Referencime endpoint answers with."""

    success: bool
    data: Any = None
    message: str | None = None

    @classmethod
    def from_json(cls, body: Any) -> "BackendEnvelope":
        if not isinstance(body, Mapping):
            raise UpstreamApplicationError("Response body is not a JSON object")
        message = body.get("message")
        return cls(
            success=bool(body.get("success", False)),
            data=body.get("data"),
            message=str(message) if message else None,
        )

    def unwrap(self) -> Any:
        """Return ``data`` on success, raise the backend's message otherwise."""
        if not self.success:
            raise UpstreamApplicationError(self.message)
        return self.data


@dataclass(frozen=True)
class Report:
    """The rendered answer to a tool call."""

    text: str
    is_error: bool = False

    @classmethod
    def error(cls, message: str) -> "Report":
        return cls(text=f"❌ **Error**: {message}", is_error=True)
