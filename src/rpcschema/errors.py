# rpcschema/errors.py
from typing import Any, ClassVar, Optional
from dataclasses import dataclass

@dataclass(eq=False)
class SchemaError(Exception):
    """Base error raised while loading or fetching an API definition."""
    message: str
    cause: Optional[BaseException] = None

    kind: ClassVar[str] = "schema"
    prefix: ClassVar[str] = "Schema error"

    def __post_init__(self):
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"{self.prefix}: {self.message}"

    def to_dict(self) -> dict:
        base: dict[str, Any] = {"kind": self.kind, "message": self.message}
        if self.cause is not None:
            base["cause"] = repr(self.cause)
        return base


class SchemaIOError(SchemaError):
    """The source could not be read (missing file, permissions, network)."""
    kind = "io"
    prefix = "IO error"


class SchemaParseError(SchemaError):
    """The source is not a valid encoding of an API definition."""
    kind = "json_parse"
    prefix = "Failed to parse JSON"


IO_ERROR = lambda message, cause=None: SchemaIOError(message, cause)
PARSE_ERROR = lambda message, cause=None: SchemaParseError(message, cause)
