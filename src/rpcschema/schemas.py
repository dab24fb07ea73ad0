# rpcschema/schemas.py
"""
Schema types for JSON-RPC API definitions.

An API definition is a JSON document of the form::

    {"rpcs": {"<method name>": {<method>}, ...}}

where each method carries its arguments and one or more result trees. The
models here mirror that document field for field; the only derived value is
``BtcResult.required``, which is filled in by ``BtcResult.post_process``
when a definition is loaded.
"""
from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    SerializerFunctionWrapHandler,
    ValidationError,
    field_serializer,
    field_validator,
)

from rpcschema.errors import IO_ERROR, PARSE_ERROR

logger = logging.getLogger("rpcschema.schemas")


class _SchemaModel(BaseModel):
    # "type" is a builtin, so models use ``type_`` and keep "type" on the wire
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


# ──────────────────────────────────────────────────────────────
# Arguments
# ──────────────────────────────────────────────────────────────
class BtcArgument(_SchemaModel):
    """One argument of an RPC method."""
    names: List[str] = Field(..., description="Argument names, the first one is canonical")
    description: str = Field(..., description="Description of the argument")
    oneline_description: str = Field("", description="One-line description of the argument")
    also_positional: bool = Field(False, description="Whether the argument can also be passed positionally")
    type_str: Optional[List[str]] = Field(None, description="Type string representation, derived from type when absent")
    required: bool = Field(..., description="Whether the argument is required")
    hidden: bool = Field(False, description="Whether the argument is hidden from documentation")
    type_: str = Field(..., alias="type", description="Type of the argument")

    @property
    def name(self) -> str:
        return self.names[0] if self.names else ""


# ──────────────────────────────────────────────────────────────
# Results
# ──────────────────────────────────────────────────────────────
class BtcResult(_SchemaModel):
    """
    One node of a result tree.

    Object and array results nest their fields/elements in ``inner``.

    ``required`` is not part of the wire format: a "required" key in the
    source is ignored and the value stays stale until ``post_process``
    derives it from ``optional``.
    """
    type_: str = Field(..., alias="type", description="Type of the result")
    optional: bool = Field(False, description="Whether the result is optional")
    description: str = Field(..., description="Description of the result")
    skip_type_check: bool = Field(False, description="Whether to skip type checking for this result")
    key_name: str = Field("", description="Key name when the result is a field of an object")
    condition: str = Field("", description="Condition for when this result is present")
    inner: List["BtcResult"] = Field(default_factory=list, description="Inner results for nested structures")

    _required: bool = PrivateAttr(default=False)

    @classmethod
    def new(
        cls,
        type_: str,
        optional: bool,
        description: str,
        skip_type_check: bool,
        key_name: str,
        condition: str,
        inner: List["BtcResult"],
    ) -> "BtcResult":
        """Build a result node with ``required`` already derived."""
        result = cls(
            type_=type_,
            optional=optional,
            description=description,
            skip_type_check=skip_type_check,
            key_name=key_name,
            condition=condition,
            inner=inner,
        )
        result.post_process()
        return result

    @classmethod
    def default(cls) -> "BtcResult":
        """An empty, required result node."""
        return cls.new("", False, "", False, "", "", [])

    @property
    def required(self) -> bool:
        return self._required

    def post_process(self) -> None:
        """Set ``required = not optional`` on this node and every descendant."""
        self._required = not self.optional
        for child in self.inner:
            child.post_process()


# ──────────────────────────────────────────────────────────────
# Methods
# ──────────────────────────────────────────────────────────────
class BtcMethod(_SchemaModel):
    """
    An RPC method definition.

    ``argument_names`` is taken from the source as-is and is not checked
    against ``arguments``.
    """
    name: str = Field(..., description="Name of the method")
    description: str = Field(..., description="Description of the method")
    examples: str = Field("", description="Example usage of the method")
    argument_names: List[str] = Field(default_factory=list, description="Names of the arguments")
    arguments: List[BtcArgument] = Field(..., description="Arguments for the method")
    results: List[BtcResult] = Field(..., description="Results returned by the method")

    def post_process(self) -> None:
        for result in self.results:
            result.post_process()


# ──────────────────────────────────────────────────────────────
# API definition
# ──────────────────────────────────────────────────────────────
class ApiDefinition(_SchemaModel):
    """All methods of an RPC API, keyed and ordered by method name."""
    rpcs: Dict[str, BtcMethod] = Field(..., description="Methods sorted by name")

    @field_validator("rpcs")
    @classmethod
    def sort_rpcs(cls, v: Dict[str, BtcMethod]) -> Dict[str, BtcMethod]:
        return dict(sorted(v.items()))

    # callers may insert into rpcs directly, so sort again on the way out
    @field_serializer("rpcs", mode="wrap")
    def serialize_rpcs(self, v: Dict[str, BtcMethod], handler: SerializerFunctionWrapHandler) -> Any:
        return handler(dict(sorted(v.items())))

    # ───── Construction / loading ─────
    @classmethod
    def new(cls) -> "ApiDefinition":
        """An empty definition; decoded documents must carry "rpcs" themselves."""
        return cls(rpcs={})

    @classmethod
    def loads(cls, content: str | bytes, source: str = "<string>") -> "ApiDefinition":
        """Decode a definition from JSON text and normalize every result tree."""
        try:
            api_def = cls.model_validate_json(content)
        except ValidationError as e:
            logger.error(f"Invalid API definition in {source}: {e.error_count()} error(s)")
            raise PARSE_ERROR(f"{source}: {e}", e) from e

        for method in api_def.rpcs.values():
            method.post_process()
        logger.debug(f"Loaded {len(api_def.rpcs)} methods from {source}")
        return api_def

    @classmethod
    def load(cls, path: str | os.PathLike) -> "ApiDefinition":
        """
        Load an API definition from a JSON file.

        Raises SchemaIOError if the file cannot be read and SchemaParseError
        if its content is not a valid definition.
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                content = f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Cannot read API definition {path}: {e}")
            raise IO_ERROR(f"{path}: {e}", e) from e
        return cls.loads(content, source=os.fspath(path))

    # ───── Lookup / mutation ─────
    def get_method(self, name: str) -> Optional[BtcMethod]:
        return self.rpcs.get(name)

    def insert_method(self, method: BtcMethod) -> Optional[BtcMethod]:
        """Insert ``method`` under its own name, returning any method it replaced."""
        previous = self.rpcs.get(method.name)
        self.rpcs[method.name] = method
        self.rpcs = dict(sorted(self.rpcs.items()))
        return previous

    def remove_method(self, name: str) -> Optional[BtcMethod]:
        return self.rpcs.pop(name, None)

    def method_names(self) -> List[str]:
        return sorted(self.rpcs)

    # ───── Serialization ─────
    def to_json(self, indent: int | None = 2) -> str:
        return self.model_dump_json(by_alias=True, indent=indent)

    def dump(self, path: str | os.PathLike) -> None:
        try:
            with open(path, "w", encoding="utf-8") as f:
                f.write(self.to_json())
        except OSError as e:
            raise IO_ERROR(f"{path}: {e}", e) from e

    # ───── Introspection ─────
    def list_methods(self) -> Dict[str, dict]:
        return {
            name: {
                "description": m.description,
                "argument_names": [a.name for a in m.arguments],
                "required_arguments": [a.name for a in m.arguments if a.required],
                "result_count": len(m.results),
            }
            for name, m in sorted(self.rpcs.items())
        }
