"""
Hash or Height identifier for block-addressing RPC methods.

Several RPC methods accept either a block hash or a block height to pick a
block. On the wire the two are told apart only by their JSON shape:

- a hash is a string (byte-reversed hex of the 32 hash bytes)
- a height is a bare non-negative integer that fits in 32 bits

There is no tag field, so decoding peeks at the raw value before choosing the
variant.
"""
from __future__ import annotations

import binascii
import re
from typing import Annotated, Any, ClassVar, Optional, Union

from pydantic import ConfigDict, Field, GetCoreSchemaHandler, GetJsonSchemaHandler, RootModel
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema

_HEX_RE = re.compile(r"^[0-9a-fA-F]{64}$")

MAX_HEIGHT = 0xFFFFFFFF


class BlockHash:
    """
    A 32-byte block hash.

    Bytes are kept in internal (little-endian) order; the text form is the
    reversed hex string used by the RPC interface and block explorers.
    """

    __slots__ = ("_raw",)

    LENGTH: ClassVar[int] = 32

    def __init__(self, raw: bytes):
        raw = bytes(raw)
        if len(raw) != self.LENGTH:
            raise ValueError(f"block hash must be {self.LENGTH} bytes (got {len(raw)})")
        self._raw = raw

    @classmethod
    def from_hex(cls, text: str) -> "BlockHash":
        """Parse the canonical reversed-hex form."""
        if not isinstance(text, str) or not _HEX_RE.fullmatch(text):
            raise ValueError(f"invalid block hash hex: {text!r}")
        return cls(binascii.unhexlify(text)[::-1])

    def to_hex(self) -> str:
        return self._raw[::-1].hex()

    def __bytes__(self) -> bytes:
        return self._raw

    def __str__(self) -> str:
        return self.to_hex()

    def __repr__(self) -> str:
        return f"BlockHash({self.to_hex()!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BlockHash):
            return NotImplemented
        return self._raw == other._raw

    def __hash__(self) -> int:
        return hash(self._raw)

    # ───── pydantic integration ─────
    @classmethod
    def _validate(cls, value: Any) -> "BlockHash":
        if isinstance(value, BlockHash):
            return value
        if isinstance(value, str):
            return cls.from_hex(value)
        raise ValueError(f"block hash must be a hex string, got {type(value).__name__}")

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: GetCoreSchemaHandler) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                lambda h: h.to_hex(), when_used="always"
            ),
        )

    @classmethod
    def __get_pydantic_json_schema__(cls, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler) -> JsonSchemaValue:
        return {"type": "string", "pattern": "^[0-9a-fA-F]{64}$"}


# strict: rejects bools, floats and numeric strings
Height = Annotated[int, Field(strict=True, ge=0, le=MAX_HEIGHT)]


class HashOrHeight(RootModel[Union[BlockHash, Height]]):
    """
    Either a block hash or a block height.

    Serializes untagged: ``HashOrHeight.from_height(5).model_dump_json()`` is
    ``5`` and a hash dumps as its hex string. ``model_validate_json`` picks the
    variant from the JSON value's type.
    """

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_hash(cls, block_hash: BlockHash | str) -> "HashOrHeight":
        if isinstance(block_hash, str):
            block_hash = BlockHash.from_hex(block_hash)
        if not isinstance(block_hash, BlockHash):
            raise TypeError(f"expected BlockHash, got {type(block_hash).__name__}")
        return cls(block_hash)

    @classmethod
    def from_height(cls, height: int) -> "HashOrHeight":
        if isinstance(height, bool) or not isinstance(height, int):
            raise TypeError(f"expected int, got {type(height).__name__}")
        return cls(height)

    def is_hash(self) -> bool:
        return isinstance(self.root, BlockHash)

    def is_height(self) -> bool:
        return not self.is_hash()

    def as_hash(self) -> Optional[BlockHash]:
        return self.root if self.is_hash() else None

    def as_height(self) -> Optional[int]:
        return self.root if self.is_height() else None
