"""Calldata serializer for the Cairo ABI.

Encoding walks a typed value and flattens it into the ordered word list an
entry point expects:
- bool -> 0 / 1
- int -> one word, width-checked against the field's declared kind
- address string -> one word
- Uint256 -> [low, high]
- I129 -> [mag_low, mag_high, sign]
- dataclass -> its fields, recursively, in declaration order
- list / tuple -> [len, *elements]

Decoding is the inverse for contract return values. It is strict: a short
response or a word wider than its target kind raises DeserializationError
rather than zero-filling or truncating.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import fields, is_dataclass
from typing import Any, TypeVar, get_type_hints

from autoswappr.codec import (
    WordKind,
    check_width,
    limbs_to_u128,
    parse_word,
    u128_to_limbs,
)
from autoswappr.errors import DeserializationError, InvalidInput
from autoswappr.models.contract import ContractInfo
from autoswappr.models.fields import IS_ADDRESS, IS_ARRAY, KIND
from autoswappr.models.types import I129, FeeType, Uint256

T = TypeVar("T")

Shape = Sequence[WordKind]

# contract_parameters returns
# (fees_collector, fibrous_exchange, avnu_exchange, oracle, owner, fee_type: u8, percentage_fee: u16)
CONTRACT_INFO_SHAPE: Shape = (
    WordKind.FELT,
    WordKind.FELT,
    WordKind.FELT,
    WordKind.FELT,
    WordKind.FELT,
    WordKind.U8,
    WordKind.U16,
)


# =============================================================================
# Encoding
# =============================================================================


def encode(value: Any) -> list[int]:
    """Flatten a typed value into calldata words.

    Args:
        value: A model instance, scalar, or sequence of them

    Returns:
        Ordered list of words

    Raises:
        InvalidInput: If a field value is out of range or malformed
        TypeError: If the value has a type the serializer does not know
    """
    out: list[int] = []
    _encode_into(value, out, None)
    return out


def encode_many(*values: Any) -> list[int]:
    """Concatenate the encodings of several top-level arguments."""
    out: list[int] = []
    for value in values:
        _encode_into(value, out, None)
    return out


def _encode_into(value: Any, out: list[int], kind: WordKind | None) -> None:
    if isinstance(value, bool):
        out.append(int(value))
    elif isinstance(value, Uint256):
        out.extend((value.low, value.high))
    elif isinstance(value, I129):
        low, high = u128_to_limbs(value.mag)
        out.extend((low, high, int(value.sign)))
    elif isinstance(value, FeeType):
        out.append(value.to_u8())
    elif is_dataclass(value) and not isinstance(value, type):
        for f in fields(value):
            _encode_into(getattr(value, f.name), out, f.metadata.get(KIND))
    elif isinstance(value, (list, tuple)):
        out.append(len(value))
        for item in value:
            _encode_into(item, out, kind)
    elif isinstance(value, str):
        out.append(parse_word(value))
    elif isinstance(value, int):
        out.append(check_width(value, kind or WordKind.FELT))
    else:
        raise TypeError(f"Cannot encode {type(value).__name__} as calldata")


# =============================================================================
# Decoding
# =============================================================================


class WordReader:
    """Cursor over a response word list that fails loudly on underrun."""

    def __init__(self, words: Sequence[int], context: str = "response") -> None:
        self._words = list(words)
        self._pos = 0
        self._context = context

    @property
    def context(self) -> str:
        return self._context

    @property
    def remaining(self) -> int:
        return len(self._words) - self._pos

    def take(self, count: int = 1) -> list[int]:
        if count > self.remaining:
            raise DeserializationError(
                f"Insufficient return values from {self._context}: "
                f"needed {self._pos + count} words, got {len(self._words)}"
            )
        chunk = self._words[self._pos : self._pos + count]
        self._pos += count
        return chunk

    def read(self, kind: WordKind) -> Any:
        """Read one value of the given kind."""
        words = self.take(kind.size)
        try:
            if kind is WordKind.U256:
                return Uint256(low=words[0], high=words[1])
            if kind is WordKind.I129:
                return I129(mag=limbs_to_u128(words[0], words[1]), sign=_as_bool(words[2]))
            if kind is WordKind.BOOL:
                return _as_bool(words[0])
            return check_width(words[0], kind)
        except InvalidInput as err:
            raise DeserializationError(
                f"Word out of range for {kind.value} in {self._context}: {err}"
            ) from err


def _as_bool(word: int) -> bool:
    if word not in (0, 1):
        raise InvalidInput(f"bool word must be 0 or 1, got {word}", word)
    return word == 1


def decode_tuple(
    words: Sequence[int],
    shape: Shape,
    *,
    context: str = "response",
    exact: bool = False,
) -> tuple[Any, ...]:
    """Decode a return value into a tuple following the given shape.

    Args:
        words: Words returned by the contract
        shape: Kinds of each return slot, in order
        context: Entry point name used in error messages
        exact: If True, trailing words are an error too

    Raises:
        DeserializationError: If words are short, out of range, or (exact)
            left over
    """
    reader = WordReader(words, context)
    values = tuple(reader.read(kind) for kind in shape)
    if exact and reader.remaining:
        raise DeserializationError(
            f"Unexpected trailing words from {context}: {reader.remaining} left"
        )
    return values


def decode_struct(words: Sequence[int], cls: type[T], *, context: str | None = None) -> T:
    """Decode a model dataclass from words, inverse of encode.

    Raises:
        DeserializationError: If words are short or out of range
    """
    reader = WordReader(words, context or cls.__name__)
    return _read_struct(reader, cls)


def _read_struct(reader: WordReader, cls: type[T]) -> T:
    hints = get_type_hints(cls)
    kwargs: dict[str, Any] = {}
    for f in fields(cls):  # type: ignore[arg-type]
        hint = hints[f.name]
        kind = f.metadata.get(KIND)
        if f.metadata.get(IS_ARRAY):
            (length,) = reader.take(1)
            kwargs[f.name] = tuple(reader.read(kind) for _ in range(length))
        elif f.metadata.get(IS_ADDRESS):
            kwargs[f.name] = hex(reader.read(WordKind.FELT))
        elif hint is Uint256:
            kwargs[f.name] = reader.read(WordKind.U256)
        elif hint is I129:
            kwargs[f.name] = reader.read(WordKind.I129)
        elif hint is bool:
            kwargs[f.name] = reader.read(WordKind.BOOL)
        elif is_dataclass(hint):
            kwargs[f.name] = _read_struct(reader, hint)
        elif kind is not None:
            kwargs[f.name] = reader.read(kind)
        else:
            raise TypeError(f"No wire kind for {cls.__name__}.{f.name}")
    try:
        return cls(**kwargs)
    except InvalidInput as err:
        raise DeserializationError(f"Invalid {cls.__name__} in {reader.context}: {err}") from err


def decode_contract_info(words: Sequence[int]) -> ContractInfo:
    """Decode the contract_parameters return value.

    Raises:
        DeserializationError: On fewer than 7 words or out-of-range fee fields
    """
    (
        fees_collector,
        fibrous_exchange,
        avnu_exchange,
        oracle,
        owner,
        fee_type_raw,
        percentage_fee,
    ) = decode_tuple(words, CONTRACT_INFO_SHAPE, context="contract_parameters")
    return ContractInfo(
        fees_collector=str(fees_collector),
        fibrous_exchange_address=str(fibrous_exchange),
        avnu_exchange_address=str(avnu_exchange),
        oracle_address=str(oracle),
        owner=str(owner),
        fee_type=FeeType.from_u8(fee_type_raw),
        percentage_fee=percentage_fee,
    )


__all__ = [
    "Shape",
    "CONTRACT_INFO_SHAPE",
    "encode",
    "encode_many",
    "WordReader",
    "decode_tuple",
    "decode_struct",
    "decode_contract_info",
]
