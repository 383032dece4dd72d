"""Upper bounds on the serialised length of AT command arguments."""

from __future__ import annotations

from typing import Iterable, Sequence

_PRIMITIVE_LENS = {
    "char": 1,
    "bool": 5,
    "isize": 19,
    "usize": 20,
    "u8": 3,
    "u16": 5,
    "u32": 10,
    "u64": 20,
    "u128": 39,
    "i8": 4,
    "i16": 6,
    "i32": 11,
    "i64": 20,
    "i128": 40,
    "f32": 42,
    "f64": 312,
}

# "0x" followed by colon-separated hex digits.
_HEX_STR_LENS = {
    "u8": 10,
    "u16": 18,
    "u32": 30,
    "u64": 66,
    "u128": 130,
}


def primitive_len(type_name: str) -> int:
    """Maximum length of a primitive value written as text, e.g. ``u8`` -> 3."""
    try:
        return _PRIMITIVE_LENS[type_name]
    except KeyError:
        raise ValueError(f"unknown primitive type {type_name!r}") from None


def hex_str_len(type_name: str) -> int:
    """Maximum length of an unsigned integer written as a hex string."""
    try:
        return _HEX_STR_LENS[type_name]
    except KeyError:
        raise ValueError(f"unknown hex string type {type_name!r}") from None


def _check_size(value: int, what: str) -> int:
    if value < 0:
        raise ValueError(f"{what} must not be negative, got {value!r}")
    return value


def hex_array_len(size: int) -> int:
    """Maximum length of a byte array of ``size`` bytes written as a hex string."""
    _check_size(size, "size")
    return (2 + size * 4 - 1) * 2


def string_len(capacity: int) -> int:
    """Length of a quoted string holding up to ``capacity`` characters."""
    return 1 + _check_size(capacity, "capacity") + 1


def vec_len(capacity: int, item_len: int) -> int:
    """Length of up to ``capacity`` items of ``item_len`` each."""
    return _check_size(capacity, "capacity") * _check_size(item_len, "item_len")


def struct_len(field_lens: Iterable[int]) -> int:
    """Length of comma-separated fields: their lengths plus one per separator."""
    lens = [_check_size(n, "field length") for n in field_lens]
    if not lens:
        return 0
    return sum(lens) + len(lens) - 1


def enum_len(variant_lens: Iterable[Sequence[int]]) -> int:
    """Length of the longest variant.

    Each variant is given as the lengths of the items it writes, starting
    with its discriminant; the items are comma separated.
    """
    lens = [struct_len(variant) for variant in variant_lens]
    if not lens:
        raise ValueError("an enum needs at least one variant")
    return max(lens)