"""
Wallet seed derivation from eight user-chosen numbers.

Algorithm:
    digits = "".join(str(n) for n in inputs)       # no separators, no padding
    digest = sha512(digits.encode("utf-8"))
    seed   = "s" + encode_base58(digest[:32])

The alphabet is the XRPL ordering, not Bitcoin's. Using the Bitcoin
alphabet produces a different, incompatible seed.

Leading zero bytes of the digest are dropped by the big-integer
encoding (no placeholder characters). Seeds are compared by exact
string equality downstream, so this is kept as-is.

The output is secret-equivalent. Never log it.
"""

from __future__ import annotations

import hashlib
import secrets
from collections.abc import Sequence

from xapay.errors import InvalidInput

# Base58 alphabet, XRPL order. Character order is part of the seed format.
SEED_ALPHABET = "rpshnaf39wBUDNEGHJKLM4PQRST7VWXYZ2bcdeCg65jkm8oFqi1tuvAxyz"

SEED_PREFIX = "s"

# Number of inputs and their upper bound (six decimal digits).
SEED_INPUT_COUNT = 8
SEED_INPUT_MAX = 999_999

# Bytes of the SHA-512 digest used as seed material.
SEED_MATERIAL_BYTES = 32


def _validate_inputs(inputs: Sequence[int]) -> None:
    if isinstance(inputs, (str, bytes)):
        raise InvalidInput("seed inputs must be a sequence of integers")
    if len(inputs) != SEED_INPUT_COUNT:
        raise InvalidInput(
            f"seed inputs must have exactly {SEED_INPUT_COUNT} numbers, got {len(inputs)}"
        )
    for position, value in enumerate(inputs):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidInput(
                f"seed input {position} must be an int, got: {value!r}"
            )
        if not 0 <= value <= SEED_INPUT_MAX:
            raise InvalidInput(
                f"seed input {position} must be between 0 and {SEED_INPUT_MAX}, got {value}"
            )


def encode_base58(data: bytes, alphabet: str = SEED_ALPHABET) -> str:
    """Encode bytes as a big-endian integer in base 58.

    Zero-valued input encodes to the empty string; leading zero bytes
    contribute no characters.
    """
    num = int.from_bytes(data, "big")
    chars: list[str] = []
    while num > 0:
        num, rem = divmod(num, 58)
        chars.append(alphabet[rem])
    return "".join(reversed(chars))


def seed_material(inputs: Sequence[int]) -> bytes:
    """Return the first 32 bytes of sha512 over the concatenated inputs."""
    _validate_inputs(inputs)
    joined = "".join(str(value) for value in inputs)
    return hashlib.sha512(joined.encode("utf-8")).digest()[:SEED_MATERIAL_BYTES]


def derive_seed(inputs: Sequence[int]) -> str:
    """Derive a seed string from exactly eight numbers.

    Args:
        inputs: Eight ints in [0, 999999]. Order matters.

    Returns:
        "s" followed by the base58 encoding of the seed material.

    Raises:
        InvalidInput: Wrong count, non-int element, or out of range.
    """
    return SEED_PREFIX + encode_base58(seed_material(inputs))


def random_seed_inputs() -> list[int]:
    """Draw eight numbers suitable for derive_seed() from a CSPRNG."""
    return [secrets.randbelow(SEED_INPUT_MAX + 1) for _ in range(SEED_INPUT_COUNT)]
