"""
Token mint validation.
Syntactic Base58 checks applied before any provider is queried.
"""

import string
from typing import List

MAX_MINT_LENGTH = 44

# Base58 drops the look-alike characters 0, O, I and l
BASE58_ALPHABET = frozenset(
    c for c in string.ascii_letters + string.digits if c not in "0OIl"
)


class TokenValidationError(ValueError):
    """Raised when one or both token mints are malformed."""

    def __init__(self, message: str, invalid_mints: List[str]):
        self.message = message
        self.invalid_mints = invalid_mints
        super().__init__(self.message)


def is_valid_mint(mint: str) -> bool:
    """Check that a token mint is a non-empty Base58 string of at most 44 characters."""
    if not mint or len(mint) > MAX_MINT_LENGTH:
        return False
    return all(c in BASE58_ALPHABET for c in mint)


def validate_token_pair(token_mint_a: str, token_mint_b: str) -> None:
    """
    Validate both mints of a request.

    Raises:
        TokenValidationError: If either mint is malformed
    """
    invalid = [mint for mint in (token_mint_a, token_mint_b) if not is_valid_mint(mint)]
    if invalid:
        raise TokenValidationError("Invalid token mint address", invalid)
