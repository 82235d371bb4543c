"""Identifiers, proof tokens and token digests"""

import hashlib
import secrets
import uuid

# 32 bytes -> 256 bits of entropy, 64 hex characters
PROOF_TOKEN_BYTES = 32


def generate_session_id() -> str:
    """Generate an opaque 128-bit session identifier"""
    return str(uuid.uuid4())


def generate_proof_token() -> str:
    """Generate an unpredictable proof token"""
    return secrets.token_hex(PROOF_TOKEN_BYTES)


def hash_token(token: str) -> str:
    """One-way digest of a proof token"""
    return hashlib.sha256(token.encode("utf-8", errors="surrogatepass")).hexdigest()
