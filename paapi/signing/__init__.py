"""AWS Signature Version 4 request signing."""

from .signer import RequestSigner, SignedHeaders, derive_signing_key, sha256_hex

__all__ = ["RequestSigner", "SignedHeaders", "derive_signing_key", "sha256_hex"]
