"""
Request Signer - AWS Signature Version 4 for Product Advertising API calls

Features:
- Canonical request construction (method, path, query, headers, body hash)
- HMAC-SHA256 signing key chain scoped to date/region/service
- Single clock read shared by the signature and the X-Amz-Date header
- No I/O and no caching; every call signs afresh
"""

import hashlib
import hmac
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Mapping, Optional, Tuple
from urllib.parse import parse_qsl, quote, urlsplit

from paapi.errors import SigningError
from paapi.schema.models import Credentials

logger = logging.getLogger(__name__)

ALGORITHM = "AWS4-HMAC-SHA256"
DEFAULT_SERVICE = "ProductAdvertisingAPI"
AMZ_DATE_FORMAT = "%Y%m%dT%H%M%SZ"
DATE_STAMP_FORMAT = "%Y%m%d"
TERMINATOR = "aws4_request"


@dataclass(frozen=True)
class SignedHeaders:
    """Headers that present a computed signature."""

    authorization: str
    content_sha256: str
    amz_date: str

    def as_headers(self) -> Dict[str, str]:
        """Wire header names mapped to their values."""
        return {
            "Authorization": self.authorization,
            "X-Amz-Content-Sha256": self.content_sha256,
            "X-Amz-Date": self.amz_date,
        }


def sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def _hmac(key: bytes, msg: str) -> bytes:
    return hmac.new(key, msg.encode("utf-8"), hashlib.sha256).digest()


def derive_signing_key(secret_key: str, date_stamp: str, region: str, service: str) -> bytes:
    """Signing key for one date/region/service scope."""
    k_date = _hmac(("AWS4" + secret_key).encode("utf-8"), date_stamp)
    k_region = _hmac(k_date, region)
    k_service = _hmac(k_region, service)
    return _hmac(k_service, TERMINATOR)


class RequestSigner:
    """
    Signs HTTP requests with AWS Signature Version 4

    Usage:
    ```python
    signer = RequestSigner()
    signed = signer.sign(
        "POST",
        "https://webservices.amazon.com/paapi5/getitems",
        {"X-Amz-Target": "...", "Content-Encoding": "amz-1.0"},
        body,
        Credentials("AKID", "secret"),
        "us-east-1",
    )
    headers.update(signed.as_headers())
    ```
    """

    def __init__(self, clock=None):
        """
        Initialize RequestSigner

        Args:
            clock: Callable returning the current UTC datetime
        """
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    def sign(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: bytes,
        credentials: Credentials,
        region: str,
        service: str = DEFAULT_SERVICE,
        now: Optional[datetime] = None,
    ) -> SignedHeaders:
        """
        Compute the signature of one request

        Args:
            method: HTTP method
            url: Absolute request URL
            headers: Headers to include in the signature (Host is derived
                from the URL when absent)
            body: Exact body bytes that will be sent
            credentials: Access key pair
            region: Signing region of the endpoint
            service: Signing service name
            now: Timestamp to sign with (read from the clock if omitted)

        Returns:
            SignedHeaders with authorization, content hash and timestamp

        Raises:
            SigningError: Empty credentials or region, or an unusable URL
        """
        self._check_credentials(credentials)
        if not region or not region.strip():
            raise SigningError("Signing region is required")
        if not service:
            raise SigningError("Signing service is required")

        host, path, query = self._split_url(url)
        if isinstance(body, str):
            body = body.encode("utf-8")

        timestamp = self._utc(now if now is not None else self.clock())
        amz_date = timestamp.strftime(AMZ_DATE_FORMAT)
        date_stamp = timestamp.strftime(DATE_STAMP_FORMAT)
        content_sha256 = sha256_hex(body)

        signed = {k.lower(): v for k, v in headers.items()}
        signed.setdefault("host", host)
        signed["x-amz-date"] = amz_date
        signed["x-amz-content-sha256"] = content_sha256

        canonical_headers, signed_header_names = self._canonical_headers(signed)
        canonical_request = "\n".join([
            method.upper(),
            path,
            query,
            canonical_headers,
            signed_header_names,
            content_sha256,
        ])

        scope = f"{date_stamp}/{region}/{service}/{TERMINATOR}"
        string_to_sign = "\n".join([
            ALGORITHM,
            amz_date,
            scope,
            sha256_hex(canonical_request.encode("utf-8")),
        ])

        signing_key = derive_signing_key(credentials.secret_key, date_stamp, region, service)
        signature = hmac.new(
            signing_key, string_to_sign.encode("utf-8"), hashlib.sha256
        ).hexdigest()

        authorization = (
            f"{ALGORITHM} Credential={credentials.access_key}/{scope}, "
            f"SignedHeaders={signed_header_names}, Signature={signature}"
        )

        logger.debug(f"Signed {method.upper()} {host}{path} for scope {scope}")
        return SignedHeaders(
            authorization=authorization,
            content_sha256=content_sha256,
            amz_date=amz_date,
        )

    @staticmethod
    def _check_credentials(credentials: Credentials) -> None:
        if credentials is None:
            raise SigningError("Credentials are required")

        for name in ("access_key", "secret_key"):
            value = getattr(credentials, name, None)
            if not isinstance(value, str) or not value.strip():
                raise SigningError(f"Credentials are missing {name}")
            if value != value.strip() or any(c.isspace() for c in value):
                raise SigningError(f"Credentials {name} contains whitespace")

    @staticmethod
    def _split_url(url: str) -> Tuple[str, str, str]:
        """Host, canonical path and canonical query string of a URL."""
        try:
            parts = urlsplit(url)
            port = parts.port
        except (TypeError, ValueError, AttributeError) as e:
            raise SigningError(f"Cannot parse endpoint URL {url!r}: {e}") from e

        if parts.scheme not in ("http", "https") or not parts.hostname:
            raise SigningError(f"Endpoint URL needs a scheme and host: {url!r}")

        host = parts.hostname
        default_port = 443 if parts.scheme == "https" else 80
        if port and port != default_port:
            host = f"{host}:{port}"

        path = quote(parts.path or "/", safe="/~")
        pairs = sorted(
            (quote(k, safe="-_.~"), quote(v, safe="-_.~"))
            for k, v in parse_qsl(parts.query, keep_blank_values=True)
        )
        query = "&".join(f"{k}={v}" for k, v in pairs)
        return host, path, query

    @staticmethod
    def _canonical_headers(headers: Mapping[str, str]) -> Tuple[str, str]:
        names = sorted(headers)
        lines = "".join(
            f"{name}:{' '.join(str(headers[name]).split())}\n" for name in names
        )
        return lines, ";".join(names)

    @staticmethod
    def _utc(moment: datetime) -> datetime:
        if moment.tzinfo is None:
            return moment.replace(tzinfo=timezone.utc)
        return moment.astimezone(timezone.utc)
