from copy import deepcopy
from dataclasses import dataclass
from hashlib import sha256
import hmac
import logging
import re
from urllib.parse import quote

from ._http import Field, Fields
from ._identity import AWSCredentialIdentity
from ._request import SignRequest
from .exceptions import InvalidIdentityException, MissingCredentialsException

logger = logging.getLogger(__name__)

HEADERS_EXCLUDED_FROM_SIGNING: tuple[str, ...] = (
    "authorization",
    "content-length",
    "user-agent",
)

SIGV4_ALGORITHM: str = "AWS4-HMAC-SHA256"
SIGV4_TERMINATOR: str = "aws4_request"
UNSIGNED_PAYLOAD: str = "UNSIGNED-PAYLOAD"
EMPTY_SHA256_HASH = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
MULTISPACE = re.compile(r" {2,}")


@dataclass(frozen=True, kw_only=True)
class Configuration:
    normalize_path: bool = False
    payload_signing_enabled: bool = True


class SigV4Signer:
    """
    Request signer for applying the AWS Signature Version 4 algorithm.
    """

    def __init__(self, *, config: Configuration | None = None):
        self._config = config if config is not None else Configuration()

    def sign(self, *, request: SignRequest) -> Fields:
        """Sign ``request`` and return the headers to send with it.

        The request itself is left untouched; the returned fields are a copy of
        its headers plus ``x-amz-date`` and ``authorization`` (and
        ``x-amz-security-token`` for temporary credentials).
        """
        identity = self._validate_identity(identity=request.credentials)
        new_request = self._generate_new_request(request=request)

        new_request.headers.set_field(
            Field(name="x-amz-date", values=[new_request.amz_date])
        )
        if identity.session_token:
            new_request.headers.set_field(
                Field(name="x-amz-security-token", values=[identity.session_token])
            )

        signature = self.signature(request=new_request)
        credential = f"{identity.access_key_id}/{self.scope(request=new_request)}"
        authorization = self.generate_authorization_field(
            credential=credential,
            signed_headers=self._signed_header_names(request=new_request),
            signature=signature,
        )
        new_request.headers.set_field(authorization)

        return new_request.headers

    def generate_authorization_field(
        self, *, credential: str, signed_headers: list[str], signature: str
    ) -> Field:
        """Generate the `Authorization` field"""
        signed_headers_str = ";".join(signed_headers)
        auth_str = (
            f"{SIGV4_ALGORITHM} Credential={credential}, "
            f"SignedHeaders={signed_headers_str}, Signature={signature}"
        )
        return Field(name="authorization", values=[auth_str])

    def signature(self, *, request: SignRequest) -> str:
        """Compute the hex signature for ``request`` exactly as configured."""
        identity = self._validate_identity(identity=request.credentials)
        canonical_request = self.canonical_request(request=request)
        string_to_sign = self.string_to_sign(
            request=request, canonical_request=canonical_request
        )
        signing_key = self.signing_key(
            secret_key=identity.secret_access_key,
            date_stamp=request.date_stamp,
            region=request.region or "",
            service=request.service or "",
        )
        signature = self._hash(key=signing_key, value=string_to_sign).hex()

        logger.debug("CanonicalRequest:\n%s", canonical_request)
        logger.debug("StringToSign:\n%s", string_to_sign)
        logger.debug("Signature:\n%s", signature)
        return signature

    def signing_key(
        self, *, secret_key: str, date_stamp: str, region: str, service: str
    ) -> bytes:
        """Derive the signing key.

        In SigV4, a signing key is created that is scoped to a specific region and
        service. The date, region, service and resulting signing key are individually
        hashed, then the composite hash is used to sign the string to sign.

        DateKey              = HMAC-SHA256("AWS4"+"<SecretAccessKey>", "<YYYYMMDD>")
        DateRegionKey        = HMAC-SHA256(<DateKey>, "<aws-region>")
        DateRegionServiceKey = HMAC-SHA256(<DateRegionKey>, "<aws-service>")
        SigningKey           = HMAC-SHA256(<DateRegionServiceKey>, "aws4_request")
        """
        k_date = self._hash(key=f"AWS4{secret_key}".encode(), value=date_stamp)
        k_region = self._hash(key=k_date, value=region)
        k_service = self._hash(key=k_region, value=service)
        return self._hash(key=k_service, value=SIGV4_TERMINATOR)

    def _hash(self, key: bytes, value: str) -> bytes:
        return hmac.new(key=key, msg=value.encode(), digestmod=sha256).digest()

    def _validate_identity(
        self, *, identity: AWSCredentialIdentity | None
    ) -> AWSCredentialIdentity:
        """Fail fast when the request has nothing usable to sign with."""
        if identity is None:
            raise MissingCredentialsException(
                "Cannot sign a request without credentials. Configure them "
                "with SignRequest.with_credentials()."
            )
        if not isinstance(identity, AWSCredentialIdentity):
            raise InvalidIdentityException(
                "Received unexpected value for credentials. Expected "
                f"AWSCredentialIdentity but received {type(identity)}."
            )
        if not identity.is_complete:
            raise MissingCredentialsException(
                "Credentials must have a non-empty access_key_id and "
                "secret_access_key."
            )
        return identity

    def _generate_new_request(self, *, request: SignRequest) -> SignRequest:
        return deepcopy(request)

    def canonical_request(self, *, request: SignRequest) -> str:
        # canonical_headers ends with a newline for every entry, which yields
        # the blank line between the header block and the signed headers.
        return (
            f"{request.method or ''}\n"
            f"{self.canonical_path(request=request)}\n"
            f"{self.canonical_query(request=request)}\n"
            f"{self.canonical_headers(request=request)}\n"
            f"{self.signed_headers(request=request)}\n"
            f"{self.hashed_payload(request=request)}"
        )

    def string_to_sign(self, *, request: SignRequest, canonical_request: str) -> str:
        return (
            f"{SIGV4_ALGORITHM}\n"
            f"{request.amz_date}\n"
            f"{self.scope(request=request)}\n"
            f"{sha256(canonical_request.encode()).hexdigest()}"
        )

    def scope(self, *, request: SignRequest) -> str:
        region = request.region or ""
        service = request.service or ""
        # Scope format: <YYYYMMDD>/<AWS Region>/<AWS Service>/aws4_request
        return f"{request.date_stamp}/{region}/{service}/{SIGV4_TERMINATOR}"

    def canonical_path(self, *, request: SignRequest) -> str:
        path = request.path or ""
        if not self._config.normalize_path:
            return path
        if not path:
            path = "/"
        normalized_path = _remove_dot_segments(path)
        return quote(string=normalized_path, safe="/%")

    def canonical_query(self, *, request: SignRequest) -> str:
        if not request.query:
            return ""

        query_params = [_split_query_token(token) for token in request.query.split("&")]
        # Stable sort on the key alone so repeated names keep their order.
        query_params.sort(key=lambda param: param[0].encode())
        return "&".join(
            f"{quote(string=key, safe='')}={quote(string=value, safe='')}"
            for key, value in query_params
        )

    def canonical_headers(self, *, request: SignRequest) -> str:
        return "".join(
            f"{name}:{value}\n"
            for name, value in self._normalize_signing_fields(request=request).items()
        )

    def signed_headers(self, *, request: SignRequest) -> str:
        return ";".join(self._signed_header_names(request=request))

    def hashed_payload(self, *, request: SignRequest) -> str:
        if not self._config.payload_signing_enabled:
            return UNSIGNED_PAYLOAD
        payload = request.payload
        if not payload:
            return EMPTY_SHA256_HASH
        if isinstance(payload, str):
            payload = payload.encode()
        return sha256(payload).hexdigest()

    def _signed_header_names(self, *, request: SignRequest) -> list[str]:
        return list(self._normalize_signing_fields(request=request))

    def _normalize_signing_fields(self, *, request: SignRequest) -> dict[str, str]:
        normalized_fields = {
            field.name.lower(): ",".join(
                _canonical_header_value(value) for value in field.values
            )
            for field in request.headers
            if field.name.lower() not in HEADERS_EXCLUDED_FROM_SIGNING
        }
        return dict(sorted(normalized_fields.items()))


def _split_query_token(token: str) -> tuple[str, str]:
    key, _, value = token.partition("=")
    return key, value


def _canonical_header_value(value: str) -> str:
    """Trim a header value and collapse runs of spaces, unless it is quoted.

    Only spaces collapse; tabs and other whitespace inside the value are kept.
    A value is quoted only when its first character, before trimming, is ``"``.
    """
    if value.startswith('"'):
        return value
    return MULTISPACE.sub(" ", value).strip()


def _remove_dot_segments(path: str, remove_consecutive_slashes: bool = True) -> str:
    """Removes dot segments from a path per :rfc:`3986#section-5.2.4`.
    Optionally removes consecutive slashes, true by default.
    :param path: The path to modify.
    :param remove_consecutive_slashes: Whether to remove consecutive slashes.
    :returns: The path with dot segments removed.
    """
    output = []
    for segment in path.split("/"):
        if segment == ".":
            continue
        elif segment != "..":
            output.append(segment)
        elif output:
            output.pop()
    if path.startswith("/") and (not output or output[0]):
        output.insert(0, "")
    if output and path.endswith(("/.", "/..")):
        output.append("")
    result = "/".join(output)
    if remove_consecutive_slashes:
        result = result.replace("//", "/")
    return result
