"""
Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
SPDX-License-Identifier: Apache-2.0
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Self

from ._http import Fields
from ._identity import AWSCredentialIdentity

SIGV4_TIMESTAMP_FORMAT: str = "%Y%m%dT%H%M%SZ"
SIGV4_DATE_FORMAT: str = "%Y%m%d"


def _utc(date: datetime) -> datetime:
    if date.tzinfo is None:
        return date.replace(tzinfo=UTC)
    return date.astimezone(UTC)


@dataclass
class SignRequest:
    """
    Description of an HTTP request to be signed.

    Attributes are accumulated through the chainable ``with_*`` setters::

        request = (
            SignRequest()
            .with_method("GET")
            .with_path("/")
            .with_query("Action=ListUsers&Version=2010-05-08")
            .with_header("Host", "iam.amazonaws.com")
            .with_region("us-east-1")
            .with_service("iam")
            .with_credentials(identity)
        )

    Any attribute left unset canonicalizes as an empty string. The signing
    timestamp is captured when the request is created unless overridden with
    :meth:`with_date`.
    """

    method: str | None = None
    path: str | None = None
    query: str | None = None
    payload: str | bytes | None = None
    headers: Fields = field(default_factory=Fields)
    region: str | None = None
    service: str | None = None
    date: datetime = field(default_factory=lambda: datetime.now(UTC))
    credentials: AWSCredentialIdentity | None = None

    def __post_init__(self) -> None:
        self.date = _utc(self.date)

    def with_method(self, method: str) -> Self:
        self.method = method
        return self

    def with_path(self, path: str) -> Self:
        self.path = path
        return self

    def with_query(self, query: str) -> Self:
        self.query = query
        return self

    def with_payload(self, payload: str | bytes) -> Self:
        self.payload = payload
        return self

    def with_header(self, name: str, value: str) -> Self:
        """Append a header value. Repeated names accumulate in order."""
        self.headers.add(name, value)
        return self

    def with_headers(self, headers: Mapping[str, str]) -> Self:
        for name, value in headers.items():
            self.headers.add(name, value)
        return self

    def with_region(self, region: str) -> Self:
        self.region = region
        return self

    def with_service(self, service: str) -> Self:
        self.service = service
        return self

    def with_date(self, date: datetime) -> Self:
        """Override the signing timestamp. Naive datetimes are taken as UTC."""
        self.date = _utc(date)
        return self

    def with_credentials(self, credentials: AWSCredentialIdentity) -> Self:
        self.credentials = credentials
        return self

    @property
    def amz_date(self) -> str:
        """Timestamp in the ``X-Amz-Date`` format, e.g. ``20110909T233600Z``."""
        return self.date.strftime(SIGV4_TIMESTAMP_FORMAT)

    @property
    def date_stamp(self) -> str:
        """Date portion used in the credential scope, e.g. ``20110909``."""
        return self.date.strftime(SIGV4_DATE_FORMAT)
