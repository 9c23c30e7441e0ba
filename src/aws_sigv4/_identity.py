"""
Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
SPDX-License-Identifier: Apache-2.0
"""

from dataclasses import dataclass, field


@dataclass(kw_only=True)
class AWSCredentialIdentity:
    access_key_id: str
    secret_access_key: str = field(repr=False)
    session_token: str | None = field(default=None, repr=False)

    @property
    def is_complete(self) -> bool:
        """Whether both the access key id and the secret are non-empty."""
        return bool(self.access_key_id) and bool(self.secret_access_key)
