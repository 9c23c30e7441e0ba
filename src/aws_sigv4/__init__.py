"""
Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
SPDX-License-Identifier: Apache-2.0

AWS SigV4 provides a stand-alone AWS Signature Version 4 request signer. It turns
a request description and a set of credentials into the headers needed to call
an AWS-compatible service, leaving the transport to tools such as AioHTTP, Curl,
Requests, urllib3, etc.
"""

from __future__ import annotations

import logging

from ._http import Field, Fields
from ._identity import AWSCredentialIdentity
from ._request import SignRequest
from .exceptions import (
    BaseSigV4Exception,
    InvalidIdentityException,
    MissingCredentialsException,
)
from .signers import Configuration, SigV4Signer

__license__ = "Apache-2.0"
__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = (
    "AWSCredentialIdentity",
    "BaseSigV4Exception",
    "Configuration",
    "Field",
    "Fields",
    "InvalidIdentityException",
    "MissingCredentialsException",
    "SigV4Signer",
    "SignRequest",
)
