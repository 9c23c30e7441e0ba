class BaseSigV4Exception(Exception):
    """Top-level exception to capture signing-related errors."""

    ...


class MissingCredentialsException(BaseSigV4Exception, ValueError):
    """Signing requires an access key id and a secret access key."""

    ...


class InvalidIdentityException(BaseSigV4Exception, TypeError):
    """The configured credentials are not an AWSCredentialIdentity."""

    ...
