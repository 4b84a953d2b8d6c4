"""
Exception taxonomy for vpchrono.

Every failure raised by the session and lookup layers is one of the classes
below, with the underlying botocore error attached as ``__cause__``.

  ConfigurationError   credentials / config could not be resolved
  AuthenticationError  the identity check was rejected
  LookupFailedError    a describe call failed in transport or at the provider
  NotFoundError        a describe call succeeded but matched nothing
"""


class VpchronoError(Exception):
    """Base class for all errors raised by vpchrono."""


class ConfigurationError(VpchronoError):
    pass


class AuthenticationError(VpchronoError):
    pass


class LookupFailedError(VpchronoError, LookupError):
    pass


class NotFoundError(VpchronoError, LookupError):
    pass
