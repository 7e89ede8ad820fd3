"""Custom exceptions for the indoor air bridge."""


class IndoorAirException(Exception):
    """Base exception for the indoor air bridge."""

    pass


class FetchError(IndoorAirException):
    """A sensor fetch did not produce a reading."""

    kind = "fetch"


class NetworkError(FetchError):
    """Connection failed, was reset, timed out, or the server returned an error status."""

    kind = "network"


class ParseError(FetchError):
    """Response body was not a valid sensor payload."""

    kind = "parse"
