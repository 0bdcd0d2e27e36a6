"""Exception hierarchy for headeraudit."""


class HeaderAuditError(Exception):
    """Base class for every error raised by headeraudit."""


class ConfigError(HeaderAuditError):
    """A configuration value could not be used."""


class FetchError(HeaderAuditError):
    """The target response could not be retrieved. Fatal for that URL."""

    def __init__(self, url: str, message: str):
        super().__init__(f"{url}: {message}")
        self.url = url
        self.message = message


class InvalidTargetError(FetchError):
    """The target is not an absolute http(s) URL."""


class NetworkError(FetchError):
    """DNS resolution, connection or protocol failure."""


class FetchTimeoutError(FetchError):
    """The redirect chain did not complete within the configured deadline."""


class RedirectLoopError(FetchError):
    """More redirects than the configured maximum were followed."""


class ParseError(HeaderAuditError):
    """A header value is malformed. Absorbed by the rule engine."""

    def __init__(self, header: str, value: str, reason: str):
        super().__init__(f"could not parse {header}: {reason}")
        self.header = header
        self.value = value
        self.reason = reason
