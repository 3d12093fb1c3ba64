import re


class XliffCodecError(Exception):
    """Base class for all fatal codec errors."""


class ConfigError(XliffCodecError, ValueError):
    """Raised when codec options cannot be resolved into a configuration."""


class ParseError(XliffCodecError):
    """
    Raised when the XLIFF text is not well-formed XML.
    The message is normalized: tabs become spaces, leading whitespace is dropped.
    """

    def __init__(self, message: str):
        super().__init__(sanitize_message(message))


class UnsupportedVersionError(XliffCodecError):
    """Raised when the document's major XLIFF version is not 1."""

    def __init__(self, version: str):
        self.version = version
        super().__init__(f"Unsupported XLIFF version: '{version}'")


class SerializeError(XliffCodecError):
    """Raised when a unit holds text that cannot be written as XML."""

    def __init__(self, key: str, reason: str):
        self.key = key
        super().__init__(f"Cannot serialize unit {key}: {reason}")


def sanitize_message(message: str) -> str:
    message = message.replace("\t", " ")
    return re.sub(r"^\s+", "", message)
