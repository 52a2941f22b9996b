"""Exceptions raised by the Aliyun SMS client."""


class SmsError(Exception):
    """Base class for all SMS client errors."""


class ConfigurationError(SmsError):
    """Access key id or secret is missing or blank."""


class SerializationError(SmsError):
    """Template parameters could not be serialized to JSON."""


class TimeZoneResolutionError(SmsError):
    """The GMT time zone could not be resolved by the runtime."""


class TransportError(SmsError):
    """The HTTP request to the SMS endpoint failed."""


class ResponseDecodeError(SmsError):
    """The response body could not be decoded into a SendSmsResponse."""
