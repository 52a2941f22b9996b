"""Aliyun SMS client - POP request signing and SendSMS dispatch."""

from aligo_sms.core.params import build_parameters
from aligo_sms.core.settings import SmsSettings
from aligo_sms.core.signing import SignedRequest, canonical_query_string, percent_encode, sign, sign_request
from aligo_sms.errors import (
    ConfigurationError,
    ResponseDecodeError,
    SerializationError,
    SmsError,
    TimeZoneResolutionError,
    TransportError,
)
from aligo_sms.models import SendSmsResponse
from aligo_sms.services.response_parser import parse_send_sms_response
from aligo_sms.services.sms_client import SmsClient

__all__ = [
    "build_parameters",
    "SmsSettings",
    "SignedRequest",
    "canonical_query_string",
    "percent_encode",
    "sign",
    "sign_request",
    "ConfigurationError",
    "ResponseDecodeError",
    "SerializationError",
    "SmsError",
    "TimeZoneResolutionError",
    "TransportError",
    "SendSmsResponse",
    "parse_send_sms_response",
    "SmsClient",
]
