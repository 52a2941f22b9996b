"""
POP request signing for the Aliyun SMS API.

Signing steps:
1. Sort parameters by name and percent-encode each name and value
2. Wrap the query string as GET&%2F&<encoded query>
3. HMAC-SHA1 keyed with "<secret>&", Base64, percent-encode again
4. Append the signature to the query string as the Signature parameter
"""

import base64
import hashlib
import hmac
import logging
from dataclasses import dataclass
from typing import Dict, Mapping
from urllib.parse import quote_plus

from aligo_sms.core.constants import HTTP_METHOD, KEY_SIGNATURE
from aligo_sms.errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SignedRequest:
    """Every stage of the signing pipeline for one request."""

    parameters: Dict[str, str]
    query_string: str
    string_to_sign: str
    signature: str
    url: str


def percent_encode(value: str) -> str:
    """
    Percent-encode a value with the POP variant of query encoding.

    Standard query encoding, then "+" becomes "%20", "*" becomes "%2A"
    and "%7E" goes back to "~".
    """
    encoded = quote_plus(value, safe="", encoding="utf-8")
    return encoded.replace("+", "%20").replace("*", "%2A").replace("%7E", "~")


def canonical_query_string(parameters: Mapping[str, str]) -> str:
    """
    Build the sorted, percent-encoded query string for a parameter set.

    Args:
        parameters: Parameter names mapped to string values

    Returns:
        str: "name=value" pairs joined with "&", empty for an empty mapping

    Raises:
        ValueError: If the Signature parameter is present
    """
    if KEY_SIGNATURE in parameters:
        raise ValueError("The Signature parameter cannot be part of its own signing input")

    # Code point order of str matches byte order of its UTF-8 encoding
    return "&".join(
        f"{percent_encode(name)}={percent_encode(parameters[name])}"
        for name in sorted(parameters)
    )


def build_string_to_sign(query_string: str) -> str:
    return f"{HTTP_METHOD}&{percent_encode('/')}&{percent_encode(query_string)}"


def sign(access_secret: str, string_to_sign: str) -> str:
    """
    Compute the encoded request signature.

    Args:
        access_secret: Secret paired with the access key id
        string_to_sign: Output of build_string_to_sign

    Returns:
        str: Percent-encoded Base64 HMAC-SHA1 digest, ready to use as a query value
    """
    key = f"{access_secret}&".encode("utf-8")
    digest = hmac.new(key, string_to_sign.encode("utf-8"), hashlib.sha1).digest()
    return percent_encode(base64.b64encode(digest).decode("utf-8"))


def compose_request_url(protocol: str, domain: str, query_string: str, signature: str) -> str:
    return f"{protocol}://{domain}/?{query_string}&{percent_encode(KEY_SIGNATURE)}={signature}"


def sign_request(
    parameters: Mapping[str, str],
    access_secret: str,
    protocol: str,
    domain: str,
) -> SignedRequest:
    """
    Run the full signing pipeline over an assembled parameter set.

    Args:
        parameters: Parameter set from build_parameters
        access_secret: Secret paired with the access key id
        protocol: "http" or "https"
        domain: API host, e.g. "dysmsapi.aliyuncs.com"

    Returns:
        SignedRequest: Query string, string-to-sign, signature and final URL

    Raises:
        ConfigurationError: If access_secret is blank
    """
    if not access_secret or not access_secret.strip():
        raise ConfigurationError("Access key secret is not configured")

    query_string = canonical_query_string(parameters)
    string_to_sign = build_string_to_sign(query_string)
    logger.debug(f"String to sign: {string_to_sign}")
    signature = sign(access_secret, string_to_sign)
    return SignedRequest(
        parameters=dict(parameters),
        query_string=query_string,
        string_to_sign=string_to_sign,
        signature=signature,
        url=compose_request_url(protocol, domain, query_string, signature),
    )
