"""Parsing of XML response bodies returned by the SMS API."""

import logging
import re
import xml.etree.ElementTree as ET
from typing import Dict, Union

from aligo_sms.errors import ResponseDecodeError
from aligo_sms.models import SendSmsResponse

logger = logging.getLogger(__name__)

_XML_DECLARATION = re.compile(r"^\s*<\?xml[^>]*\?>")
_FIELDS = tuple(SendSmsResponse.model_fields)


def parse_send_sms_response(body: Union[bytes, str]) -> SendSmsResponse:
    """
    Decode a SendSMS response body.

    Both the success document (root "SendSmsResponse") and the error
    document (root "Error") are accepted. Unknown elements are ignored.

    Args:
        body: Raw response body

    Returns:
        SendSmsResponse: Parsed result with whitespace-trimmed field values

    Raises:
        ResponseDecodeError: If the body is empty, not UTF-8 or not well-formed XML
    """
    if isinstance(body, bytes):
        try:
            text = body.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            logger.error(f"Response body is not valid UTF-8: {e}")
            raise ResponseDecodeError(f"Response body is not valid UTF-8: {e}") from e
    else:
        text = body.lstrip("\ufeff")

    text = _XML_DECLARATION.sub("", text, count=1).strip()
    if not text:
        raise ResponseDecodeError("Response body is empty")

    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        logger.error(f"Malformed XML response: {e}")
        raise ResponseDecodeError(f"Malformed XML response: {e}") from e

    values: Dict[str, str] = {}
    for child in root:
        if child.tag in _FIELDS:
            values[child.tag] = (child.text or "").strip()

    return SendSmsResponse(**values)
