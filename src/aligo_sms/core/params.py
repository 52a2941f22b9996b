"""
Request parameter assembly for the SendSMS action.

Builds the full set of system and business parameters that the signing
pipeline canonicalizes. Every call produces a fresh mapping with its own
nonce and timestamp.
"""

import json
import logging
import uuid
from datetime import datetime
from typing import Dict, Mapping, Optional, Sequence, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from aligo_sms.core.constants import (
    DEFAULT_ACTION,
    DEFAULT_FORMAT,
    DEFAULT_REGION_ID,
    DEFAULT_SIGNATURE_METHOD,
    DEFAULT_SIGNATURE_VERSION,
    DEFAULT_VERSION,
    KEY_ACCESS_KEY_ID,
    KEY_ACTION,
    KEY_FORMAT,
    KEY_OUT_ID,
    KEY_PHONE_NUMBERS,
    KEY_REGION_ID,
    KEY_SIGN_NAME,
    KEY_SIGNATURE,
    KEY_SIGNATURE_METHOD,
    KEY_SIGNATURE_NONCE,
    KEY_SIGNATURE_VERSION,
    KEY_TEMPLATE_CODE,
    KEY_TEMPLATE_PARAM,
    KEY_TIMESTAMP,
    KEY_VERSION,
    TIMESTAMP_FORMAT,
)
from aligo_sms.errors import ConfigurationError, SerializationError, TimeZoneResolutionError

logger = logging.getLogger(__name__)

PhoneNumbers = Union[str, Sequence[str]]

# Keys set by build_parameters itself, never taken from extra_params
ASSEMBLED_KEYS = frozenset(
    {
        KEY_SIGNATURE_METHOD,
        KEY_SIGNATURE_NONCE,
        KEY_ACCESS_KEY_ID,
        KEY_SIGNATURE_VERSION,
        KEY_FORMAT,
        KEY_TIMESTAMP,
        KEY_ACTION,
        KEY_VERSION,
        KEY_REGION_ID,
        KEY_PHONE_NUMBERS,
        KEY_SIGN_NAME,
        KEY_TEMPLATE_CODE,
        KEY_TEMPLATE_PARAM,
        KEY_OUT_ID,
    }
)


def _gmt_zone() -> ZoneInfo:
    try:
        return ZoneInfo("GMT")
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise TimeZoneResolutionError(f"Could not resolve GMT time zone: {e}") from e


def format_timestamp(now: Optional[datetime] = None) -> str:
    """
    Format a moment as the GMT timestamp the API expects.

    Args:
        now: Moment to format. Naive values are taken as local time. Defaults to the current time.

    Returns:
        str: Timestamp in ``YYYY-MM-DDTHH:MM:SSZ`` form

    Raises:
        TimeZoneResolutionError: If the GMT zone is unavailable
    """
    gmt = _gmt_zone()
    if now is None:
        moment = datetime.now(gmt)
    else:
        moment = now.astimezone(gmt)
    return moment.strftime(TIMESTAMP_FORMAT)


def serialize_template_param(template_param: Mapping[str, str]) -> str:
    """Serialize template variables to a compact JSON object string."""
    try:
        return json.dumps(
            dict(template_param),
            ensure_ascii=False,
            separators=(",", ":"),
            sort_keys=True,
        )
    except (TypeError, ValueError) as e:
        raise SerializationError(f"Template parameters are not JSON serializable: {e}") from e


def join_phone_numbers(phone_numbers: PhoneNumbers) -> str:
    if isinstance(phone_numbers, str):
        return phone_numbers
    return ",".join(phone_numbers)


def resolve_region_id(region_id: Optional[str]) -> str:
    if region_id is None or not region_id.strip():
        return DEFAULT_REGION_ID
    return region_id


def build_parameters(
    access_key_id: str,
    phone_numbers: PhoneNumbers,
    sign_name: str,
    template_code: str,
    template_param: Optional[Mapping[str, str]] = None,
    out_id: Optional[str] = None,
    region_id: Optional[str] = None,
    extra_params: Optional[Mapping[str, str]] = None,
    nonce: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Dict[str, str]:
    """
    Assemble system and business parameters for a single SendSMS request.

    Args:
        access_key_id: Caller's access key id
        phone_numbers: Recipient number, or several numbers to be comma-joined
        sign_name: Approved SMS signature name
        template_code: Approved SMS template code, e.g. "SMS_71390007"
        template_param: Optional template variables, e.g. {"code": "123456"}
        out_id: Optional caller-side tracking id
        region_id: Region id; blank values fall back to the default region
        extra_params: Further business parameters accepted by the API
        nonce: Fixed nonce, a fresh UUID4 is used when omitted
        now: Fixed moment for the timestamp, the current time when omitted

    Returns:
        Dict[str, str]: Parameter set, never containing the Signature key

    Raises:
        ConfigurationError: If access_key_id is blank
        ValueError: If extra_params tries to set a parameter assembled here
        SerializationError: If template_param cannot be serialized to JSON
        TimeZoneResolutionError: If the GMT zone is unavailable
    """
    if not access_key_id or not access_key_id.strip():
        raise ConfigurationError("Access key id is not configured")

    if extra_params:
        overridden = sorted(ASSEMBLED_KEYS.intersection(extra_params))
        if overridden:
            raise ValueError(f"extra_params cannot override assembled parameters: {', '.join(overridden)}")

    params: Dict[str, str] = {
        KEY_SIGNATURE_METHOD: DEFAULT_SIGNATURE_METHOD,
        KEY_SIGNATURE_NONCE: nonce or str(uuid.uuid4()),
        KEY_ACCESS_KEY_ID: access_key_id,
        KEY_SIGNATURE_VERSION: DEFAULT_SIGNATURE_VERSION,
        KEY_FORMAT: DEFAULT_FORMAT,
        KEY_TIMESTAMP: format_timestamp(now),
        KEY_ACTION: DEFAULT_ACTION,
        KEY_VERSION: DEFAULT_VERSION,
        KEY_REGION_ID: resolve_region_id(region_id),
        KEY_PHONE_NUMBERS: join_phone_numbers(phone_numbers),
        KEY_SIGN_NAME: sign_name,
        KEY_TEMPLATE_CODE: template_code,
    }

    if template_param is not None:
        params[KEY_TEMPLATE_PARAM] = serialize_template_param(template_param)

    if out_id:
        params[KEY_OUT_ID] = out_id

    if extra_params:
        params.update(extra_params)

    if params.pop(KEY_SIGNATURE, None) is not None:
        logger.warning("Dropped reserved Signature parameter from request parameters")

    return params
