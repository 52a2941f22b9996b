"""Client for sending SMS messages through the Aliyun SMS API."""

import logging
from datetime import datetime
from typing import Mapping, Optional

import httpx

from aligo_sms.core.constants import KEY_PHONE_NUMBERS
from aligo_sms.core.params import PhoneNumbers, build_parameters
from aligo_sms.core.settings import SmsSettings
from aligo_sms.core.signing import SignedRequest, sign_request
from aligo_sms.models import SendSmsResponse
from aligo_sms.services.response_parser import parse_send_sms_response
from aligo_sms.services.transport import dispatch

logger = logging.getLogger(__name__)


class SmsClient:
    """Signs and sends SendSMS requests. Holds no per-request state."""

    def __init__(
        self,
        settings: Optional[SmsSettings] = None,
        http_client: Optional[httpx.Client] = None,
    ):
        """
        Initialize the SMS client.

        Args:
            settings: Optional SmsSettings. If None, settings will be loaded from environment.
            http_client: Optional httpx.Client used for every request.
        """
        if settings is None:
            settings = SmsSettings()
        self.settings = settings
        self.http_client = http_client

    def build_signed_request(
        self,
        phone_numbers: PhoneNumbers,
        sign_name: str,
        template_code: str,
        template_param: Optional[Mapping[str, str]] = None,
        out_id: Optional[str] = None,
        region_id: Optional[str] = None,
        extra_params: Optional[Mapping[str, str]] = None,
        nonce: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> SignedRequest:
        """
        Assemble and sign a SendSMS request without sending it.

        Args:
            phone_numbers: Recipient number or numbers
            sign_name: Approved SMS signature name
            template_code: Approved SMS template code
            template_param: Optional template variables
            out_id: Optional caller-side tracking id
            region_id: Region id, defaults to the configured region
            extra_params: Further business parameters accepted by the API
            nonce: Fixed nonce, mainly for reproducible signatures
            now: Fixed timestamp moment, mainly for reproducible signatures

        Returns:
            SignedRequest: Parameters, signature and final request URL

        Raises:
            ConfigurationError: If credentials are blank
            SerializationError: If template_param cannot be serialized
            TimeZoneResolutionError: If the GMT zone is unavailable
        """
        if region_id is None:
            region_id = self.settings.aliyun_sms_region_id

        parameters = build_parameters(
            access_key_id=self.settings.aliyun_access_key_id,
            phone_numbers=phone_numbers,
            sign_name=sign_name,
            template_code=template_code,
            template_param=template_param,
            out_id=out_id,
            region_id=region_id,
            extra_params=extra_params,
            nonce=nonce,
            now=now,
        )
        return sign_request(
            parameters,
            access_secret=self.settings.aliyun_access_key_secret,
            protocol=self.settings.aliyun_sms_protocol,
            domain=self.settings.aliyun_sms_domain,
        )

    def send_sms(
        self,
        phone_numbers: PhoneNumbers,
        sign_name: str,
        template_code: str,
        template_param: Optional[Mapping[str, str]] = None,
        out_id: Optional[str] = None,
        region_id: Optional[str] = None,
        extra_params: Optional[Mapping[str, str]] = None,
    ) -> SendSmsResponse:
        """
        Send an SMS using an approved sign name and template.

        A fresh nonce and timestamp are generated on every call, so a caller
        retrying after a failure gets a newly signed request.

        Args:
            phone_numbers: Recipient number, or several numbers sent in one request
            sign_name: Approved SMS signature name
            template_code: Approved SMS template code, e.g. "SMS_71390007"
            template_param: Optional template variables, e.g. {"code": "123456"}
            out_id: Optional caller-side tracking id
            region_id: Region id, defaults to the configured region
            extra_params: Further business parameters accepted by the API

        Returns:
            SendSmsResponse: Parsed API response. Check is_success() for the outcome.

        Raises:
            ConfigurationError: If credentials are blank
            SerializationError: If template_param cannot be serialized
            TimeZoneResolutionError: If the GMT zone is unavailable
            TransportError: If the HTTP request fails
            ResponseDecodeError: If the response body cannot be parsed
        """
        signed = self.build_signed_request(
            phone_numbers=phone_numbers,
            sign_name=sign_name,
            template_code=template_code,
            template_param=template_param,
            out_id=out_id,
            region_id=region_id,
            extra_params=extra_params,
        )

        logger.info(
            f"Sending SMS with template {template_code} to "
            f"{signed.parameters[KEY_PHONE_NUMBERS]} via {self.settings.aliyun_sms_domain}"
        )
        body = dispatch(signed.url, client=self.http_client, timeout=self.settings.aliyun_sms_timeout)
        response = parse_send_sms_response(body)

        if response.is_success():
            logger.info(f"SMS accepted: RequestId={response.RequestId} BizId={response.BizId}")
        else:
            logger.warning(
                f"SMS rejected: RequestId={response.RequestId} Code={response.Code} Message={response.Message}"
            )
        return response
