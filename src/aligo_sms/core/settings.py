from typing import Literal

from pydantic import ConfigDict
from pydantic_settings import BaseSettings

from aligo_sms.core.constants import DEFAULT_DOMAIN, DEFAULT_PROTOCOL, DEFAULT_REGION_ID


class SmsSettings(BaseSettings):
    """Connection and credential settings for the Aliyun SMS API.

    Frozen so a single instance can be shared between callers.
    """

    model_config = ConfigDict(env_file=".env", extra="ignore", frozen=True)

    aliyun_access_key_id: str
    aliyun_access_key_secret: str
    aliyun_sms_protocol: Literal["http", "https"] = DEFAULT_PROTOCOL
    aliyun_sms_domain: str = DEFAULT_DOMAIN
    aliyun_sms_region_id: str = DEFAULT_REGION_ID
    aliyun_sms_timeout: float = 10.0
