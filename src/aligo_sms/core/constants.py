# System parameter keys
KEY_SIGNATURE_METHOD = "SignatureMethod"
KEY_SIGNATURE_NONCE = "SignatureNonce"
KEY_ACCESS_KEY_ID = "AccessKeyId"
KEY_SIGNATURE_VERSION = "SignatureVersion"
KEY_TIMESTAMP = "Timestamp"
KEY_FORMAT = "Format"

# Business API parameter keys
KEY_ACTION = "Action"
KEY_VERSION = "Version"
KEY_REGION_ID = "RegionId"
KEY_PHONE_NUMBERS = "PhoneNumbers"
KEY_SIGN_NAME = "SignName"
KEY_TEMPLATE_PARAM = "TemplateParam"
KEY_TEMPLATE_CODE = "TemplateCode"
KEY_OUT_ID = "OutId"

# Never part of its own signing input
KEY_SIGNATURE = "Signature"

DEFAULT_SIGNATURE_METHOD = "HMAC-SHA1"
DEFAULT_SIGNATURE_VERSION = "1.0"
DEFAULT_FORMAT = "XML"
DEFAULT_ACTION = "SendSMS"
DEFAULT_VERSION = "2017-05-25"
DEFAULT_REGION_ID = "cn-hangzhou"
DEFAULT_DOMAIN = "dysmsapi.aliyuncs.com"
DEFAULT_PROTOCOL = "http"

HTTP_METHOD = "GET"
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
