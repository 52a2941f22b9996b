import pytest
from urllib.parse import unquote

from aligo_sms.core.signing import (
    SignedRequest,
    build_string_to_sign,
    canonical_query_string,
    compose_request_url,
    percent_encode,
    sign,
    sign_request,
)
from aligo_sms.errors import ConfigurationError

# Worked example from the Aliyun SMS signing documentation
VENDOR_EXAMPLE_PARAMS = {
    "AccessKeyId": "testId",
    "Action": "SendSms",
    "Format": "XML",
    "OutId": "123",
    "PhoneNumbers": "15300000001",
    "RegionId": "cn-hangzhou",
    "SignName": "阿里云短信测试专用",
    "SignatureMethod": "HMAC-SHA1",
    "SignatureNonce": "45e25e9b-0a6f-4070-8c85-2956eda1b466",
    "SignatureVersion": "1.0",
    "TemplateCode": "SMS_71390007",
    "TemplateParam": '{"customer":"test"}',
    "Timestamp": "2017-07-12T02:42:19Z",
    "Version": "2017-05-25",
}

VENDOR_EXAMPLE_QUERY = (
    "AccessKeyId=testId&Action=SendSms&Format=XML&OutId=123&PhoneNumbers=15300000001"
    "&RegionId=cn-hangzhou"
    "&SignName=%E9%98%BF%E9%87%8C%E4%BA%91%E7%9F%AD%E4%BF%A1%E6%B5%8B%E8%AF%95%E4%B8%93%E7%94%A8"
    "&SignatureMethod=HMAC-SHA1&SignatureNonce=45e25e9b-0a6f-4070-8c85-2956eda1b466"
    "&SignatureVersion=1.0&TemplateCode=SMS_71390007"
    "&TemplateParam=%7B%22customer%22%3A%22test%22%7D"
    "&Timestamp=2017-07-12T02%3A42%3A19Z&Version=2017-05-25"
)

VENDOR_EXAMPLE_SIGNATURE = "zJDF%2BLrzhj%2FThnlvIToysFRq6t4%3D"


class TestPercentEncode:
    """Tests for the POP percent-encoding variant."""

    def test_space_becomes_percent_20(self):
        assert percent_encode("a b") == "a%20b"

    def test_plus_is_escaped(self):
        assert percent_encode("a+b") == "a%2Bb"

    def test_asterisk_is_escaped(self):
        assert percent_encode("a*b") == "a%2Ab"

    def test_tilde_stays_literal(self):
        assert percent_encode("a~b") == "a~b"
        assert "%7E" not in percent_encode("~~~")

    def test_slash_is_escaped(self):
        assert percent_encode("/") == "%2F"

    def test_unreserved_characters_untouched(self):
        assert percent_encode("AZaz09-_.~") == "AZaz09-_.~"

    def test_utf8_bytes_are_encoded_uppercase(self):
        assert percent_encode("短信") == "%E7%9F%AD%E4%BF%A1"

    @pytest.mark.parametrize("value", ["1+2*3 ~x", "a=b&c=d", "{\"code\":\"1234\"}", "短信 test*+~/"])
    def test_standard_decoding_recovers_value(self, value):
        assert unquote(percent_encode(value)) == value

    def test_empty_string(self):
        assert percent_encode("") == ""


class TestCanonicalQueryString:
    """Tests for building the sorted query string."""

    def test_sorted_by_byte_order(self):
        query = canonical_query_string({"b": "2", "a": "1", "B": "3"})
        assert query == "B=3&a=1&b=2"

    def test_reordering_input_gives_identical_output(self):
        reordered = dict(reversed(list(VENDOR_EXAMPLE_PARAMS.items())))
        assert canonical_query_string(reordered) == canonical_query_string(VENDOR_EXAMPLE_PARAMS)

    def test_names_appear_in_ascending_order(self):
        query = canonical_query_string(VENDOR_EXAMPLE_PARAMS)
        names = [pair.split("=", 1)[0] for pair in query.split("&")]
        assert names == sorted(names)
        assert len(names) == len(set(names))

    def test_sign_name_sorts_before_signature_method(self):
        query = canonical_query_string({"SignatureMethod": "HMAC-SHA1", "SignName": "x"})
        assert query == "SignName=x&SignatureMethod=HMAC-SHA1"

    def test_empty_mapping_gives_empty_string(self):
        assert canonical_query_string({}) == ""

    def test_names_and_values_are_encoded(self):
        assert canonical_query_string({"a b": "c*d"}) == "a%20b=c%2Ad"

    def test_signature_key_rejected(self):
        with pytest.raises(ValueError, match="Signature"):
            canonical_query_string({"Signature": "abc", "Action": "SendSMS"})

    def test_vendor_example(self):
        assert canonical_query_string(VENDOR_EXAMPLE_PARAMS) == VENDOR_EXAMPLE_QUERY


def test_string_to_sign_template():
    assert build_string_to_sign("AccessKeyId=ABC") == "GET&%2F&AccessKeyId%3DABC"


def test_string_to_sign_empty_query():
    assert build_string_to_sign("") == "GET&%2F&"


def test_sign_pinned_vector():
    assert sign("testsecret", "GET&%2F&AccessKeyId%3DABC") == "qS33JyMyWzYE9GRvK1BH2aZLsYQ%3D"


def test_sign_is_deterministic():
    first = sign("testsecret", "GET&%2F&AccessKeyId%3DABC")
    second = sign("testsecret", "GET&%2F&AccessKeyId%3DABC")
    assert first == second


def test_sign_depends_on_secret():
    assert sign("testsecret", "GET&%2F&A%3D1") != sign("othersecret", "GET&%2F&A%3D1")


def test_sign_vendor_example():
    string_to_sign = build_string_to_sign(VENDOR_EXAMPLE_QUERY)
    assert sign("testSecret", string_to_sign) == VENDOR_EXAMPLE_SIGNATURE


def test_compose_request_url():
    url = compose_request_url("https", "dysmsapi.aliyuncs.com", "A=1&B=2", "abc%3D")
    assert url == "https://dysmsapi.aliyuncs.com/?A=1&B=2&Signature=abc%3D"


def test_sign_request_vendor_example():
    signed = sign_request(
        VENDOR_EXAMPLE_PARAMS,
        access_secret="testSecret",
        protocol="http",
        domain="dysmsapi.aliyuncs.com",
    )

    assert isinstance(signed, SignedRequest)
    assert signed.query_string == VENDOR_EXAMPLE_QUERY
    assert signed.string_to_sign.startswith("GET&%2F&AccessKeyId%3DtestId%26Action%3DSendSms")
    assert signed.signature == VENDOR_EXAMPLE_SIGNATURE
    assert signed.url == (
        f"http://dysmsapi.aliyuncs.com/?{VENDOR_EXAMPLE_QUERY}&Signature={VENDOR_EXAMPLE_SIGNATURE}"
    )
    assert signed.parameters == VENDOR_EXAMPLE_PARAMS


def test_sign_request_does_not_share_parameters():
    params = {"Action": "SendSMS"}
    signed = sign_request(params, access_secret="s", protocol="http", domain="example.com")
    params["Action"] = "Changed"
    assert signed.parameters == {"Action": "SendSMS"}


@pytest.mark.parametrize("access_secret", ["", "   "])
def test_sign_request_blank_secret(access_secret):
    with pytest.raises(ConfigurationError):
        sign_request(
            {"AccessKeyId": "testId"},
            access_secret=access_secret,
            protocol="http",
            domain="dysmsapi.aliyuncs.com",
        )
