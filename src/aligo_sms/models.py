"""Data models for Aliyun SMS API responses."""

from pydantic import BaseModel, ConfigDict


class SendSmsResponse(BaseModel):
    """Result of a SendSMS call.

    Successful calls carry Code "OK" and a BizId. Error responses
    (root element "Error") additionally carry HostId and Recommend.
    """

    RequestId: str = ""
    BizId: str = ""
    Code: str = ""
    Message: str = ""
    HostId: str = ""
    Recommend: str = ""

    model_config = ConfigDict(frozen=True)

    def is_success(self) -> bool:
        return self.Code == "OK"

    def __str__(self) -> str:
        return (
            "SendSmsResponse = {"
            f"\n\tRequestId: {self.RequestId}"
            f"\n\tBizId: {self.BizId}"
            f"\n\tCode: {self.Code}"
            f"\n\tMessage: {self.Message}"
            f"\n\tHostId: {self.HostId}"
            f"\n\tRecommend: {self.Recommend}"
            "\n}"
        )
