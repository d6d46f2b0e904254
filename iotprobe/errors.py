"""Error type and error codes shared by connections, protocols and devices."""

from __future__ import annotations

from enum import IntEnum

DEVICE_TYPE_FANUC = "FANUC_CNC"
DEVICE_TYPE_MELSEC = "MELSEC_PLC"
DEVICE_TYPE_LS = "LS_PLC"

PROTOCOL_TYPE_FOCAS = "FOCAS"
PROTOCOL_TYPE_SLMP = "SLMP"
PROTOCOL_TYPE_XGT = "XGT"


class ErrorCode(IntEnum):
    """Numeric codes identifying what went wrong."""

    # communication
    CONNECTION_FAILED = 100
    TIMEOUT = 101
    INVALID_RESPONSE = 102
    DEVICE_ERROR = 103
    READ_FAILED = 104
    WRITE_FAILED = 105
    CLOSE_FAILED = 106

    # application
    CONFIG_PARSE_FAILED = 200
    DEVICE_CREATE_FAILED = 201
    EMPTY_RESULT = 202
    DATA_PARSE_FAILED = 300


_MESSAGES: dict[int, str] = {
    ErrorCode.CONNECTION_FAILED: "장비 연결에 실패했습니다.",
    ErrorCode.TIMEOUT: "통신 응답 시간이 초과되었습니다.",
    ErrorCode.INVALID_RESPONSE: "장비 응답 형식이 유효하지 않습니다.",
    ErrorCode.DEVICE_ERROR: "장비 내부에서 오류가 발생했습니다.",
    ErrorCode.READ_FAILED: "데이터 읽기에 실패했습니다.",
    ErrorCode.WRITE_FAILED: "데이터 쓰기에 실패했습니다.",
    ErrorCode.CLOSE_FAILED: "연결 해제에 실패했습니다.",
    ErrorCode.CONFIG_PARSE_FAILED: "설정 파일 파싱 중 오류가 발생했습니다.",
    ErrorCode.DEVICE_CREATE_FAILED: "장비 객체 생성에 실패했습니다.",
    ErrorCode.EMPTY_RESULT: "요청한 데이터가 비어있습니다.",
    ErrorCode.DATA_PARSE_FAILED: "요청한 데이터 파싱 중 오류가 발생했습니다.",
}


def get_error_message(error_code: int) -> str:
    """Return the description for an error code, or a generic one if unknown."""
    message = _MESSAGES.get(int(error_code))
    if message is not None:
        return message
    return f"알 수 없는 에러 코드 ({int(error_code)})"


class DeviceError(Exception):
    """A device or protocol failure carrying a code and the underlying cause."""

    def __init__(self, device_type, protocol_type, error_code, original=None):
        self.device_type = device_type or ""
        self.protocol_type = protocol_type or ""
        try:
            self.error_code: int = ErrorCode(int(error_code))
        except ValueError:
            self.error_code = int(error_code)
        self.message = get_error_message(self.error_code)
        self.original = original
        super().__init__(self.message)
        if isinstance(original, BaseException):
            self.__cause__ = original

    def __str__(self) -> str:
        if self.device_type and self.protocol_type:
            prefix = f"[{self.device_type}/{self.protocol_type}] "
        elif self.device_type:
            prefix = f"[{self.device_type}] "
        elif self.protocol_type:
            prefix = f"[{self.protocol_type}] "
        else:
            prefix = ""

        code = int(self.error_code)
        if self.original is not None:
            return (
                f"{prefix} \n ErrorCode: {code} \n Message: {self.message} "
                f"\n Original: {self.original}"
            )
        return f"{prefix} \n ErrorCode: {code} \n Message: {self.message} "