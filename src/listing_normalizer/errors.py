"""Exceptions raised by the normalization engine."""

from typing import Optional

from listing_normalizer.models.listing import ViolationCode


class NormalizerError(Exception):
    """Base error. `code` is the violation code counted when a record fails."""

    code: str = ViolationCode.NORMALIZE_EXCEPTION.value

    def __init__(self, message: str = "", code: Optional[str] = None):
        super().__init__(message or self.code)
        if code:
            self.code = code


class RawFileNotFoundError(NormalizerError, FileNotFoundError):
    """Input capture file does not exist. The only condition that aborts a run."""

    code = "RAW_FILE_NOT_FOUND"


class SourceAccessBlockedError(NormalizerError):
    """Payload shows the upstream source denied access (login wall, rate limit, robot check)."""

    code = ViolationCode.SOURCE_ACCESS_BLOCKED.value


def error_code(exc: BaseException) -> str:
    """Map an exception to the violation code it is counted under."""
    code = getattr(exc, "code", None)
    if isinstance(code, str) and code in ViolationCode.values():
        return code
    return ViolationCode.NORMALIZE_EXCEPTION.value
