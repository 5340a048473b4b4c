"""
목적: 서비스 계층에서 노출하는 도메인 예외를 정의한다.
설명: 설정 오류, 잘못된 쿼리 명세, 미존재 문서, 자동 생성 불가 상황을 구분한다.
디자인 패턴: 도메인 예외 객체
참조: src/arango_service/shared/exceptions/base.py, src/arango_service/core/service/document_service.py
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from arango_service.shared.exceptions.base import BaseAppException
from arango_service.shared.exceptions.models import ExceptionDetail


class ErrorCode:
    """도메인 예외 코드 집합."""

    CONFIG_INVALID = "SERVICE_CONFIG_INVALID"
    QUERY_SPEC_INVALID = "QUERY_SPEC_INVALID"
    DOCUMENT_INVALID = "DOCUMENT_INVALID"
    NOT_FOUND = "DOCUMENT_NOT_FOUND"
    PROVISIONING_UNSUPPORTED = "PROVISIONING_UNSUPPORTED"


class ConfigurationError(BaseAppException):
    """생성 시점에 발견되는 설정 오류. 재시도 대상이 아니다."""

    default_code = ErrorCode.CONFIG_INVALID

    def __init__(
        self,
        message: str,
        cause: Optional[str] = None,
        hint: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
        code: Optional[str] = None,
        original: Optional[Exception] = None,
    ) -> None:
        detail = ExceptionDetail(
            code=code or self.default_code,
            cause=cause,
            hint=hint,
            metadata=metadata or {},
        )
        super().__init__(message, detail, original)


class InvalidQueryError(ConfigurationError):
    """쿼리 명세나 입력 문서 형식이 올바르지 않을 때 발생한다."""

    default_code = ErrorCode.QUERY_SPEC_INVALID


class NotFoundError(BaseAppException):
    """조회/수정 대상 문서가 없을 때 발생한다."""

    def __init__(
        self,
        message: str,
        metadata: Optional[Dict[str, Any]] = None,
        original: Optional[Exception] = None,
    ) -> None:
        detail = ExceptionDetail(
            code=ErrorCode.NOT_FOUND,
            cause=message,
            metadata=metadata or {},
        )
        super().__init__(message, detail, original)


class ProvisioningError(BaseAppException):
    """자동 생성을 지원하지 않는 DB 핸들에서 컬렉션/그래프 생성을 요청했을 때 발생한다."""

    def __init__(self, message: str, resource: str) -> None:
        detail = ExceptionDetail(
            code=ErrorCode.PROVISIONING_UNSUPPORTED,
            cause=message,
            hint="database 옵션에 이름(str) 또는 AutoDatabase 인스턴스를 전달하세요.",
            metadata={"resource": resource},
        )
        super().__init__(message, detail)
