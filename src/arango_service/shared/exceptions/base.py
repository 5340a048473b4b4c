"""
목적: 공통 예외 베이스 클래스를 제공한다.
설명: 메시지와 Pydantic 상세 모델, 원본 예외를 함께 보관하고 직렬화한다.
디자인 패턴: 도메인 예외 객체
참조: src/arango_service/shared/exceptions/models.py
"""

from __future__ import annotations

from typing import Optional

from arango_service.shared.exceptions.models import ExceptionDetail


class BaseAppException(Exception):
    """애플리케이션 공통 예외 클래스이다.

    Args:
        message: 호출자에게 전달할 메시지.
        detail: 예외 상세 정보 모델.
        original: 원본 예외 객체(드라이버 예외 등).
    """

    def __init__(
        self,
        message: str,
        detail: ExceptionDetail,
        original: Optional[Exception] = None,
    ) -> None:
        super().__init__(message)
        self._message = message
        self._detail = detail
        self._original = original

    @property
    def message(self) -> str:
        return self._message

    @property
    def code(self) -> str:
        """상세 모델의 에러 코드를 반환한다."""

        return self._detail.code

    @property
    def detail(self) -> ExceptionDetail:
        return self._detail

    @property
    def original(self) -> Optional[Exception]:
        return self._original

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, message={self._message!r})"

    def to_dict(self) -> dict:
        """예외 정보를 응답 본문으로 쓸 수 있는 사전으로 변환한다."""

        return {
            "name": type(self).__name__,
            "message": self._message,
            "detail": self._detail.model_dump(),
            "original": repr(self._original) if self._original else None,
        }
