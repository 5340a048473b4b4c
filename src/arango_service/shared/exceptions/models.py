"""
목적: 공통 예외 상세 모델을 정의한다.
설명: 에러 코드/원인/힌트/재시도 여부/메타데이터를 Pydantic 모델로 제공한다.
디자인 패턴: 데이터 전송 객체(DTO)
참조: src/arango_service/shared/exceptions/base.py
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class ExceptionDetail(BaseModel):
    """예외 상세 정보를 담는 모델이다.

    Args:
        code: 시스템 전반에서 일관되게 사용하는 에러 코드.
        cause: 에러의 직접 원인 설명.
        hint: 해결을 위한 힌트.
        retryable: 동일 요청을 재시도해 해결될 수 있는지 여부. 이 계층의 예외는 모두 False다.
        metadata: 추가적인 구조화 메타데이터(컬렉션 이름, id 등).
    """

    code: str = Field(..., description="에러 코드")
    cause: Optional[str] = Field(default=None, description="에러 원인")
    hint: Optional[str] = Field(default=None, description="해결 힌트")
    retryable: bool = Field(default=False, description="재시도 가능 여부")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="추가 메타데이터")

    def with_metadata(self, **values: Any) -> "ExceptionDetail":
        """메타데이터가 병합된 새 상세 모델을 반환한다."""

        return self.model_copy(update={"metadata": {**self.metadata, **values}})
