"""
목적: 로깅에 필요한 공통 모델을 정의한다.
설명: 로그 레벨, 서비스 호출 컨텍스트, 레코드 구조를 Pydantic으로 제공한다.
디자인 패턴: 데이터 전송 객체(DTO)
참조: src/arango_service/shared/logging/logger.py
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class LogLevel(str, Enum):
    """로그 레벨 열거형."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    def to_stdlib(self) -> int:
        """표준 logging 모듈의 레벨 값으로 변환한다."""

        return logging.getLevelName(self.value)


class LogContext(BaseModel):
    """서비스 호출 단위 로그 컨텍스트 모델이다.

    Args:
        request_id: 요청 식별자.
        operation: CRUD 연산 이름(find/get/create/update/patch/remove).
        collection: 대상 컬렉션 이름.
        tags: 자유형 태그.
    """

    request_id: Optional[str] = None
    operation: Optional[str] = None
    collection: Optional[str] = None
    tags: Dict[str, str] = Field(default_factory=dict)

    def merged(self, other: Optional["LogContext"]) -> "LogContext":
        """다른 컨텍스트 값을 우선해 병합한 새 컨텍스트를 반환한다."""

        if other is None:
            return self
        return LogContext(
            request_id=other.request_id or self.request_id,
            operation=other.operation or self.operation,
            collection=other.collection or self.collection,
            tags={**self.tags, **other.tags},
        )


def _utc_now() -> datetime:
    """UTC 기준의 timezone-aware 시간을 반환한다."""

    return datetime.now(timezone.utc)


class LogRecord(BaseModel):
    """로그 레코드 모델이다.

    Args:
        level: 로그 레벨.
        message: 로그 메시지.
        timestamp: 기록 시각.
        logger_name: 로거 이름.
        context: 로그 컨텍스트.
        metadata: 추가 메타데이터.
    """

    level: LogLevel
    message: str
    timestamp: datetime = Field(default_factory=_utc_now)
    logger_name: str
    context: Optional[LogContext] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)
