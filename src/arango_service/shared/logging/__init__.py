"""
목적: 로깅 모듈 공개 API를 제공한다.
설명: 로거 구현과 모델을 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/arango_service/shared/logging/logger.py, src/arango_service/shared/logging/models.py
"""

from arango_service.shared.logging.logger import (
    InMemoryLogRepository,
    InMemoryLogger,
    LogRepository,
    Logger,
    StandardLogRepository,
    create_default_logger,
)
from arango_service.shared.logging.models import LogContext, LogLevel, LogRecord

__all__ = [
    "LogContext",
    "LogLevel",
    "LogRecord",
    "Logger",
    "LogRepository",
    "InMemoryLogRepository",
    "StandardLogRepository",
    "InMemoryLogger",
    "create_default_logger",
]
