"""
목적: 로거 인터페이스와 기본 구현체를 제공한다.
설명: 크기 제한이 있는 인메모리 저장소와 표준 logging 전달 저장소를 포함하며 저장소 주입을 지원한다.
디자인 패턴: 전략 패턴, 저장소 패턴
참조: src/arango_service/shared/logging/models.py
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections import deque
from typing import Deque, List, Optional

from arango_service.shared.const import SharedConst
from arango_service.shared.logging.models import LogContext, LogLevel, LogRecord


class LogRepository(ABC):
    """로그 저장소 인터페이스."""

    @abstractmethod
    def add(self, record: LogRecord) -> None:
        """로그 레코드를 저장한다."""

    @abstractmethod
    def list(self) -> List[LogRecord]:
        """저장된 로그를 반환한다."""


class InMemoryLogRepository(LogRepository):
    """최근 레코드만 보관하는 인메모리 로그 저장소."""

    def __init__(self, max_records: int = SharedConst.DEFAULT_LOG_BUFFER_SIZE) -> None:
        self._records: Deque[LogRecord] = deque(maxlen=max_records)

    def add(self, record: LogRecord) -> None:
        self._records.append(record)

    def list(self) -> List[LogRecord]:
        return list(self._records)


class StandardLogRepository(InMemoryLogRepository):
    """레코드를 보관하면서 표준 logging 모듈로도 전달하는 저장소."""

    def __init__(
        self,
        name: str,
        max_records: int = SharedConst.DEFAULT_LOG_BUFFER_SIZE,
    ) -> None:
        super().__init__(max_records=max_records)
        self._stdlib_logger = logging.getLogger(name)

    def add(self, record: LogRecord) -> None:
        super().add(record)
        extra = ""
        if record.context is not None:
            parts = [
                f"{key}={value}"
                for key, value in record.context.model_dump(exclude={"tags"}).items()
                if value
            ]
            parts.extend(f"{key}={value}" for key, value in record.context.tags.items())
            if parts:
                extra = f" [{', '.join(parts)}]"
        self._stdlib_logger.log(record.level.to_stdlib(), "%s%s", record.message, extra)


class Logger(ABC):
    """로거 인터페이스."""

    @abstractmethod
    def log(
        self,
        level: LogLevel,
        message: str,
        context: Optional[LogContext] = None,
        metadata: Optional[dict] = None,
    ) -> None:
        """로그를 기록한다."""

    @abstractmethod
    def with_context(self, context: LogContext) -> "Logger":
        """컨텍스트가 합쳐진 새 로거를 반환한다."""

    def debug(self, message: str, context: Optional[LogContext] = None) -> None:
        self.log(LogLevel.DEBUG, message, context)

    def info(self, message: str, context: Optional[LogContext] = None) -> None:
        self.log(LogLevel.INFO, message, context)

    def warning(self, message: str, context: Optional[LogContext] = None) -> None:
        self.log(LogLevel.WARNING, message, context)

    def error(self, message: str, context: Optional[LogContext] = None) -> None:
        self.log(LogLevel.ERROR, message, context)


class InMemoryLogger(Logger):
    """저장소 주입형 로거 구현체."""

    def __init__(
        self,
        name: str,
        repository: Optional[LogRepository] = None,
        base_context: Optional[LogContext] = None,
    ) -> None:
        self._name = name
        self._repository = repository or InMemoryLogRepository()
        self._base_context = base_context

    @property
    def name(self) -> str:
        return self._name

    @property
    def repository(self) -> LogRepository:
        """저장소를 반환한다."""

        return self._repository

    def log(
        self,
        level: LogLevel,
        message: str,
        context: Optional[LogContext] = None,
        metadata: Optional[dict] = None,
    ) -> None:
        record = LogRecord(
            level=level,
            message=message,
            logger_name=self._name,
            context=self._merge_context(context),
            metadata=metadata or {},
        )
        self._repository.add(record)

    def with_context(self, context: LogContext) -> "Logger":
        return InMemoryLogger(
            name=self._name,
            repository=self._repository,
            base_context=self._merge_context(context),
        )

    def _merge_context(self, context: Optional[LogContext]) -> Optional[LogContext]:
        if self._base_context is None:
            return context
        return self._base_context.merged(context)


def create_default_logger(name: str) -> InMemoryLogger:
    """표준 logging으로도 전달하는 기본 로거를 생성한다."""

    return InMemoryLogger(name=name, repository=StandardLogRepository(name))
