"""
목적: 컬렉션/데이터베이스/그래프 입력을 닫힌 변형 집합으로 분류한다.
설명: 생성 시점에 참조/이름/대기(awaitable)/옵션 변형을 판별하고, 해당하지 않는 입력은 ConfigurationError로 거부한다.
디자인 패턴: 태그된 유니온
참조: src/arango_service/core/service/connection.py
"""

from __future__ import annotations

import inspect
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from arango.database import StandardDatabase
from pydantic import ValidationError

from arango_service.integrations.db.base.engine import BaseDocumentDatabase
from arango_service.integrations.db.engines.arangodb.database import ArangoDatabase
from arango_service.integrations.db.engines.arangodb.models import GraphOptions
from arango_service.shared.exceptions import ConfigurationError


class SourceKind(str, Enum):
    """입력 변형 종류."""

    REFERENCE = "REFERENCE"
    NAME = "NAME"
    PENDING = "PENDING"
    OPTIONS = "OPTIONS"


@dataclass(frozen=True)
class ResourceSource:
    """분류가 끝난 입력 값."""

    kind: SourceKind
    value: Any


def _has_name(value: Any) -> bool:
    return isinstance(getattr(value, "name", None), str)


def resolve_database_source(value: Any) -> ResourceSource:
    """database 옵션을 분류한다."""

    if not value:
        raise ConfigurationError(
            "database 참조 또는 이름이 필요합니다.",
            hint="database 옵션에 이름(str)이나 DB 핸들을 전달하세요.",
        )
    if inspect.isawaitable(value):
        return ResourceSource(SourceKind.PENDING, value)
    if isinstance(value, BaseDocumentDatabase):
        return ResourceSource(SourceKind.REFERENCE, value)
    if isinstance(value, StandardDatabase):
        return ResourceSource(SourceKind.REFERENCE, ArangoDatabase(value))
    if isinstance(value, str):
        return ResourceSource(SourceKind.NAME, value)
    raise ConfigurationError(
        "database 참조 또는 이름(str)이 필요합니다.",
        cause=f"type={type(value).__name__}",
    )


def resolve_collection_source(value: Any) -> ResourceSource:
    """collection 옵션을 분류한다."""

    if not value:
        raise ConfigurationError(
            "collection 참조 또는 이름이 필요합니다.",
            hint="collection 옵션에 이름(str)이나 컬렉션 핸들을 전달하세요.",
        )
    if inspect.isawaitable(value):
        return ResourceSource(SourceKind.PENDING, value)
    if isinstance(value, str):
        return ResourceSource(SourceKind.NAME, value)
    if _has_name(value):
        return ResourceSource(SourceKind.REFERENCE, value)
    raise ConfigurationError(
        "collection 참조 또는 이름(str)이 필요합니다.",
        cause=f"type={type(value).__name__}",
    )


def resolve_graph_source(value: Any) -> Optional[ResourceSource]:
    """graph 옵션을 분류한다. 값이 없으면 None이다."""

    if value is None:
        return None
    if inspect.isawaitable(value):
        return ResourceSource(SourceKind.PENDING, value)
    if isinstance(value, GraphOptions):
        return ResourceSource(SourceKind.OPTIONS, value)
    if isinstance(value, Mapping):
        try:
            return ResourceSource(SourceKind.OPTIONS, GraphOptions.model_validate(dict(value)))
        except ValidationError as error:
            raise ConfigurationError(
                "graph 옵션 형식이 올바르지 않습니다.",
                cause=str(error),
                original=error,
            ) from error
    if _has_name(value):
        return ResourceSource(SourceKind.REFERENCE, value)
    raise ConfigurationError(
        "graph 참조 또는 옵션이 필요합니다.",
        cause=f"type={type(value).__name__}",
    )
