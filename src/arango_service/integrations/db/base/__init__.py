"""
목적: DB 베이스 모듈 공개 API를 제공한다.
설명: 공통 모델과 DB 핸들 인터페이스를 노출한다.
디자인 패턴: 퍼사드
참조: src/arango_service/integrations/db/base/models.py, src/arango_service/integrations/db/base/engine.py
"""

from arango_service.integrations.db.base.engine import BaseAutoDatabase, BaseDocumentDatabase
from arango_service.integrations.db.base.models import (
    AqlQuery,
    FilterCondition,
    FilterExpression,
    FilterLogic,
    FilterOperator,
    Page,
    Pagination,
    Query,
    QueryCursor,
    SortField,
    SortOrder,
)

__all__ = [
    "AqlQuery",
    "FilterCondition",
    "FilterExpression",
    "FilterLogic",
    "FilterOperator",
    "Page",
    "Pagination",
    "Query",
    "QueryCursor",
    "SortField",
    "SortOrder",
    "BaseDocumentDatabase",
    "BaseAutoDatabase",
]
