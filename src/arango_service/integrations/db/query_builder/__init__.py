"""
목적: AQL 쿼리 빌더 모듈 공개 API를 제공한다.
설명: 바인드 변수 테이블, 쿼리 명세 파서, AQL 빌더를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/arango_service/integrations/db/query_builder/aql_builder.py
"""

from arango_service.integrations.db.query_builder.aql_builder import AqlQueryBuilder
from arango_service.integrations.db.query_builder.bind_variables import (
    BindVariable,
    BindVariableTable,
)
from arango_service.integrations.db.query_builder.spec_parser import (
    DIRECTIVES,
    OPERATOR_TOKENS,
    QuerySpecParser,
)

__all__ = [
    "AqlQueryBuilder",
    "BindVariable",
    "BindVariableTable",
    "QuerySpecParser",
    "DIRECTIVES",
    "OPERATOR_TOKENS",
]
