"""
목적: 쿼리 명세를 파라미터화된 AQL 조각으로 변환한다.
설명: FILTER/SORT/LIMIT/RETURN 조각과 바인드 변수 테이블을 생성한다. 호출자 값과 필드 이름은 모두 바인드 변수로만 전달된다.
디자인 패턴: 빌더 패턴
참조: src/arango_service/integrations/db/query_builder/spec_parser.py, src/arango_service/integrations/db/query_builder/bind_variables.py
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Union

from arango_service.integrations.db.base.models import (
    FilterCondition,
    FilterExpression,
    FilterLogic,
    FilterOperator,
    Query,
    SortOrder,
)
from arango_service.integrations.db.query_builder.bind_variables import BindVariableTable
from arango_service.integrations.db.query_builder.spec_parser import QuerySpecParser
from arango_service.shared.exceptions import InvalidQueryError

_ALIAS_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

_COMPARISON_OPERATORS: Dict[FilterOperator, str] = {
    FilterOperator.EQ: "==",
    FilterOperator.NE: "!=",
    FilterOperator.GT: ">",
    FilterOperator.GTE: ">=",
    FilterOperator.LT: "<",
    FilterOperator.LTE: "<=",
    FilterOperator.IN: "IN",
    FilterOperator.NOT_IN: "NOT IN",
}

INTERNAL_KEY_FIELD = "_key"

# skip만 지정된 경우 사용하는 LIMIT 개수.
MAX_LIMIT = 1_000_000_000


class AqlQueryBuilder:
    """AQL 조각 빌더.

    Args:
        query: 쿼리 명세 사전 또는 이미 파싱된 Query 모델.
        doc_name: 행 순회 변수 이름.
        return_doc_name: RETURN 대상 변수 이름(쓰기 연산의 NEW/OLD 별칭).
    """

    def __init__(
        self,
        query: Union[Query, Mapping[str, Any], None] = None,
        doc_name: str = "doc",
        return_doc_name: str = "doc",
        parser: Optional[QuerySpecParser] = None,
    ) -> None:
        self._doc_name = self._validate_alias(doc_name)
        self._return_doc_name = self._validate_alias(return_doc_name)
        if isinstance(query, Query):
            self._query = query
        else:
            self._query = (parser or QuerySpecParser()).parse(query)
        self._bind_table = BindVariableTable()
        self.filter = ""
        self.sort = ""
        self.limit = ""
        self.return_filter = ""
        self._build()

    @property
    def query(self) -> Query:
        return self._query

    @property
    def bind_table(self) -> BindVariableTable:
        return self._bind_table

    @property
    def bind_vars(self) -> Dict[str, Any]:
        """드라이버에 전달할 바인드 변수 사전을 반환한다."""

        return self._bind_table.to_bind_vars()

    def add_bind_var(self, value: Any, collection: bool = False) -> str:
        """값을 바인드 변수로 등록하고 자리표시자를 반환한다.

        `collection=True`이면 컬렉션 식별자(`@@name`)로 등록한다.
        """

        return self._bind_table.add(value, is_identifier=collection)

    def attribute(self, path: List[str], doc_name: Optional[str] = None) -> str:
        """문서 속성 접근식을 만든다. 각 경로 세그먼트는 바인드 변수로 전달된다."""

        accessor = doc_name or self._doc_name
        return accessor + "".join(f".{self.add_bind_var(segment)}" for segment in path)

    def _build(self) -> None:
        self.return_filter = self._build_return()
        expression = self._query.filter_expression
        if not expression.is_empty():
            self.filter = f"FILTER {self._render_expression(expression, nested=False)}"
        if self._query.sort:
            clauses = [
                f"{self.attribute(item.field)} {'DESC' if item.order == SortOrder.DESC else 'ASC'}"
                for item in self._query.sort
            ]
            self.sort = f"SORT {', '.join(clauses)}"
        pagination = self._query.pagination
        if pagination.is_bounded():
            count = pagination.limit or MAX_LIMIT
            self.limit = f"LIMIT {self.add_bind_var(pagination.skip)}, {self.add_bind_var(count)}"

    def _build_return(self) -> str:
        select = self._query.select
        if not select:
            return f"RETURN {self._return_doc_name}"
        fields = [INTERNAL_KEY_FIELD] + [item for item in select if item != INTERNAL_KEY_FIELD]
        return f"RETURN KEEP({self._return_doc_name}, {self.add_bind_var(fields)})"

    def _render_expression(self, expression: FilterExpression, nested: bool = True) -> str:
        parts = [
            self._render_condition(item)
            if isinstance(item, FilterCondition)
            else self._render_expression(item)
            for item in expression.conditions
        ]
        if not parts:
            return "true"
        joiner = " || " if expression.logic == FilterLogic.OR else " && "
        rendered = joiner.join(parts)
        if nested and len(parts) > 1:
            return f"({rendered})"
        return rendered

    def _render_condition(self, condition: FilterCondition) -> str:
        operator = _COMPARISON_OPERATORS.get(condition.operator)
        if operator is None:
            raise InvalidQueryError(
                "지원하지 않는 연산자입니다.",
                cause=f"operator={condition.operator}",
            )
        attribute = self.attribute(condition.field)
        return f"{attribute} {operator} {self.add_bind_var(condition.value)}"

    def _validate_alias(self, name: str) -> str:
        if not isinstance(name, str) or not _ALIAS_RE.match(name):
            raise InvalidQueryError(f"허용되지 않는 변수 이름입니다: {name!r}", cause="alias")
        return name
