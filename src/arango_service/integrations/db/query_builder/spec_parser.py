"""
목적: 쿼리 명세(dict)를 Query 모델로 파싱한다.
설명: 필드별 동등/연산자/논리합 조건과 `$sort/$limit/$skip/$select` 지시어를 즉시 검증해 태그된 모델로 변환한다.
디자인 패턴: 파서, 빌더 패턴
참조: src/arango_service/integrations/db/base/models.py, src/arango_service/integrations/db/query_builder/aql_builder.py
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
    Pagination,
    Query,
    SortField,
    SortOrder,
)
from arango_service.shared.exceptions import InvalidQueryError

# `?age[$gte]=18`의 `$gte`처럼 필드 매핑 안에서 쓰이는 비교 연산자 토큰.
OPERATOR_TOKENS: Dict[str, FilterOperator] = {
    "$lt": FilterOperator.LT,
    "$lte": FilterOperator.LTE,
    "$gt": FilterOperator.GT,
    "$gte": FilterOperator.GTE,
    "$ne": FilterOperator.NE,
    "$in": FilterOperator.IN,
    "$nin": FilterOperator.NOT_IN,
}

LIST_OPERATORS = {FilterOperator.IN, FilterOperator.NOT_IN}

OR_TOKEN = "$or"
SORT_DIRECTIVE = "$sort"
LIMIT_DIRECTIVE = "$limit"
SKIP_DIRECTIVE = "$skip"
SELECT_DIRECTIVE = "$select"
DIRECTIVES = {SORT_DIRECTIVE, LIMIT_DIRECTIVE, SKIP_DIRECTIVE, SELECT_DIRECTIVE}

_SORT_DIRECTIONS = {
    "1": SortOrder.ASC,
    "asc": SortOrder.ASC,
    "ascending": SortOrder.ASC,
    "-1": SortOrder.DESC,
    "desc": SortOrder.DESC,
    "descending": SortOrder.DESC,
}

_NON_NEGATIVE_INT_RE = re.compile(r"^\d+$")


class QuerySpecParser:
    """쿼리 명세 파서."""

    def parse(self, spec: Optional[Mapping[str, Any]]) -> Query:
        """전체 쿼리 명세를 Query 모델로 변환한다."""

        if spec is None:
            return Query()
        if not isinstance(spec, Mapping):
            raise InvalidQueryError(
                "쿼리 명세는 매핑이어야 합니다.",
                cause=f"type={type(spec).__name__}",
            )
        filter_spec = {key: value for key, value in spec.items() if key not in DIRECTIVES}
        return Query(
            filter_expression=self.parse_filter(filter_spec),
            sort=self.parse_sort(spec.get(SORT_DIRECTIVE)),
            pagination=Pagination(
                limit=self.parse_limit(spec.get(LIMIT_DIRECTIVE)),
                skip=self.parse_skip(spec.get(SKIP_DIRECTIVE)),
            ),
            select=self.parse_select(spec.get(SELECT_DIRECTIVE)),
        )

    def parse_filter(self, spec: Mapping[str, Any]) -> FilterExpression:
        """지시어가 없는 필터 명세를 AND 표현식으로 변환한다."""

        if not isinstance(spec, Mapping):
            raise InvalidQueryError("필터 명세는 매핑이어야 합니다.", cause=repr(spec))
        conditions: List[Union[FilterCondition, FilterExpression]] = []
        for key, value in spec.items():
            if key in DIRECTIVES:
                raise InvalidQueryError(
                    f"{key} 지시어는 최상위 쿼리에서만 사용할 수 있습니다.",
                    cause=f"key={key}",
                )
            if key == OR_TOKEN:
                conditions.append(self._parse_or(value, self.parse_filter))
                continue
            conditions.extend(self._parse_field(self._split_path(key), value))
        return FilterExpression(conditions=conditions, logic=FilterLogic.AND)

    def parse_sort(self, value: Any) -> List[SortField]:
        """`$sort` 지시어를 정렬 필드 목록으로 변환한다. 순서는 명세 순서를 따른다."""

        if value is None:
            return []
        if not isinstance(value, Mapping):
            raise InvalidQueryError("$sort는 필드별 정렬 방향 매핑이어야 합니다.", cause=repr(value))
        return [
            SortField(field=self._split_path(key), order=self._parse_direction(key, direction))
            for key, direction in value.items()
        ]

    def parse_limit(self, value: Any) -> Optional[int]:
        """`$limit` 값을 음이 아닌 정수로 변환한다. 값이 없으면 None이다."""

        return self._parse_non_negative(LIMIT_DIRECTIVE, value)

    def parse_skip(self, value: Any) -> int:
        """`$skip` 값을 음이 아닌 정수로 변환한다. 값이 없으면 0이다."""

        return self._parse_non_negative(SKIP_DIRECTIVE, value) or 0

    def parse_select(self, value: Any) -> Optional[List[str]]:
        """`$select` 값을 중복 없는 필드 목록으로 변환한다."""

        if value is None:
            return None
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, (list, tuple, set, frozenset)):
            raise InvalidQueryError("$select는 필드 이름 목록이어야 합니다.", cause=repr(value))
        fields: List[str] = []
        for item in value:
            if not isinstance(item, str) or not item:
                raise InvalidQueryError("$select 항목은 비어 있지 않은 문자열이어야 합니다.", cause=repr(item))
            if item not in fields:
                fields.append(item)
        return fields or None

    def _parse_field(
        self, path: List[str], value: Any
    ) -> List[Union[FilterCondition, FilterExpression]]:
        if not isinstance(value, Mapping) or not value:
            return [FilterCondition(field=path, operator=FilterOperator.EQ, value=value)]
        conditions: List[Union[FilterCondition, FilterExpression]] = []
        for key, operand in value.items():
            if not isinstance(key, str) or not key:
                raise InvalidQueryError("필드 연산자 키는 비어 있지 않은 문자열이어야 합니다.", cause=repr(key))
            if key == OR_TOKEN:
                conditions.append(
                    self._parse_or(
                        operand,
                        lambda item: FilterExpression(conditions=self._parse_field(path, item)),
                    )
                )
                continue
            operator = OPERATOR_TOKENS.get(key)
            if operator is not None:
                conditions.append(self._build_condition(path, operator, operand))
                continue
            if key.startswith("$"):
                raise InvalidQueryError(
                    f"지원하지 않는 연산자입니다: {key}",
                    cause=f"field={'.'.join(path)}",
                    hint=f"사용 가능한 연산자: {', '.join(sorted(OPERATOR_TOKENS))}, {OR_TOKEN}",
                )
            # 연산자가 아닌 키는 하위 속성 경로로 해석한다.
            conditions.extend(self._parse_field(path + self._split_path(key), operand))
        return conditions

    def _parse_or(self, value: Any, parse_item) -> FilterExpression:
        if not isinstance(value, (list, tuple)) or not value:
            raise InvalidQueryError("$or는 비어 있지 않은 목록이어야 합니다.", cause=repr(value))
        return FilterExpression(
            conditions=[parse_item(item) for item in value],
            logic=FilterLogic.OR,
        )

    def _build_condition(
        self, path: List[str], operator: FilterOperator, value: Any
    ) -> FilterCondition:
        if operator in LIST_OPERATORS:
            if not isinstance(value, (list, tuple, set, frozenset)):
                raise InvalidQueryError(
                    "$in/$nin은 목록 값이 필요합니다.",
                    cause=f"field={'.'.join(path)}, value={value!r}",
                )
            value = list(value)
        return FilterCondition(field=path, operator=operator, value=value)

    def _parse_direction(self, key: str, direction: Any) -> SortOrder:
        if isinstance(direction, SortOrder):
            return direction
        if isinstance(direction, bool):
            raise InvalidQueryError(f"정렬 방향이 올바르지 않습니다: {key}", cause=repr(direction))
        order = _SORT_DIRECTIONS.get(str(direction).strip().lower())
        if order is None:
            raise InvalidQueryError(
                f"정렬 방향이 올바르지 않습니다: {key}",
                cause=repr(direction),
                hint="1/-1 또는 asc/desc를 사용하세요.",
            )
        return order

    def _parse_non_negative(self, name: str, value: Any) -> Optional[int]:
        if value is None:
            return None
        if isinstance(value, bool):
            raise InvalidQueryError(f"{name}는 음이 아닌 정수여야 합니다.", cause=repr(value))
        if isinstance(value, int):
            if value < 0:
                raise InvalidQueryError(f"{name}는 음수일 수 없습니다.", cause=repr(value))
            return value
        if isinstance(value, str) and _NON_NEGATIVE_INT_RE.match(value.strip()):
            return int(value.strip())
        raise InvalidQueryError(f"{name}는 음이 아닌 정수여야 합니다.", cause=repr(value))

    def _split_path(self, key: Any) -> List[str]:
        if not isinstance(key, str) or not key:
            raise InvalidQueryError("필드 이름은 비어 있지 않은 문자열이어야 합니다.", cause=repr(key))
        if key.startswith("$"):
            raise InvalidQueryError(f"지원하지 않는 연산자입니다: {key}", cause=f"key={key}")
        segments = key.split(".")
        if any(not segment for segment in segments):
            raise InvalidQueryError(f"필드 경로가 올바르지 않습니다: {key}", cause=f"key={key}")
        return segments
