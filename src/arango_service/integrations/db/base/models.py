"""
목적: DB 통합 인터페이스에서 공통으로 사용하는 모델을 정의한다.
설명: 필터/정렬/페이지네이션 쿼리 모델과 AQL 실행 단위, 커서, 페이지 응답 모델을 제공한다.
디자인 패턴: 데이터 전송 객체(DTO)
참조: src/arango_service/integrations/db/query_builder/spec_parser.py, src/arango_service/integrations/db/base/engine.py
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Union

from pydantic import BaseModel, Field


class FilterOperator(str, Enum):
    """필터 연산자."""

    EQ = "EQ"
    NE = "NE"
    GT = "GT"
    GTE = "GTE"
    LT = "LT"
    LTE = "LTE"
    IN = "IN"
    NOT_IN = "NOT_IN"


class FilterLogic(str, Enum):
    """조건 결합 논리."""

    AND = "AND"
    OR = "OR"


class FilterCondition(BaseModel):
    """단일 필드 비교 조건.

    `field`는 점(.)으로 구분된 경로를 세그먼트 목록으로 보관한다.
    """

    field: List[str] = Field(..., min_length=1)
    operator: FilterOperator
    value: Any = None

    @property
    def path(self) -> str:
        return ".".join(self.field)


class FilterExpression(BaseModel):
    """조건과 하위 표현식을 AND/OR로 결합한 필터 표현식."""

    conditions: List[Union[FilterCondition, "FilterExpression"]] = Field(default_factory=list)
    logic: FilterLogic = FilterLogic.AND

    def is_empty(self) -> bool:
        return not self.conditions


class SortOrder(str, Enum):
    """정렬 순서."""

    ASC = "ASC"
    DESC = "DESC"


class SortField(BaseModel):
    """정렬 필드."""

    field: List[str] = Field(..., min_length=1)
    order: SortOrder = SortOrder.ASC


class Pagination(BaseModel):
    """조회 범위. `limit`이 None이거나 0이면 개수 제한이 없다."""

    limit: Optional[int] = Field(default=None, ge=0)
    skip: int = Field(default=0, ge=0)

    def is_bounded(self) -> bool:
        return bool(self.limit) or self.skip > 0


class Query(BaseModel):
    """파싱이 끝난 쿼리 명세 모델."""

    filter_expression: FilterExpression = Field(default_factory=FilterExpression)
    sort: List[SortField] = Field(default_factory=list)
    pagination: Pagination = Field(default_factory=Pagination)
    select: Optional[List[str]] = None


FilterExpression.model_rebuild()


class AqlQuery(BaseModel):
    """실행할 AQL 문자열과 드라이버 형식의 바인드 변수."""

    query: str
    bind_vars: Dict[str, Any] = Field(default_factory=dict)


@dataclass
class QueryCursor:
    """쿼리 실행 결과 커서.

    Attributes:
        rows: 반환된 행 목록.
        count: `count` 옵션을 요청했을 때의 결과 개수.
        full_count: `full_count` 옵션을 요청했을 때 LIMIT 이전의 전체 매칭 개수.
    """

    rows: List[Any] = field(default_factory=list)
    count: Optional[int] = None
    full_count: Optional[int] = None

    def __iter__(self) -> Iterator[Any]:
        return iter(self.rows)

    def __len__(self) -> int:
        return len(self.rows)


class Page(BaseModel):
    """페이지네이션 응답 봉투."""

    total: int
    limit: int = 0
    skip: int = 0
    data: List[Any] = Field(default_factory=list)
