"""
목적: AQL 바인드 변수 테이블을 제공한다.
설명: 쿼리 문자열에 값을 직접 넣지 않도록 자리표시자 이름과 값을 순서대로 보관한다.
디자인 패턴: 레지스트리 패턴
참조: src/arango_service/integrations/db/query_builder/aql_builder.py
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, List

from pydantic import BaseModel

from arango_service.shared.exceptions import InvalidQueryError


class BindVariable(BaseModel):
    """바인드 변수 항목.

    `is_identifier`가 True인 항목은 컬렉션/그래프 이름으로, 쿼리에는 `@@name`으로
    들어가고 드라이버에는 `@name` 키로 전달된다. 나머지는 리터럴 값으로 치환된다.
    """

    name: str
    value: Any = None
    is_identifier: bool = False

    @property
    def placeholder(self) -> str:
        return f"@@{self.name}" if self.is_identifier else f"@{self.name}"

    @property
    def driver_key(self) -> str:
        return f"@{self.name}" if self.is_identifier else self.name


class BindVariableTable:
    """한 번의 쿼리 빌드에서 사용하는 바인드 변수 테이블."""

    def __init__(self, prefix: str = "value") -> None:
        self._prefix = prefix
        self._entries: List[BindVariable] = []

    def add(self, value: Any, is_identifier: bool = False) -> str:
        """값을 등록하고 쿼리에 넣을 자리표시자를 반환한다."""

        if is_identifier and (not isinstance(value, str) or not value):
            raise InvalidQueryError(
                "식별자 바인드 변수는 비어 있지 않은 문자열이어야 합니다.",
                cause=f"value={value!r}",
            )
        entry = BindVariable(
            name=f"{self._prefix}_{len(self._entries)}",
            value=value,
            is_identifier=is_identifier,
        )
        self._entries.append(entry)
        return entry.placeholder

    @property
    def entries(self) -> List[BindVariable]:
        return list(self._entries)

    def to_bind_vars(self) -> Dict[str, Any]:
        """드라이버에 전달할 형식의 사전을 반환한다."""

        return {entry.driver_key: entry.value for entry in self._entries}

    def __iter__(self) -> Iterator[BindVariable]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
