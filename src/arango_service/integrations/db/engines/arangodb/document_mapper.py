"""
목적: 외부 문서 표현과 ArangoDB 내부 문서 간 키 매핑을 담당한다.
설명: 쓰기 시 외부 id를 `_key`로 옮기고(없으면 UUID 생성), 읽기 시 `_key`를 외부 id 필드로 되돌린다.
디자인 패턴: 매퍼 패턴
참조: src/arango_service/integrations/db/engines/arangodb/result_mapper.py
"""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from arango_service.shared.exceptions import ErrorCode, InvalidQueryError

INTERNAL_KEY = "_key"
INTERNAL_HANDLE = "_id"
REVISION = "_rev"
INTERNAL_FIELDS = frozenset({INTERNAL_KEY, INTERNAL_HANDLE, REVISION})


def _new_key() -> str:
    return str(uuid.uuid4())


class DocumentKeyMapper:
    """문서 키 매퍼.

    Args:
        id_field: 외부에 노출하는 식별자 필드 이름.
        expand_data: True이면 읽기 결과에 `_id`/`_rev`를 남긴다.
        key_factory: id가 없을 때 새 키를 만드는 함수.
    """

    def __init__(
        self,
        id_field: str = INTERNAL_HANDLE,
        expand_data: bool = False,
        key_factory: Optional[Callable[[], str]] = None,
    ) -> None:
        self._id_field = id_field
        self._expand_data = expand_data
        self._key_factory = key_factory or _new_key

    @property
    def id_field(self) -> str:
        return self._id_field

    def to_write(
        self, data: Union[Mapping[str, Any], Sequence[Mapping[str, Any]]]
    ) -> List[Dict[str, Any]]:
        """저장할 문서 목록을 만든다. 단일 문서도 길이 1 목록으로 반환한다."""

        items = list(data) if isinstance(data, (list, tuple)) else [data]
        return [self._to_write_one(item) for item in items]

    def to_read(self, item: Any) -> Any:
        """DB 행을 외부 문서 표현으로 변환한다. 매핑이 아닌 행은 그대로 반환한다."""

        if not isinstance(item, Mapping):
            return item
        hidden = {self._id_field, INTERNAL_KEY}
        if not self._expand_data:
            hidden.update({INTERNAL_HANDLE, REVISION})
        result: Dict[str, Any] = {}
        if INTERNAL_KEY in item:
            result[self._id_field] = item[INTERNAL_KEY]
        result.update({key: value for key, value in item.items() if key not in hidden})
        return result

    def strip_internal(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        """수정 페이로드에서 식별자/내부 필드를 제거한다."""

        if not isinstance(data, Mapping):
            raise InvalidQueryError(
                "문서는 매핑이어야 합니다.",
                cause=f"type={type(data).__name__}",
                code=ErrorCode.DOCUMENT_INVALID,
            )
        hidden = INTERNAL_FIELDS | {self._id_field}
        return {key: value for key, value in data.items() if key not in hidden}

    def _to_write_one(self, item: Any) -> Dict[str, Any]:
        body = self.strip_internal(item)
        key = item.get(self._id_field)
        # `_key`는 문자열만 허용되므로 조회 경로와 같은 str 변환을 적용한다.
        key = self._key_factory() if key is None or key == "" else str(key)
        return {INTERNAL_KEY: key, **body}
