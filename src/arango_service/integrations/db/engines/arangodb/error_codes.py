"""
목적: ArangoDB 서버 에러 번호를 정의한다.
설명: 미존재 문서/컬렉션 판단에 사용하는 에러 번호와 판별 함수를 제공한다.
디자인 패턴: 상수 객체
참조: src/arango_service/integrations/db/engines/arangodb/result_mapper.py
"""

from __future__ import annotations

from enum import IntEnum


class ArangoErrorCode(IntEnum):
    """ArangoDB errorNum 값."""

    DOCUMENT_NOT_FOUND = 1202
    DATA_SOURCE_NOT_FOUND = 1203


NOT_FOUND_ERROR_CODES = frozenset(
    {ArangoErrorCode.DOCUMENT_NOT_FOUND, ArangoErrorCode.DATA_SOURCE_NOT_FOUND}
)


def is_not_found_error(error: BaseException) -> bool:
    """python-arango 서버 예외가 미존재 에러 번호를 갖는지 확인한다."""

    return getattr(error, "error_code", None) in NOT_FOUND_ERROR_CODES
