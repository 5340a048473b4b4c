"""
목적: AQL 실행 결과를 호출자 문서 형태로 정규화한다.
설명: 쿼리를 실행하고 행을 키 매퍼로 변환하며, 미존재 에러 번호/빈 결과를 NotFoundError로, 페이지 요청을 전체 개수와 함께 반환한다.
디자인 패턴: 매퍼 패턴, 템플릿 메서드
참조: src/arango_service/integrations/db/engines/arangodb/document_mapper.py, src/arango_service/integrations/db/engines/arangodb/error_codes.py
"""

from __future__ import annotations

from typing import Any, Optional

from arango_service.integrations.db.base.engine import BaseDocumentDatabase
from arango_service.integrations.db.base.models import AqlQuery, Page
from arango_service.integrations.db.engines.arangodb.document_mapper import DocumentKeyMapper
from arango_service.integrations.db.engines.arangodb.error_codes import is_not_found_error
from arango_service.shared.exceptions import NotFoundError
from arango_service.shared.logging import Logger, create_default_logger


class ResultMapper:
    """쿼리 실행 및 결과 정규화기."""

    def __init__(self, key_mapper: DocumentKeyMapper, logger: Optional[Logger] = None) -> None:
        self._key_mapper = key_mapper
        self._logger = logger or create_default_logger("ResultMapper")

    async def execute(
        self,
        database: BaseDocumentDatabase,
        query: AqlQuery,
        error_message: Optional[str] = None,
        remove_array: bool = True,
        paging: bool = False,
    ) -> Any:
        """쿼리를 실행하고 결과를 정규화한다.

        Args:
            database: 쿼리를 실행할 DB 핸들.
            query: AQL 문자열과 바인드 변수.
            error_message: 지정하면 결과가 없거나 미존재 에러일 때 NotFoundError 메시지로 쓴다.
            remove_array: 결과가 정확히 1건이면 목록 대신 문서를 반환한다.
            paging: True이면 전체 매칭 개수를 포함한 Page를 반환한다.
        """

        try:
            cursor = await database.query(
                query.query,
                query.bind_vars,
                count=paging,
                full_count=paging,
            )
        except Exception as error:
            if error_message and is_not_found_error(error):
                self._logger.warning(f"미존재 에러를 NotFound로 변환합니다: {error_message}")
                raise NotFoundError(error_message, original=error) from error
            raise
        result = [self._key_mapper.to_read(item) for item in cursor]
        if not result and error_message:
            raise NotFoundError(error_message)
        if paging:
            total = cursor.full_count if cursor.full_count is not None else len(result)
            return Page(total=total, data=result)
        if len(result) > 1 or not remove_array:
            return result
        return result[0] if result else None
