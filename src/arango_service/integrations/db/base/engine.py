"""
목적: 문서 DB 핸들 추상 인터페이스를 정의한다.
설명: 파라미터화된 쿼리 실행과, 자동 생성을 지원하는 핸들의 프로비저닝 메서드를 표준화한다.
디자인 패턴: 전략 패턴
참조: src/arango_service/integrations/db/base/models.py, src/arango_service/integrations/db/engines/arangodb/database.py
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from arango_service.integrations.db.base.models import QueryCursor


class BaseDocumentDatabase(ABC):
    """문서 DB 핸들 인터페이스."""

    @property
    @abstractmethod
    def name(self) -> str:
        """데이터베이스 이름을 반환한다."""

    @abstractmethod
    async def query(
        self,
        query: str,
        bind_vars: Dict[str, Any],
        count: bool = False,
        full_count: bool = False,
    ) -> QueryCursor:
        """바인드 변수와 함께 쿼리를 실행한다.

        드라이버 예외는 변환하지 않고 그대로 전파한다. 예외가 `error_code` 속성을
        가지면 상위 계층이 미존재 여부를 판단하는 데 사용한다.
        """

    async def close(self) -> None:
        """보유한 연결 자원을 정리한다."""

        return None


class BaseAutoDatabase(BaseDocumentDatabase):
    """데이터베이스/컬렉션/그래프 자동 생성을 지원하는 핸들 인터페이스."""

    @abstractmethod
    async def auto_use_database(self, name: str) -> None:
        """데이터베이스를 선택하고, 없으면 생성한다."""

    @abstractmethod
    async def auto_collection(self, name: str, graph: Optional[Any] = None) -> Any:
        """컬렉션 핸들을 반환하고, 없으면 생성한다."""

    @abstractmethod
    async def auto_graph(self, options: Any) -> Any:
        """그래프 핸들을 반환하고, 없으면 생성한다."""
