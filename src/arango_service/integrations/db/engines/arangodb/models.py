"""
목적: ArangoDB 연결/그래프 설정 모델을 정의한다.
설명: 접속 주소, 인증 방식, 그래프 자동 생성 속성을 Pydantic으로 제공한다.
디자인 패턴: 데이터 전송 객체(DTO)
참조: src/arango_service/integrations/db/engines/arangodb/database.py
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from arango_service.shared.const import SharedConst


class AuthType(str, Enum):
    """인증 방식."""

    BASIC_AUTH = "BASIC_AUTH"
    BEARER_AUTH = "BEARER_AUTH"


class ArangoConnectionConfig(BaseModel):
    """ArangoDB 접속 설정.

    `auth_type`이 BEARER_AUTH이면 `token`을 우선 사용하고, 없으면
    username/password로 JWT 로그인을 수행한다.
    """

    model_config = ConfigDict(coerce_numbers_to_str=True)

    hosts: Union[str, List[str]] = SharedConst.DEFAULT_ARANGO_URL
    auth_type: Optional[AuthType] = None
    username: Optional[str] = None
    password: Optional[str] = None
    token: Optional[str] = None


class GraphOptions(BaseModel):
    """그래프 자동 생성 속성.

    `edge_definitions` 항목은 python-arango 형식
    (`edge_collection`, `from_vertex_collections`, `to_vertex_collections`)을 따른다.
    """

    name: str = Field(..., min_length=1)
    edge_definitions: List[Dict[str, Any]] = Field(default_factory=list)
    orphan_collections: List[str] = Field(default_factory=list)
