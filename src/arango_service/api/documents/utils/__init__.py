"""
목적: 문서 API 유틸 공개 API를 제공한다.
설명: 쿼리 문자열 파서를 외부에 노출한다.
디자인 패턴: 퍼사드
참조: src/arango_service/api/documents/utils/query_params.py
"""

from arango_service.api.documents.utils.query_params import parse_query_params

__all__ = ["parse_query_params"]
