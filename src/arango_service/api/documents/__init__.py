"""
목적: 문서 API 패키지를 정의한다.
설명: 문서 CRUD 라우터와 쿼리 파라미터 유틸을 묶는다.
디자인 패턴: 패키지 구조화
참조: src/arango_service/api/documents/routers/router.py
"""
