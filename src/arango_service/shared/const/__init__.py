"""
목적: 공통 상수 집합을 제공한다.
설명: 설정 로더와 서비스 기본값에서 사용하는 상수 값을 정의한다.
디자인 패턴: 상수 객체
참조: src/arango_service/shared/config/loader.py
"""


class SharedConst:
    """공통 상수 집합이다.

    Attributes:
        DEFAULT_ENCODING: 기본 파일 인코딩.
        ENV_NESTED_DELIMITER: 환경 변수 키를 중첩 경로로 해석하는 구분자.
        ENV_PREFIX: 서비스 설정으로 읽어들일 환경 변수 접두어.
        DEFAULT_ARANGO_URL: 접속 정보가 없을 때 사용하는 ArangoDB 주소.
        DEFAULT_LOG_BUFFER_SIZE: 인메모리 로그 저장소가 보관하는 최대 레코드 수.
    """

    DEFAULT_ENCODING = "utf-8"
    ENV_NESTED_DELIMITER = "__"
    ENV_PREFIX = "ARANGO_SERVICE_"
    DEFAULT_ARANGO_URL = "http://127.0.0.1:8529"
    DEFAULT_LOG_BUFFER_SIZE = 1000


__all__ = ["SharedConst"]
