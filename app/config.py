from pathlib import Path
from pydantic_settings import BaseSettings
from functools import lru_cache

from app.models import DEFAULT_REVIEW_MESSAGE


# 패키지에 함께 배포되는 기본 룰 데이터 위치
DEFAULT_RULES_DIR = Path(__file__).parent / "data" / "rules"


class Settings(BaseSettings):
    """
    애플리케이션의 설정을 관리하는 클래스입니다.
    환경 변수(.env 파일)에서 설정값을 읽어옵니다.
    """

    # 룰 데이터 설정: JSON 파일 위치와 이름
    rules_dir: Path = DEFAULT_RULES_DIR
    checklists_file: str = "checklists.json"  # 체크리스트 항목 정의
    rule_engine_file: str = "rule_engine.json"  # 판정 로직 정의
    base_rules_file: str = "base_rules.json"  # 용도지역별 건폐율/용적률/용도
    laws_file: str = "laws.json"  # 법령 참조

    # 판정 설정: 판정 로직이 없거나 완화될 때 보여줄 기본 안내 문구
    default_review_message: str = DEFAULT_REVIEW_MESSAGE

    # 외부 서비스 설정: 주소 검색(Nominatim)과 용도지역 조회(V월드)
    nominatim_base_url: str = "https://nominatim.openstreetmap.org"
    vworld_base_url: str = "https://api.vworld.kr/req/data"
    vworld_key: str = ""
    vworld_domain: str = ""
    vworld_zoning_datasets: str = "LT_C_UQ111"  # 쉼표로 여러 데이터셋 지정 가능
    vworld_buffer_m: float = 0.0
    vworld_try_all_datasets: bool = False
    http_user_agent: str = "building-code-checker/1.0"
    http_timeout_seconds: float = 10.0

    # 서버 설정: 서버가 실행될 주소와 포트 번호
    host: str = "0.0.0.0"  # 모든 외부 접속 허용
    port: int = 8000
    allowed_origins: list[str] = ["*"]
    log_level: str = "INFO"

    class Config:
        # 설정을 읽어올 파일 지정
        env_file = ".env"
        env_file_encoding = "utf-8"

    @property
    def zoning_datasets(self) -> list[str]:
        """V월드 용도지역 데이터셋 목록."""
        return [s.strip() for s in self.vworld_zoning_datasets.split(",") if s.strip()]


@lru_cache()
def get_settings() -> Settings:
    """
    설정을 가져오는 함수입니다.
    @lru_cache를 사용하여 한 번 읽은 설정은 메모리에 저장해두고 재사용합니다.
    (매번 파일을 다시 읽지 않아 효율적입니다)
    """
    return Settings()
