"""
하드코딩 상수 - 변경될 일이 거의 없는 고정값

중요: 경로는 반드시 pathlib.Path 사용 (Windows/Linux 크로스 플랫폼)
"""

from pathlib import Path


# 프로젝트 루트 (이 파일 기준 2단계 상위: core/constants.py → 프로젝트 루트)
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent


class Defaults:
    """기본값 상수"""

    # 통화 / 표시
    CURRENCY: str = "USD"
    FALLBACK_LOCALE: str = "fr_FR"

    # 입력 소수 자릿수
    MONEY_DECIMALS: int = 2
    LOT_DECIMALS: int = 4
    PCT_DECIMALS: int = 2

    # 외부 저장소
    STORE_TIMEOUT_SEC: float = 10.0
    STORE_MAX_RETRIES: int = 3
    LIST_LIMIT: int = 2000

    # 그룹 키 최후 수단 (id도 이름도 없는 레코드)
    UNKNOWN_KEY: str = "—"

    # 레코드당 최대 이미지 수
    MAX_IMAGES: int = 5

    WEB_HOST: str = "127.0.0.1"
    WEB_PORT: int = 8000

    LOG_LEVEL: str = "INFO"


class Paths:
    """프로젝트 경로 상수 (pathlib 사용 - OS 독립적)"""

    # 디렉토리
    CONFIG_DIR: Path = PROJECT_ROOT / "config"
    LOGS_DIR: Path = PROJECT_ROOT / "logs"

    # 설정 파일
    SETTINGS_FILE: Path = CONFIG_DIR / "settings.yaml"


class StoreEndpoints:
    """외부 저널 저장소 REST 경로 (고정값)"""

    JOURNAL: str = "/journal"
    ACCOUNTS: str = "/journal/accounts"
    ACCOUNTS_SET_CURRENCY: str = "/journal/accounts/set-currency"
    MARKETS: str = "/journal/markets"
    STRATEGIES: str = "/journal/strategies"
