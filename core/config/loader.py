"""
설정 로더

settings.yaml 로드 및 저장소 / 표시 설정 생성
"""

from dataclasses import dataclass
from pathlib import Path

import yaml

from core.constants import Defaults, Paths
from core.money.currency import SUPPORTED_CODES, is_supported


@dataclass(frozen=True)
class StoreConfig:
    """외부 저널 저장소 연결 설정

    불변 데이터 구조로 설정 변경 방지
    """

    base_url: str
    api_token: str = ""
    timeout: float = Defaults.STORE_TIMEOUT_SEC
    max_retries: int = Defaults.STORE_MAX_RETRIES


@dataclass(frozen=True)
class DisplayConfig:
    """표시 설정 (기본 통화, fallback 로케일)"""

    currency: str = Defaults.CURRENCY
    fallback_locale: str = Defaults.FALLBACK_LOCALE


@dataclass(frozen=True)
class AppConfig:
    """settings.yaml 전체"""

    store: StoreConfig
    display: DisplayConfig
    log_level: str = Defaults.LOG_LEVEL


class SettingsLoadError(Exception):
    """Settings 로드 실패 예외"""

    pass


def load_settings(path: Path | None = None) -> AppConfig:
    """settings.yaml 파일 로드

    Args:
        path: settings.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        AppConfig 인스턴스

    Raises:
        SettingsLoadError: 파일이 없거나 형식이 잘못된 경우
        ValueError: 지원하지 않는 표시 통화인 경우
    """
    if path is None:
        path = Paths.SETTINGS_FILE

    if not path.exists():
        raise SettingsLoadError(f"settings.yaml 파일을 찾을 수 없습니다: {path}")

    try:
        content = path.read_text(encoding="utf-8")
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise SettingsLoadError(f"settings.yaml 파싱 실패: {e}") from e

    if data is None:
        raise SettingsLoadError("settings.yaml이 비어 있습니다")
    if not isinstance(data, dict):
        raise SettingsLoadError("settings.yaml 최상위는 매핑이어야 합니다")

    # store 섹션
    store_data = data.get("store") or {}
    base_url = str(store_data.get("base_url") or "").strip()
    if not base_url:
        raise SettingsLoadError("settings.yaml의 store 섹션에 'base_url'이 없습니다")

    try:
        store = StoreConfig(
            base_url=base_url,
            api_token=str(store_data.get("api_token") or ""),
            timeout=float(store_data.get("timeout", Defaults.STORE_TIMEOUT_SEC)),
            max_retries=int(store_data.get("max_retries", Defaults.STORE_MAX_RETRIES)),
        )
    except (TypeError, ValueError) as e:
        raise SettingsLoadError(f"store 섹션 값이 올바르지 않습니다: {e}") from e

    # display 섹션
    display_data = data.get("display") or {}
    currency = str(display_data.get("currency") or Defaults.CURRENCY).upper()
    if not is_supported(currency):
        raise ValueError(
            f"지원하지 않는 표시 통화입니다: '{currency}'. "
            f"유효한 값: {list(SUPPORTED_CODES)}"
        )

    display = DisplayConfig(
        currency=currency,
        fallback_locale=str(display_data.get("fallback_locale") or Defaults.FALLBACK_LOCALE),
    )

    logging_data = data.get("logging") or {}

    return AppConfig(
        store=store,
        display=display,
        log_level=str(logging_data.get("level") or Defaults.LOG_LEVEL).upper(),
    )


class Settings:
    """애플리케이션 설정 (싱글턴 패턴)

    settings.yaml을 로드하고 관련 설정을 제공
    """

    _instance: "Settings | None" = None
    _config: AppConfig | None = None

    def __new__(cls, settings_path: Path | None = None) -> "Settings":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self, settings_path: Path | None = None) -> None:
        if self._config is None:
            type(self)._config = load_settings(settings_path)

    @property
    def store(self) -> StoreConfig:
        """저장소 연결 설정"""
        assert self._config is not None
        return self._config.store

    @property
    def display(self) -> DisplayConfig:
        """표시 설정"""
        assert self._config is not None
        return self._config.display

    @property
    def log_level(self) -> str:
        """로그 레벨 이름"""
        assert self._config is not None
        return self._config.log_level

    @classmethod
    def reset(cls) -> None:
        """싱글턴 인스턴스 초기화 (테스트용)"""
        cls._instance = None
        cls._config = None


def get_settings(settings_path: Path | None = None) -> Settings:
    """Settings 인스턴스 반환

    Args:
        settings_path: settings.yaml 경로 (None이면 기본 경로 사용)

    Returns:
        Settings 싱글턴 인스턴스
    """
    return Settings(settings_path)
