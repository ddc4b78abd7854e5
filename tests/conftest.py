"""
pytest 공통 fixture 정의

저널 레코드 / 설정 파일 / Mock 저장소 fixture
"""

import tempfile
from decimal import Decimal
from pathlib import Path

import pytest

from adapters.mock.ledger_store import MockLedgerStore
from adapters.mock.notifier import MockNotifier
from core.config.loader import Settings
from core.ledger.records import Account, LedgerRecord, NamedEntity


@pytest.fixture
def temp_dir() -> Path:
    """OS 독립적인 임시 디렉토리 생성"""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_settings_file(temp_dir: Path) -> Path:
    """테스트용 settings.yaml 파일 생성"""
    content = """# 테스트용 settings.yaml
store:
  base_url: "http://journal.test/api/"
  api_token: "token_abc"
  timeout: 5
  max_retries: 2

display:
  currency: eur
  fallback_locale: fr_FR

logging:
  level: debug
"""
    path = temp_dir / "settings.yaml"
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def reset_settings():
    """Settings 싱글턴 초기화"""
    Settings.reset()
    yield
    Settings.reset()


# -------------------------------------------------------------------------
# 레코드 / 엔티티
# -------------------------------------------------------------------------

@pytest.fixture
def sample_records() -> list[LedgerRecord]:
    """계좌 a1 / a2에 걸친 샘플 레코드"""
    return [
        LedgerRecord(
            id="r1",
            date="2025-03-03",
            account_id="a1",
            account_name="Main",
            market_id="m1",
            market_name="EURUSD",
            strategy_id="s1",
            strategy_name="Breakout",
            order="Buy",
            result="Gain",
            invested="1000",
            result_money="100",
            result_pct="10.00",
            respect="Yes",
            session="london",
            comment="clean entry",
        ),
        LedgerRecord(
            id="r2",
            date="2025-03-04",
            account_id="a1",
            account_name="Main",
            market_id="m2",
            market_name="GBPUSD",
            strategy_id="s1",
            strategy_name="Breakout",
            order="Sell",
            result="Loss",
            invested="1000",
            result_money="-150",
            result_pct="-15.00",
            respect="No",
            session="newyork",
        ),
        LedgerRecord(
            id="r3",
            date="2025-03-05",
            account_id="a1",
            account_name="Main",
            market_id="m1",
            market_name="EURUSD",
            order="Buy",
            result="Gain",
            invested="200",
            result_money="20",
            result_pct="10.00",
            respect="Yes",
            session="asian",
            detail="news spike",
        ),
        LedgerRecord(
            id="r4",
            date="2025-03-05",
            account_id="a2",
            account_name="Swing",
            market_name="Gold",
            result="Breakeven",
            invested="500",
            result_money="0",
            result_pct="0.00",
        ),
    ]


@pytest.fixture
def sample_accounts() -> list[Account]:
    return [
        Account(id="a1", name="Main", currency="USD", initial=Decimal("10000")),
        Account(id="a2", name="Swing", currency="EUR", initial=Decimal("500")),
    ]


@pytest.fixture
def sample_markets() -> list[NamedEntity]:
    return [
        NamedEntity(id="m1", name="EURUSD"),
        NamedEntity(id="m2", name="GBPUSD"),
        NamedEntity(id="m3", name="EURJPY"),
    ]


@pytest.fixture
def sample_strategies() -> list[NamedEntity]:
    return [NamedEntity(id="s1", name="Breakout")]


@pytest.fixture
def mock_store(sample_records, sample_accounts, sample_markets, sample_strategies) -> MockLedgerStore:
    """샘플 데이터가 채워진 Mock 저장소"""
    store = MockLedgerStore()
    for record in sample_records:
        store.add_record(record)
    for account in sample_accounts:
        store.add_account(account)
    for market in sample_markets:
        store.add_market(market)
    for strategy in sample_strategies:
        store.add_strategy(strategy)
    return store


@pytest.fixture
def notifier() -> MockNotifier:
    return MockNotifier()
