"""
core/ledger/aggregation.py 테스트

그룹 집계, 최대 낙폭, KPI / 차트 데이터
"""

import random
from decimal import Decimal

from core.constants import Defaults
from core.ledger.aggregation import (
    account_balance,
    aggregate,
    buy_sell_counts,
    compute_kpis,
    discipline_counts,
    equity_by_date,
    fold_group,
    gains_losses,
    gains_losses_by,
    pnl_by_weekday,
)
from core.ledger.grouping import GroupKey, KeyResolver
from core.ledger.records import Account, LedgerRecord
from core.types import EntityKind


def _rec(rid: str, date: str, money: str, **kw) -> LedgerRecord:
    return LedgerRecord(id=rid, date=date, result_money=money, **kw)


class TestFoldGroup:
    """단일 그룹 통계"""

    def test_drawdown_and_series(self) -> None:
        records = [
            _rec("1", "2025-01-01", "100", result="Gain"),
            _rec("2", "2025-01-02", "-150", result="Loss"),
            _rec("3", "2025-01-03", "20", result="Gain"),
        ]

        stat = fold_group(records)

        assert stat.trades == 3
        assert stat.wins == 2
        assert stat.gain == Decimal("120")
        assert stat.loss == Decimal("150")
        assert stat.net == Decimal("-30")
        assert stat.dd == Decimal("150")
        assert [p.cum for p in stat.series] == [Decimal("100"), Decimal("-50"), Decimal("-30")]

    def test_sorted_by_date_before_folding(self) -> None:
        records = [
            _rec("2", "2025-01-02", "-150"),
            _rec("1", "2025-01-01", "100"),
        ]

        stat = fold_group(records)

        assert [p.timestamp for p in stat.series] == ["2025-01-01", "2025-01-02"]
        assert stat.dd == Decimal("150")

    def test_equal_dates_keep_input_order(self) -> None:
        """같은 날짜는 입력 순서대로 누적"""
        loss_first = fold_group([_rec("a", "2025-01-01", "-50"), _rec("b", "2025-01-01", "100")])
        gain_first = fold_group([_rec("b", "2025-01-01", "100"), _rec("a", "2025-01-01", "-50")])

        assert [p.cum for p in loss_first.series] == [Decimal("-50"), Decimal("50")]
        assert [p.cum for p in gain_first.series] == [Decimal("100"), Decimal("50")]
        assert loss_first.dd == Decimal("50")
        assert gain_first.dd == Decimal("50")

    def test_input_order_irrelevant_for_distinct_dates(self) -> None:
        records = [
            _rec(str(i), f"2025-02-{i + 1:02d}", money)
            for i, money in enumerate(["40", "-90", "15", "-5", "60", "-30"])
        ]
        shuffled = list(records)
        random.Random(7).shuffle(shuffled)

        assert fold_group(shuffled) == fold_group(records)
        assert fold_group(list(reversed(records))) == fold_group(records)

    def test_net_and_drawdown_bounds_with_unparseable_amounts(self) -> None:
        records = [
            _rec("1", "2025-03-01", "30"),
            _rec("2", "2025-03-02", "abc"),
            _rec("3", "2025-03-03", "-7.25"),
            _rec("4", "2025-03-04", ""),
            _rec("5", "2025-03-05", "-40"),
        ]

        stat = fold_group(records)

        assert stat.trades == 5
        assert stat.net == stat.gain - stat.loss
        assert stat.net == Decimal("-17.25")
        assert stat.dd >= 0
        assert stat.dd == Decimal("47.25")

    def test_loss_first_counts_from_zero_peak(self) -> None:
        stat = fold_group([_rec("1", "2025-01-01", "-40"), _rec("2", "2025-01-02", "10")])

        assert stat.dd == Decimal("40")

    def test_unparseable_money_is_absent(self) -> None:
        """해석 불가 금액은 합계에 포함하지 않지만 거래 수에는 포함"""
        stat = fold_group([_rec("1", "2025-01-01", "abc", result="Breakeven", invested="10,5")])

        assert stat.trades == 1
        assert stat.breakeven == 1
        assert stat.net == Decimal("0")
        assert stat.invested == Decimal("10.5")

    def test_win_rate(self) -> None:
        stat = fold_group([_rec("1", "d", "1", result="Gain"), _rec("2", "d", "-1", result="Loss")])

        assert stat.win_rate == Decimal("50")
        assert fold_group([]).win_rate == Decimal("0")


class TestAggregate:
    def test_default_groups_by_account(self, sample_records) -> None:
        stats = aggregate(sample_records)

        assert list(stats) == [GroupKey.by_id("a1"), GroupKey.by_id("a2")]
        assert stats[GroupKey.by_id("a1")].net == Decimal("-30")
        assert stats[GroupKey.by_id("a1")].label == "Main"

    def test_name_fallback_groups(self) -> None:
        """외래 키 없는 레코드는 이름으로 묶임"""
        records = [
            _rec("1", "2025-01-01", "5", market_name="Gold"),
            _rec("2", "2025-01-02", "7", market_name=" gold "),
            _rec("3", "2025-01-03", "1"),
        ]

        stats = aggregate(records, KeyResolver(EntityKind.MARKET))

        assert stats[GroupKey.by_name("gold")].trades == 2
        assert stats[GroupKey.by_name("gold")].net == Decimal("12")
        assert stats[GroupKey.unknown()].trades == 1


class TestKpis:
    def test_compute_kpis(self, sample_records) -> None:
        kpi = compute_kpis(sample_records)

        assert kpi.pnl == Decimal("-30")
        assert kpi.invested == Decimal("2700")
        assert (kpi.wins, kpi.losses, kpi.ties) == (2, 1, 1)
        assert kpi.win_rate == Decimal("50")

    def test_equity_by_date(self, sample_records) -> None:
        points = equity_by_date(sample_records)

        assert [(p.timestamp, p.cum) for p in points] == [
            ("2025-03-03", Decimal("100")),
            ("2025-03-04", Decimal("-50")),
            ("2025-03-05", Decimal("-30")),
        ]

    def test_gains_losses(self, sample_records) -> None:
        row = gains_losses(sample_records)

        assert row.gains == Decimal("120")
        assert row.losses == Decimal("150")

    def test_buy_sell_counts(self, sample_records) -> None:
        assert buy_sell_counts(sample_records) == {"Buy": 2, "Sell": 1}

    def test_discipline_counts(self, sample_records) -> None:
        assert discipline_counts(sample_records) == {"Yes": 2, "No": 1}

    def test_pnl_by_weekday(self, sample_records) -> None:
        """2025-03-03은 월요일"""
        totals = pnl_by_weekday(sample_records)

        assert list(totals) == ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
        assert totals["Mon"] == Decimal("100")
        assert totals["Tue"] == Decimal("-150")
        assert totals["Wed"] == Decimal("20")

    def test_gains_losses_by_uses_cache_names(self, sample_records) -> None:
        rows = gains_losses_by(
            sample_records,
            KeyResolver(EntityKind.MARKET),
            names={"m1": "EUR/USD"},
        )

        assert [r.name for r in rows] == ["EUR/USD", "GBPUSD", "Gold"]
        assert rows[0].gains == Decimal("120")
        assert rows[1].losses == Decimal("150")

    def test_gains_losses_by_unknown_label(self) -> None:
        rows = gains_losses_by([_rec("1", "d", "3")], KeyResolver(EntityKind.STRATEGY))

        assert rows[0].name == Defaults.UNKNOWN_KEY


class TestAccountBalance:
    def test_matches_id_and_name(self) -> None:
        account = Account(id="a1", name="Main", initial=Decimal("1000"))
        records = [
            _rec("1", "d", "50", account_id="a1"),
            _rec("2", "d", "-20", account_name="main"),
            _rec("3", "d", "999", account_id="a2"),
        ]

        assert account_balance(account, records) == Decimal("1030")
