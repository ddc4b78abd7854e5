"""
집계 엔진

레코드 묶음 → 그룹별 통계(GroupStat), KPI, 차트용 시계열.

모든 합계는 Decimal로 계산.
해석 불가 금액은 합계에서 제외하되 거래 수에는 포함.
승 / 무 카운트는 숫자 부호가 아니라 범주형 result 기준.
"""

from collections import Counter
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Iterable, Mapping

from core.constants import Defaults
from core.ledger.grouping import GroupKey, GroupKeyKind, KeyOf, KeyResolver, name_key
from core.ledger.records import Account, LedgerRecord
from core.money.decimal_input import parse_decimal
from core.types import EntityKind, OrderSide, RespectFlag, TradeResult

ZERO = Decimal("0")

WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")


@dataclass(frozen=True)
class SeriesPoint:
    """누적 손익 시계열 포인트"""

    timestamp: str
    cum: Decimal


@dataclass(frozen=True)
class GroupStat:
    """그룹별 통계

    Attributes:
        trades: 거래 수 (모든 레코드)
        wins: Gain 수
        breakeven: Breakeven 수
        gain: 양수 결과 합
        loss: 음수 결과 절댓값 합
        invested: 투자 금액 합
        dd: 최대 낙폭 (누적 손익 기준, 0 이상, 통화 단위)
        series: 시간순 누적 손익
        label: 그룹 표시 이름 (처음 발견된 비정규화 이름)
    """

    trades: int = 0
    wins: int = 0
    breakeven: int = 0
    gain: Decimal = ZERO
    loss: Decimal = ZERO
    invested: Decimal = ZERO
    dd: Decimal = ZERO
    series: tuple[SeriesPoint, ...] = ()
    label: str = ""

    @property
    def net(self) -> Decimal:
        """순손익 (gain - loss)"""
        return self.gain - self.loss

    @property
    def win_rate(self) -> Decimal:
        """승률 (%) - 거래가 없으면 0"""
        if self.trades == 0:
            return ZERO
        return Decimal(self.wins) / Decimal(self.trades) * 100


def fold_group(records: Iterable[LedgerRecord], kind: EntityKind | None = None) -> GroupStat:
    """단일 그룹 통계 계산

    date(없으면 created_at) 오름차순 안정 정렬 후 누적.
    peak는 0에서 시작, 매 단계 누적 후 peak / 낙폭 갱신.

    Args:
        records: 그룹 레코드
        kind: 라벨을 뽑을 차원 (None이면 라벨 없음)

    Returns:
        GroupStat
    """
    ordered = sorted(records, key=lambda r: r.sort_key)

    trades = wins = breakeven = 0
    gain = loss = invested = ZERO
    cum = peak = dd = ZERO
    series: list[SeriesPoint] = []
    label = ""

    for record in ordered:
        trades += 1
        if record.result == TradeResult.GAIN.value:
            wins += 1
        elif record.result == TradeResult.BREAKEVEN.value:
            breakeven += 1

        if kind is not None and not label:
            label = record.denormalized_name(kind).strip()

        money = parse_decimal(record.result_money)
        if money is not None:
            if money > 0:
                gain += money
            elif money < 0:
                loss += -money
            cum += money

        inv = parse_decimal(record.invested)
        if inv is not None:
            invested += inv

        peak = max(peak, cum)
        dd = min(dd, cum - peak)
        series.append(SeriesPoint(record.sort_key, cum))

    return GroupStat(
        trades=trades,
        wins=wins,
        breakeven=breakeven,
        gain=gain,
        loss=loss,
        invested=invested,
        dd=abs(dd),
        series=tuple(series),
        label=label,
    )


def aggregate(
    records: Iterable[LedgerRecord],
    key_of: KeyOf | None = None,
) -> dict[GroupKey, GroupStat]:
    """레코드 그룹별 집계

    Args:
        records: 레코드 목록
        key_of: 그룹 키 해석기 (기본: 계좌 기준 KeyResolver)

    Returns:
        {GroupKey: GroupStat}, 그룹 첫 등장 순서
    """
    if key_of is None:
        key_of = KeyResolver(EntityKind.ACCOUNT)

    groups: dict[GroupKey, list[LedgerRecord]] = {}
    for record in records:
        groups.setdefault(key_of(record), []).append(record)

    kind = key_of.kind if isinstance(key_of, KeyResolver) else None
    return {key: fold_group(items, kind) for key, items in groups.items()}


# -------------------------------------------------------------------------
# 분석 화면 KPI / 차트
# -------------------------------------------------------------------------

@dataclass(frozen=True)
class KpiSummary:
    """전체 KPI

    win_rate는 결과가 분류된 거래(Gain / Loss / Breakeven) 기준.
    """

    pnl: Decimal = ZERO
    invested: Decimal = ZERO
    wins: int = 0
    losses: int = 0
    ties: int = 0

    @property
    def total(self) -> int:
        return self.wins + self.losses + self.ties

    @property
    def win_rate(self) -> Decimal:
        if self.total == 0:
            return ZERO
        return Decimal(self.wins) / Decimal(self.total) * 100


@dataclass(frozen=True)
class GainLoss:
    """이익 / 손실 합계 행"""

    name: str
    gains: Decimal = ZERO
    losses: Decimal = ZERO


@dataclass
class _GainLossAcc:
    name: str
    gains: Decimal = field(default=ZERO)
    losses: Decimal = field(default=ZERO)

    def add(self, money: Decimal) -> None:
        if money >= 0:
            self.gains += money
        else:
            self.losses += -money


def compute_kpis(records: Iterable[LedgerRecord]) -> KpiSummary:
    """전체 KPI 계산"""
    pnl = invested = ZERO
    counts: Counter[str] = Counter()

    for record in records:
        money = parse_decimal(record.result_money)
        if money is not None:
            pnl += money
        inv = parse_decimal(record.invested)
        if inv is not None:
            invested += inv
        counts[record.result] += 1

    return KpiSummary(
        pnl=pnl,
        invested=invested,
        wins=counts[TradeResult.GAIN.value],
        losses=counts[TradeResult.LOSS.value],
        ties=counts[TradeResult.BREAKEVEN.value],
    )


def equity_by_date(records: Iterable[LedgerRecord]) -> list[SeriesPoint]:
    """날짜별 누적 손익 (날짜 오름차순, 하루 한 포인트)"""
    by_day: dict[str, Decimal] = {}
    for record in records:
        money = parse_decimal(record.result_money)
        by_day[record.day] = by_day.get(record.day, ZERO) + (money if money is not None else ZERO)

    points: list[SeriesPoint] = []
    cum = ZERO
    for day in sorted(by_day):
        cum += by_day[day]
        points.append(SeriesPoint(day, cum))
    return points


def gains_losses(records: Iterable[LedgerRecord]) -> GainLoss:
    """전체 이익 / 손실 합계"""
    acc = _GainLossAcc("total")
    for record in records:
        money = parse_decimal(record.result_money)
        if money is not None:
            acc.add(money)
    return GainLoss(acc.name, acc.gains, acc.losses)


def buy_sell_counts(records: Iterable[LedgerRecord]) -> dict[str, int]:
    """Buy / Sell 건수"""
    counts = {OrderSide.BUY.value: 0, OrderSide.SELL.value: 0}
    for record in records:
        if record.order in counts:
            counts[record.order] += 1
    return counts


def pnl_by_weekday(records: Iterable[LedgerRecord]) -> dict[str, Decimal]:
    """요일별 손익 합계 (Mon..Sun). 날짜 해석 불가 레코드는 제외."""
    totals = [ZERO] * 7
    for record in records:
        try:
            weekday = date.fromisoformat(record.day[:10]).weekday()
        except ValueError:
            continue
        money = parse_decimal(record.result_money)
        if money is not None:
            totals[weekday] += money
    return dict(zip(WEEKDAY_LABELS, totals))


def discipline_counts(records: Iterable[LedgerRecord]) -> dict[str, int]:
    """전략 규칙 준수 / 미준수 건수"""
    counts = {RespectFlag.YES.value: 0, RespectFlag.NO.value: 0}
    for record in records:
        if record.respect in counts:
            counts[record.respect] += 1
    return counts


def gains_losses_by(
    records: Iterable[LedgerRecord],
    key_of: KeyResolver,
    names: Mapping[str, str] | None = None,
    other_label: str = Defaults.UNKNOWN_KEY,
) -> list[GainLoss]:
    """차원별 이익 / 손실 합계 (이름순)

    Args:
        records: 레코드 목록
        key_of: 차원 키 해석기
        names: id → 표시 이름 (엔티티 캐시)
        other_label: 키가 없는 레코드 그룹 이름
    """
    names = names or {}
    rows: dict[GroupKey, _GainLossAcc] = {}

    for record in records:
        money = parse_decimal(record.result_money)
        if money is None:
            continue
        key = key_of(record)
        acc = rows.get(key)
        if acc is None:
            if key.kind == GroupKeyKind.BY_ID:
                label = names.get(key.value) or record.denormalized_name(key_of.kind).strip() or key.value
            elif key.kind == GroupKeyKind.BY_NAME:
                label = record.denormalized_name(key_of.kind).strip()
            else:
                label = other_label
            acc = rows[key] = _GainLossAcc(label)
        acc.add(money)

    ordered = sorted(rows.values(), key=lambda a: a.name.casefold())
    return [GainLoss(a.name, a.gains, a.losses) for a in ordered]


def account_balance(account: Account, records: Iterable[LedgerRecord]) -> Decimal:
    """계좌 현재 잔고 = 초기 잔고 + 계좌 레코드 순손익

    외래 키가 비어 있는 레코드는 계좌 이름으로 매칭.
    """
    resolver = KeyResolver(EntityKind.ACCOUNT)
    targets = {GroupKey.by_id(account.id.strip()), GroupKey.by_name(name_key(account.name))}
    own = [r for r in records if resolver(r) in targets]
    return account.initial + fold_group(own).net
