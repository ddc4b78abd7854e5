"""
통계 서비스

메모리 내 레코드 북 기반 KPI / 차원별 집계 / 계좌 잔고
"""

import logging
from dataclasses import replace
from decimal import Decimal
from typing import Any, Iterable

from core.ledger import (
    FilterCriteria,
    GainLoss,
    GroupKeyKind,
    GroupStat,
    SeriesPoint,
    account_balance,
    aggregate,
    buy_sell_counts,
    compute_kpis,
    discipline_counts,
    equity_by_date,
    filter_records,
    gains_losses,
    gains_losses_by,
    pnl_by_weekday,
)
from core.money import currency_sign, dominant_currency, format_money, round2
from core.types import EntityKind
from journal.runtime import JournalRuntime

logger = logging.getLogger(__name__)


def _series(points: Iterable[SeriesPoint]) -> list[dict[str, str]]:
    return [{"timestamp": p.timestamp, "cum": str(p.cum)} for p in points]


def _gain_loss(row: GainLoss) -> dict[str, str]:
    return {"name": row.name, "gains": str(row.gains), "losses": str(row.losses)}


class StatsService:
    """통계 계산 서비스

    JournalRuntime의 레코드 북과 엔티티 캐시를 읽기만 함.
    """

    def __init__(self, runtime: JournalRuntime):
        self.runtime = runtime

    @property
    def currency(self) -> str:
        """표시 통화 (계좌 최다 통화, 계좌가 없으면 설정 값)"""
        accounts = self.runtime.cache.accounts()
        if not accounts:
            return self.runtime.display.currency
        return dominant_currency(a.currency for a in accounts)

    def _format(self, amount: Decimal, currency: str | None = None) -> str:
        return format_money(
            amount,
            currency or self.currency,
            fallback_locale=self.runtime.display.fallback_locale,
        )

    def get_summary(self, criteria: FilterCriteria | None = None) -> dict[str, Any]:
        """분석 화면 요약

        Args:
            criteria: 필터 조건

        Returns:
            KPI, 누적 손익, 차트용 분포 데이터
        """
        records = filter_records(self.runtime.book.records(), criteria)
        cache = self.runtime.cache
        currency = self.currency
        kpi = compute_kpis(records)

        return {
            "currency": currency,
            "currency_sign": currency_sign(currency),
            "kpi": {
                "pnl": str(kpi.pnl),
                "pnl_formatted": self._format(kpi.pnl, currency),
                "invested": str(kpi.invested),
                "wins": kpi.wins,
                "losses": kpi.losses,
                "ties": kpi.ties,
                "total": kpi.total,
                "win_rate": round2(kpi.win_rate),
            },
            "equity": _series(equity_by_date(records)),
            "gains_losses": _gain_loss(gains_losses(records)),
            "buy_sell": buy_sell_counts(records),
            "pnl_by_weekday": {day: str(v) for day, v in pnl_by_weekday(records).items()},
            "discipline": discipline_counts(records),
            "by_market": [
                _gain_loss(row)
                for row in gains_losses_by(
                    records,
                    cache.resolver(EntityKind.MARKET),
                    cache.names(EntityKind.MARKET),
                )
            ],
            "by_strategy": [
                _gain_loss(row)
                for row in gains_losses_by(
                    records,
                    cache.resolver(EntityKind.STRATEGY),
                    cache.names(EntityKind.STRATEGY),
                )
            ],
        }

    def _group_row(self, stat: GroupStat, key_kind: GroupKeyKind, key: str, currency: str) -> dict[str, Any]:
        return {
            "key": key,
            "key_kind": key_kind.value,
            "label": stat.label,
            "trades": stat.trades,
            "wins": stat.wins,
            "breakeven": stat.breakeven,
            "win_rate": round2(stat.win_rate),
            "gain": str(stat.gain),
            "loss": str(stat.loss),
            "net": str(stat.net),
            "net_formatted": self._format(stat.net, currency),
            "invested": str(stat.invested),
            "dd": str(stat.dd),
            "dd_formatted": self._format(stat.dd, currency),
            "series": _series(stat.series),
        }

    def get_group_stats(
        self,
        dimension: EntityKind,
        criteria: FilterCriteria | None = None,
    ) -> dict[str, Any]:
        """차원별 그룹 통계 (순손익 내림차순)

        id 키 그룹은 캐시 이름을 표시 이름으로 사용.
        계좌 차원은 그룹별 계좌 통화로 금액을 표시.
        """
        records = filter_records(self.runtime.book.records(), criteria)
        cache = self.runtime.cache
        names = cache.names(dimension)
        currencies = {a.id: a.currency for a in cache.accounts()}
        currency = self.currency

        stats = aggregate(records, cache.resolver(dimension))
        rows = []
        for key, stat in stats.items():
            if key.kind == GroupKeyKind.BY_ID and key.value in names:
                stat = replace(stat, label=names[key.value])
            group_currency = currency
            if dimension == EntityKind.ACCOUNT and key.kind == GroupKeyKind.BY_ID:
                group_currency = currencies.get(key.value, currency)
            rows.append(self._group_row(stat, key.kind, str(key), group_currency))

        rows.sort(key=lambda r: Decimal(r["net"]), reverse=True)
        return {"dimension": dimension.value, "currency": currency, "groups": rows}

    def get_account_balances(self) -> list[dict[str, Any]]:
        """계좌별 현재 잔고 (필터 미적용, 전체 레코드 기준)"""
        records = self.runtime.book.records()
        rows = []
        for account in self.runtime.cache.accounts():
            balance = account_balance(account, records)
            rows.append(
                {
                    "id": account.id,
                    "name": account.name,
                    "currency": account.currency,
                    "initial": str(account.initial),
                    "net": str(balance - account.initial),
                    "balance": str(balance),
                    "balance_formatted": self._format(balance, account.currency),
                }
            )
        return rows
