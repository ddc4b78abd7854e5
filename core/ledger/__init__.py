"""
저널 원장 엔진

거래 기록 모델, 필터, 그룹 키 해석, 집계, 결과-금액 일관성 규칙.
모든 함수는 동기 / 순수 함수이며 상태를 저장하지 않음.

사용 예시:
```python
from core.ledger import KeyResolver, aggregate, coerce_record, filter_records
from core.types import EntityKind

records = [coerce_record(raw) for raw in items]
visible = filter_records(records, FilterCriteria(date_from="2025-01-01"))
stats = aggregate(visible, KeyResolver(EntityKind.MARKET, known_ids=market_ids))

for key, stat in stats.items():
    print(key, stat.net, stat.dd)
```
"""

from core.ledger.aggregation import (
    GainLoss,
    GroupStat,
    KpiSummary,
    SeriesPoint,
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
from core.ledger.consistency import (
    apply_result_rule,
    build_quick_edit_patch,
    derive_result_pct,
    money_editable,
    normalize_result,
)
from core.ledger.filters import FilterCriteria, filter_records
from core.ledger.grouping import GroupKey, GroupKeyKind, KeyResolver, group_by_key
from core.ledger.records import (
    Account,
    LedgerRecord,
    NamedEntity,
    apply_patch,
    coerce_account,
    coerce_entity,
    coerce_record,
    patch_to_wire,
)

__all__ = [
    # 모델
    "LedgerRecord",
    "Account",
    "NamedEntity",
    "coerce_record",
    "coerce_account",
    "coerce_entity",
    "apply_patch",
    "patch_to_wire",
    # 일관성 규칙
    "apply_result_rule",
    "money_editable",
    "normalize_result",
    "derive_result_pct",
    "build_quick_edit_patch",
    # 필터 / 그룹
    "FilterCriteria",
    "filter_records",
    "GroupKey",
    "GroupKeyKind",
    "KeyResolver",
    "group_by_key",
    # 집계
    "GroupStat",
    "SeriesPoint",
    "KpiSummary",
    "GainLoss",
    "aggregate",
    "fold_group",
    "compute_kpis",
    "equity_by_date",
    "gains_losses",
    "gains_losses_by",
    "buy_sell_counts",
    "pnl_by_weekday",
    "discipline_counts",
    "account_balance",
]
