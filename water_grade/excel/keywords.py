from __future__ import annotations

from dataclasses import dataclass

"""Header keyword table.

Each semantic role lists the lowercase substrings that identify its column in
a header row (Chinese header names plus the usual ASCII abbreviations). Matching
is substring based: a header such as "溶解氧(mg/L)" resolves to ``do``.

Only ``site`` carries exclusions so that a "河流名称" (river name) column is
not taken for the monitoring section name via the generic "名称" keyword.
"""

__all__ = [
    "HEADER_KEYWORDS",
    "KeywordRule",
]


@dataclass(frozen=True)
class KeywordRule:
    triggers: tuple[str, ...]
    excludes: tuple[str, ...] = ()

    def matches(self, text: str) -> bool:
        """True when ``text`` (already lowercased) hits a trigger and no exclude."""
        return any(k in text for k in self.triggers) and not any(e in text for e in self.excludes)


HEADER_KEYWORDS: dict[str, KeywordRule] = {
    "site": KeywordRule(
        ("监测断面", "断面名称", "断面", "监测点位", "点位名称", "点位", "测站", "名称"),
        excludes=("河流名称",),
    ),
    "time": KeywordRule(("采样时间", "监测时间", "日期", "时间", "采样日期")),
    "year": KeywordRule(("年", "年份")),
    "month": KeywordRule(("月", "月份")),
    "day": KeywordRule(("日", "日期")),
    "ph": KeywordRule(("ph", "ph值", "酸碱度")),
    "do": KeywordRule(("溶解氧", "do")),
    "cod_mn": KeywordRule(("高锰酸盐指数", "codmn", "imn", "高锰酸盐")),
    "cod": KeywordRule(("化学需氧量", "cod", "codcr")),
    "bod5": KeywordRule(("五日生化需氧量", "bod5", "bod")),
    "nh3_n": KeywordRule(("氨氮", "nh3-n", "nh3n", "nh3")),
    "tp": KeywordRule(("总磷", "tp")),
}
