from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple


@dataclass
class ColumnLayout:
    """Responsive layout for the project list table."""
    min_width: int
    columns: List[str]
    stat_w: int = 3
    name_min: int = 16
    summary_min: int = 16
    updated_w: int = 16

    def has_column(self, name: str) -> bool:
        return name in self.columns

    def _base_min_widths(self, desired: Optional[Dict[str, int]] = None) -> Dict[str, int]:
        base = {
            'idx': 3,
            'stat': self.stat_w,
            'name': self.name_min,
            'summary': self.summary_min,
            'updated': self.updated_w,
        }
        result: Dict[str, int] = {}
        for col in self.columns:
            width = base.get(col, 8)
            if desired and col in desired:
                width = max(width, desired[col])
            result[col] = max(1, width)
        return result

    def required_width(self, desired: Optional[Dict[str, int]] = None) -> int:
        widths = self._base_min_widths(desired)
        return sum(widths.values()) + len(self.columns) + 1

    def calculate_widths(self, term_width: int, desired: Optional[Dict[str, int]] = None) -> Dict[str, int]:
        """Compute column widths that fit into ``term_width``."""
        separators = len(self.columns) + 1
        usable_width = max(len(self.columns), term_width - separators)
        widths = self._base_min_widths(desired)
        min_total = sum(widths.values())

        if min_total <= usable_width:
            remaining = usable_width - min_total
            flex_cols = [c for c in self.columns if c in ('name', 'summary')] or list(self.columns)
            weights = {col: (2 if col == 'name' else 3) for col in flex_cols}
            total_weight = max(1, sum(weights.values()))
            distributed = 0
            for col in flex_cols:
                share = (remaining * weights[col]) // total_weight
                widths[col] += share
                distributed += share
            leftover = remaining - distributed
            if leftover and flex_cols:
                widths[flex_cols[0]] += leftover
            return widths

        overflow = min_total - usable_width
        min_limits = {'idx': 1, 'stat': 1, 'name': 4, 'summary': 2, 'updated': 2}
        for col in reversed(self.columns):
            reducible = max(0, widths[col] - min_limits.get(col, 1))
            if reducible <= 0:
                continue
            take = min(reducible, overflow)
            widths[col] -= take
            overflow -= take
            if overflow == 0:
                break
        return widths


class ResponsiveLayoutManager:
    """Picks the widest project table layout that fits the terminal."""

    LAYOUTS = [
        ColumnLayout(min_width=110, columns=['idx', 'stat', 'name', 'summary', 'updated'], name_min=20, summary_min=24),
        ColumnLayout(min_width=80, columns=['idx', 'stat', 'name', 'summary'], name_min=16, summary_min=16),
        ColumnLayout(min_width=0, columns=['idx', 'stat', 'name'], stat_w=2, name_min=8),
    ]

    @classmethod
    def select_layout(cls, term_width: int) -> ColumnLayout:
        for layout in cls.LAYOUTS:
            effective_min = max(layout.min_width, layout.required_width())
            if term_width >= effective_min:
                return layout
        return cls.LAYOUTS[-1]


def split_widths(term_width: int, min_pane: int = 24) -> Tuple[int, int]:
    """Widths of the list pane and the preview pane; preview is 0 when too narrow."""
    tw = max(20, term_width)
    if tw < min_pane * 2 + 1:
        return tw, 0
    left = max(min_pane, int(tw * 0.4))
    right = tw - left - 1
    if right < min_pane:
        return tw, 0
    return left, right


def detail_content_width(term_width: int) -> int:
    """Adaptive content width for the detail and form views."""
    tw = max(20, term_width)
    if tw < 80:
        base = tw - 4
    elif tw < 120:
        base = tw - 6
    else:
        base = int(tw * 0.9)
    return max(16, min(base, tw - 2, 160))
