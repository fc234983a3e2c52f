"""
scoring/results.py

Output records shared by the calculators. All of them are frozen and built
fresh on every call; breakdowns are for display and audit only.
"""

from dataclasses import asdict, dataclass, field, is_dataclass, replace
from decimal import Decimal
from typing import Any, Dict, Optional

from nirf_portal.models.enumerations import Category


def _plain(value: Any) -> Any:
    """Recursively turn Decimals into floats for JSON output."""
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, dict):
        return {str(getattr(k, "value", k)): _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


@dataclass(frozen=True)
class SubScore:
    """One named, capped component of a category total."""
    name: str
    value: Decimal          # [0, max_score], quantized to 0.01
    max_score: Decimal
    breakdown: Optional[Any] = None
    overridden: bool = False

    def to_dict(self) -> Dict[str, Any]:
        breakdown = asdict(self.breakdown) if is_dataclass(self.breakdown) else None
        return {
            "name": self.name,
            "value": float(self.value),
            "max_score": float(self.max_score),
            "breakdown": _plain(breakdown),
            "overridden": self.overridden,
        }


@dataclass(frozen=True)
class CategoryResult:
    """Sub-scores of a detailed category plus their sum."""
    category: Category
    sub_scores: Dict[str, SubScore] = field(default_factory=dict)
    total: Decimal = Decimal("0")   # Σ sub-score values, quantized to 0.01

    def __getitem__(self, name: str) -> SubScore:
        return self.sub_scores[name]

    def replace_sub_scores(self, sub_scores: Dict[str, SubScore], total: Decimal) -> "CategoryResult":
        return replace(self, sub_scores=dict(sub_scores), total=total)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category.value,
            "sub_scores": {name: s.to_dict() for name, s in self.sub_scores.items()},
            "total": float(self.total),
        }


@dataclass(frozen=True)
class FinalResult:
    """Every category result for one institution plus the weighted final score."""
    tlr: CategoryResult
    research: CategoryResult
    graduation: Decimal      # [0, 100], quantized to 0.01
    outreach: Decimal        # [0, 100], quantized to 0.01
    perception: Decimal      # [0, 100], quantized to 0.01
    final_score: Decimal     # [0, 100], quantized to 0.01
    baseline: Decimal        # FRQ-equivalent faculty count, quantized to 0.0001

    def category_totals(self) -> Dict[Category, Decimal]:
        """The five category totals in aggregation order."""
        return {
            Category.TLR: self.tlr.total,
            Category.RESEARCH: self.research.total,
            Category.GRADUATION: self.graduation,
            Category.OUTREACH: self.outreach,
            Category.PERCEPTION: self.perception,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tlr": self.tlr.to_dict(),
            "research": self.research.to_dict(),
            "graduation": float(self.graduation),
            "outreach": float(self.outreach),
            "perception": float(self.perception),
            "final_score": float(self.final_score),
            "baseline": float(self.baseline),
        }
