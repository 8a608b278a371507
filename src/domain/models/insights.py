"""Domain models for rule-based financial insights."""

from dataclasses import dataclass, field
from decimal import Decimal


def _plain(value):
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, list):
        return [_plain(item) for item in value]
    return value


@dataclass(frozen=True)
class Insight:
    """Observation displayed on the insights page."""

    key: str
    type: str
    title: str
    description: str
    impact: str
    action_path: str
    action_label: str
    potential_savings: Decimal | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.key,
            "type": self.type,
            "title": self.title,
            "description": self.description,
            "impact": self.impact,
            "actionPath": self.action_path,
            "actionLabel": self.action_label,
            "potentialSavings": _plain(self.potential_savings),
        }


@dataclass(frozen=True)
class Recommendation:
    """Actionable recommendation with its estimated monthly savings."""

    type: str
    title: str
    description: str
    potential_savings: Decimal
    priority: str
    difficulty: str
    category: str
    is_applied: bool = False
    action_data: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "type": self.type,
            "title": self.title,
            "description": self.description,
            "potential_savings": _plain(self.potential_savings),
            "priority": self.priority,
            "difficulty": self.difficulty,
            "category": self.category,
            "is_applied": self.is_applied,
            "action_data": {
                key: _plain(value) for key, value in self.action_data.items()
            },
        }


@dataclass(frozen=True)
class InsightsReport:
    """Insights, recommendations and the resulting 0-100 score."""

    insights: list[Insight]
    recommendations: list[Recommendation]
    score: int

    def to_dict(self) -> dict:
        return {
            "insights": [item.to_dict() for item in self.insights],
            "recommendations": [item.to_dict() for item in self.recommendations],
            "score": self.score,
        }


__all__ = ["Insight", "Recommendation", "InsightsReport"]
