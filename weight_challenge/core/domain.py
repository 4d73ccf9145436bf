from dataclasses import dataclass, field, replace
from datetime import date


@dataclass(frozen=True, order=True)
class WeighIn:
    """One dated weight observation. Ordered by date, then weight."""

    date: date
    weight: float

    def to_dict(self):
        return {
            'date': self.date.strftime('%Y-%m-%d'),
            'weight': self.weight
        }


@dataclass(frozen=True)
class Participant:
    id: str
    name: str
    start_weight: float
    goal_weight: float
    entries: tuple = field(default_factory=tuple)

    def with_entries(self, entries):
        return replace(self, entries=tuple(entries))

    def with_details(self, name, start_weight, goal_weight):
        # Metadata edits never touch existing entries
        return replace(self, name=name, start_weight=start_weight, goal_weight=goal_weight)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'start_weight': self.start_weight,
            'goal_weight': self.goal_weight,
            'entries': [entry.to_dict() for entry in self.entries]
        }
