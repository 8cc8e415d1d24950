# File: habit_tracker/models/category.py

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Category:
    """A plain label shared by reference across habits."""
    id: str
    name: str
    description: Optional[str] = None

    def to_dict(self) -> dict:
        """Snapshot form; description is omitted when unset."""
        data = {'id': self.id, 'name': self.name}
        if self.description is not None:
            data['description'] = self.description
        return data


def category_from_dict(data: dict) -> Category:
    """Create Category from a snapshot dictionary."""
    return Category(
        id=str(data['id']),
        name=str(data['name']),
        description=data.get('description'),
    )
