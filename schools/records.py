"""
Read-only school records handed to views and the listing.

Rows coming back from the database (or from seed/import data) are validated
once here; everything downstream can rely on the documented defaults instead
of re-checking optional fields.
"""
from dataclasses import dataclass
from typing import Any, Mapping, Optional

RATING_MIN = 0.0
RATING_MAX = 5.0


def _to_score(value) -> float:
    try:
        score = float(value)
    except (TypeError, ValueError):
        return 0.0
    if score != score:  # NaN
        return 0.0
    return min(max(score, RATING_MIN), RATING_MAX)


def _to_year(value) -> Optional[int]:
    if value in (None, ''):
        return None
    try:
        year = int(value)
    except (TypeError, ValueError):
        return None
    return year if year > 0 else None


def _to_float(value) -> Optional[float]:
    if value in (None, ''):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class Ratings:
    overall: float = 0.0
    facility: float = 0.0
    faculty: float = 0.0
    activities: float = 0.0

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> Optional['Ratings']:
        if not isinstance(data, Mapping):
            return None
        return cls(
            overall=_to_score(data.get('overall')),
            facility=_to_score(data.get('facility')),
            faculty=_to_score(data.get('faculty')),
            activities=_to_score(data.get('activities')),
        )


@dataclass(frozen=True)
class SchoolRecord:
    id: str
    name: str
    city: str
    district: str = ''
    board: str = ''
    type: str = ''
    established: Optional[int] = None
    description: Optional[str] = None
    image: Optional[str] = None
    ratings: Optional[Ratings] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> 'SchoolRecord':
        return cls(
            id=str(row.get('id', '')),
            name=str(row.get('name') or ''),
            city=str(row.get('city') or ''),
            district=str(row.get('district') or ''),
            board=str(row.get('board') or ''),
            type=str(row.get('type') or ''),
            established=_to_year(row.get('established')),
            description=row.get('description') or None,
            image=row.get('image') or row.get('image_url') or None,
            ratings=Ratings.from_mapping(row.get('ratings')),
            latitude=_to_float(row.get('latitude')),
            longitude=_to_float(row.get('longitude')),
        )

    @property
    def overall_rating(self) -> float:
        return self.ratings.overall if self.ratings else 0.0

    @property
    def established_year(self) -> int:
        return self.established or 0

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None
