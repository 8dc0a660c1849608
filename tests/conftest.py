"""Pytest configuration and fixtures."""

import pytest
from django.contrib.auth import get_user_model

from core.models import UserRole, Profile
from schools.models import City, School, SchoolRating
from schools.records import SchoolRecord


@pytest.fixture
def make_record():
    """Build SchoolRecord values without touching the database."""
    counter = {'n': 0}

    def _make(name, city='Bhubaneswar', board='CBSE', rating=None, established=None, **extra):
        counter['n'] += 1
        row = {
            'id': extra.pop('id', counter['n']),
            'name': name,
            'city': city,
            'district': extra.pop('district', 'Khordha'),
            'board': board,
            'type': extra.pop('type', 'Private'),
            'established': established,
            'ratings': {'overall': rating} if rating is not None else None,
        }
        row.update(extra)
        return SchoolRecord.from_row(row)

    return _make


@pytest.fixture
def user(db):
    u = get_user_model().objects.create_user(username='parent', email='parent@example.com', password='pass12345!')
    Profile.objects.create(user=u, display_name='Priya Parent')
    return u


@pytest.fixture
def site_admin(db):
    u = get_user_model().objects.create_user(username='boss', email='boss@example.com', password='pass12345!')
    UserRole.objects.create(user=u, role=UserRole.ADMIN)
    return u


@pytest.fixture
def city(db):
    return City.objects.create(name='Bhubaneswar', district='Khordha')


@pytest.fixture
def make_school(db):
    def _make(name, city='Bhubaneswar', board='CBSE', type='Private', **extra):
        return School.objects.create(
            name=name,
            city=city,
            district=extra.pop('district', 'Khordha'),
            board=board,
            type=type,
            **extra,
        )
    return _make


@pytest.fixture
def rate(db):
    def _rate(school, user, overall, facility=0, faculty=0, activities=0):
        return SchoolRating.objects.create(
            school=school, user=user, overall=overall,
            facility=facility, faculty=faculty, activities=activities,
        )
    return _rate
