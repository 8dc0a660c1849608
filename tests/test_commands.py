"""Tests for management commands."""

import pytest
from django.core.management import call_command

from schools.models import City, School

pytestmark = pytest.mark.django_db


def test_seed_schools_is_idempotent():
    call_command('seed_schools')
    cities, schools = City.objects.count(), School.objects.count()

    call_command('seed_schools')

    assert cities == 5
    assert schools == 7
    assert (City.objects.count(), School.objects.count()) == (cities, schools)
    assert School.objects.get(name='Stewart School').board == 'ICSE'
