"""Tests for CSV import/export of schools."""

import pytest
import tablib

from schools.models import School
from schools.resources import SchoolResource, SCHOOL_FIELDS

pytestmark = pytest.mark.django_db


def make_dataset(*rows):
    dataset = tablib.Dataset(headers=['name', 'city', 'district', 'type', 'board', 'established'])
    for row in rows:
        dataset.append(row)
    return dataset


def test_import_canonicalises_city_board_and_type(city):
    dataset = make_dataset(
        ('Kendriya Vidyalaya No. 1', 'BHUBANESWAR', '', 'government', 'cbse', '1964'),
        ('Blind School', 'Puri', 'Puri', 'Government', 'state board', ''),
    )

    result = SchoolResource().import_data(dataset, dry_run=False)

    assert not result.has_errors()
    kv = School.objects.get(name='Kendriya Vidyalaya No. 1')
    assert (kv.city, kv.district, kv.board, kv.type, kv.established) == ('Bhubaneswar', 'Khordha', 'CBSE', 'Government', 1964)
    blind = School.objects.get(name='Blind School')
    assert blind.board == 'State Board'
    assert blind.established is None


def test_import_updates_existing_school_by_name(make_school):
    make_school("Stewart School", city="Cuttack", district="Cuttack", board="ICSE", type="Aided")

    SchoolResource().import_data(
        make_dataset(('Stewart School', 'Cuttack', 'Cuttack', 'Aided', 'ICSE', '1881')),
        dry_run=False,
    )

    assert School.objects.count() == 1
    assert School.objects.get().established == 1881


def test_export_columns(make_school):
    make_school("DAV Public School", established=1989)

    dataset = SchoolResource().export()

    assert tuple(dataset.headers) == SCHOOL_FIELDS
    assert dataset[0][0] == "DAV Public School"
