"""
Seed the directory with a handful of Odisha cities and schools.

Safe to run repeatedly: existing rows are matched by name and left alone.
"""
from django.core.management.base import BaseCommand
from django.db import transaction

from schools.models import City, School

CITIES = [
    {'name': 'Bhubaneswar', 'district': 'Khordha'},
    {'name': 'Cuttack', 'district': 'Cuttack'},
    {'name': 'Puri', 'district': 'Puri'},
    {'name': 'Rourkela', 'district': 'Sundargarh'},
    {'name': 'Sambalpur', 'district': 'Sambalpur'},
]

SCHOOLS = [
    {
        'name': 'DAV Public School, Unit-8',
        'city': 'Bhubaneswar', 'district': 'Khordha', 'board': 'CBSE', 'type': 'Private',
        'established': 1989, 'latitude': 20.2806, 'longitude': 85.8161,
        'description': 'Co-educational day school with strong science and sports programmes.',
        'facilities': ['Library', 'Science Labs', 'Sports Complex'],
    },
    {
        'name': 'KIIT International School',
        'city': 'Bhubaneswar', 'district': 'Khordha', 'board': 'IB', 'type': 'International',
        'established': 2006, 'latitude': 20.3549, 'longitude': 85.8197,
        'description': 'Residential international school on the KIIT campus.',
        'facilities': ['Boarding', 'Swimming Pool', 'Robotics Lab'],
    },
    {
        'name': 'Kendriya Vidyalaya No. 1',
        'city': 'Bhubaneswar', 'district': 'Khordha', 'board': 'CBSE', 'type': 'Government',
        'established': 1964, 'latitude': 20.2961, 'longitude': 85.8245,
        'description': 'Central government school serving families across the city.',
        'facilities': ['Library', 'Computer Lab'],
    },
    {
        'name': 'Sainik School Bhubaneswar',
        'city': 'Bhubaneswar', 'district': 'Khordha', 'board': 'CBSE', 'type': 'Government',
        'established': 1962, 'latitude': 20.3180, 'longitude': 85.8330,
        'description': 'Residential school preparing cadets for the defence academies.',
        'facilities': ['Boarding', 'Parade Ground', 'Horse Riding'],
    },
    {
        'name': 'SAI International School',
        'city': 'Bhubaneswar', 'district': 'Khordha', 'board': 'CBSE', 'type': 'Private',
        'established': 2008, 'latitude': 20.3295, 'longitude': 85.8069,
        'description': 'Day school known for its innovation and arts programmes.',
        'facilities': ['Innovation Lab', 'Auditorium'],
    },
    {
        'name': 'Stewart School',
        'city': 'Cuttack', 'district': 'Cuttack', 'board': 'ICSE', 'type': 'Aided',
        'established': 1881, 'latitude': 20.4625, 'longitude': 85.8830,
        'description': 'One of the oldest schools in the state.',
        'facilities': ['Library', 'Chapel'],
    },
    {
        'name': 'Blind School Puri',
        'city': 'Puri', 'district': 'Puri', 'board': 'State Board', 'type': 'Government',
        'established': 1972, 'latitude': 19.8135, 'longitude': 85.8312,
        'description': 'State board school with specialised support for visually impaired students.',
        'facilities': ['Braille Library'],
    },
]


class Command(BaseCommand):
    help = "Create sample cities and schools"

    @transaction.atomic
    def handle(self, *args, **options):
        created_cities = 0
        for data in CITIES:
            _, created = City.objects.get_or_create(name=data['name'], defaults={'district': data['district']})
            created_cities += created

        created_schools = 0
        for data in SCHOOLS:
            fields = dict(data)
            name = fields.pop('name')
            _, created = School.objects.get_or_create(name=name, defaults=fields)
            created_schools += created

        self.stdout.write(self.style.SUCCESS(
            f"Seeded {created_cities} new cities and {created_schools} new schools."
        ))
