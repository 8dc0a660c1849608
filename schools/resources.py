# schools/resources.py
from import_export import resources
from .models import School, City

SCHOOL_FIELDS = (
    'name',
    'city',
    'district',
    'type',
    'board',
    'established',
    'principal',
    'contact_email',
    'contact_phone',
    'website',
    'address',
    'description',
    'image_url',
    'admission_process',
    'latitude',
    'longitude',
)


def _match_choice(value, choices):
    for key, _ in choices:
        if key.casefold() == value.casefold():
            return key
    return value


class SchoolResource(resources.ModelResource):
    class Meta:
        model = School
        fields = SCHOOL_FIELDS
        export_order = SCHOOL_FIELDS
        import_id_fields = ('name',)  # school names are unique
        skip_unchanged = True
        report_skipped = True

    def before_import_row(self, row, **kwargs):
        # Canonicalise city spelling and fill district from the cities table
        city_val = (row.get('city') or '').strip()
        if city_val:
            city = City.objects.filter(name__iexact=city_val).first()
            if city:
                row['city'] = city.name
                if not (row.get('district') or '').strip():
                    row['district'] = city.district

        board_val = (row.get('board') or '').strip()
        if board_val:
            row['board'] = _match_choice(board_val, School.BOARD_CHOICES)

        type_val = (row.get('type') or '').strip()
        if type_val:
            row['type'] = _match_choice(type_val, School.TYPE_CHOICES)

        if row.get('established') in ('', None):
            row['established'] = None
