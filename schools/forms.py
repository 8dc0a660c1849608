import re

from django import forms

from .models import School, SchoolRating
from .listing import SORT_CHOICES


def split_lines(value):
    return [item.strip() for item in re.split(r'[\n,]', value or '') if item.strip()]


class SchoolForm(forms.ModelForm):
    facilities = forms.CharField(
        required=False,
        widget=forms.Textarea(attrs={'rows': 3}),
        help_text="One per line or comma separated"
    )
    achievements = forms.CharField(
        required=False,
        widget=forms.Textarea(attrs={'rows': 3}),
        help_text="One per line or comma separated"
    )

    class Meta:
        model = School
        fields = [
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
            'image',
            'image_url',
            'facilities',
            'achievements',
            'admission_process',
            'latitude',
            'longitude',
        ]
        widgets = {
            'city': forms.TextInput(attrs={'list': 'city-options'}),
            'address': forms.Textarea(attrs={'rows': 2}),
            'description': forms.Textarea(attrs={'rows': 4}),
            'admission_process': forms.Textarea(attrs={'rows': 3}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        if self.instance.pk:
            self.initial['facilities'] = "\n".join(self.instance.facilities or [])
            self.initial['achievements'] = "\n".join(self.instance.achievements or [])

    def clean_facilities(self):
        return split_lines(self.cleaned_data.get('facilities'))

    def clean_achievements(self):
        return split_lines(self.cleaned_data.get('achievements'))


class RatingForm(forms.ModelForm):
    class Meta:
        model = SchoolRating
        fields = list(SchoolRating.CATEGORIES)
        widgets = {
            c: forms.NumberInput(attrs={'min': 0, 'max': 5, 'step': 1}) for c in SchoolRating.CATEGORIES
        }


class ReviewForm(forms.Form):
    rating = forms.TypedChoiceField(
        choices=[('', "No stars")] + [(n, f"{n} / 5") for n in range(6)],
        coerce=int,
        empty_value=None,
        required=False,
        label="Stars"
    )
    text = forms.CharField(
        max_length=2000,
        widget=forms.Textarea(attrs={'rows': 4, 'placeholder': "Share your experience..."}),
        label="Your review"
    )


class ListingFilterForm(forms.Form):
    """Unbound form used only to render the listing filter controls."""
    q = forms.CharField(required=False, label="Search schools")
    city = forms.ChoiceField(required=False, label="City")
    board = forms.ChoiceField(required=False, label="Board")
    sort = forms.ChoiceField(required=False, choices=SORT_CHOICES, label="Sort by")

    def __init__(self, *args, cities=(), boards=(), **kwargs):
        super().__init__(*args, **kwargs)
        self.fields['city'].choices = [('all', 'All Cities')] + [(c, c) for c in cities]
        self.fields['board'].choices = [('all', 'All Boards')] + [(b, b) for b in boards]
