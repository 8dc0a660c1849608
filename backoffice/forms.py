from django import forms

from core.models import SiteSettings


class SiteSettingsForm(forms.ModelForm):
    class Meta:
        model = SiteSettings
        fields = [
            'site_name',
            'site_description',
            'admin_email',
            'enable_notifications',
            'enable_public_registration',
            'enable_school_ratings',
            'moderate_reviews',
            'max_rating_per_user',
            'enable_email_alerts',
            'maintenance_mode',
        ]
        widgets = {
            'site_description': forms.Textarea(attrs={'rows': 3}),
        }
