from .models import SiteSettings
from .roles import current_user, is_admin


def session_context(request):
    """Read-only auth and site context shared by every template."""
    return {
        'current_user': current_user(request),
        'is_admin': is_admin(request),
        'site_settings': SiteSettings.load(),
    }
