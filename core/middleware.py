from django.shortcuts import render

from .models import SiteSettings
from .roles import is_admin

# Paths that stay reachable while the site is in maintenance mode
MAINTENANCE_EXEMPT_PREFIXES = ('/admin/', '/accounts/login/', '/accounts/logout/', '/backoffice/')


class MaintenanceModeMiddleware:
    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        if not request.path.startswith(MAINTENANCE_EXEMPT_PREFIXES):
            if SiteSettings.load().maintenance_mode and not is_admin(request):
                return render(request, 'maintenance.html', status=503)
        return self.get_response(request)
