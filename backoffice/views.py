import logging

from django.shortcuts import render, redirect, get_object_or_404
from django.contrib import messages
from django.contrib.auth import get_user_model
from django.db.models import Q
from django.views.decorators.http import require_POST

from core.models import SiteSettings, UserRole
from core.roles import admin_required, grant_role, revoke_role
from schools.backend import BackendError, insert_school, update_school, delete_school, delete_all_schools, fetch_cities
from schools.forms import SchoolForm
from schools.models import School
from .forms import SiteSettingsForm
from . import stats

logger = logging.getLogger(__name__)


@admin_required
def dashboard(request):
    context = {
        'title': 'Admin Dashboard',
        **stats.dashboard_stats(),
    }
    return render(request, 'backoffice/dashboard.html', context)


@admin_required
def school_list(request):
    query = request.GET.get('q', '')

    schools = School.objects.all().order_by('name')
    if query:
        schools = schools.filter(
            Q(name__icontains=query) |
            Q(city__icontains=query) |
            Q(district__icontains=query)
        )

    context = {
        'title': 'School Management',
        'schools': schools,
        'query': query,
    }
    return render(request, 'backoffice/schools.html', context)


def _render_school_form(request, form, school=None):
    context = {
        'title': 'Edit School' if school else 'Add New School',
        'form': form,
        'school': school,
        'cities': fetch_cities(),
    }
    return render(request, 'backoffice/school_form.html', context)


def _add_backend_errors(form, error):
    for field, field_errors in error.errors.items():
        for message in field_errors:
            form.add_error(field if field in form.fields else None, message)


@admin_required
def school_create(request):
    if request.method == 'POST':
        form = SchoolForm(request.POST, request.FILES)
        if form.is_valid():
            try:
                insert_school(form.cleaned_data)
            except BackendError as e:
                _add_backend_errors(form, e)
                messages.error(request, "Failed to create school")
            else:
                messages.success(request, "School created successfully")
                return redirect('backoffice:school_list')
        else:
            messages.error(request, "Please fill in all required fields")
    else:
        form = SchoolForm()

    return _render_school_form(request, form)


@admin_required
def school_edit(request, school_id):
    school = get_object_or_404(School, pk=school_id)

    if request.method == 'POST':
        form = SchoolForm(request.POST, request.FILES, instance=school)
        if form.is_valid():
            try:
                update_school(school_id, form.cleaned_data)
            except BackendError as e:
                _add_backend_errors(form, e)
                messages.error(request, "Failed to update school")
            else:
                messages.success(request, "School updated successfully")
                return redirect('backoffice:school_list')
        else:
            messages.error(request, "Please fill in all required fields")
    else:
        form = SchoolForm(instance=school)

    return _render_school_form(request, form, school=school)


@admin_required
@require_POST
def school_delete(request, school_id):
    try:
        delete_school(school_id)
        messages.success(request, "School deleted successfully")
    except BackendError:
        messages.error(request, "Failed to delete school")
    return redirect('backoffice:school_list')


@admin_required
@require_POST
def school_delete_all(request):
    if request.POST.get('confirm') != 'yes':
        messages.warning(request, "Deletion not confirmed.")
        return redirect('backoffice:school_list')

    try:
        count = delete_all_schools()
        messages.success(request, f"All schools deleted successfully ({count}).")
    except BackendError:
        messages.error(request, "Failed to delete all schools")
    return redirect('backoffice:school_list')


@admin_required
def user_list(request):
    query = request.GET.get('q', '')
    rows = stats.user_rows(query)

    context = {
        'title': 'User Management',
        'users': rows,
        'query': query,
        **stats.user_stats(stats.user_rows()),
    }
    return render(request, 'backoffice/users.html', context)


@admin_required
@require_POST
def user_set_role(request, user_id):
    user = get_object_or_404(get_user_model(), pk=user_id)
    action = request.POST.get('action')

    if action == 'grant':
        grant_role(user, UserRole.ADMIN)
        messages.success(request, f"{user.get_username()} is now an admin.")
    elif action == 'revoke':
        if user.pk == request.user.pk:
            messages.error(request, "You cannot revoke your own admin role.")
        else:
            revoke_role(user, UserRole.ADMIN)
            messages.success(request, f"Admin role removed from {user.get_username()}.")
    else:
        messages.error(request, "Unknown role action.")

    return redirect('backoffice:user_list')


@admin_required
def analytics(request):
    timeframe = request.GET.get('timeframe', stats.DEFAULT_TIMEFRAME)
    context = {
        'title': 'Analytics',
        'timeframe_choices': stats.TIMEFRAME_CHOICES,
        **stats.analytics(timeframe),
    }
    return render(request, 'backoffice/analytics.html', context)


@admin_required
def site_settings(request):
    current = SiteSettings.load()

    if request.method == 'POST':
        if request.POST.get('action') == 'reset':
            current.reset()
            logger.info("Site settings reset by user %s", request.user.pk)
            messages.success(request, "Settings reset to default values")
            return redirect('backoffice:site_settings')

        form = SiteSettingsForm(request.POST, instance=current)
        if form.is_valid():
            form.save()
            logger.info("Site settings updated by user %s", request.user.pk)
            messages.success(request, "Settings saved successfully")
            return redirect('backoffice:site_settings')
        messages.error(request, "Please correct the errors below.")
    else:
        form = SiteSettingsForm(instance=current)

    context = {
        'title': 'Settings',
        'form': form,
    }
    return render(request, 'backoffice/settings.html', context)
