"""
Who is signed in, and what they are allowed to do.

Role checks read the UserRole table; a Django superuser is treated as an
admin so a freshly created `createsuperuser` account can reach the back
office before any role rows exist.
"""
import logging
from dataclasses import dataclass
from functools import wraps
from typing import Optional

from django.contrib.auth import get_user_model
from django.contrib.auth.views import redirect_to_login
from django.shortcuts import render

from .models import UserRole

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CurrentUser:
    id: int
    email: str


def current_user(request) -> Optional[CurrentUser]:
    user = getattr(request, 'user', None)
    if user is None or not user.is_authenticated:
        return None
    return CurrentUser(id=user.pk, email=user.email or '')


def has_role(user_id, role) -> bool:
    if user_id is None:
        return False
    if UserRole.objects.filter(user_id=user_id, role=role).exists():
        return True
    if role == UserRole.ADMIN:
        return get_user_model().objects.filter(pk=user_id, is_superuser=True).exists()
    return False


def is_admin(request) -> bool:
    user = current_user(request)
    return user is not None and has_role(user.id, UserRole.ADMIN)


def role_for(user) -> str:
    """Highest role held by ``user``; plain users without rows are 'user'."""
    if user.is_superuser:
        return UserRole.ADMIN
    held = {r.role for r in user.roles.all()}
    for role in (UserRole.ADMIN, UserRole.MODERATOR):
        if role in held:
            return role
    return UserRole.USER


def grant_role(user, role):
    obj, created = UserRole.objects.get_or_create(user=user, role=role)
    if created:
        logger.info("Granted role %s to user %s", role, user.pk)
    return obj


def revoke_role(user, role):
    deleted, _ = UserRole.objects.filter(user=user, role=role).delete()
    if deleted:
        logger.info("Revoked role %s from user %s", role, user.pk)
    return deleted


def admin_required(view_func):
    """
    Gate a view on the admin role. Anonymous visitors are sent to the login
    page; signed-in users without the role get an access-denied page.
    """
    @wraps(view_func)
    def wrapper(request, *args, **kwargs):
        user = current_user(request)
        if user is None:
            return redirect_to_login(request.get_full_path())
        if not has_role(user.id, UserRole.ADMIN):
            logger.warning("User %s denied access to %s", user.id, request.path)
            return render(request, 'access_denied.html', status=403)
        return view_func(request, *args, **kwargs)
    return wrapper
