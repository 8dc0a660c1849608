from django.contrib import admin
from .models import UserRole, Profile, SiteSettings, ContactMessage
from .roles import has_role


class RoleGatedAdmin(admin.ModelAdmin):
    """
    Base admin class that grants full access to holders of the admin role.
    Superusers keep Django's defaults; staff users without the role fall back
    to their regular model permissions.
    """
    def _is_role_admin(self, request):
        return request.user.is_active and has_role(request.user.pk, UserRole.ADMIN)

    def has_module_permission(self, request):
        return self._is_role_admin(request) or super().has_module_permission(request)

    def has_view_permission(self, request, obj=None):
        return self._is_role_admin(request) or super().has_view_permission(request, obj)

    def has_add_permission(self, request):
        return self._is_role_admin(request) or super().has_add_permission(request)

    def has_change_permission(self, request, obj=None):
        return self._is_role_admin(request) or super().has_change_permission(request, obj)

    def has_delete_permission(self, request, obj=None):
        return self._is_role_admin(request) or super().has_delete_permission(request, obj)


@admin.register(UserRole)
class UserRoleAdmin(RoleGatedAdmin):
    list_display = ('user', 'role', 'created_at')
    list_filter = ('role',)
    search_fields = ('user__username', 'user__email')
    readonly_fields = ('created_at',)


@admin.register(Profile)
class ProfileAdmin(RoleGatedAdmin):
    list_display = ('user', 'display_name', 'phone', 'created_at')
    search_fields = ('user__username', 'user__email', 'display_name')
    readonly_fields = ('created_at', 'updated_at')


@admin.register(SiteSettings)
class SiteSettingsAdmin(RoleGatedAdmin):
    list_display = ('site_name', 'admin_email', 'maintenance_mode', 'updated_at')
    readonly_fields = ('updated_at',)
    fieldsets = (
        (None, {
            'fields': ('site_name', 'site_description', 'admin_email')
        }),
        ('Features', {
            'fields': ('enable_notifications', 'enable_public_registration', 'enable_school_ratings',
                       'moderate_reviews', 'max_rating_per_user', 'enable_email_alerts'),
        }),
        ('Maintenance', {
            'fields': ('maintenance_mode', 'updated_at'),
            'classes': ('collapse',),
        }),
    )

    def has_add_permission(self, request):
        return not SiteSettings.objects.exists() and super().has_add_permission(request)

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(ContactMessage)
class ContactMessageAdmin(RoleGatedAdmin):
    list_display = ('name', 'email', 'is_read', 'created_at')
    list_filter = ('is_read',)
    search_fields = ('name', 'email', 'message')
    readonly_fields = ('created_at',)
    actions = ['mark_read']

    @admin.action(description="Mark selected messages as read")
    def mark_read(self, request, queryset):
        updated = queryset.update(is_read=True)
        self.message_user(request, f"Marked {updated} message(s) as read.")
