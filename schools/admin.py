from django.contrib import admin
from django.db.models import Avg
from import_export.admin import ImportExportMixin

from core.admin import RoleGatedAdmin
from .models import City, School, SchoolRating, Review
from .resources import SchoolResource


@admin.register(City)
class CityAdmin(RoleGatedAdmin):
    list_display = ('name', 'district')
    list_filter = ('district',)
    search_fields = ('name', 'district')


class ReviewInline(admin.TabularInline):
    model = Review
    extra = 0
    fields = ('user', 'rating', 'text', 'is_approved', 'created_at')
    readonly_fields = ('created_at',)


@admin.register(School)
class SchoolAdmin(ImportExportMixin, RoleGatedAdmin):
    resource_classes = [SchoolResource]
    list_display = ('name', 'city', 'district', 'board', 'type', 'established', 'average_rating')
    list_filter = ('board', 'type', 'city')
    search_fields = ('name', 'city', 'district')
    readonly_fields = ('created_at', 'updated_at')
    inlines = [ReviewInline]
    fieldsets = (
        (None, {
            'fields': ('name', 'city', 'district', 'type', 'board', 'established')
        }),
        ('Contact', {
            'fields': ('principal', 'contact_email', 'contact_phone', 'website', 'address'),
        }),
        ('Profile', {
            'fields': ('description', 'image', 'image_url', 'facilities', 'achievements', 'admission_process'),
        }),
        ('Map', {
            'fields': ('latitude', 'longitude'),
            'classes': ('collapse',),
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )

    def get_queryset(self, request):
        return super().get_queryset(request).annotate(avg_overall=Avg('user_ratings__overall'))

    def average_rating(self, obj):
        if obj.avg_overall is None:
            return "-"
        return f"{obj.avg_overall:.1f}"
    average_rating.short_description = 'Rating'
    average_rating.admin_order_field = 'avg_overall'


@admin.register(SchoolRating)
class SchoolRatingAdmin(RoleGatedAdmin):
    list_display = ('school', 'user', 'overall', 'facility', 'faculty', 'activities', 'updated_at')
    list_filter = ('school__board', 'overall')
    search_fields = ('school__name', 'user__username', 'user__email')
    readonly_fields = ('created_at', 'updated_at')


@admin.register(Review)
class ReviewAdmin(RoleGatedAdmin):
    list_display = ('school', 'user', 'rating', 'is_approved', 'created_at')
    list_filter = ('is_approved',)
    search_fields = ('school__name', 'user__username', 'text')
    readonly_fields = ('created_at',)
    actions = ['approve_reviews', 'reject_reviews']

    @admin.action(description="Approve selected reviews")
    def approve_reviews(self, request, queryset):
        updated = queryset.update(is_approved=True)
        self.message_user(request, f"Approved {updated} review(s).")

    @admin.action(description="Hide selected reviews")
    def reject_reviews(self, request, queryset):
        updated = queryset.update(is_approved=False)
        self.message_user(request, f"Hid {updated} review(s).")
