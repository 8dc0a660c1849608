from django.db import models
from django.conf import settings
from django.core.validators import MinValueValidator


class UserRole(models.Model):
    ADMIN = 'admin'
    MODERATOR = 'moderator'
    USER = 'user'
    ROLE_CHOICES = [
        (ADMIN, 'Admin'),
        (MODERATOR, 'Moderator'),
        (USER, 'User'),
    ]

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='roles',
        verbose_name="User"
    )
    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=USER, verbose_name="Role")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['user__email', 'role']
        verbose_name = "User Role"
        verbose_name_plural = "User Roles"
        constraints = [
            models.UniqueConstraint(fields=['user', 'role'], name='unique_user_role'),
        ]

    def __str__(self):
        return f"{self.user} ({self.role})"


class Profile(models.Model):
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='profile',
        verbose_name="User"
    )
    display_name = models.CharField(max_length=150, blank=True, verbose_name="Display Name")
    phone = models.CharField(max_length=20, blank=True, verbose_name="Phone Number")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Profile"
        verbose_name_plural = "Profiles"

    def __str__(self):
        return self.display_name or self.user.get_username()


class SiteSettings(models.Model):
    """
    Single-row table holding the options editable from the back office.
    Always access it through SiteSettings.load().
    """
    DEFAULTS = {
        'site_name': "SchoolHub",
        'site_description': "Find and compare the best schools in your area",
        'admin_email': "admin@schoolhub.com",
        'enable_notifications': True,
        'enable_public_registration': True,
        'enable_school_ratings': True,
        'moderate_reviews': False,
        'max_rating_per_user': 1,
        'enable_email_alerts': True,
        'maintenance_mode': False,
    }

    site_name = models.CharField(max_length=100, default=DEFAULTS['site_name'])
    site_description = models.TextField(blank=True, default=DEFAULTS['site_description'])
    admin_email = models.EmailField(default=DEFAULTS['admin_email'])
    enable_notifications = models.BooleanField(default=True)
    enable_public_registration = models.BooleanField(default=True)
    enable_school_ratings = models.BooleanField(default=True)
    moderate_reviews = models.BooleanField(default=False)
    max_rating_per_user = models.PositiveIntegerField(default=1, validators=[MinValueValidator(1)])
    enable_email_alerts = models.BooleanField(default=True)
    maintenance_mode = models.BooleanField(default=False)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Site Settings"
        verbose_name_plural = "Site Settings"

    def __str__(self):
        return self.site_name

    def save(self, *args, **kwargs):
        self.pk = 1
        super().save(*args, **kwargs)

    @classmethod
    def load(cls):
        obj, _ = cls.objects.get_or_create(pk=1)
        return obj

    def reset(self):
        for field, value in self.DEFAULTS.items():
            setattr(self, field, value)
        self.save()


class ContactMessage(models.Model):
    name = models.CharField(max_length=150)
    email = models.EmailField()
    message = models.TextField()
    is_read = models.BooleanField(default=False, verbose_name="Read?")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        verbose_name = "Contact Message"
        verbose_name_plural = "Contact Messages"

    def __str__(self):
        return f"{self.name} <{self.email}>"
