from django.db import models
from django.conf import settings
from django.core.validators import MinValueValidator, MaxValueValidator


class City(models.Model):
    name = models.CharField(max_length=100, unique=True, verbose_name="City")
    district = models.CharField(max_length=100, verbose_name="District")

    class Meta:
        ordering = ['name']
        verbose_name = "City"
        verbose_name_plural = "Cities"

    def __str__(self):
        return f"{self.name} ({self.district})"


class School(models.Model):
    BOARD_CHOICES = [
        ('CBSE', 'CBSE'),
        ('ICSE', 'ICSE'),
        ('State Board', 'State Board'),
        ('IB', 'IB'),
    ]
    TYPE_CHOICES = [
        ('Government', 'Government'),
        ('Private', 'Private'),
        ('Aided', 'Aided'),
        ('International', 'International'),
    ]

    name = models.CharField(max_length=200, unique=True, verbose_name="School Name")
    city = models.CharField(max_length=100, verbose_name="City")
    district = models.CharField(max_length=100, verbose_name="District")
    type = models.CharField(max_length=20, choices=TYPE_CHOICES, verbose_name="School Type")
    board = models.CharField(max_length=20, choices=BOARD_CHOICES, verbose_name="Board")
    established = models.PositiveIntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(1800), MaxValueValidator(2100)],
        verbose_name="Year Established"
    )
    principal = models.CharField(max_length=150, blank=True, verbose_name="Principal")
    contact_email = models.EmailField(blank=True, verbose_name="Contact Email")
    contact_phone = models.CharField(max_length=20, blank=True, verbose_name="Contact Phone")
    website = models.URLField(blank=True, verbose_name="Website")
    address = models.TextField(blank=True, verbose_name="Address")
    description = models.TextField(blank=True, verbose_name="Description")
    image = models.ImageField(upload_to='school_images/', blank=True, null=True, verbose_name="School Image")
    image_url = models.URLField(blank=True, verbose_name="Image URL")
    facilities = models.JSONField(default=list, blank=True, help_text="List of facilities, e.g. [\"Library\", \"Labs\"]")
    achievements = models.JSONField(default=list, blank=True, help_text="List of notable achievements")
    admission_process = models.TextField(blank=True, verbose_name="Admission Process")
    latitude = models.FloatField(null=True, blank=True)
    longitude = models.FloatField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['name']
        verbose_name = "School"
        verbose_name_plural = "Schools"
        indexes = [
            models.Index(fields=['city'], name='schools_sch_city_idx'),
            models.Index(fields=['board'], name='schools_sch_board_idx'),
        ]

    def __str__(self):
        return f"{self.name} ({self.city})"

    @property
    def image_reference(self):
        if self.image:
            return self.image.url
        return self.image_url or None


class SchoolRating(models.Model):
    CATEGORIES = ('overall', 'facility', 'faculty', 'activities')
    SCORE_VALIDATORS = [MinValueValidator(0), MaxValueValidator(5)]

    school = models.ForeignKey(School, on_delete=models.CASCADE, related_name='user_ratings', verbose_name="School")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='school_ratings',
        verbose_name="Rated By"
    )
    overall = models.PositiveSmallIntegerField(default=0, validators=SCORE_VALIDATORS)
    facility = models.PositiveSmallIntegerField(default=0, validators=SCORE_VALIDATORS)
    faculty = models.PositiveSmallIntegerField(default=0, validators=SCORE_VALIDATORS)
    activities = models.PositiveSmallIntegerField(default=0, validators=SCORE_VALIDATORS)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-updated_at']
        verbose_name = "School Rating"
        verbose_name_plural = "School Ratings"
        indexes = [
            models.Index(fields=['school', 'user'], name='schools_rat_school_user_idx'),
        ]

    def __str__(self):
        return f"{self.user} rated {self.school.name}: {self.overall}/5"


class Review(models.Model):
    school = models.ForeignKey(School, on_delete=models.CASCADE, related_name='reviews', verbose_name="School")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='school_reviews',
        verbose_name="Author"
    )
    text = models.TextField(verbose_name="Review")
    rating = models.PositiveSmallIntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(0), MaxValueValidator(5)],
        verbose_name="Stars"
    )
    is_approved = models.BooleanField(default=True, verbose_name="Approved?")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        verbose_name = "Review"
        verbose_name_plural = "Reviews"

    def __str__(self):
        return f"{self.user} on {self.school.name}"
