"""
Table operations behind the public pages and the back office.

Reads return validated SchoolRecord values; writes go through model
validation and raise BackendError when the database rejects them, so callers
only ever have one failure type to report.
"""
import logging

from django.core.exceptions import ValidationError
from django.db import DatabaseError, IntegrityError, transaction
from django.db.models import Avg, Count

from core.models import SiteSettings
from .models import City, School, SchoolRating, Review
from .records import SchoolRecord

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = (
    'name', 'city', 'district', 'type', 'board', 'established', 'principal',
    'contact_email', 'contact_phone', 'website', 'address', 'description',
    'image', 'image_url', 'facilities', 'achievements', 'admission_process',
    'latitude', 'longitude',
)


class BackendError(Exception):
    """A read or write was rejected by the database."""

    def __init__(self, message, errors=None):
        super().__init__(message)
        self.errors = errors or {}


def _rated_schools():
    return School.objects.annotate(
        avg_overall=Avg('user_ratings__overall'),
        avg_facility=Avg('user_ratings__facility'),
        avg_faculty=Avg('user_ratings__faculty'),
        avg_activities=Avg('user_ratings__activities'),
        rating_count=Count('user_ratings'),
    )


def school_to_record(school):
    ratings = None
    if getattr(school, 'rating_count', 0):
        ratings = {
            'overall': school.avg_overall,
            'facility': school.avg_facility,
            'faculty': school.avg_faculty,
            'activities': school.avg_activities,
        }
    return SchoolRecord.from_row({
        'id': school.pk,
        'name': school.name,
        'city': school.city,
        'district': school.district,
        'board': school.board,
        'type': school.type,
        'established': school.established,
        'description': school.description,
        'image': school.image_reference,
        'ratings': ratings,
        'latitude': school.latitude,
        'longitude': school.longitude,
    })


def fetch_schools():
    return [school_to_record(s) for s in _rated_schools().order_by('name')]


def fetch_school(school_id):
    try:
        school = _rated_schools().get(pk=school_id)
    except (School.DoesNotExist, ValueError):
        return None
    return school_to_record(school)


def fetch_cities():
    return list(City.objects.order_by('name').values('name', 'district'))


def fetch_map_markers(city='all'):
    markers = []
    wanted = (city or 'all').casefold()
    for record in fetch_schools():
        if not record.has_coordinates:
            continue
        if wanted != 'all' and record.city.casefold() != wanted:
            continue
        markers.append({
            'id': record.id,
            'name': record.name,
            'city': record.city,
            'lat': record.latitude,
            'lng': record.longitude,
            'rating': record.overall_rating,
        })
    return markers


def _editable(fields):
    editable = {k: v for k, v in fields.items() if k in EDITABLE_FIELDS}
    # ClearableFileInput reports a cleared upload as False
    if editable.get('image') is False:
        editable['image'] = None
    return editable


def _save(school, action):
    try:
        school.full_clean()
        with transaction.atomic():
            school.save()
    except ValidationError as e:
        logger.warning("School %s rejected: %s", action, e.message_dict)
        raise BackendError(f"Failed to {action} school", errors=e.message_dict) from e
    except (IntegrityError, DatabaseError) as e:
        logger.error("School %s failed: %s", action, e)
        raise BackendError(f"Failed to {action} school") from e
    return school


def insert_school(fields):
    school = _save(School(**_editable(fields)), 'create')
    logger.info("Created school %s (%s)", school.pk, school.name)
    return school


def update_school(school_id, fields):
    try:
        school = School.objects.get(pk=school_id)
    except (School.DoesNotExist, ValueError) as e:
        raise BackendError("Failed to update school: not found") from e
    for key, value in _editable(fields).items():
        setattr(school, key, value)
    _save(school, 'update')
    logger.info("Updated school %s (%s)", school.pk, school.name)
    return school


def delete_school(school_id):
    try:
        deleted, _ = School.objects.filter(pk=school_id).delete()
    except (ValueError, DatabaseError) as e:
        logger.error("School delete failed: %s", e)
        raise BackendError("Failed to delete school") from e
    if not deleted:
        raise BackendError("Failed to delete school: not found")
    logger.info("Deleted school %s", school_id)
    return deleted


def delete_all_schools():
    try:
        count = School.objects.count()
        School.objects.all().delete()
    except DatabaseError as e:
        logger.error("Deleting all schools failed: %s", e)
        raise BackendError("Failed to delete all schools") from e
    logger.info("Deleted all %s schools", count)
    return count


def save_rating(user, school, scores):
    """
    Record a user's rating of a school. Once the user holds the maximum
    number of ratings allowed by site settings, the most recent one is
    updated instead of adding another.
    """
    site = SiteSettings.load()
    if not site.enable_school_ratings:
        raise BackendError("Ratings are currently disabled")

    values = {c: scores.get(c, 0) for c in SchoolRating.CATEGORIES}
    existing = SchoolRating.objects.filter(user=user, school=school).order_by('-updated_at')
    if existing.count() >= site.max_rating_per_user:
        rating = existing.first()
        for key, value in values.items():
            setattr(rating, key, value)
    else:
        rating = SchoolRating(user=user, school=school, **values)

    try:
        rating.full_clean()
        rating.save()
    except ValidationError as e:
        raise BackendError("Failed to save rating", errors=e.message_dict) from e
    except DatabaseError as e:
        logger.error("Saving rating for school %s failed: %s", school.pk, e)
        raise BackendError("Failed to save rating") from e
    logger.info("User %s rated school %s: %s", user.pk, school.pk, values)
    return rating


def add_review(user, school, text, rating=None):
    site = SiteSettings.load()
    try:
        review = Review.objects.create(
            user=user,
            school=school,
            text=text,
            rating=rating,
            is_approved=not site.moderate_reviews,
        )
    except DatabaseError as e:
        logger.error("Saving review for school %s failed: %s", school.pk, e)
        raise BackendError("Failed to save review") from e
    return review
