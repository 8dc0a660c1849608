from datetime import timedelta

from django.contrib.auth import get_user_model
from django.db.models import Avg, Count
from django.utils import timezone

from core.roles import role_for
from core.models import UserRole
from schools.models import School, SchoolRating

TIMEFRAME_CHOICES = [
    ('7', 'Last 7 days'),
    ('30', 'Last 30 days'),
    ('90', 'Last 90 days'),
    ('365', 'Last year'),
]
DEFAULT_TIMEFRAME = '30'


def _average(value):
    return round(value, 1) if value is not None else 0


def ratings_per_school(total_ratings, total_schools):
    if not total_schools:
        return 0
    return round(total_ratings / total_schools, 1)


def _count_for(groups, field, value):
    return next((g['count'] for g in groups if g[field] == value), 0)


def dashboard_stats():
    ratings = SchoolRating.objects.aggregate(total=Count('id'), average=Avg('overall'))
    return {
        'total_schools': School.objects.count(),
        'total_users': get_user_model().objects.count(),
        'total_ratings': ratings['total'],
        'average_rating': _average(ratings['average']),
    }


def analytics(timeframe=DEFAULT_TIMEFRAME):
    days = int(timeframe) if timeframe in dict(TIMEFRAME_CHOICES) else int(DEFAULT_TIMEFRAME)
    since = timezone.now() - timedelta(days=days)

    stats = dashboard_stats()
    by_type = list(
        School.objects.values('type').annotate(count=Count('id')).order_by('-count', 'type')
    )
    by_board = list(
        School.objects.values('board').annotate(count=Count('id')).order_by('-count', 'board')
    )
    stats.update({
        'timeframe': str(days),
        'schools_by_type': by_type,
        'schools_by_board': by_board,
        'average_ratings_per_school': ratings_per_school(stats['total_ratings'], stats['total_schools']),
        'private_schools': _count_for(by_type, 'type', 'Private'),
        'cbse_schools': _count_for(by_board, 'board', 'CBSE'),
        'recent_ratings': SchoolRating.objects.filter(created_at__gte=since).count(),
        'recent_signups': get_user_model().objects.filter(date_joined__gte=since).count(),
    })
    return stats


def user_rows(search=''):
    users = get_user_model().objects.select_related('profile').prefetch_related('roles').order_by('-date_joined')
    rows = []
    term = search.strip().casefold()
    for user in users:
        profile = getattr(user, 'profile', None)
        display_name = profile.display_name if profile else ''
        if term and term not in (user.email or '').casefold() and term not in display_name.casefold():
            continue
        rows.append({
            'user': user,
            'email': user.email,
            'display_name': display_name,
            'phone': profile.phone if profile else '',
            'role': role_for(user),
            'created_at': user.date_joined,
            'last_login_at': user.last_login,
        })
    return rows


def user_stats(rows):
    week_ago = timezone.now() - timedelta(days=7)
    return {
        'total_users': len(rows),
        'admin_users': sum(1 for r in rows if r['role'] == UserRole.ADMIN),
        'recent_signups': sum(1 for r in rows if r['created_at'] > week_ago),
    }
