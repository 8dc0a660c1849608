import logging
from urllib.parse import urlencode

from django.shortcuts import render, redirect, get_object_or_404
from django.contrib.auth.decorators import login_required
from django.contrib import messages
from django.db import DatabaseError
from django.http import JsonResponse
from django.views.decorators.http import require_POST

from core.models import SiteSettings
from .backend import (
    BackendError, fetch_schools, fetch_school, fetch_cities, fetch_map_markers, save_rating, add_review,
)
from .forms import RatingForm, ReviewForm, ListingFilterForm
from .listing import ALL, ListingState, build_listing, available_boards
from .models import School, SchoolRating

logger = logging.getLogger(__name__)


def school_list(request):
    state = ListingState.from_params(request.GET)

    try:
        records = fetch_schools()
        cities = [c['name'] for c in fetch_cities()]
    except DatabaseError:
        logger.exception("Fetching schools failed")
        messages.error(request, "Could not load schools. Please try again later.")
        records, cities = [], []

    listing = build_listing(records, state)
    boards = available_boards(records)

    filter_form = ListingFilterForm(
        initial={
            'q': state.search_query,
            'city': state.selected_city,
            'board': state.selected_board,
            'sort': state.sort_key,
        },
        cities=cities,
        boards=boards,
    )

    cleared = state.update(search_query='', selected_city=ALL, selected_board=ALL)
    page_links = [(n, urlencode(state.as_params(page=n))) for n in listing.page_range]

    context = {
        'title': 'All Schools',
        'listing': listing,
        'state': state,
        'filter_form': filter_form,
        'total_schools': len(records),
        'page_links': page_links,
        'clear_query': urlencode(cleared.as_params()),
        'previous_query': urlencode(state.as_params(page=listing.current_page - 1)) if listing.has_previous else '',
        'next_query': urlencode(state.as_params(page=listing.current_page + 1)) if listing.has_next else '',
    }
    return render(request, 'schools/list.html', context)


def school_detail(request, school_id):
    school = get_object_or_404(School, pk=school_id)
    record = fetch_school(school.pk)

    reviews = school.reviews.filter(is_approved=True).select_related('user')

    user_rating = None
    if request.user.is_authenticated:
        user_rating = SchoolRating.objects.filter(user=request.user, school=school).order_by('-updated_at').first()

    context = {
        'title': school.name,
        'school': school,
        'record': record,
        'reviews': reviews,
        'user_rating': user_rating,
        'rating_form': RatingForm(instance=user_rating),
        'review_form': ReviewForm(),
        'ratings_enabled': SiteSettings.load().enable_school_ratings,
    }
    return render(request, 'schools/detail.html', context)


@login_required
@require_POST
def rate_school(request, school_id):
    school = get_object_or_404(School, pk=school_id)
    form = RatingForm(request.POST)
    if not form.is_valid():
        messages.error(request, "Ratings must be whole numbers between 0 and 5.")
        return redirect('schools:school_detail', school_id=school.pk)

    try:
        save_rating(request.user, school, form.cleaned_data)
        messages.success(request, "Thanks! Your rating has been saved.")
    except BackendError as e:
        messages.error(request, str(e))

    return redirect('schools:school_detail', school_id=school.pk)


@login_required
@require_POST
def review_school(request, school_id):
    school = get_object_or_404(School, pk=school_id)
    form = ReviewForm(request.POST)
    if not form.is_valid():
        messages.error(request, "Please write a review and pick between 0 and 5 stars.")
        return redirect('schools:school_detail', school_id=school.pk)

    try:
        review = add_review(request.user, school, form.cleaned_data['text'], form.cleaned_data['rating'])
    except BackendError as e:
        messages.error(request, str(e))
    else:
        if review.is_approved:
            messages.success(request, "Your review has been posted.")
        else:
            messages.info(request, "Your review will appear once a moderator approves it.")

    return redirect('schools:school_detail', school_id=school.pk)


def map_data(request):
    try:
        markers = fetch_map_markers(request.GET.get('city', 'all'))
    except DatabaseError:
        logger.exception("Fetching map markers failed")
        markers = []
    return JsonResponse({'markers': markers})
