"""Tests for the public pages."""

import pytest
from django.db import DatabaseError
from django.urls import reverse

from core.models import SiteSettings, ContactMessage
from schools import views
from schools.models import SchoolRating, Review

pytestmark = pytest.mark.django_db


@pytest.fixture
def seven_schools(make_school):
    return [make_school(f"School {i}", established=2000 + i) for i in range(7)]


def test_home_lists_top_rated(client, make_school, rate, user, city):
    best = make_school("Best School")
    make_school("Unrated School")
    rate(best, user, overall=5)

    response = client.get(reverse('home'))

    assert response.status_code == 200
    assert response.context['featured'][0].name == "Best School"
    assert response.context['stats'] == {
        'schools_listed': 2, 'cities_covered': 1, 'average_rating': 5.0, 'top_rated': 1,
    }


def test_listing_paginates_six_per_page(client, seven_schools):
    first = client.get(reverse('schools:school_list'), {'sort': 'established'})
    second = client.get(reverse('schools:school_list'), {'sort': 'established', 'page': 2})

    assert [r.name for r in first.context['listing'].page_records] == [f"School {i}" for i in range(6, 0, -1)]
    assert [r.name for r in second.context['listing'].page_records] == ["School 0"]
    assert second.context['listing'].total_pages == 2
    assert b"Showing 7-7 of 7 schools" in second.content


def test_listing_filters_by_board_and_search(client, make_school):
    make_school("Stewart School", city="Cuttack", board="ICSE")
    make_school("DAV Public School")

    by_board = client.get(reverse('schools:school_list'), {'board': 'ICSE'})
    by_city_text = client.get(reverse('schools:school_list'), {'search': 'cuttack'})

    assert [r.name for r in by_board.context['listing'].page_records] == ["Stewart School"]
    assert [r.name for r in by_city_text.context['listing'].page_records] == ["Stewart School"]
    assert by_board.context['state'].is_filtered


def test_clear_filters_link_keeps_sort_and_returns_to_first_page(client, seven_schools):
    response = client.get(reverse('schools:school_list'), {'board': 'CBSE', 'sort': 'name', 'page': '2'})

    assert response.context['clear_query'] == 'sort=name&page=1'


def test_listing_empty_state(client):
    response = client.get(reverse('schools:school_list'), {'q': 'nothing'})

    assert response.status_code == 200
    assert response.context['listing'].total_pages == 1
    assert b"No schools found" in response.content


def test_listing_reports_fetch_failure(client, monkeypatch):

    def broken():
        raise DatabaseError("connection refused")

    monkeypatch.setattr(views, 'fetch_schools', broken)

    response = client.get(reverse('schools:school_list'))

    assert response.status_code == 200
    assert response.context['listing'].page_records == ()
    assert any("Could not load schools" in str(m) for m in response.context['messages'])


def test_detail_shows_only_approved_reviews(client, make_school, user):
    school = make_school("Reviewed")
    Review.objects.create(school=school, user=user, text="Lovely campus")
    Review.objects.create(school=school, user=user, text="Pending words", is_approved=False)

    response = client.get(reverse('schools:school_detail', args=[school.pk]))

    assert response.status_code == 200
    assert b"Lovely campus" in response.content
    assert b"Pending words" not in response.content


def test_detail_404(client):
    assert client.get(reverse('schools:school_detail', args=[999])).status_code == 404


def test_rate_requires_login(client, make_school):
    school = make_school("Rated")

    response = client.post(reverse('schools:rate_school', args=[school.pk]), {'overall': 4})

    assert response.status_code == 302
    assert reverse('login') in response['Location']
    assert not SchoolRating.objects.exists()


def test_rate_and_rerate(client, make_school, user):
    school = make_school("Rated")
    client.force_login(user)
    url = reverse('schools:rate_school', args=[school.pk])
    scores = {'overall': 4, 'facility': 3, 'faculty': 5, 'activities': 2}

    client.post(url, scores)
    client.post(url, {**scores, 'overall': 2})

    rating = SchoolRating.objects.get(user=user, school=school)
    assert rating.overall == 2
    assert rating.faculty == 5


def test_rate_rejects_bad_scores(client, make_school, user):
    school = make_school("Rated")
    client.force_login(user)

    response = client.post(
        reverse('schools:rate_school', args=[school.pk]),
        {'overall': 9, 'facility': 3, 'faculty': 3, 'activities': 3},
        follow=True,
    )

    assert not SchoolRating.objects.exists()
    assert any("between 0 and 5" in str(m) for m in response.context['messages'])


def test_review_is_held_when_moderated(client, make_school, user):
    site = SiteSettings.load()
    site.moderate_reviews = True
    site.save()
    school = make_school("Moderated")
    client.force_login(user)

    client.post(reverse('schools:review_school', args=[school.pk]), {'text': "Strict but fair"})

    review = Review.objects.get(school=school)
    assert not review.is_approved


def test_map_data(client, make_school):
    make_school("Mapped", latitude=20.29, longitude=85.82)

    response = client.get(reverse('schools:map_data'), {'city': 'Bhubaneswar'})

    assert response.status_code == 200
    assert [m['name'] for m in response.json()['markers']] == ["Mapped"]


def test_contact_form_saves_message(client):
    response = client.post(reverse('contact'), {
        'name': 'Asha', 'email': 'asha@example.com', 'message': 'Please add my school',
    })

    assert response.status_code == 302
    assert ContactMessage.objects.get().name == 'Asha'


def test_signup_creates_user_and_logs_in(client, django_user_model):
    response = client.post(reverse('signup'), {
        'username': 'newparent',
        'email': 'new@example.com',
        'display_name': 'New Parent',
        'password1': 'a-Strong-pass-123',
        'password2': 'a-Strong-pass-123',
    })

    assert response.status_code == 302
    user = django_user_model.objects.get(username='newparent')
    assert user.profile.display_name == 'New Parent'
    assert int(client.session['_auth_user_id']) == user.pk


def test_signup_closed(client):
    site = SiteSettings.load()
    site.enable_public_registration = False
    site.save()

    response = client.get(reverse('signup'))

    assert response.status_code == 302
    assert response['Location'] == reverse('login')


def test_maintenance_mode_blocks_visitors_but_not_admins(client, site_admin):
    site = SiteSettings.load()
    site.maintenance_mode = True
    site.save()

    assert client.get(reverse('schools:school_list')).status_code == 503
    assert client.get(reverse('login')).status_code == 200

    client.force_login(site_admin)
    assert client.get(reverse('schools:school_list')).status_code == 200


def test_review_with_stars_and_community_count(client, make_school, user):
    school = make_school("Starred")
    client.force_login(user)
    url = reverse('schools:review_school', args=[school.pk])

    client.post(url, {'text': "Caring teachers", 'rating': '4'})
    client.post(url, {'text': "No stars from me"})

    assert set(Review.objects.values_list('rating', flat=True)) == {4, None}

    response = client.get(reverse('schools:school_detail', args=[school.pk]))

    assert b"2 reviews from the community" in response.content
    assert b"4/5 stars" in response.content


def test_review_rejects_out_of_range_stars(client, make_school, user):
    school = make_school("Starred")
    client.force_login(user)

    response = client.post(
        reverse('schools:review_school', args=[school.pk]),
        {'text': "Too generous", 'rating': '9'},
        follow=True,
    )

    assert not Review.objects.exists()
    assert any("between 0 and 5 stars" in str(m) for m in response.context['messages'])
