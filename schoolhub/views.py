import logging

from django.conf import settings
from django.shortcuts import render, redirect
from django.contrib import messages
from django.contrib.auth import login
from django.contrib.auth.views import LoginView
from django.db import DatabaseError
from django.urls import reverse_lazy

from core.forms import ContactForm, SignupForm
from core.models import SiteSettings
from schools.backend import fetch_schools, fetch_cities
from schools.listing import sort_records, SORT_RATING

logger = logging.getLogger(__name__)

TOP_RATED_THRESHOLD = 4.0


def home_stats(records, cities):
    rated = [r.overall_rating for r in records if r.ratings]
    return {
        'schools_listed': len(records),
        'cities_covered': len(cities),
        'average_rating': round(sum(rated) / len(rated), 1) if rated else 0,
        'top_rated': sum(1 for r in records if r.overall_rating >= TOP_RATED_THRESHOLD),
    }


# Public home page
def home(request):
    try:
        records = fetch_schools()
        cities = fetch_cities()
    except DatabaseError:
        logger.exception("Fetching home page data failed")
        messages.error(request, "Could not load schools. Please try again later.")
        records, cities = [], []

    context = {
        'featured': sort_records(records, SORT_RATING)[:settings.FEATURED_SCHOOLS_COUNT],
        'cities': cities,
        'stats': home_stats(records, cities),
    }
    return render(request, 'home.html', context)


def about(request):
    return render(request, 'about.html', {'title': 'About'})


def contact(request):
    if request.method == 'POST':
        form = ContactForm(request.POST)
        if form.is_valid():
            form.save()
            messages.success(request, "Thanks for reaching out! We'll get back to you soon.")
            return redirect('contact')
        messages.error(request, "Please fill in all fields.")
    else:
        form = ContactForm()
    return render(request, 'contact.html', {'title': 'Contact', 'form': form})


def signup(request):
    if not SiteSettings.load().enable_public_registration:
        messages.error(request, "Registration is currently closed.")
        return redirect('login')

    if request.user.is_authenticated:
        return redirect('home')

    if request.method == 'POST':
        form = SignupForm(request.POST)
        if form.is_valid():
            user = form.save()
            login(request, user, backend='django.contrib.auth.backends.ModelBackend')
            logger.info("New user %s signed up", user.pk)
            messages.success(request, "Welcome! Your account has been created.")
            return redirect('home')
    else:
        form = SignupForm()
    return render(request, 'registration/signup.html', {'form': form})


class CustomLoginView(LoginView):
    template_name = 'registration/login.html'
    redirect_authenticated_user = True
    next_page = reverse_lazy('home')
