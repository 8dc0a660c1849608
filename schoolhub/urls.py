from django.conf import settings
from django.conf.urls.static import static
from django.contrib import admin
from django.urls import path, include
from django.contrib.auth.views import LogoutView

from . import views

urlpatterns = [
    path('admin/', admin.site.urls),

    # Authentication
    path('accounts/login/', views.CustomLoginView.as_view(), name='login'),
    path('accounts/logout/', LogoutView.as_view(next_page='home'), name='logout'),
    path('accounts/signup/', views.signup, name='signup'),

    # Public pages
    path('', views.home, name='home'),
    path('about/', views.about, name='about'),
    path('contact/', views.contact, name='contact'),

    # Apps
    path('schools/', include('schools.urls')),
    path('backoffice/', include('backoffice.urls')),
] + static(settings.MEDIA_URL, document_root=settings.MEDIA_ROOT)
