from django.urls import path
from . import views

app_name = 'backoffice'

urlpatterns = [
    path('', views.dashboard, name='dashboard'),

    # Schools
    path('schools/', views.school_list, name='school_list'),
    path('schools/new/', views.school_create, name='school_create'),
    path('schools/<int:school_id>/edit/', views.school_edit, name='school_edit'),
    path('schools/<int:school_id>/delete/', views.school_delete, name='school_delete'),
    path('schools/delete-all/', views.school_delete_all, name='school_delete_all'),

    # Users
    path('users/', views.user_list, name='user_list'),
    path('users/<int:user_id>/role/', views.user_set_role, name='user_set_role'),

    path('analytics/', views.analytics, name='analytics'),
    path('settings/', views.site_settings, name='site_settings'),
]
