from django.urls import path
from . import views

app_name = 'schools'

urlpatterns = [
    path('', views.school_list, name='school_list'),
    path('map.json', views.map_data, name='map_data'),
    path('<int:school_id>/', views.school_detail, name='school_detail'),
    path('<int:school_id>/rate/', views.rate_school, name='rate_school'),
    path('<int:school_id>/review/', views.review_school, name='review_school'),
]
