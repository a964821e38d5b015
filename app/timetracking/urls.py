"""
URL configuration for timetracking app.
"""
from django.urls import path

from . import views

app_name = 'timetracking'

urlpatterns = [
    path('api/periods/', views.TimePeriodListAPIView.as_view(), name='period_list'),
    path('api/periods/current/', views.CurrentTimePeriodAPIView.as_view(), name='current_period'),
]
