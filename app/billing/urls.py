"""
URL configuration for billing app.
"""
from django.urls import path
from . import views

app_name = 'billing'

urlpatterns = [
    path('api/companies/<uuid:company_id>/preview/', views.BillingPreviewAPIView.as_view(), name='billing_preview'),
]
