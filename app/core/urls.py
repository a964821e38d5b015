"""
URL configuration for the PSA platform.
"""
from django.contrib import admin
from django.http import JsonResponse
from django.urls import path, include


def health(request):
    return JsonResponse({'status': 'ok'})


urlpatterns = [
    path('health/', health, name='health'),
    path('admin/', admin.site.urls),
    path('billing/', include('billing.urls')),
    path('time/', include('timetracking.urls')),
]

# Admin customization
admin.site.site_header = 'PSA Administration'
admin.site.site_title = 'PSA Admin'
admin.site.index_title = 'Billing and Time Tracking'
