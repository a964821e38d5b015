"""
Celery configuration for the PSA platform.
"""
import os
from celery import Celery

# Set the default Django settings module for the 'celery' program.
os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'core.settings')

app = Celery('psa')

# Using a string here means the worker doesn't have to serialize
# the configuration object to child processes.
app.config_from_object('django.conf:settings', namespace='CELERY')

# Load task modules from all registered Django app configs.
app.autodiscover_tasks()


# Periodic tasks. Billing runs are triggered on demand only.
app.conf.beat_schedule = {
    'generate-upcoming-time-periods': {
        'task': 'timetracking.tasks.generate_upcoming_time_periods',
        'schedule': 86400.0,  # Run daily
    },
}
