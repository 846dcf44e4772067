"""
URL mappings for the reporting backend.

JSON endpoints live under ``/api`` without trailing slashes; the
server-rendered pages sit at the root.  ``api/reports/recent`` must be
registered before ``api/reports/<int:pk>``.
"""
from django.contrib.auth import views as auth_views
from django.urls import path, include

from .auth_views import login_view, jwt_refresh_view, jwt_logout_view, refresh_session_view
from .views import dashboard, debug, health, pages, patients, profile, reports, uploads


urlpatterns = [
    path('metrics', include('django_prometheus.urls')),
    path('healthz', health.healthz),

    # Authentication
    path('api/auth/login', login_view, name='login_view'),
    path('api/auth/refresh', jwt_refresh_view),
    path('api/auth/logout', jwt_logout_view),
    path('api/auth/refresh-session', refresh_session_view, name='refresh_session'),

    # Profile
    path('api/profile', profile.profile, name='api_profile'),

    # Patients
    path('api/patients', patients.patients, name='patients'),
    path('api/patients/<int:pk>', patients.patient_detail, name='patient_detail'),

    # Reports
    path('api/reports', reports.reports, name='reports'),
    path('api/reports/recent', reports.recent_reports, name='recent_reports'),
    path('api/reports/<int:pk>', reports.report_detail, name='report_detail'),

    path('api/upload', uploads.upload, name='upload'),
    path('api/dashboard/stats', dashboard.stats, name='dashboard_stats'),

    # Cache inspection
    path('api/debug/cache-stats', debug.cache_stats, name='cache_stats'),
    path('api/debug/cache-vs-db', debug.cache_vs_db, name='cache_vs_db'),

    # Pages
    path('login', auth_views.LoginView.as_view(), name='login'),
    path('logout', auth_views.LogoutView.as_view(), name='logout'),
    path('', pages.dashboard_page),
    path('dashboard', pages.dashboard_page, name='dashboard'),
    path('dashboard/profile', pages.profile_page, name='profile_page'),
    path('dashboard/reports/<int:pk>/print', pages.report_print_page, name='report_print_page'),
]
