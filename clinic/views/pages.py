"""
Server-rendered pages: dashboard, profile and the printable report.

The dashboard and profile pages read the signed-in user through the
profile cache instead of querying the user row on every render.  When
the cache cannot produce a profile the pages still render and show a
notice instead of the profile card.
"""
from __future__ import annotations

import logging

from django.contrib import messages
from django.contrib.auth import update_session_auth_hash
from django.contrib.auth.decorators import login_required
from django.db import transaction
from django.shortcuts import get_object_or_404, redirect, render
from rest_framework.exceptions import ValidationError as DRFValidation

from clinic.forms import ProfileForm
from clinic.models import Report
from clinic.services.audit import log_action
from clinic.services.profiles import update_profile
from clinic.services.reports import serialize_report
from clinic.services.stats import dashboard_stats
from clinic.services.user_cache import get_profile_cache

logger = logging.getLogger(__name__)


@login_required
def dashboard_page(request):
    profile = get_profile_cache().fetch(request.user.id)
    if profile is None:
        logger.warning("dashboard rendered without profile for user %s", request.user.id)
    recent = (
        Report.objects.filter(doctor=request.user)
        .select_related('patient')
        .order_by('-examination_date', '-id')[:5]
    )
    return render(request, 'clinic/dashboard.html', {
        'profile': profile,
        'recent_reports': recent,
        'stats': dashboard_stats(request.user),
    })


@login_required
def profile_page(request):
    cache = get_profile_cache()
    profile = cache.fetch(request.user.id)
    if profile is None:
        logger.warning("profile page rendered without cached profile for user %s", request.user.id)

    if request.method == 'POST':
        form = ProfileForm(request.POST)
        if form.is_valid():
            v = form.cleaned_data
            try:
                with transaction.atomic():
                    user = update_profile(
                        request.user,
                        name=v['name'],
                        email=v['email'],
                        license_number=v['license_number'],
                        institution_name=v['institution_name'],
                        institution_address=v['institution_address'],
                        institution_phone=v['institution_phone'],
                        current_password=v['current_password'] or None,
                        new_password=v['new_password'] or None,
                    )
                    log_action(user=user, action='profile_update', object_type='user', object_id=user.id,
                               detail={'passwordChanged': bool(v['new_password']), 'via': 'page'})
            except DRFValidation as exc:
                for messages_ in exc.detail.values():
                    for msg in messages_:
                        form.add_error(None, str(msg))
            else:
                cache.invalidate(user.id)
                if v['new_password']:
                    update_session_auth_hash(request, user)
                messages.success(request, 'Profile updated successfully')
                return redirect('dashboard')
    else:
        form = ProfileForm.from_profile(profile) if profile else ProfileForm()

    return render(request, 'clinic/profile.html', {'form': form, 'profile': profile})


@login_required
def report_print_page(request, pk: int):
    report = get_object_or_404(Report.objects.select_related('patient', 'doctor'), pk=pk)
    template = (
        'clinic/report_print_carotid.html'
        if report.report_type == Report.TYPE_CAROTID
        else 'clinic/report_print_abdominal.html'
    )
    return render(request, template, {'report': report, 'data': serialize_report(report)})
