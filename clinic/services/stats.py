from datetime import datetime, timedelta
from django.db.models import Count
from django.utils import timezone
from clinic.models import Patient, Report

EXAMINATION_TYPE_LABELS = {
    'GENERAL': '일반',
    'DETAILED': '정밀',
    'LIMITED': '제한적',
}

GENDER_LABELS = {
    'MALE': '남성',
    'FEMALE': '여성',
    'OTHER': '기타',
}


def month_start(now: datetime, offset: int = 0) -> datetime:
    """First instant of the month ``offset`` months away from ``now`` (local time)."""
    index = now.year * 12 + (now.month - 1) + offset
    year, month = divmod(index, 12)
    return timezone.make_aware(datetime(year, month + 1, 1))


def monthly_growth(this_month: int, last_month: int) -> float:
    if last_month > 0:
        return round((this_month - last_month) / last_month * 100, 1)
    return 100.0 if this_month > 0 else 0.0


def dashboard_stats(doctor, now=None) -> dict:
    now = timezone.localtime(now or timezone.now())
    reports = Report.objects.filter(doctor=doctor)
    this_month_start = month_start(now)
    last_month_start = month_start(now, -1)
    year_start = timezone.make_aware(datetime(now.year, 1, 1))

    reports_this_month = reports.filter(examination_date__gte=this_month_start).count()
    reports_last_month = reports.filter(
        examination_date__gte=last_month_start, examination_date__lt=this_month_start
    ).count()

    exam_types = (
        reports.filter(examination_date__gte=this_month_start)
        .values('examination_type')
        .annotate(count=Count('id'))
        .order_by('examination_type')
    )

    trend = []
    for i in range(5, -1, -1):
        start = month_start(now, -i)
        end = month_start(now, -i + 1)
        trend.append({
            'month': f"{start.month}월",
            'count': reports.filter(examination_date__gte=start, examination_date__lt=end).count(),
        })

    patients = Patient.objects.filter(reports__doctor=doctor)
    genders = patients.values('gender').annotate(count=Count('id', distinct=True)).order_by('gender')

    return {
        'totalReports': reports.count(),
        'totalPatients': patients.distinct().count(),
        'reportsThisMonth': reports_this_month,
        'reportsLastMonth': reports_last_month,
        'monthlyGrowth': monthly_growth(reports_this_month, reports_last_month),
        'reportsThisYear': reports.filter(examination_date__gte=year_start).count(),
        'examinationTypeStats': [
            {
                'type': row['examination_type'],
                'count': row['count'],
                'label': EXAMINATION_TYPE_LABELS.get(row['examination_type'], row['examination_type']),
            }
            for row in exam_types
        ],
        'monthlyTrend': trend,
        'genderStats': [
            {'gender': row['gender'], 'count': row['count'], 'label': GENDER_LABELS.get(row['gender'], row['gender'])}
            for row in genders
        ],
        'recentActivity': reports.filter(created_at__gte=now - timedelta(days=7)).count(),
    }
