"""
Management command to populate the database with demo patients and reports.
"""
import random
from datetime import date, timedelta

from django.contrib.auth.hashers import make_password
from django.core.management.base import BaseCommand
from django.utils import timezone

from clinic.models import Patient, Report, User

DOCTORS = [
    {'username': 'kim.doctor', 'first_name': '김영상', 'license_number': 'MD-10231'},
    {'username': 'lee.doctor', 'first_name': '이초음', 'license_number': 'MD-20417'},
]

NAMES = ['박서준', '최지우', '정민호', '강하늘', '윤서연']

LIVER_ECHO = ['정상', '경도 지방간', '중등도 지방간']
STENOSIS = ['없음', '50% 미만', '50-69%']
PLAQUE = ['없음', '석회화 플라크', '연성 플라크']


class Command(BaseCommand):
    help = 'Populate database with demo users, patients and reports'

    def add_arguments(self, parser):
        parser.add_argument('--reports', type=int, default=20)
        parser.add_argument('--seed', type=int, default=None)

    def handle(self, *args, **options):
        rng = random.Random(options['seed'])
        self.stdout.write('Creating demo data...')

        doctors = self.create_doctors()
        patients = self.create_patients(doctors, rng)
        count = self.create_reports(doctors, patients, rng, options['reports'])

        self.stdout.write(self.style.SUCCESS(
            f'Demo data ready: {len(doctors)} doctors, {len(patients)} patients, {count} reports'
        ))

    def create_doctors(self):
        doctors = []
        for data in DOCTORS:
            doctor, _ = User.objects.get_or_create(
                username=data['username'],
                defaults={
                    'first_name': data['first_name'],
                    'email': f"{data['username']}@example.com",
                    'role': User.ROLE_DOCTOR,
                    'license_number': data['license_number'],
                    'institution_name': '서울영상의학과의원',
                    'institution_address': '서울특별시 강남구 테헤란로 123',
                    'institution_phone': '02-555-0100',
                    'password': make_password('sono-demo-2024'),
                },
            )
            doctors.append(doctor)
        User.objects.get_or_create(
            username='nurse.park',
            defaults={'first_name': '박간호', 'role': User.ROLE_NURSE, 'password': make_password('sono-demo-2024')},
        )
        return doctors

    def create_patients(self, doctors, rng):
        patients = []
        for i, name in enumerate(NAMES, start=1):
            patient, _ = Patient.objects.get_or_create(
                record_number=f'P{i:05d}',
                defaults={
                    'full_name': name,
                    'date_of_birth': date(1950 + rng.randint(0, 45), rng.randint(1, 12), rng.randint(1, 28)),
                    'gender': rng.choice(['MALE', 'FEMALE']),
                    'phone_number': f'010-{rng.randint(1000, 9999)}-{rng.randint(1000, 9999)}',
                    'created_by': rng.choice(doctors),
                },
            )
            patients.append(patient)
        return patients

    def create_reports(self, doctors, patients, rng, count):
        now = timezone.now()
        for _ in range(count):
            doctor = rng.choice(doctors)
            report = Report(
                patient=rng.choice(patients),
                doctor=doctor,
                report_type=rng.choice([Report.TYPE_ABDOMINAL, Report.TYPE_CAROTID]),
                examination_type=rng.choice([c[0] for c in Report.EXAM_CHOICES]),
                examination_date=now - timedelta(days=rng.randint(0, 180)),
                institution_name=doctor.institution_name,
                institution_address=doctor.institution_address,
                institution_phone=doctor.institution_phone,
            )
            if report.report_type == Report.TYPE_ABDOMINAL:
                report.liver_echo = rng.choice(LIVER_ECHO)
                report.findings = f'간 실질 에코: {report.liver_echo}. 담낭 및 췌장에 특이 소견 없음.'
                report.impression = '상복부 초음파상 특이 소견 없음' if report.liver_echo == '정상' else '지방간'
            else:
                report.right_carotid_imt = round(rng.uniform(0.5, 1.4), 2)
                report.left_carotid_imt = round(rng.uniform(0.5, 1.4), 2)
                report.right_carotid_stenosis = rng.choice(STENOSIS)
                report.left_carotid_stenosis = rng.choice(STENOSIS)
                report.right_carotid_plaque = rng.choice(PLAQUE)
                report.left_carotid_plaque = rng.choice(PLAQUE)
                report.findings = '양측 경동맥 내중막 두께 측정.'
                report.impression = '경동맥 죽상경화 소견' if report.right_carotid_plaque != '없음' else '정상 범위'
            report.recommendations = '1년 후 추적 검사 권고'
            report.interpretation_date = report.examination_date
            report.save()
        return count
