"""
Integration tests for the reporting API.

Covers authentication, role gating for patients and reports, the
profile endpoint's cache invalidation and the cache diagnostics.  Uses
DRF's APIClient via APITestCase for the request/response flows and
plain pytest functions where fixtures read better.
"""
from datetime import timedelta

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APIClient, APITestCase

from clinic.models import AuditEvent, Patient, Report, User
from clinic.services.user_cache import get_profile_cache


def make_report(patient, doctor, **kwargs):
    defaults = dict(report_type=Report.TYPE_ABDOMINAL, examination_type='GENERAL',
                    examination_date=timezone.now(), findings='정상', impression='특이 소견 없음')
    defaults.update(kwargs)
    return Report.objects.create(patient=patient, doctor=doctor, **defaults)


class ClinicAPITests(APITestCase):
    def setUp(self) -> None:
        self.doctor = User.objects.create_user(
            username='doc1', password='Sono!pass42', email='doc1@example.com', first_name='김의사',
            role=User.ROLE_DOCTOR, license_number='MD-1', institution_name='서울영상의학과',
            institution_address='서울시 강남구', institution_phone='02-000-0000',
        )
        self.other_doctor = User.objects.create_user(
            username='doc2', password='Sono!pass42', email='doc2@example.com', role=User.ROLE_DOCTOR,
        )
        self.nurse = User.objects.create_user(username='nurse1', password='Sono!pass42', role=User.ROLE_NURSE)
        self.patient = Patient.objects.create(
            full_name='홍길동', record_number='P00001', date_of_birth='1970-03-01', gender='MALE',
            email='hong@example.com', created_by=self.doctor,
        )
        self.other_patient = Patient.objects.create(
            full_name='성춘향', record_number='P00002', date_of_birth='1985-07-07', gender='FEMALE',
            created_by=self.other_doctor,
        )

    def authenticate(self, user: User) -> APIClient:
        client = APIClient()
        client.force_authenticate(user=user)
        return client

    # -- auth -------------------------------------------------------------

    def test_login_returns_tokens_and_profile(self):
        response = self.client.post(reverse('login_view'), {'username': 'doc1', 'password': 'Sono!pass42'},
                                    format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(response.data['token'])
        self.assertTrue(response.data['jwt_access'])
        self.assertEqual(response.data['user']['name'], '김의사')
        self.assertEqual(response.data['role'], 'DOCTOR')

    def test_login_failure_is_audited(self):
        response = self.client.post(reverse('login_view'), {'username': 'doc1', 'password': 'wrong'},
                                    format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertTrue(AuditEvent.objects.filter(action='login', detail__result='fail').exists())

    def test_token_authenticates_api_calls(self):
        token = self.client.post(reverse('login_view'), {'username': 'doc1', 'password': 'Sono!pass42'},
                                 format='json').data['token']
        client = APIClient()
        client.credentials(HTTP_AUTHORIZATION=f'Token {token}')
        response = client.get('/api/profile')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['username'], 'doc1')

    def test_anonymous_request_is_rejected(self):
        response = self.client.get('/api/patients')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertFalse(response.data['ok'])

    # -- patients ---------------------------------------------------------

    def test_doctor_lists_own_and_reported_patients(self):
        make_report(self.other_patient, self.doctor)
        third = Patient.objects.create(full_name='이몽룡', date_of_birth='1990-01-01', gender='MALE',
                                       created_by=self.other_doctor)
        response = self.authenticate(self.doctor).get('/api/patients')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        ids = [p['id'] for p in response.data]
        self.assertCountEqual(ids, [self.patient.id, self.other_patient.id])
        self.assertNotIn(third.id, ids)

    def test_patient_search(self):
        response = self.authenticate(self.doctor).get('/api/patients', {'search': 'hong@'})
        self.assertEqual([p['fullName'] for p in response.data], ['홍길동'])
        response = self.authenticate(self.doctor).get('/api/patients', {'search': 'nobody'})
        self.assertEqual(response.data, [])

    def test_nurse_cannot_list_or_create_patients(self):
        client = self.authenticate(self.nurse)
        self.assertEqual(client.get('/api/patients').status_code, status.HTTP_403_FORBIDDEN)
        response = client.post('/api/patients', {'fullName': 'X', 'dateOfBirth': '2000-01-01', 'gender': 'MALE'},
                               format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_nurse_can_read_patient_detail(self):
        response = self.authenticate(self.nurse).get(f'/api/patients/{self.patient.id}')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['recordNumber'], 'P00001')

    def test_create_patient_strips_markup(self):
        response = self.authenticate(self.doctor).post('/api/patients', {
            'fullName': ' 박환자 ',
            'dateOfBirth': '1960-12-31',
            'gender': 'FEMALE',
            'medicalHistory': '<script>alert(1)</script>고혈압',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['fullName'], '박환자')
        self.assertNotIn('<script>', response.data['medicalHistory'])
        self.assertEqual(Patient.objects.get(id=response.data['id']).created_by, self.doctor)

    def test_create_patient_requires_fields(self):
        response = self.authenticate(self.doctor).post('/api/patients', {'fullName': '박환자'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['error']['code'], 'invalid')

    def test_update_and_delete_patient(self):
        client = self.authenticate(self.doctor)
        response = client.put(f'/api/patients/{self.patient.id}', {'phoneNumber': '010-1234-5678'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['phoneNumber'], '010-1234-5678')
        self.assertEqual(response.data['fullName'], '홍길동')

        response = client.delete(f'/api/patients/{self.patient.id}')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertEqual(client.get(f'/api/patients/{self.patient.id}').status_code, status.HTTP_404_NOT_FOUND)

    # -- reports ----------------------------------------------------------

    def test_create_report_defaults_institution_from_doctor(self):
        response = self.authenticate(self.doctor).post('/api/reports', {
            'patientId': self.patient.id,
            'reportType': 'CAROTID',
            'examinationType': 'DETAILED',
            'examinationDate': timezone.now().isoformat(),
            'rightCarotidImt': 0.8,
            'leftCarotidImt': 1.1,
            'findings': '좌측 경동맥 내중막 비후',
            'images': ['/media/uploads/a.png'],
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        data = response.data
        self.assertEqual(data['institutionName'], '서울영상의학과')
        self.assertEqual(data['leftCarotidImt'], 1.1)
        self.assertEqual(data['doctor']['licenseNumber'], 'MD-1')
        self.assertEqual(data['patient']['fullName'], '홍길동')
        self.assertEqual(data['images'], ['/media/uploads/a.png'])

    def test_report_text_is_stored_as_typed(self):
        response = self.authenticate(self.doctor).post('/api/reports', {
            'patientId': self.patient.id,
            'examinationDate': timezone.now().isoformat(),
            'findings': 'IMT < 1.0 mm & no plaque',
            'impression': '<b>정상</b> 범위',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['findings'], 'IMT < 1.0 mm & no plaque')
        self.assertEqual(response.data['impression'], '정상 범위')
        report = Report.objects.get(id=response.data['id'])
        self.assertEqual(report.findings, 'IMT < 1.0 mm & no plaque')

    def test_patient_history_is_stored_as_typed(self):
        response = self.authenticate(self.doctor).put(f'/api/patients/{self.patient.id}', {
            'medicalHistory': 'HbA1c < 6.5% & BP 130/80',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['medicalHistory'], 'HbA1c < 6.5% & BP 130/80')

    def test_examination_type_defaults_to_general_and_rejects_null(self):
        client = self.authenticate(self.doctor)
        payload = {'patientId': self.patient.id, 'examinationDate': timezone.now().isoformat()}
        response = client.post('/api/reports', payload, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['examinationType'], 'GENERAL')

        for bad in (None, ''):
            response = client.post('/api/reports', dict(payload, examinationType=bad), format='json')
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        report_id = client.post('/api/reports', payload, format='json').data['id']
        response = client.put(f'/api/reports/{report_id}', {'examinationType': None}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(Report.objects.get(id=report_id).examination_type, 'GENERAL')

    def test_create_report_for_unknown_patient(self):
        response = self.authenticate(self.doctor).post('/api/reports', {
            'patientId': 9999, 'examinationDate': timezone.now().isoformat(),
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_report_list_is_per_doctor_and_filterable(self):
        mine = make_report(self.patient, self.doctor)
        carotid = make_report(self.patient, self.doctor, report_type=Report.TYPE_CAROTID)
        make_report(self.other_patient, self.other_doctor)
        client = self.authenticate(self.doctor)

        ids = [r['id'] for r in client.get('/api/reports').data]
        self.assertCountEqual(ids, [mine.id, carotid.id])
        ids = [r['id'] for r in client.get('/api/reports', {'reportType': 'CAROTID'}).data]
        self.assertEqual(ids, [carotid.id])

    def test_report_date_filter_needs_both_bounds(self):
        old = make_report(self.patient, self.doctor, examination_date=timezone.now() - timedelta(days=60))
        new = make_report(self.patient, self.doctor)
        client = self.authenticate(self.doctor)
        start = (timezone.now() - timedelta(days=7)).isoformat()
        end = (timezone.now() + timedelta(days=1)).isoformat()

        ids = [r['id'] for r in client.get('/api/reports', {'startDate': start, 'endDate': end}).data]
        self.assertEqual(ids, [new.id])
        ids = [r['id'] for r in client.get('/api/reports', {'startDate': start}).data]
        self.assertCountEqual(ids, [old.id, new.id])

    def test_only_author_can_modify_report(self):
        report = make_report(self.patient, self.doctor)
        other = self.authenticate(self.other_doctor)
        response = other.put(f'/api/reports/{report.id}', {'impression': 'changed'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(other.delete(f'/api/reports/{report.id}').status_code, status.HTTP_403_FORBIDDEN)

        client = self.authenticate(self.doctor)
        response = client.put(f'/api/reports/{report.id}', {'impression': 'changed'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['impression'], 'changed')
        self.assertEqual(client.delete(f'/api/reports/{report.id}').status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Report.objects.filter(id=report.id).exists())

    def test_nurse_reads_report_but_cannot_delete(self):
        report = make_report(self.patient, self.doctor)
        client = self.authenticate(self.nurse)
        self.assertEqual(client.get(f'/api/reports/{report.id}').status_code, status.HTTP_200_OK)
        self.assertEqual(client.delete(f'/api/reports/{report.id}').status_code, status.HTTP_403_FORBIDDEN)

    def test_recent_reports_returns_latest_five(self):
        now = timezone.now()
        reports = [make_report(self.patient, self.doctor, examination_date=now - timedelta(days=i))
                   for i in range(7)]
        response = self.authenticate(self.doctor).get('/api/reports/recent')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([r['id'] for r in response.data], [r.id for r in reports[:5]])
        self.assertNotIn('medicalHistory', response.data[0]['patient'])

    def test_dashboard_stats(self):
        make_report(self.patient, self.doctor)
        make_report(self.patient, self.doctor, examination_type='DETAILED')
        make_report(self.other_patient, self.other_doctor)
        response = self.authenticate(self.doctor).get('/api/dashboard/stats')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        data = response.data
        self.assertEqual(data['totalReports'], 2)
        self.assertEqual(data['totalPatients'], 1)
        self.assertEqual(data['reportsThisMonth'], 2)
        self.assertEqual(data['reportsLastMonth'], 0)
        self.assertEqual(data['monthlyGrowth'], 100.0)
        self.assertEqual(len(data['monthlyTrend']), 6)
        self.assertEqual(data['monthlyTrend'][-1]['count'], 2)
        self.assertEqual(data['genderStats'], [{'gender': 'MALE', 'count': 1, 'label': '남성'}])
        labels = {row['type']: row['label'] for row in data['examinationTypeStats']}
        self.assertEqual(labels, {'GENERAL': '일반', 'DETAILED': '정밀'})

    # -- profile and cache ------------------------------------------------

    def test_profile_update_invalidates_cached_profile(self):
        cache = get_profile_cache()
        self.assertEqual(cache.fetch(self.doctor.id)['name'], '김의사')

        response = self.authenticate(self.doctor).put('/api/profile', {
            'name': '김원장', 'email': 'doc1@example.com', 'licenseNumber': 'MD-2',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['name'], '김원장')
        self.assertIsNone(cache.peek(self.doctor.id))
        self.assertEqual(cache.fetch(self.doctor.id)['licenseNumber'], 'MD-2')

    def test_profile_update_rejects_taken_email(self):
        response = self.authenticate(self.doctor).put('/api/profile', {
            'name': '김의사', 'email': 'DOC2@example.com',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_profile_password_change_requires_current_password(self):
        client = self.authenticate(self.doctor)
        response = client.put('/api/profile', {
            'name': '김의사', 'email': 'doc1@example.com', 'newPassword': 'Ultra$ound77',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        response = client.put('/api/profile', {
            'name': '김의사', 'email': 'doc1@example.com',
            'currentPassword': 'Sono!pass42', 'newPassword': 'Ultra$ound77',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.doctor.refresh_from_db()
        self.assertTrue(self.doctor.check_password('Ultra$ound77'))

    def test_refresh_session_rereads_database(self):
        cache = get_profile_cache()
        cache.fetch(self.doctor.id)
        User.objects.filter(id=self.doctor.id).update(first_name='갱신됨')
        self.assertEqual(cache.fetch(self.doctor.id)['name'], '김의사')

        response = self.authenticate(self.doctor).post('/api/auth/refresh-session')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['user']['name'], '갱신됨')
        self.assertEqual(response['Cache-Control'], 'private, max-age=300')
        self.assertEqual(cache.peek(self.doctor.id)['name'], '갱신됨')

    def test_cache_vs_db_reports_drift(self):
        client = self.authenticate(self.doctor)
        response = client.get('/api/debug/cache-vs-db')
        self.assertFalse(response.data['isCached'])
        self.assertFalse(response.data['isOutOfSync'])

        get_profile_cache().fetch(self.doctor.id)
        User.objects.filter(id=self.doctor.id).update(institution_name='부산영상의학과')
        response = client.get('/api/debug/cache-vs-db')
        self.assertTrue(response.data['isCached'])
        self.assertTrue(response.data['isOutOfSync'])
        self.assertTrue(response.data['differences']['institutionName'])
        self.assertFalse(response.data['differences']['email'])

    def test_cache_stats(self):
        get_profile_cache().fetch(self.doctor.id)
        get_profile_cache().fetch(self.nurse.id)
        response = self.authenticate(self.doctor).get('/api/debug/cache-stats')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['data']['cache'],
                         {'totalEntries': 2, 'validEntries': 2, 'expiredEntries': 0})
        self.assertIn('timestamp', response.data['data'])

    def test_logout_drops_cached_profile(self):
        get_profile_cache().fetch(self.doctor.id)
        response = self.authenticate(self.doctor).post('/api/auth/logout', {}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIsNone(get_profile_cache().peek(self.doctor.id))


def test_upload_stores_image(api, settings, tmp_path):
    settings.MEDIA_ROOT = tmp_path
    image = SimpleUploadedFile('scan.png', b'\x89PNG\r\n\x1a\n', content_type='image/png')
    response = api.post('/api/upload', {'file': image}, format='multipart')
    assert response.status_code == 200
    assert response.data['url'].startswith('/media/uploads/')
    assert response.data['url'].endswith('.png')


def test_upload_rejects_missing_and_unsupported_files(api, settings, tmp_path):
    settings.MEDIA_ROOT = tmp_path
    assert api.post('/api/upload', {}, format='multipart').status_code == 400
    script = SimpleUploadedFile('run.sh', b'echo hi', content_type='text/x-sh')
    response = api.post('/api/upload', {'file': script}, format='multipart')
    assert response.status_code == 400
    assert response.data['ok'] is False


@pytest.mark.django_db
def test_healthz_does_not_expose_cache_stats(doctor):
    get_profile_cache().fetch(doctor.id)
    response = APIClient().get('/healthz')
    assert response.status_code == 200
    body = response.json()
    assert body == {'ok': True, 'db': True}


def test_upload_extension_follows_content_type(api, settings, tmp_path):
    settings.MEDIA_ROOT = tmp_path
    disguised = SimpleUploadedFile('x.html', b'<script>alert(1)</script>', content_type='image/png')
    response = api.post('/api/upload', {'file': disguised}, format='multipart')
    assert response.status_code == 200
    assert response.data['url'].endswith('.png')
    assert not list(tmp_path.rglob('*.html'))


def test_upload_rejects_svg(api, settings, tmp_path):
    settings.MEDIA_ROOT = tmp_path
    svg = SimpleUploadedFile('scan.svg', b'<svg onload="alert(1)"/>', content_type='image/svg+xml')
    response = api.post('/api/upload', {'file': svg}, format='multipart')
    assert response.status_code == 400
