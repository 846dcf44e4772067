import pytest
from django.core.cache import cache as django_cache
from rest_framework.test import APIClient

from clinic.models import Patient, User
from clinic.services.user_cache import get_profile_cache


@pytest.fixture(autouse=True)
def _clean_caches():
    # throttle history lives in the Django cache, profiles in the per-process cache
    django_cache.clear()
    get_profile_cache().clear()
    yield
    get_profile_cache().clear()


@pytest.fixture
def doctor(db):
    return User.objects.create_user(
        username='doc1', password='Sono!pass42', email='doc1@example.com', first_name='김의사',
        role=User.ROLE_DOCTOR, license_number='MD-1', institution_name='서울영상의학과',
    )


@pytest.fixture
def other_doctor(db):
    return User.objects.create_user(username='doc2', password='Sono!pass42', email='doc2@example.com',
                                    role=User.ROLE_DOCTOR)


@pytest.fixture
def nurse(db):
    return User.objects.create_user(username='nurse1', password='Sono!pass42', role=User.ROLE_NURSE)


@pytest.fixture
def patient(db, doctor):
    return Patient.objects.create(full_name='홍길동', record_number='P00001', date_of_birth='1970-03-01',
                                  gender='MALE', created_by=doctor)


@pytest.fixture
def api(doctor):
    client = APIClient()
    client.force_authenticate(user=doctor)
    return client
