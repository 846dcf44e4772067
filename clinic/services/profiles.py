from typing import Optional, Dict, Any
from django.contrib.auth import get_user_model
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError
from rest_framework.exceptions import ValidationError as DRFValidation

User = get_user_model()

PROFILE_FIELDS = (
    'name', 'email', 'licenseNumber', 'institutionName', 'institutionAddress', 'institutionPhone',
)


def serialize_profile(user) -> Dict[str, Any]:
    return {
        'id': user.id,
        'username': user.username,
        'name': user.display_name,
        'email': user.email,
        'role': user.role,
        'licenseNumber': user.license_number,
        'institutionName': user.institution_name,
        'institutionAddress': user.institution_address,
        'institutionPhone': user.institution_phone,
        'createdAt': user.date_joined.isoformat() if user.date_joined else None,
        'updatedAt': user.updated_at.isoformat() if user.updated_at else None,
    }


def load_profile(user_id) -> Optional[Dict[str, Any]]:
    """Retriever used by the process-wide user cache."""
    try:
        pk = int(user_id)
    except (TypeError, ValueError):
        return None
    user = User.objects.filter(id=pk).first()
    return serialize_profile(user) if user else None


def update_profile(user, *, name, email, license_number='', institution_name='',
                   institution_address='', institution_phone='',
                   current_password=None, new_password=None):
    if User.objects.filter(email__iexact=email).exclude(id=user.id).exists():
        raise DRFValidation({'email': ['Email is already taken']})

    update_fields = [
        'first_name', 'last_name', 'email', 'license_number', 'institution_name',
        'institution_address', 'institution_phone', 'updated_at',
    ]
    if new_password:
        if not current_password:
            raise DRFValidation({'currentPassword': ['Current password is required to change password']})
        if not user.check_password(current_password):
            raise DRFValidation({'currentPassword': ['Current password is incorrect']})
        try:
            validate_password(new_password, user=user)
        except ValidationError as e:
            raise DRFValidation({'newPassword': e.messages})
        user.set_password(new_password)
        update_fields.append('password')

    user.first_name = name
    user.last_name = ''
    user.email = email
    user.license_number = license_number or ''
    user.institution_name = institution_name or ''
    user.institution_address = institution_address or ''
    user.institution_phone = institution_phone or ''
    user.save(update_fields=update_fields)
    return user


def compare_profiles(cached: Optional[Dict[str, Any]], fresh: Dict[str, Any]) -> Dict[str, Any]:
    """Field-by-field drift between a cached profile and the database row."""
    differences = {
        field: (cached or {}).get(field) != fresh.get(field)
        for field in PROFILE_FIELDS
    }
    return {
        'cached': cached,
        'database': fresh,
        'differences': differences if cached is not None else {},
        'isCached': cached is not None,
        'isOutOfSync': cached is not None and any(differences.values()),
    }
