from rest_framework import serializers


class PatientWriteSerializer(serializers.Serializer):
    fullName = serializers.CharField(max_length=255)
    recordNumber = serializers.CharField(required=False, allow_blank=True, max_length=64)
    dateOfBirth = serializers.DateField()
    gender = serializers.ChoiceField(choices=['MALE', 'FEMALE', 'OTHER'])
    phoneNumber = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=32)
    email = serializers.EmailField(required=False, allow_blank=True, allow_null=True)
    address = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=255)
    medicalHistory = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def validate_fullName(self, v):
        v = (v or '').strip()
        if not v:
            raise serializers.ValidationError('Full name is required')
        return v


class PatientListQuerySerializer(serializers.Serializer):
    search = serializers.CharField(required=False, allow_blank=True, max_length=64)
