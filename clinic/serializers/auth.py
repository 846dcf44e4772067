from rest_framework import serializers


class LoginSerializer(serializers.Serializer):
    username = serializers.CharField()
    password = serializers.CharField()

    def validate_username(self, v):
        v = (v or '').strip()
        if not v:
            raise serializers.ValidationError('Username is required')
        return v

    def validate_password(self, v):
        if not v:
            raise serializers.ValidationError('Password is required')
        return v


class ProfileUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    licenseNumber = serializers.CharField(required=False, allow_blank=True, max_length=64)
    institutionName = serializers.CharField(required=False, allow_blank=True, max_length=255)
    institutionAddress = serializers.CharField(required=False, allow_blank=True, max_length=255)
    institutionPhone = serializers.CharField(required=False, allow_blank=True, max_length=32)
    currentPassword = serializers.CharField(required=False, allow_blank=True, write_only=True)
    newPassword = serializers.CharField(required=False, allow_blank=True, write_only=True, min_length=6)

    def validate_name(self, v):
        v = (v or '').strip()
        if not v:
            raise serializers.ValidationError('Name is required')
        return v
