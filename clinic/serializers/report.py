from rest_framework import serializers

text = dict(required=False, allow_blank=True, allow_null=True)


class ReportWriteSerializer(serializers.Serializer):
    patientId = serializers.IntegerField(min_value=1)
    reportType = serializers.ChoiceField(choices=['ABDOMINAL', 'CAROTID'], required=False)
    examinationType = serializers.ChoiceField(choices=['GENERAL', 'DETAILED', 'LIMITED'], required=False)
    examinationDate = serializers.DateTimeField()
    interpretationDate = serializers.DateTimeField(required=False, allow_null=True)

    institutionName = serializers.CharField(max_length=255, **text)
    institutionAddress = serializers.CharField(max_length=255, **text)
    institutionPhone = serializers.CharField(max_length=32, **text)

    liverEcho = serializers.CharField(max_length=255, **text)
    liverMass = serializers.CharField(max_length=255, **text)
    gallbladderAbnormal = serializers.CharField(max_length=255, **text)
    bileDuctDilation = serializers.CharField(max_length=255, **text)
    spleenEnlargement = serializers.CharField(max_length=255, **text)
    pancreasAbnormal = serializers.CharField(max_length=255, **text)

    rightCarotidImt = serializers.FloatField(required=False, allow_null=True, min_value=0, max_value=10)
    leftCarotidImt = serializers.FloatField(required=False, allow_null=True, min_value=0, max_value=10)
    rightCarotidStenosis = serializers.CharField(max_length=255, **text)
    leftCarotidStenosis = serializers.CharField(max_length=255, **text)
    rightCarotidPlaque = serializers.CharField(max_length=255, **text)
    leftCarotidPlaque = serializers.CharField(max_length=255, **text)
    rightCarotidFlow = serializers.CharField(max_length=255, **text)
    leftCarotidFlow = serializers.CharField(max_length=255, **text)

    findings = serializers.CharField(**text)
    impression = serializers.CharField(**text)
    recommendations = serializers.CharField(**text)
    conclusion = serializers.CharField(**text)
    additionalNotes = serializers.CharField(**text)
    images = serializers.ListField(child=serializers.CharField(max_length=512), required=False, allow_empty=True)


class ReportListQuerySerializer(serializers.Serializer):
    patientId = serializers.IntegerField(required=False, min_value=1)
    reportType = serializers.ChoiceField(choices=['ABDOMINAL', 'CAROTID'], required=False)
    startDate = serializers.DateTimeField(required=False)
    endDate = serializers.DateTimeField(required=False)
