import django.contrib.auth.models
import django.contrib.auth.validators
import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('auth', '0012_alter_user_first_name_max_length'),
    ]

    operations = [
        migrations.CreateModel(
            name='User',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('password', models.CharField(max_length=128, verbose_name='password')),
                ('last_login', models.DateTimeField(blank=True, null=True, verbose_name='last login')),
                ('is_superuser', models.BooleanField(default=False, help_text='Designates that this user has all permissions without explicitly assigning them.', verbose_name='superuser status')),
                ('username', models.CharField(error_messages={'unique': 'A user with that username already exists.'}, help_text='Required. 150 characters or fewer. Letters, digits and @/./+/-/_ only.', max_length=150, unique=True, validators=[django.contrib.auth.validators.UnicodeUsernameValidator()], verbose_name='username')),
                ('first_name', models.CharField(blank=True, max_length=150, verbose_name='first name')),
                ('last_name', models.CharField(blank=True, max_length=150, verbose_name='last name')),
                ('email', models.EmailField(blank=True, max_length=254, verbose_name='email address')),
                ('is_staff', models.BooleanField(default=False, help_text='Designates whether the user can log into this admin site.', verbose_name='staff status')),
                ('is_active', models.BooleanField(default=True, help_text='Designates whether this user should be treated as active. Unselect this instead of deleting accounts.', verbose_name='active')),
                ('date_joined', models.DateTimeField(default=django.utils.timezone.now, verbose_name='date joined')),
                ('role', models.CharField(choices=[('DOCTOR', 'Doctor'), ('NURSE', 'Nurse'), ('ADMIN', 'Administrator')], db_index=True, default='DOCTOR', max_length=10)),
                ('license_number', models.CharField(blank=True, max_length=64)),
                ('institution_name', models.CharField(blank=True, max_length=255)),
                ('institution_address', models.CharField(blank=True, max_length=255)),
                ('institution_phone', models.CharField(blank=True, max_length=32)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('groups', models.ManyToManyField(blank=True, help_text='The groups this user belongs to. A user will get all permissions granted to each of their groups.', related_name='user_set', related_query_name='user', to='auth.group', verbose_name='groups')),
                ('user_permissions', models.ManyToManyField(blank=True, help_text='Specific permissions for this user.', related_name='user_set', related_query_name='user', to='auth.permission', verbose_name='user permissions')),
            ],
            options={
                'verbose_name': 'user',
                'verbose_name_plural': 'users',
                'abstract': False,
            },
            managers=[
                ('objects', django.contrib.auth.models.UserManager()),
            ],
        ),
        migrations.CreateModel(
            name='Patient',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('full_name', models.CharField(db_index=True, max_length=255)),
                ('record_number', models.CharField(blank=True, db_index=True, max_length=64)),
                ('date_of_birth', models.DateField()),
                ('gender', models.CharField(choices=[('MALE', 'Male'), ('FEMALE', 'Female'), ('OTHER', 'Other')], max_length=10)),
                ('phone_number', models.CharField(blank=True, max_length=32)),
                ('email', models.EmailField(blank=True, max_length=254)),
                ('address', models.CharField(blank=True, max_length=255)),
                ('medical_history', models.TextField(blank=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='patients_created', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'indexes': [models.Index(fields=['created_by', 'created_at'], name='patient_creator_idx')],
            },
        ),
        migrations.CreateModel(
            name='Report',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('report_type', models.CharField(choices=[('ABDOMINAL', 'Abdominal'), ('CAROTID', 'Carotid')], db_index=True, default='ABDOMINAL', max_length=16)),
                ('institution_name', models.CharField(blank=True, max_length=255)),
                ('institution_address', models.CharField(blank=True, max_length=255)),
                ('institution_phone', models.CharField(blank=True, max_length=32)),
                ('examination_type', models.CharField(choices=[('GENERAL', 'General'), ('DETAILED', 'Detailed'), ('LIMITED', 'Limited')], default='GENERAL', max_length=16)),
                ('examination_date', models.DateTimeField()),
                ('interpretation_date', models.DateTimeField(blank=True, null=True)),
                ('liver_echo', models.CharField(blank=True, max_length=255)),
                ('liver_mass', models.CharField(blank=True, max_length=255)),
                ('gallbladder_abnormal', models.CharField(blank=True, max_length=255)),
                ('bile_duct_dilation', models.CharField(blank=True, max_length=255)),
                ('spleen_enlargement', models.CharField(blank=True, max_length=255)),
                ('pancreas_abnormal', models.CharField(blank=True, max_length=255)),
                ('right_carotid_imt', models.FloatField(blank=True, null=True)),
                ('left_carotid_imt', models.FloatField(blank=True, null=True)),
                ('right_carotid_stenosis', models.CharField(blank=True, max_length=255)),
                ('left_carotid_stenosis', models.CharField(blank=True, max_length=255)),
                ('right_carotid_plaque', models.CharField(blank=True, max_length=255)),
                ('left_carotid_plaque', models.CharField(blank=True, max_length=255)),
                ('right_carotid_flow', models.CharField(blank=True, max_length=255)),
                ('left_carotid_flow', models.CharField(blank=True, max_length=255)),
                ('findings', models.TextField(blank=True)),
                ('impression', models.TextField(blank=True)),
                ('recommendations', models.TextField(blank=True)),
                ('conclusion', models.TextField(blank=True)),
                ('additional_notes', models.TextField(blank=True)),
                ('images', models.JSONField(blank=True, default=list)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('doctor', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='reports', to=settings.AUTH_USER_MODEL)),
                ('patient', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='reports', to='clinic.patient')),
            ],
            options={
                'indexes': [
                    models.Index(fields=['doctor', 'examination_date'], name='report_doctor_exam_idx'),
                    models.Index(fields=['patient', 'examination_date'], name='report_patient_exam_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='AuditEvent',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('action', models.CharField(max_length=64)),
                ('object_type', models.CharField(blank=True, max_length=64, null=True)),
                ('object_id', models.IntegerField(blank=True, null=True)),
                ('detail', models.JSONField(blank=True, default=dict)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'indexes': [
                    models.Index(fields=['action', 'created_at'], name='audit_action_idx'),
                    models.Index(fields=['object_type', 'object_id', 'created_at'], name='audit_object_idx'),
                ],
            },
        ),
    ]
