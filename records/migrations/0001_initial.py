import django.contrib.auth.models
import django.contrib.auth.validators
import django.core.serializers.json
import django.core.validators
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
        # User
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
                ('role', models.CharField(choices=[('maleNurse', 'Male nurse'), ('manager', 'Manager'), ('superadmin', 'Super administrator')], default='maleNurse', max_length=20)),
                ('location_id', models.CharField(blank=True, db_index=True, default='', max_length=100)),
                ('manager_locations', models.JSONField(blank=True, default=list)),
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

        # DailyTokenCounter
        migrations.CreateModel(
            name='DailyTokenCounter',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('location_id', models.CharField(max_length=100)),
                ('date_key', models.CharField(help_text='YYYY-MM-DD in server-local time', max_length=10)),
                ('seq', models.PositiveIntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'constraints': [
                    models.UniqueConstraint(fields=('location_id', 'date_key'), name='uniq_token_counter_location_day'),
                ],
            },
        ),

        # ClinicVisit
        migrations.CreateModel(
            name='ClinicVisit',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('location_id', models.CharField(blank=True, db_index=True, default='', max_length=100)),
                ('date', models.DateField(blank=True, db_index=True, null=True)),
                ('time', models.CharField(blank=True, default='', max_length=20)),
                ('emp_no', models.CharField(blank=True, db_index=True, default='', max_length=50)),
                ('employee_name', models.CharField(blank=True, default='', max_length=255)),
                ('date_of_joining', models.CharField(blank=True, default='', max_length=50)),
                ('eligibility_for_sick_leave', models.BooleanField(blank=True, null=True)),
                ('emirates_id', models.CharField(blank=True, db_index=True, default='', max_length=50)),
                ('insurance_id', models.CharField(blank=True, default='', max_length=100)),
                ('tr_location', models.CharField(blank=True, default='', max_length=100)),
                ('mobile_number', models.CharField(blank=True, default='', max_length=30)),
                ('nature_of_case', models.CharField(blank=True, default='', max_length=255)),
                ('case_category', models.CharField(blank=True, default='', max_length=255)),
                ('nurse_assessment', models.JSONField(blank=True, default=list)),
                ('symptom_duration', models.CharField(blank=True, default='', max_length=100)),
                ('temperature', models.CharField(blank=True, default='', max_length=20)),
                ('blood_pressure', models.CharField(blank=True, default='', max_length=20)),
                ('heart_rate', models.CharField(blank=True, default='', max_length=20)),
                ('others', models.TextField(blank=True, default='')),
                ('token_no', models.CharField(blank=True, db_index=True, default='', max_length=40)),
                ('sent_to', models.CharField(blank=True, default='', max_length=100)),
                ('provider_name', models.CharField(blank=True, default='', max_length=255)),
                ('doctor_name', models.CharField(blank=True, default='', max_length=255)),
                ('primary_diagnosis', models.CharField(blank=True, default='', max_length=255)),
                ('secondary_diagnosis', models.JSONField(blank=True, default=list)),
                ('medicines', models.JSONField(blank=True, default=list, encoder=django.core.serializers.json.DjangoJSONEncoder)),
                ('sick_leave_status', models.CharField(blank=True, db_index=True, default='', max_length=50)),
                ('sick_leave_start_date', models.DateField(blank=True, null=True)),
                ('sick_leave_end_date', models.DateField(blank=True, null=True)),
                ('total_sick_leave_days', models.CharField(blank=True, default='', max_length=20)),
                ('remarks', models.TextField(blank=True, default='')),
                ('referral', models.BooleanField(db_index=True, default=False)),
                ('referral_code', models.CharField(blank=True, default='', max_length=40)),
                ('referral_type', models.CharField(blank=True, default='', max_length=100)),
                ('referred_to_hospital', models.CharField(blank=True, default='', max_length=255)),
                ('visit_date_referral', models.DateField(blank=True, null=True)),
                ('specialist_type', models.CharField(blank=True, default='', max_length=255)),
                ('doctor_name_referral', models.CharField(blank=True, default='', max_length=255)),
                ('investigation_reports', models.TextField(blank=True, default='')),
                ('primary_diagnosis_referral', models.CharField(blank=True, default='', max_length=255)),
                ('secondary_diagnosis_referral', models.JSONField(blank=True, default=list)),
                ('nurse_remarks_referral', models.TextField(blank=True, default='')),
                ('insurance_approval_requested', models.BooleanField(default=False)),
                ('follow_up_required', models.BooleanField(default=False)),
                ('follow_up_visits', models.JSONField(blank=True, default=list, encoder=django.core.serializers.json.DjangoJSONEncoder)),
                ('visit_status', models.CharField(blank=True, db_index=True, default='', max_length=30)),
                ('final_remarks', models.TextField(blank=True, default='')),
                ('ip_admission_required', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='clinic_visits', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['-date', '-id'],
                'indexes': [
                    models.Index(fields=['location_id', 'date'], name='visit_location_date_idx'),
                    models.Index(fields=['emp_no', 'date'], name='visit_emp_date_idx'),
                ],
            },
        ),

        # HospitalCase
        migrations.CreateModel(
            name='HospitalCase',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('location_id', models.CharField(blank=True, db_index=True, default='', max_length=100)),
                ('clinic_visit_token', models.CharField(blank=True, default='', max_length=40)),
                ('emp_no', models.CharField(db_index=True, max_length=50)),
                ('employee_name', models.CharField(max_length=255)),
                ('emirates_id', models.CharField(max_length=50)),
                ('insurance_id', models.CharField(blank=True, default='', max_length=100)),
                ('tr_location', models.CharField(blank=True, default='', max_length=100)),
                ('mobile_number', models.CharField(blank=True, default='', max_length=30)),
                ('hospital_name', models.CharField(blank=True, default='', max_length=255)),
                ('date_of_admission', models.DateField(blank=True, db_index=True, null=True)),
                ('nature_of_case', models.CharField(blank=True, default='', max_length=255)),
                ('case_category', models.CharField(blank=True, default='', max_length=255)),
                ('primary_diagnosis', models.CharField(blank=True, default='', max_length=255)),
                ('secondary_diagnosis', models.JSONField(blank=True, default=list)),
                ('status', models.CharField(blank=True, db_index=True, default='', max_length=50)),
                ('discharge_summary_received', models.BooleanField(default=False)),
                ('date_of_discharge', models.DateField(blank=True, null=True)),
                ('days_hospitalized', models.PositiveIntegerField(blank=True, null=True)),
                ('follow_up', models.JSONField(blank=True, default=list, encoder=django.core.serializers.json.DjangoJSONEncoder)),
                ('fitness_status', models.CharField(blank=True, default='', max_length=100)),
                ('isolation_required', models.BooleanField(default=False)),
                ('final_remarks', models.TextField(blank=True, default='')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='hospital_cases', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['-created_at', '-id'],
            },
        ),

        # Isolation
        migrations.CreateModel(
            name='Isolation',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('location_id', models.CharField(blank=True, db_index=True, default='', max_length=100)),
                ('clinic_visit_token', models.CharField(blank=True, default='', max_length=40)),
                ('emp_no', models.CharField(db_index=True, max_length=50)),
                ('isolation_type', models.CharField(blank=True, default='', max_length=100)),
                ('employee_name', models.CharField(max_length=255)),
                ('emirates_id', models.CharField(max_length=50)),
                ('insurance_id', models.CharField(blank=True, default='', max_length=100)),
                ('mobile_number', models.CharField(blank=True, default='', max_length=30)),
                ('tr_location', models.CharField(blank=True, default='', max_length=100)),
                ('isolated_in', models.CharField(blank=True, default='', max_length=255)),
                ('isolation_reason', models.CharField(blank=True, default='', max_length=255)),
                ('nationality', models.CharField(blank=True, default='', max_length=100)),
                ('sl_upto', models.CharField(blank=True, default='', max_length=50)),
                ('date_from', models.DateField(blank=True, db_index=True, null=True)),
                ('date_to', models.DateField(blank=True, null=True)),
                ('current_status', models.CharField(blank=True, default='', max_length=100)),
                ('remarks', models.TextField(blank=True, default='')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='isolations', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['-created_at', '-id'],
            },
        ),

        # IpAdmission
        migrations.CreateModel(
            name='IpAdmission',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('emp_no', models.CharField(db_index=True, max_length=50)),
                ('date_of_admission', models.DateField(blank=True, null=True)),
                ('hospital_name', models.CharField(blank=True, default='', max_length=255)),
                ('tr_location', models.CharField(blank=True, db_index=True, default='', max_length=100)),
                ('hi_managers', models.CharField(blank=True, default='', max_length=255)),
                ('admission_mode', models.CharField(blank=True, default='', max_length=100)),
                ('admission_type', models.CharField(blank=True, default='', max_length=100)),
                ('insurance_approval_status', models.CharField(blank=True, default='', max_length=100)),
                ('treatment_undergone', models.TextField(blank=True, default='')),
                ('im_visit_status', models.CharField(blank=True, default='', max_length=100)),
                ('no_of_visits', models.PositiveIntegerField(blank=True, null=True)),
                ('technician_visits', models.JSONField(blank=True, default=list)),
                ('treatment_location', models.CharField(blank=True, default='', max_length=255)),
                ('place_of_location', models.CharField(blank=True, default='', max_length=255)),
                ('post_recovery_location', models.CharField(blank=True, default='', max_length=255)),
                ('fit_to_travel', models.BooleanField(blank=True, null=True)),
                ('post_rehab_required', models.BooleanField(blank=True, null=True)),
                ('duration_of_rehab', models.PositiveIntegerField(blank=True, null=True)),
                ('follow_up_required', models.BooleanField(blank=True, null=True)),
                ('rehab_extension', models.BooleanField(blank=True, null=True)),
                ('rehab_extension_duration', models.PositiveIntegerField(blank=True, null=True)),
                ('member_resume_to_work', models.DateField(blank=True, null=True)),
                ('technician_feedback_form', models.TextField(blank=True, default='')),
                ('discharged_hi', models.BooleanField(blank=True, null=True)),
                ('dod_hi', models.DateField(blank=True, null=True)),
                ('source', models.CharField(blank=True, default='', max_length=50)),
                ('case_type_change', models.CharField(blank=True, default='', max_length=100)),
                ('discharge_comments', models.TextField(blank=True, default='')),
                ('case_type_change_comments', models.TextField(blank=True, default='')),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('hospital_case', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='ip_admissions', to='records.hospitalcase')),
            ],
            options={
                'ordering': ['-created_at', '-id'],
            },
        ),

        # CaseResolution
        migrations.CreateModel(
            name='CaseResolution',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('emp_no', models.CharField(blank=True, db_index=True, default='', max_length=50)),
                ('resolution_status', models.CharField(blank=True, default='', max_length=50)),
                ('resolution_date', models.DateField(blank=True, null=True)),
                ('outcome', models.CharField(blank=True, default='', max_length=255)),
                ('remarks', models.TextField(blank=True, default='')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('hospital_case', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='resolutions', to='records.hospitalcase')),
                ('ip_admission', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name='resolutions', to='records.ipadmission')),
                ('resolved_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='case_resolutions', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['-created_at', '-id'],
            },
        ),

        # MemberFeedback
        migrations.CreateModel(
            name='MemberFeedback',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('employee_id', models.CharField(blank=True, db_index=True, default='', max_length=50)),
                ('manager', models.CharField(blank=True, default='', max_length=255)),
                ('date_of_call', models.DateField(blank=True, null=True)),
                ('was_treatment_effective', models.CharField(blank=True, default='', max_length=50)),
                ('technician_feedback', models.TextField(blank=True, default='')),
                ('was_treatment_effective1', models.CharField(blank=True, default='', max_length=50)),
                ('technician_feedback1', models.TextField(blank=True, default='')),
                ('ref_req_to_specialist', models.CharField(blank=True, default='', max_length=50)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('clinic_visit', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='feedback', to='records.clinicvisit')),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='member_feedback', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['-created_at', '-id'],
            },
        ),

        # EmployeeDoj
        migrations.CreateModel(
            name='EmployeeDoj',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('emp_no', models.CharField(db_index=True, max_length=50)),
                ('doj', models.DateField(blank=True, null=True)),
                ('sl', models.FloatField(blank=True, help_text='sick leave days, last 3 months', null=True)),
                ('al', models.FloatField(blank=True, help_text='annual leave days, last 6 months', null=True)),
                ('el', models.FloatField(blank=True, help_text='emergency leave days, last 6 months', null=True)),
                ('lop', models.FloatField(blank=True, help_text='loss-of-pay days, last 3 months', null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='employee_doj_records', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'ordering': ['-updated_at', '-id'],
            },
        ),

        # Patient
        migrations.CreateModel(
            name='Patient',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('emp_id', models.CharField(max_length=6, unique=True, validators=[django.core.validators.RegexValidator('^[A-Z0-9]{6}$', 'empId must be 6 uppercase letters or digits')])),
                ('patient_name', models.CharField(max_length=255)),
                ('emirates_id', models.CharField(blank=True, db_index=True, default='', max_length=50)),
                ('insurance_id', models.CharField(blank=True, default='', max_length=100)),
                ('tr_location', models.CharField(blank=True, db_index=True, default='', max_length=100)),
                ('mobile_number', models.CharField(blank=True, default='', max_length=15, validators=[django.core.validators.RegexValidator('^[0-9]{10,15}$', 'mobileNumber must be 10-15 digits')])),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'ordering': ['-created_at', '-id'],
            },
        ),

        # Profession
        migrations.CreateModel(
            name='Profession',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(db_index=True, max_length=255)),
                ('category', models.CharField(blank=True, db_index=True, default='', max_length=255)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'ordering': ['name'],
                'indexes': [
                    models.Index(fields=['category', 'name'], name='profession_category_name_idx'),
                ],
            },
        ),

        # AuditEvent
        migrations.CreateModel(
            name='AuditEvent',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('action', models.CharField(max_length=64)),
                ('object_type', models.CharField(blank=True, max_length=64, null=True)),
                ('object_id', models.CharField(blank=True, max_length=64, null=True)),
                ('detail', models.JSONField(blank=True, default=dict, encoder=django.core.serializers.json.DjangoJSONEncoder)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'indexes': [
                    models.Index(fields=['action', 'created_at'], name='audit_action_created_idx'),
                    models.Index(fields=['object_type', 'object_id', 'created_at'], name='audit_object_created_idx'),
                ],
            },
        ),
    ]
