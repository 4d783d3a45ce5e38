from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('projects', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='ReconciliationRun',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('kind', models.CharField(choices=[('RECONCILE', 'Reconcile'), ('CORRECT', 'Correct')], max_length=20)),
                ('total_projects', models.PositiveIntegerField(default=0)),
                ('consistent_projects', models.PositiveIntegerField(default=0)),
                ('inconsistent_projects', models.PositiveIntegerField(default=0)),
                ('total_issues', models.PositiveIntegerField(default=0)),
                ('total_corrections', models.PositiveIntegerField(default=0)),
                ('errors', models.PositiveIntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
            ],
            options={
                'db_table': 'reconciliation_runs',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['created_at'], name='reconciliation_created_idx')],
            },
        ),
        migrations.CreateModel(
            name='ProjectCompletionEvent',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('reason', models.CharField(max_length=255)),
                ('admin_override', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('project', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='completion_events', to='projects.project')),
                ('triggered_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='completion_events', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'project_completion_events',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['created_at'], name='completion_events_created_idx')],
            },
        ),
    ]
