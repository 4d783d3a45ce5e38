from django.db import migrations, models


def mark_contract_placeholders(apps, schema_editor):
    Income = apps.get_model('finances', 'Income')
    Income.objects.filter(
        project_income=True,
        status='PENDING',
        description__startswith='Project Payment - ',
    ).update(placeholder=True)


class Migration(migrations.Migration):

    dependencies = [
        ('finances', '0001_initial'),
    ]

    operations = [
        migrations.AddField(
            model_name='income',
            name='placeholder',
            field=models.BooleanField(default=False),
        ),
        migrations.RunPython(mark_contract_placeholders, migrations.RunPython.noop),
    ]
