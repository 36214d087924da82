import uuid

import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Property',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('property_code', models.CharField(max_length=20, unique=True)),
                ('building_name', models.CharField(max_length=255)),
                ('address', models.CharField(max_length=255)),
                ('view_method', models.CharField(max_length=255)),
                ('status', models.CharField(choices=[('available', '募集中'), ('pending', '申込有り'), ('sold', '成約'), ('rented', '賃貸中')], default='available', max_length=16)),
                ('manager_name', models.CharField(blank=True, default='', max_length=255)),
                ('manager_email', models.EmailField(blank=True, default='', max_length=254)),
                ('form_url', models.URLField(blank=True, max_length=500, null=True)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={
                'db_table': 'properties',
                'ordering': ['-created_at'],
            },
        ),
    ]
