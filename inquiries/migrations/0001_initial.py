import uuid

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('properties', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Inquiry',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('inquiry_type', models.CharField(choices=[('viewing', '内見予約'), ('purchase', '購入相談'), ('other', 'その他')], max_length=16)),
                ('via', models.CharField(blank=True, default='', max_length=64)),
                ('company_name', models.CharField(max_length=255)),
                ('company_phone', models.CharField(max_length=64)),
                ('person_name', models.CharField(max_length=255)),
                ('person_mobile', models.CharField(max_length=64)),
                ('person_gmail', models.EmailField(max_length=254)),
                ('visit_datetime', models.DateTimeField(blank=True, null=True)),
                ('purchase_file_url', models.URLField(blank=True, default='', max_length=1000)),
                ('business_card_url', models.URLField(max_length=1000)),
                ('other_text', models.TextField(blank=True, default='')),
                ('status_at_submit', models.CharField(blank=True, default='', max_length=16)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('property', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='inquiries', to='properties.property')),
            ],
            options={
                'db_table': 'inquiries',
                'ordering': ['-created_at'],
                'verbose_name_plural': 'inquiries',
            },
        ),
    ]
