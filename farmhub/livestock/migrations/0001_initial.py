# Generated manually for the livestock table

import uuid
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Livestock',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('type', models.CharField(choices=[('cattle', 'Cattle'), ('goats', 'Goats'), ('sheep', 'Sheep'), ('pigs', 'Pigs'), ('chickens', 'Chickens'), ('other', 'Other')], max_length=20)),
                ('breed', models.CharField(max_length=100)),
                ('tag', models.CharField(max_length=50)),
                ('date_of_birth', models.DateField(blank=True, null=True)),
                ('gender', models.CharField(choices=[('male', 'Male'), ('female', 'Female')], max_length=10)),
                ('weight', models.DecimalField(blank=True, decimal_places=2, help_text='Weight in kg', max_digits=8, null=True)),
                ('health_status', models.CharField(choices=[('healthy', 'Healthy'), ('sick', 'Sick'), ('quarantine', 'Quarantine'), ('deceased', 'Deceased')], default='healthy', max_length=20)),
                ('vaccinations', models.JSONField(blank=True, default=list)),
                ('reproduction_status', models.CharField(blank=True, choices=[('pregnant', 'Pregnant'), ('lactating', 'Lactating'), ('breeding', 'Breeding'), ('none', 'None')], max_length=20, null=True)),
                ('notes', models.TextField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'livestock',
                'ordering': ['-created_at'],
                'verbose_name_plural': 'livestock',
            },
        ),
    ]
