import django.core.validators
import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('core', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='BudgetItem',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=200)),
                ('category', models.CharField(max_length=100)),
                ('amount', models.PositiveIntegerField(help_text='Amount in whole NOK')),
                ('is_recurring', models.BooleanField(default=False)),
                ('start_month', models.CharField(help_text='YYYY-MM', max_length=7, validators=[django.core.validators.RegexValidator(message='Month must be in YYYY-MM format.', regex='^\\d{4}-(0[1-9]|1[0-2])$')])),
                ('end_month', models.CharField(blank=True, help_text='YYYY-MM, inclusive. Leave blank if open-ended', max_length=7, null=True, validators=[django.core.validators.RegexValidator(message='Month must be in YYYY-MM format.', regex='^\\d{4}-(0[1-9]|1[0-2])$')])),
                ('interval_months', models.PositiveSmallIntegerField(blank=True, help_text='Months between occurrences (recurring items only)', null=True, validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(12)])),
                ('anchor_day', models.PositiveSmallIntegerField(blank=True, help_text='Day of month; defaults to the last day', null=True, validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(31)])),
                ('emoji', models.CharField(blank=True, max_length=8, null=True)),
                ('notes', models.TextField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('horse', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='budget_items', to='core.horse')),
            ],
            options={
                'ordering': ['start_month', 'title'],
                'indexes': [models.Index(fields=['horse', 'start_month'], name='budget_item_horse_start_idx')],
            },
        ),
        migrations.CreateModel(
            name='BudgetOverride',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('month', models.CharField(max_length=7, validators=[django.core.validators.RegexValidator(message='Month must be in YYYY-MM format.', regex='^\\d{4}-(0[1-9]|1[0-2])$')])),
                ('override_amount', models.PositiveIntegerField(blank=True, null=True)),
                ('skip', models.BooleanField(default=False)),
                ('note', models.TextField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('budget_item', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='overrides', to='budget.budgetitem')),
            ],
            options={
                'ordering': ['month'],
                'constraints': [models.UniqueConstraint(fields=('budget_item', 'month'), name='unique_budget_override_per_month')],
            },
        ),
    ]
