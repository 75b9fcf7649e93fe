import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('accounts', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Saving',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('deposit_mode', models.CharField(blank=True, choices=[('Cash', 'Cash'), ('Bank', 'Bank'), ('Wallet', 'Wallet')], max_length=10, null=True)),
                ('source_name', models.CharField(blank=True, max_length=150, null=True)),
                ('transaction_reference', models.CharField(blank=True, max_length=150, null=True)),
                ('evidence_url', models.CharField(blank=True, max_length=500, null=True)),
                ('member_name', models.CharField(blank=True, max_length=200)),
                ('amount', models.DecimalField(decimal_places=2, max_digits=20)),
                ('date', models.DateField(default=django.utils.timezone.localdate)),
                ('month', models.CharField(blank=True, max_length=20)),
                ('transaction_type', models.CharField(choices=[('deposit', 'Deposit'), ('withdrawal', 'Withdrawal')], default='deposit', max_length=20)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('approved', 'Approved'), ('rejected', 'Rejected')], default='pending', max_length=20)),
                ('notes', models.TextField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('member', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='savings', to='accounts.member')),
            ],
            options={
                'ordering': ('-date', '-id'),
            },
        ),
    ]
