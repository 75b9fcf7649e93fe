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
            name='ShareType',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('name', models.CharField(max_length=100, unique=True)),
                ('description', models.TextField(blank=True, null=True)),
                ('value_per_share', models.DecimalField(decimal_places=2, max_digits=20)),
                ('expected_monthly_contribution', models.DecimalField(blank=True, decimal_places=2, max_digits=20, null=True)),
            ],
            options={
                'ordering': ('name',),
            },
        ),
        migrations.CreateModel(
            name='Share',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('deposit_mode', models.CharField(blank=True, choices=[('Cash', 'Cash'), ('Bank', 'Bank'), ('Wallet', 'Wallet')], max_length=10, null=True)),
                ('source_name', models.CharField(blank=True, max_length=150, null=True)),
                ('transaction_reference', models.CharField(blank=True, max_length=150, null=True)),
                ('evidence_url', models.CharField(blank=True, max_length=500, null=True)),
                ('member_name', models.CharField(blank=True, max_length=200)),
                ('share_type_name', models.CharField(blank=True, max_length=100)),
                ('count', models.PositiveIntegerField()),
                ('value_per_share', models.DecimalField(decimal_places=2, max_digits=20)),
                ('allocation_date', models.DateField(default=django.utils.timezone.localdate)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('approved', 'Approved'), ('rejected', 'Rejected')], default='pending', max_length=20)),
                ('contribution_amount', models.DecimalField(blank=True, decimal_places=2, max_digits=20, null=True)),
                ('total_value_for_allocation', models.DecimalField(blank=True, decimal_places=2, max_digits=20, null=True)),
                ('notes', models.TextField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('member', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='shares', to='accounts.member')),
                ('share_type', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='allocations', to='shares.sharetype')),
            ],
            options={
                'ordering': ('-allocation_date', '-id'),
            },
        ),
        migrations.CreateModel(
            name='MemberShareCommitment',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('monthly_committed_amount', models.DecimalField(blank=True, decimal_places=2, max_digits=20, null=True)),
                ('member', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='share_commitments', to='accounts.member')),
                ('share_type', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='commitments', to='shares.sharetype')),
            ],
            options={
                'unique_together': {('member', 'share_type')},
            },
        ),
    ]
