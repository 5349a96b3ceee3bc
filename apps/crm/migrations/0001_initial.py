import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Movement',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('movement_number', models.CharField(blank=True, editable=False, max_length=32, null=True, unique=True)),
                ('movement_type', models.CharField(choices=[('sample', 'Sample'), ('consignment', 'Consignment'), ('sale_invoice', 'Sale (invoice)'), ('sale_credit', 'Sale (credit)')], max_length=20)),
                ('counterparty_name', models.CharField(blank=True, default='', max_length=200)),
                ('items', models.JSONField(default=list, help_text='[{product_id, quantity, unit_price}]')),
                ('total_amount', models.DecimalField(decimal_places=2, max_digits=12)),
                ('amount_paid', models.DecimalField(decimal_places=2, default=0, max_digits=12)),
                ('due_date', models.DateField(blank=True, null=True)),
                ('delivery_date', models.DateField(blank=True, null=True)),
                ('status', models.CharField(choices=[('pending', 'Pending'), ('delivered', 'Delivered'), ('sold', 'Sold'), ('partial_paid', 'Partially Paid'), ('paid', 'Paid'), ('returned', 'Returned'), ('overdue', 'Overdue')], default='pending', max_length=20)),
                ('notes', models.TextField(blank=True, default='')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('created_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='created_movements', to=settings.AUTH_USER_MODEL)),
                ('customer', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='movements', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'movements',
                'ordering': ['-created_at', '-id'],
                'indexes': [
                    models.Index(fields=['movement_type', 'status'], name='movements_type_status_idx'),
                    models.Index(fields=['due_date'], name='movements_due_date_idx'),
                ],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('total_amount__gte', 0)), name='movement_total_non_negative'),
                    models.CheckConstraint(condition=models.Q(('amount_paid__gte', 0)), name='movement_paid_non_negative'),
                    models.CheckConstraint(condition=models.Q(('amount_paid__lte', models.F('total_amount'))), name='movement_paid_within_total'),
                ],
            },
        ),
        migrations.CreateModel(
            name='MovementPayment',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('amount', models.DecimalField(decimal_places=2, max_digits=12)),
                ('payment_method', models.CharField(choices=[('cash', 'Cash'), ('transfer', 'Bank Transfer'), ('check', 'Check'), ('credit_card', 'Credit Card'), ('other', 'Other')], max_length=20)),
                ('payment_reference', models.CharField(blank=True, max_length=100, null=True)),
                ('notes', models.TextField(blank=True, default='')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('movement', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='payments', to='crm.movement')),
                ('recorded_by', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='recorded_movement_payments', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'movement_payments',
                'ordering': ['-created_at', '-id'],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('amount__gt', 0)), name='movement_payment_positive'),
                    models.UniqueConstraint(fields=('movement', 'payment_reference'), name='uniq_movement_payment_reference'),
                ],
            },
        ),
    ]
