from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="User",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
                    ),
                ),
                ("name", models.CharField(max_length=255)),
                ("email", models.CharField(max_length=255)),
                (
                    "phone_number",
                    models.CharField(
                        db_index=True,
                        help_text="Country code followed by the national number, e.g. +14155551234",
                        max_length=32,
                    ),
                ),
                (
                    "otp_attempts",
                    models.PositiveIntegerField(
                        default=0,
                        editable=False,
                        help_text="Server-managed OTP attempt counter",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["-created_at"],
            },
        ),
    ]
