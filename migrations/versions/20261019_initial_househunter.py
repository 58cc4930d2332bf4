"""create users, houses, bookings, and booking quota tables"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "househunter_20261019"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=120), nullable=True),
        sa.Column("phone", sa.String(length=32), nullable=True),
        sa.Column("role", sa.String(length=32), nullable=True),
        sa.Column("photo", sa.String(length=512), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "houses",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("address", sa.String(length=255), nullable=True),
        sa.Column("city", sa.String(length=120), nullable=True),
        sa.Column("bedrooms", sa.Integer(), nullable=True),
        sa.Column("bathrooms", sa.Integer(), nullable=True),
        sa.Column("room_size", sa.String(length=64), nullable=True),
        sa.Column("availability_date", sa.String(length=32), nullable=True),
        sa.Column("rent_per_month", sa.Float(), nullable=True),
        sa.Column("phone", sa.String(length=32), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("photo", sa.String(length=512), nullable=True),
        sa.Column("owner_email", sa.String(length=255), nullable=False),
        sa.Column("owner_name", sa.String(length=120), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_houses_city", "houses", ["city"])
    op.create_index("ix_houses_rent_per_month", "houses", ["rent_per_month"])
    op.create_index("ix_houses_owner_email", "houses", ["owner_email"])

    op.create_table(
        "bookings",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("house_id", sa.Integer(), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("email", "house_id", name="uq_bookings_email_house"),
    )
    op.create_index("ix_bookings_house_id", "bookings", ["house_id"])
    op.create_index("ix_bookings_email", "bookings", ["email"])

    op.create_table(
        "booking_quotas",
        sa.Column("email", sa.String(length=255), primary_key=True),
        sa.Column("booked", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )


def downgrade():
    op.drop_table("booking_quotas")

    op.drop_index("ix_bookings_email", table_name="bookings")
    op.drop_index("ix_bookings_house_id", table_name="bookings")
    op.drop_table("bookings")

    op.drop_index("ix_houses_owner_email", table_name="houses")
    op.drop_index("ix_houses_rent_per_month", table_name="houses")
    op.drop_index("ix_houses_city", table_name="houses")
    op.drop_table("houses")

    op.drop_table("users")
