"""House listing model."""

from datetime import datetime

from . import db

# Fields a client may set on create or full replace.
EDITABLE_FIELDS = (
    "name",
    "address",
    "city",
    "bedrooms",
    "bathrooms",
    "room_size",
    "availability_date",
    "rent_per_month",
    "phone",
    "description",
    "photo",
)


class House(db.Model):
    """Represents a rentable house or room."""

    __tablename__ = "houses"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    address = db.Column(db.String(255), nullable=True)
    city = db.Column(db.String(120), nullable=True, index=True)
    bedrooms = db.Column(db.Integer, nullable=True)
    bathrooms = db.Column(db.Integer, nullable=True)
    room_size = db.Column(db.String(64), nullable=True)
    availability_date = db.Column(db.String(32), nullable=True)
    rent_per_month = db.Column(db.Float, nullable=True, index=True)
    phone = db.Column(db.String(32), nullable=True)
    description = db.Column(db.Text, nullable=True)
    photo = db.Column(db.String(512), nullable=True)
    owner_email = db.Column(db.String(255), nullable=False, index=True)
    owner_name = db.Column(db.String(120), nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(
        db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    def is_owned_by(self, email: str | None) -> bool:
        return bool(email) and self.owner_email == email

    def to_dict(self) -> dict:
        """Serialize the listing using the public field names."""

        return {
            "id": self.id,
            "name": self.name,
            "address": self.address,
            "city": self.city,
            "bedrooms": self.bedrooms,
            "bathrooms": self.bathrooms,
            "room_size": self.room_size,
            "availability_date": self.availability_date,
            "rent_per_month": self.rent_per_month,
            "phone": self.phone,
            "description": self.description,
            "photo": self.photo,
            "email": self.owner_email,
            "user_name": self.owner_name,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }
