"""User model definition."""

from datetime import datetime

from flask import current_app, has_app_context

from utils.passwords import DEFAULT_ROUNDS, hash_password, verify_password

from . import db


class User(db.Model):
    """Represents a registered house owner or renter."""

    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    name = db.Column(db.String(120), nullable=True)
    phone = db.Column(db.String(32), nullable=True)
    role = db.Column(db.String(32), nullable=True)
    photo = db.Column(db.String(512), nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    def set_password(self, password: str) -> None:
        """Hash and store the password."""

        rounds = DEFAULT_ROUNDS
        if has_app_context():
            rounds = current_app.config.get("BCRYPT_LOG_ROUNDS", DEFAULT_ROUNDS)
        self.password_hash = hash_password(password, rounds=rounds)

    def check_password(self, password: str) -> bool:
        """Verify a password against the stored hash."""

        return verify_password(password, self.password_hash)

    def to_dict(self) -> dict:
        """Serialize the user without credentials."""

        return {
            "id": self.id,
            "email": self.email,
            "name": self.name,
            "phone": self.phone,
            "role": self.role,
            "photo": self.photo,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self) -> str:  # pragma: no cover - debugging helper
        return f"<User {self.email}>"
