"""Business logic shared by the blueprints."""
