"""Entity models, collection layout and demo seed data."""
