"""AWS session, client and EC2 backend helpers."""
