"""Data-access objects — one DAO per table."""
