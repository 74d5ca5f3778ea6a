"""Infrastructure adapters: database, persistence and email delivery."""
