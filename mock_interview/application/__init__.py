"""Domain records for sessions, exchanges and feedback."""
