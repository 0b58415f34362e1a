"""Question sequencing, feedback scoring and session lifecycle."""
