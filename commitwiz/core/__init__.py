"""Question sequencing for the commit wizard."""
