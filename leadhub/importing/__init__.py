"""Pure building blocks of the CSV lead-import engine."""
