"""Event data input: roster, standings and skills files."""
