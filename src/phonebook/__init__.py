"""Command-line phonebook on top of the contactbook core."""
