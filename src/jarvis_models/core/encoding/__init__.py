"""Wire and text encodings for records."""
