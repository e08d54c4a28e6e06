"""Wire encodings for data points."""
