"""Font encoding classification and codecs."""
