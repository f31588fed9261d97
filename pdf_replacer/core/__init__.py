"""Content stream parsing, CMaps and text rewriting."""
