"""Configuration constants for the PDF text replacer."""

# -- Encodings --
IDENTITY_ENCODING = "Identity-H"

SIMPLE_ENCODINGS = frozenset([
    "StandardEncoding",
    "MacRomanEncoding",
    "MacExpertEncoding",
    "WinAnsiEncoding",
    "UniGB-UCS2-H",
    "UniGB-UTF16-H",
])

# Identity-H codes are two-byte big-endian CIDs
COMPOSITE_CODE_WIDTH = 2

# -- Content stream walk --
# A TJ spacing number below this is treated as a word gap
WORD_GAP_THRESHOLD = -100

# Returned when decoding with a font that is not in the page's font table
NO_FONT = "?NOFONT?"

# -- Logging --
DEFAULT_VERBOSE = 1  # 0=errors only, 1=standard, 2=detailed, 3=debug

# -- Output --
# Same input and rules always produce the same bytes
SAVE_OPTIONS = {
    "deterministic_id": True,
}
