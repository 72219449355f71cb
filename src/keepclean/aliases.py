from keepclean.core.models import HashAlgorithmName

ALGORITHM_ALIASES = {
    "sha256": HashAlgorithmName.SHA256,
    "xxh128": HashAlgorithmName.XXH128,
}

ALGORITHM_CHOICES = list(ALGORITHM_ALIASES.keys())

ALGORITHM_HELP_TEXT = (
    "Content hash used to confirm duplicates after a size match:\n"
    "  sha256 : SHA-256, cryptographic (default)\n"
    "  xxh128 : XXH3-128, much faster, not cryptographic\n"
)

EXTENSIONS_HELP_TEXT = (
    "Comma-separated extensions to scan, case-insensitive (e.g. jpg,png,tar.gz).\n"
    "Default: every regular file"
)

EPILOG_TEXT = """
Examples:
  Report files in ~/backup that already exist in ~/photos
  %(prog)s -keep ~/photos -clean ~/backup -dry

  Delete them, looking at pictures only
  %(prog)s -keep ~/photos -clean ~/backup -extensions jpg,jpeg,png

  Move them to the system trash instead of deleting
  %(prog)s --keep ~/photos --clean ~/backup --trash

  Skip small files, use the faster hash
  %(prog)s -keep ~/photos -clean ~/backup --min-size 100K --algorithm xxh128
"""
