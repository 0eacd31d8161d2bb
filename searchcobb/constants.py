"""
Constants shared across searchcobb.
"""

# ============================================================================
# Search Modes
# ============================================================================

MODE_REGEX = 'regex'
MODE_MIGEMO = 'migemo'
MODE_LITERAL = 'literal'

MODES = (MODE_REGEX, MODE_MIGEMO, MODE_LITERAL)

OPT_STRICT = 'strict'

# ============================================================================
# Limits
# ============================================================================

HIST_MAX = 100
MATCH_MAX = 1000
MATCH_FRAGMENT_MAX_LENGTH = 200

# ============================================================================
# Unicode Character Database
# ============================================================================

UNICODE_VERSION = '15.1.0'
UCD_BASE_URL = f'https://www.unicode.org/Public/{UNICODE_VERSION}/ucd/'
UCD_URL_ENV = 'SEARCHCOBB_UCD_URL'

UCD_FILES = (
    'UnicodeData.txt',
    'DerivedCoreProperties.txt',
    'PropList.txt',
    'IndicSyllabicCategory.txt',
    'emoji/emoji-data.txt',
    'HangulSyllableType.txt',
    'auxiliary/GraphemeBreakTest.txt',
)
