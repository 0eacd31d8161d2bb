"""
Packaged Migemo dictionary.

The dictionary is a CompactDictionary blob built by
``scripts/build_migemo_dict.py`` from SKK and/or JMdict sources. It is
loaded once and kept in a module-level singleton; reloading builds the
new instance completely before swapping the reference, so readers holding
the old instance are never disturbed.
"""

import logging
import time
from pathlib import Path
from typing import Optional

from searchcobb.compact_dictionary import CompactDictionary

logger = logging.getLogger(__name__)

# ============================================================================
# Dictionary Loading
# ============================================================================

# Module-level singleton
_DICTIONARY: Optional[CompactDictionary] = None
_DICTIONARY_PATH: Optional[Path] = None


def get_dictionary_path() -> Path:
    """Get the default dictionary path."""
    return Path(__file__).parent / "data" / "migemo-compact-dict"


def is_dictionary_loaded() -> bool:
    """Check if dictionary is loaded."""
    return _DICTIONARY is not None


def _read_dictionary(path: Path) -> CompactDictionary:
    if not path.exists():
        raise FileNotFoundError(
            f"Migemo dictionary not found at {path}. "
            "Run 'python scripts/build_migemo_dict.py' to build it."
        )

    t0 = time.perf_counter()
    dictionary = CompactDictionary.from_file(path)
    logger.debug(
        f"Loaded {path.name}: {len(dictionary):,} key nodes "
        f"in {(time.perf_counter() - t0) * 1000:.1f}ms"
    )
    return dictionary


def load_dictionary(path: Optional[Path] = None) -> CompactDictionary:
    """
    Load the Migemo dictionary.

    The loaded instance is reused. An explicit path naming another file than
    the loaded one goes through reload_dictionary().

    Args:
        path: Path to the dictionary file. Uses default if not specified.

    Returns:
        The loaded CompactDictionary

    Raises:
        FileNotFoundError: If dictionary file doesn't exist
        DictionaryFormatError: If the file is not a valid dictionary
    """
    global _DICTIONARY, _DICTIONARY_PATH

    if _DICTIONARY is not None:
        if path is None or Path(path) == _DICTIONARY_PATH:
            return _DICTIONARY
        return reload_dictionary(path)

    path = Path(path) if path is not None else get_dictionary_path()
    _DICTIONARY = _read_dictionary(path)
    _DICTIONARY_PATH = path
    return _DICTIONARY


def reload_dictionary(path: Optional[Path] = None) -> CompactDictionary:
    """
    Replace the loaded dictionary with a freshly read one.

    The current instance stays in place if reading fails.
    """
    global _DICTIONARY, _DICTIONARY_PATH

    path = Path(path) if path is not None else get_dictionary_path()
    dictionary = _read_dictionary(path)
    _DICTIONARY = dictionary
    _DICTIONARY_PATH = path

    from searchcobb.migemo import reset_migemo
    reset_migemo()

    return dictionary


def get_dictionary_size() -> int:
    """Get the number of key trie nodes in the loaded dictionary."""
    if _DICTIONARY is None:
        return 0
    return len(_DICTIONARY)


def unload_dictionary():
    """Unload the dictionary to free memory."""
    global _DICTIONARY, _DICTIONARY_PATH
    _DICTIONARY = None
    _DICTIONARY_PATH = None

    from searchcobb.migemo import reset_migemo
    reset_migemo()
