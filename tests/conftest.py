from __future__ import annotations

import pytest

from searchcobb.compact_dictionary import CompactDictionary, CompactDictionaryBuilder
from searchcobb.migemo import Migemo
from searchcobb.unifier import FoldTable, Unifier

WORDS = {
    "けんさく": ["検索", "研削"],
    "けんさくえんじん": ["検索エンジン"],
    "けん": ["県", "件", "剣"],
    "かんじ": ["漢字", "感じ", "幹事"],
    "きょう": ["今日", "京"],
    "きゃく": ["客"],
    "あっぷる": ["apple"],
    "らーめん": ["ラーメン"],
}


@pytest.fixture(scope="session")
def dictionary_bytes() -> bytes:
    return CompactDictionaryBuilder.build(WORDS)


@pytest.fixture()
def dictionary(dictionary_bytes: bytes) -> CompactDictionary:
    return CompactDictionary(dictionary_bytes)


@pytest.fixture()
def migemo(dictionary: CompactDictionary) -> Migemo:
    return Migemo(dictionary)


@pytest.fixture(scope="session")
def unifier() -> Unifier:
    return Unifier(FoldTable.from_unicodedata())


@pytest.fixture()
def words() -> dict:
    return WORDS
