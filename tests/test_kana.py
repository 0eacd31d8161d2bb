from __future__ import annotations

from searchcobb.kana import han2zen, hira2kata, kata2hira, zen2han


def test_han2zen_ascii() -> None:
    assert han2zen("abc") == "ａｂｃ"
    assert han2zen("A1!~") == "Ａ１！～"
    assert han2zen("a b") == "ａ ｂ"


def test_han2zen_special_quotes() -> None:
    assert han2zen("\"'`\\") == "”’‘￥"


def test_han2zen_katakana() -> None:
    assert han2zen("ｶﾀｶﾅ") == "カタカナ"
    assert han2zen("ｰ｡") == "ー。"


def test_zen2han() -> None:
    assert zen2han("ａｂｃ") == "abc"
    assert zen2han("カタカナ") == "ｶﾀｶﾅ"


def test_zen2han_splits_voiced_kana() -> None:
    assert zen2han("ガイド") == "ｶﾞｲﾄﾞ"
    assert zen2han("パン") == "ﾊﾟﾝ"
    assert zen2han("ヴ") == "ｳﾞ"


def test_hira2kata() -> None:
    assert hira2kata("けんさく") == "ケンサク"
    assert hira2kata("ぁゔ") == "ァヴ"
    assert hira2kata("らーめん") == "ラーメン"
    assert hira2kata("abc漢字") == "abc漢字"


def test_kata2hira() -> None:
    assert kata2hira("ケンサク") == "けんさく"
    assert kata2hira("アップル") == "あっぷる"
