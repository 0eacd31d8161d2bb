"""
Kana width and script conversions used by the Migemo engine.
"""

from typing import Dict

# ============================================================================
# Conversion Tables
# ============================================================================

_HALF_KATAKANA = '｡｢｣､･ｦｧｨｩｪｫｬｭｮｯｰｱｲｳｴｵｶｷｸｹｺｻｼｽｾｿﾀﾁﾂﾃﾄﾅﾆﾇﾈﾉﾊﾋﾌﾍﾎﾏﾐﾑﾒﾓﾔﾕﾖﾗﾘﾙﾚﾛﾜﾝﾞﾟ'
_FULL_KATAKANA = '。「」、・ヲァィゥェォャュョッーアイウエオカキクケコサシスセソタチツテトナニヌネノハヒフヘホマミムメモヤユヨラリルレロワン゛゜'

# ASCII characters whose full-width form is a typographic variant
_ASCII_SPECIAL = {
    '"': '”',
    "'": '’',
    '\\': '￥',
    '`': '‘',
}

_VOICED = 'ヴガギグゲゴザジズゼゾダヂヅデドバビブベボ'
_SEMI_VOICED = 'パピプペポ'


def _build_han2zen() -> Dict[str, str]:
    table = {}
    for code in range(0x21, 0x7F):
        c = chr(code)
        table[c] = _ASCII_SPECIAL.get(c, chr(code + 0xFEE0))
    table.update(zip(_HALF_KATAKANA, _FULL_KATAKANA))
    return table


def _build_zen2han(han2zen: Dict[str, str]) -> Dict[str, str]:
    table = {zen: han for han, zen in han2zen.items()}
    for c in _VOICED:
        table[c] = table[chr(ord(c) - 1) if c != 'ヴ' else 'ウ'] + 'ﾞ'
    for c in _SEMI_VOICED:
        table[c] = table[chr(ord(c) - 2)] + 'ﾟ'
    return table


HAN2ZEN: Dict[str, str] = _build_han2zen()
ZEN2HAN: Dict[str, str] = _build_zen2han(HAN2ZEN)

_HIRAGANA_FIRST = ord('ぁ')
_HIRAGANA_LAST = ord('ゔ')
_KATAKANA_OFFSET = ord('ァ') - ord('ぁ')


# ============================================================================
# Conversions
# ============================================================================

def han2zen(source: str) -> str:
    """
    Convert half-width characters to full width.

    Example:
        >>> han2zen("abc ｶﾀｶﾅ")
        'ａｂｃ カタカナ'
    """
    return ''.join(HAN2ZEN.get(c, c) for c in source)


def zen2han(source: str) -> str:
    """Convert full-width characters to half width, splitting voiced kana."""
    return ''.join(ZEN2HAN.get(c, c) for c in source)


def hira2kata(source: str) -> str:
    """Convert hiragana (ぁ to ゔ) to katakana."""
    return ''.join(
        chr(ord(c) + _KATAKANA_OFFSET) if _HIRAGANA_FIRST <= ord(c) <= _HIRAGANA_LAST else c
        for c in source
    )


def kata2hira(source: str) -> str:
    """Convert katakana (ァ to ヶ) to hiragana."""
    return ''.join(
        chr(ord(c) - _KATAKANA_OFFSET) if 0x30A1 <= ord(c) <= 0x30F6 else c
        for c in source
    )
