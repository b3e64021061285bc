"""Folding of accented and variant Latin letters to plain ASCII letters."""

from __future__ import annotations

# Each plain letter with the code points that fold to it. Case is kept:
# lowercase variants fold to lowercase letters, capitals to capitals.
_FOLDS: dict[str, tuple[int, ...]] = {
    "a": (
        0x00E1, 0x0103, 0x01CE, 0x00E2, 0x00E4, 0x0227, 0x1EA1, 0x0201,
        0x00E0, 0x1EA3, 0x0203, 0x0101, 0x0105, 0x1E9A, 0x00E5, 0x1E01,
        0x00E3, 0x0363, 0x0250, 0x0251,
    ),
    "b": (0x1E03, 0x1E05, 0x0253, 0x1E07, 0x0180, 0x0183),
    "c": (
        0x0107, 0x010D, 0x00E7, 0x0109, 0x0255, 0x010B, 0x0188, 0x023C,
        0x0368, 0x0297, 0x2184,
    ),
    "d": (
        0x010F, 0x1E11, 0x1E13, 0x0221, 0x1E0B, 0x1E0D, 0x0257, 0x1E0F,
        0x0111, 0x0256, 0x018C, 0x0369,
    ),
    "e": (
        0x00E9, 0x0115, 0x011B, 0x0229, 0x1E19, 0x00EA, 0x00EB, 0x0117,
        0x1EB9, 0x0205, 0x00E8, 0x1EBB, 0x025D, 0x0207, 0x0113, 0x0119,
        0x0247, 0x1E1B, 0x1EBD, 0x0364, 0x029A, 0x025E, 0x025B, 0x0258,
        0x025C, 0x01DD, 0x1D08,
    ),
    "f": (0x1E1F, 0x0192),
    "g": (
        0x01F5, 0x011F, 0x01E7, 0x0123, 0x011D, 0x0121, 0x0260, 0x1E21,
        0x01E5, 0x0261,
    ),
    "h": (
        0x1E2B, 0x021F, 0x1E29, 0x0125, 0x1E27, 0x1E23, 0x1E25, 0x02AE,
        0x0266, 0x1E96, 0x0127, 0x036A, 0x0265, 0x2095,
    ),
    "i": (
        0x00ED, 0x012D, 0x01D0, 0x00EE, 0x00EF, 0x1ECB, 0x0209, 0x00EC,
        0x1EC9, 0x020B, 0x012B, 0x012F, 0x0268, 0x1E2D, 0x0129, 0x0365,
        0x0131, 0x1D09, 0x1D62, 0x2071,
    ),
    "j": (0x01F0, 0x0135, 0x029D, 0x0249, 0x025F, 0x0237),
    "k": (0x1E31, 0x01E9, 0x0137, 0x1E33, 0x0199, 0x1E35, 0x029E, 0x2096),
    "l": (
        0x013A, 0x019A, 0x026C, 0x013E, 0x013C, 0x1E3D, 0x0234, 0x1E37,
        0x1E3B, 0x0140, 0x026B, 0x026D, 0x0142, 0x2097,
    ),
    "m": (
        0x1E3F, 0x1E41, 0x1E43, 0x0271, 0x0270, 0x036B, 0x1D1F, 0x026F,
        0x2098,
    ),
    "n": (
        0x0144, 0x0148, 0x0146, 0x1E4B, 0x0235, 0x1E45, 0x1E47, 0x01F9,
        0x0272, 0x1E49, 0x019E, 0x0273, 0x00F1, 0x2099,
    ),
    "o": (
        0x00F3, 0x014F, 0x01D2, 0x00F4, 0x00F6, 0x022F, 0x1ECD, 0x0151,
        0x020D, 0x00F2, 0x1ECF, 0x01A1, 0x020F, 0x014D, 0x01EB, 0x00F8,
        0x1D13, 0x00F5, 0x0366, 0x0275, 0x1D17, 0x0254, 0x1D11, 0x1D12,
        0x1D16,
    ),
    "p": (0x1E55, 0x1E57, 0x01A5, 0x209A),
    "q": (0x024B, 0x02A0),
    "r": (
        0x0155, 0x0159, 0x0157, 0x1E59, 0x1E5B, 0x0211, 0x027E, 0x027F,
        0x027B, 0x0213, 0x1E5F, 0x027C, 0x027A, 0x024D, 0x027D, 0x036C,
        0x0279, 0x1D63,
    ),
    "s": (
        0x015B, 0x0161, 0x015F, 0x015D, 0x0219, 0x1E61, 0x1E9B, 0x1E63,
        0x0282, 0x023F, 0x017F, 0x00DF, 0x209B,
    ),
    "t": (
        0x0165, 0x0163, 0x1E71, 0x021B, 0x0236, 0x1E97, 0x1E6B, 0x1E6D,
        0x01AD, 0x1E6F, 0x01AB, 0x0288, 0x0167, 0x036D, 0x0287, 0x209C,
    ),
    "u": (
        0x0289, 0x00FA, 0x016D, 0x01D4, 0x1E77, 0x00FB, 0x1E73, 0x00FC,
        0x1EE5, 0x0171, 0x0215, 0x00F9, 0x1EE7, 0x01B0, 0x0217, 0x016B,
        0x0173, 0x016F, 0x1E75, 0x0169, 0x0367, 0x1D1D, 0x1D1E, 0x1D64,
    ),
    "v": (0x1E7F, 0x028B, 0x1E7D, 0x036E, 0x028C, 0x1D65),
    "w": (0x1E83, 0x0175, 0x1E85, 0x1E87, 0x1E89, 0x1E81, 0x1E98, 0x028D),
    "x": (0x1E8D, 0x1E8B, 0x036F),
    "y": (
        0x00FD, 0x0177, 0x00FF, 0x1E8F, 0x1EF5, 0x1EF3, 0x1EF7, 0x01B4,
        0x0233, 0x1E99, 0x024F, 0x1EF9, 0x028E,
    ),
    "z": (
        0x017A, 0x017E, 0x1E91, 0x0291, 0x017C, 0x1E93, 0x0225, 0x1E95,
        0x0290, 0x01B6, 0x0240,
    ),
    "A": (0x00C1, 0x00C2, 0x00C4, 0x00C0, 0x00C5, 0x023A, 0x00C3, 0x1D00),
    "B": (0x0181, 0x0243, 0x0299, 0x1D03),
    "C": (0x00C7, 0x023B, 0x1D04),
    "D": (0x018A, 0x0189, 0x1D05),
    "E": (0x00C9, 0x00CA, 0x00CB, 0x00C8, 0x0246, 0x0190, 0x018E, 0x1D07),
    "G": (0x0193, 0x029B, 0x0262),
    "H": (0x029C,),
    "I": (0x00CD, 0x00CE, 0x00CF, 0x0130, 0x00CC, 0x0197, 0x026A),
    "J": (0x0248, 0x1D0A),
    "K": (0x1D0B,),
    "L": (0x023D, 0x1D0C, 0x029F),
    "M": (0x019C, 0x1D0D),
    "N": (0x019D, 0x0220, 0x00D1, 0x0274, 0x1D0E),
    "O": (
        0x00D3, 0x00D4, 0x00D6, 0x00D2, 0x019F, 0x00D8, 0x00D5, 0x0186,
        0x1D0F, 0x1D10,
    ),
    "P": (0x1D18,),
    "Q": (0x024A,),
    "R": (0x024C, 0x0280, 0x0281, 0x1D19, 0x1D1A),
    "T": (0x023E, 0x01AE, 0x1D1B),
    "U": (0x0244, 0x00DA, 0x00DB, 0x00DC, 0x00D9, 0x1D1C),
    "V": (0x01B2, 0x0245, 0x1D20),
    "W": (0x1D21,),
    "Y": (0x00DD, 0x0178, 0x024E, 0x028F),
    "Z": (0x1D22,),
}

# Vietnamese letters carrying two diacritics.
_STACKED_FOLDS: dict[str, str] = {
    "A": "ẮẤẰẦẲẨẴẪẶẬ",
    "a": "ắấằầẳẩẵẫặậ",
    "E": "ẾỀỂỄỆ",
    "e": "ếềểễệ",
    "O": "ỐỚỒỜỔỞỖỠỘỢ",
    "o": "ốớồờổởỗỡộợ",
    "U": "ỨỪỬỮỰ",
    "u": "ứừửữự",
}


def _build_table() -> dict[str, str]:
    table = {
        chr(code): plain
        for plain, codes in _FOLDS.items()
        for code in codes
    }
    table.update(
        (char, plain)
        for plain, chars in _STACKED_FOLDS.items()
        for char in chars
    )
    return table


_TABLE = _build_table()


def normalize_rune(char: str) -> str:
    """Return the plain letter for a single accented Latin character.

    Characters without a folding are returned unchanged.
    """
    return _TABLE.get(char, char)


def normalize_runes(text: str) -> str:
    """Fold every accented Latin character in ``text``; length is preserved."""
    return "".join(_TABLE.get(char, char) for char in text)