# idqr/utils/verhoeff.py
"""
Verhoeff checksum used by 12-digit Aadhaar numbers.
"""

# Multiplication table of the dihedral group D5
_D = (
    (0, 1, 2, 3, 4, 5, 6, 7, 8, 9),
    (1, 2, 3, 4, 0, 6, 7, 8, 9, 5),
    (2, 3, 4, 0, 1, 7, 8, 9, 5, 6),
    (3, 4, 0, 1, 2, 8, 9, 5, 6, 7),
    (4, 0, 1, 2, 3, 9, 5, 6, 7, 8),
    (5, 9, 8, 7, 6, 0, 4, 3, 2, 1),
    (6, 5, 9, 8, 7, 1, 0, 4, 3, 2),
    (7, 6, 5, 9, 8, 2, 1, 0, 4, 3),
    (8, 7, 6, 5, 9, 3, 2, 1, 0, 4),
    (9, 8, 7, 6, 5, 4, 3, 2, 1, 0),
)

# Position permutation, cycles every 8 digits
_P = (
    (0, 1, 2, 3, 4, 5, 6, 7, 8, 9),
    (1, 5, 7, 6, 2, 8, 3, 0, 9, 4),
    (5, 8, 0, 3, 7, 9, 6, 1, 4, 2),
    (8, 9, 1, 6, 0, 4, 3, 5, 2, 7),
    (9, 4, 5, 3, 1, 2, 6, 8, 7, 0),
    (4, 2, 8, 6, 5, 7, 3, 9, 0, 1),
    (2, 7, 9, 3, 8, 0, 6, 4, 1, 5),
    (7, 0, 4, 6, 9, 1, 3, 2, 5, 8),
)

_INV = (0, 4, 3, 2, 1, 5, 6, 7, 8, 9)


def verhoeff_validate(number: str) -> bool:
    """True when the trailing check digit of number is correct"""
    if not number or not number.isdigit():
        return False

    checksum = 0
    for i, digit in enumerate(reversed(number)):
        checksum = _D[checksum][_P[i % 8][int(digit)]]
    return checksum == 0


def verhoeff_check_digit(number: str) -> str:
    """Check digit to append to number"""
    checksum = 0
    for i, digit in enumerate(reversed(number)):
        checksum = _D[checksum][_P[(i + 1) % 8][int(digit)]]
    return str(_INV[checksum])
