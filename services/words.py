"""
Amount-to-Words Service

Renders złoty amounts as Polish words for the "Słownie" line of
invoices, receipts and correction invoices.

Grosze are never spelled out; they are appended as a 'NN/100' fraction.
The złoty/złote/złotych choice follows the rule printed on existing
documents: 1 -> złoty; last digit 2-4 outside the teens -> złote;
everything else -> złotych.
"""

import math

from constants import (
    UNITS_WORDS, TEENS_WORDS, TENS_WORDS, HUNDREDS_WORDS, SCALE_WORDS,
    ZERO_PHRASE, MINUS_WORD, CURRENCY_ONE, CURRENCY_FEW, CURRENCY_MANY,
)


def convert_hundreds(num):
    """Words for 1-999 ('' for 0)."""
    parts = []
    if num >= 100:
        parts.append(HUNDREDS_WORDS[num // 100])
        num %= 100
    if num >= 20:
        parts.append(TENS_WORDS[num // 10])
        num %= 10
    elif num >= 10:
        parts.append(TEENS_WORDS[num - 10])
        num = 0
    if num > 0:
        parts.append(UNITS_WORDS[num])
    return ' '.join(parts)


def convert_whole(num):
    """
    Words for a non-negative whole number.

    A scale count of exactly one is the bare scale word ('tysiąc', not
    'jeden tysiąc'); any other count uses the plural ('dwa tysięcy').
    """
    parts = []
    for scale, singular, plural in SCALE_WORDS:
        if num >= scale:
            count = num // scale
            if count == 1:
                parts.append(singular)
            else:
                parts.append(f"{convert_whole(count)} {plural}")
            num %= scale
    if num > 0:
        parts.append(convert_hundreds(num))
    return ' '.join(p for p in parts if p)


def currency_word(whole):
    """Pick złoty / złote / złotych for a whole-złoty count."""
    last_digit = whole % 10
    last_two = whole % 100
    if whole == 1:
        return CURRENCY_ONE
    if 2 <= last_digit <= 4 and (last_two < 10 or last_two >= 20):
        return CURRENCY_FEW
    return CURRENCY_MANY


def convert_to_words(amount):
    """
    Convert a złoty amount to Polish words.

    >>> convert_to_words(1234.56)
    'tysiąc dwieście trzydzieści cztery złote 56/100'
    >>> convert_to_words(-150)
    'minus sto pięćdziesiąt złotych'
    """
    amount = amount or 0
    if amount == 0:
        return ZERO_PHRASE

    negative = amount < 0
    value = abs(amount)

    whole = int(math.floor(value))
    # Math.round semantics: halves round up
    grosze = int(math.floor((value - whole) * 100 + 0.5))

    parts = []
    words = convert_whole(whole)
    if words:
        parts.append(words)
    parts.append(currency_word(whole))
    if grosze > 0:
        parts.append(f"{grosze:02d}/100")

    result = ' '.join(parts).strip()
    if negative:
        result = f"{MINUS_WORD} {result}"
    return result
