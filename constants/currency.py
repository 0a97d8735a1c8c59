"""
Currency Constants

Polish number words used for the "amount in words" line on sales
documents, plus document-wide money settings.
"""

UNITS_WORDS = ['', 'jeden', 'dwa', 'trzy', 'cztery', 'pięć', 'sześć', 'siedem', 'osiem', 'dziewięć']

TEENS_WORDS = [
    'dziesięć', 'jedenaście', 'dwanaście', 'trzynaście', 'czternaście',
    'piętnaście', 'szesnaście', 'siedemnaście', 'osiemnaście', 'dziewiętnaście',
]

TENS_WORDS = [
    '', '', 'dwadzieścia', 'trzydzieści', 'czterdzieści', 'pięćdziesiąt',
    'sześćdziesiąt', 'siedemdziesiąt', 'osiemdziesiąt', 'dziewięćdziesiąt',
]

HUNDREDS_WORDS = [
    '', 'sto', 'dwieście', 'trzysta', 'czterysta', 'pięćset',
    'sześćset', 'siedemset', 'osiemset', 'dziewięćset',
]

# (scale, singular, plural) - largest first
SCALE_WORDS = [
    (10 ** 9, 'miliard', 'miliardów'),
    (10 ** 6, 'milion', 'milionów'),
    (10 ** 3, 'tysiąc', 'tysięcy'),
]

ZERO_PHRASE = 'zero złotych'
MINUS_WORD = 'minus'

CURRENCY_ONE = 'złoty'
CURRENCY_FEW = 'złote'
CURRENCY_MANY = 'złotych'

CURRENCY_SYMBOL = 'zł'

# Standard Polish VAT rate for invoices
VAT_RATE = 0.23

# Document number formatting
DOCUMENT_NUMBER_WIDTH = 9
CORRECTION_PREFIX = 'K/'
RECEIPT_PREFIX = 'R/'
