"""
Ingredient Constants

Starter catalogue of compositions used to seed an empty database.
Herb amounts are in grams, oil amounts in drops.
"""

DEFAULT_COMPOSITIONS = [
    {
        'name': 'Wieczorny Spokój',
        'description': 'dla relaksu',
        'color': 'purple',
        'herbs': {
            'kwiaty lawendy': 40,
            'kwiaty rumianku': 20,
            'liście melisy': 20,
            'nagietek': 20,
        },
        'oils': {
            'olejek lawendowy': 8,
            'olejek ylang': 7,
            'olejek pomarańczowy': 5,
        },
    },
    {
        'name': 'Iskra Namiętności',
        'description': 'dla libido',
        'color': 'red',
        'herbs': {
            'kozłek lekarski': 35,
            'korzeń maca': 30,
            'płatki róży': 20,
            'kwiaty hibiskusa': 15,
        },
        'oils': {
            'olejek ylang': 12,
            'olejek paczuli': 8,
        },
    },
    {
        'name': 'Źródło Witalności',
        'description': 'dla ogólnego zdrowia',
        'color': 'green',
        'herbs': {
            'liście pokrzywy': 25,
            'ziele skrzypu polnego': 25,
            'liście brzozy': 20,
            'liście mięty pieprzowej': 10,
            'korzeń machy': 20,
        },
        'oils': {
            'olejek eukaliptusowy': 12,
            'olejek citronella': 8,
        },
    },
    {
        'name': 'Tarcza Odporności',
        'description': 'dla wzmocnienia odporności',
        'color': 'blue',
        'herbs': {
            'kwiaty czarnego bzu': 30,
            'kwiaty lipy': 20,
            'ziele jeżówki': 20,
            'pokrzywa': 20,
            'hibiskus': 10,
        },
        'oils': {
            'olejek z drzewka herbacianego': 10,
            'olejek rozmarynowy': 4,
            'olejek pomarańczowy': 6,
        },
    },
    {
        'name': 'Morska Głębina',
        'description': 'detoks i oczyszczenie',
        'color': 'teal',
        'herbs': {
            'spirulina sproszkowana': 15,
            'sól morska': 30,
            'suszone algi kelp': 20,
            'ziele skrzypu polnego': 20,
            'eukaliptus': 15,
        },
        'oils': {
            'olejek morski świat': 20,
        },
    },
    {
        'name': 'Regeneracja Mięśni',
        'description': 'po wysiłku fizycznym',
        'color': 'orange',
        'herbs': {
            'kora wierzby białej': 30,
            'kwiat nagietka': 20,
            'mięta pieprzowa': 10,
            'liście szałwii muszkatołowej': 20,
            'lawenda': 20,
        },
        'oils': {
            'olejek lawendowy': 7,
            'olejek rozmarynowy': 7,
            'olejek z drzewka herbacianego': 7,
        },
    },
    {
        'name': 'Rytuał Piękna',
        'description': 'pielęgnacja skóry',
        'color': 'pink',
        'herbs': {
            'płatki nagietka': 20,
            'rumian rzymski': 20,
            'płatki róży': 20,
            'skrzyp polny': 20,
            'suszony aloes': 20,
        },
        'oils': {
            'olejek paczuli': 8,
            'olejek rozmarynowy': 7,
            'olejek z drzewka herbacianego': 5,
        },
    },
]
