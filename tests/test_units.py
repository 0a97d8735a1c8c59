"""Tests for unit normalization and conversion."""

import logging

import pytest

from services.units import (
    normalize_unit, convert_to_base_unit, get_base_unit, are_units_compatible,
    convert_between_units, format_unit_display,
)


def test_normalize_unit_trims_case_and_periods():
    assert normalize_unit(' Szt. ') == 'szt'
    assert normalize_unit('KROPLE.') == 'krople'
    assert normalize_unit(None) == ''


def test_drops_convert_to_milliliters():
    assert convert_to_base_unit(40, 'krople') == 2.0
    assert convert_to_base_unit(1, 'kropli') == 0.05


@pytest.mark.parametrize('unit', ['ml', 'milliliters', 'g', 'gram', 'gramy', 'szt', 'sztuki', 'pieces', 'kpl'])
def test_canonical_units_are_identity(unit):
    assert convert_to_base_unit(7.5, unit) == 7.5


def test_zero_and_negative_amounts_pass_through():
    assert convert_to_base_unit(0, 'krople') == 0
    assert convert_to_base_unit(-20, 'krople') == -1.0


def test_unknown_unit_logs_warning_and_keeps_amount(caplog):
    with caplog.at_level(logging.WARNING, logger='services.units'):
        assert convert_to_base_unit(3, 'łyżka') == 3
    assert 'Unknown unit' in caplog.text


def test_injected_logger_receives_warning():
    records = []

    class Collector(logging.Handler):
        def emit(self, record):
            records.append(record)

    log = logging.getLogger('test.units.injected')
    log.addHandler(Collector())
    log.propagate = False

    assert convert_to_base_unit(5, 'tbsp', log=log) == 5
    assert len(records) == 1
    assert records[0].levelno == logging.WARNING


def test_get_base_unit():
    assert get_base_unit('KROPLE.') == 'ml'
    assert get_base_unit('kropli') == 'ml'
    assert get_base_unit('gramy') == 'g'
    assert get_base_unit('sztuki') == 'szt'
    assert get_base_unit('cup') == 'cup'


def test_are_units_compatible():
    assert are_units_compatible('ml', 'ml')
    assert are_units_compatible('krople', 'ml')
    assert not are_units_compatible('g', 'szt')
    assert not are_units_compatible('ml', 'g')


def test_convert_between_units():
    assert convert_between_units(8, 'krople', 'ml') == 0.4
    assert convert_between_units(0.5, 'ml', 'krople') == 10
    assert convert_between_units(40, 'g', 'gramy') == 40
    # incompatible units keep the amount
    assert convert_between_units(3, 'g', 'szt') == 3


def test_format_unit_display():
    assert format_unit_display(40.0, 'g') == '40 g'
    assert format_unit_display(2.5, 'ml') == '2.5 ml'
    assert format_unit_display(0.4, 'ml') == '8 kropli'
    assert format_unit_display(3, 'szt') == '3 szt'


def test_kit_unit_is_known(caplog):
    with caplog.at_level(logging.WARNING, logger='services.units'):
        assert convert_to_base_unit(2, 'kpl') == 2
    assert caplog.text == ''
    assert are_units_compatible('kpl', 'szt')


def test_drop_amounts_keep_their_unit():
    assert format_unit_display(0.5, 'krople') == '0.5 krople'
    assert format_unit_display(8, 'krople') == '8 krople'
