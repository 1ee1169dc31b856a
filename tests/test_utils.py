from datetime import datetime

import pytest

from ruscles.exceptions import ValidationError
from ruscles.utils.dates import days_ago, parse_datetime, start_of_month, start_of_year
from ruscles.utils.pagination import parse_bool_arg, parse_list_arg, parse_page_args
from ruscles.utils.text import is_checked, mask_email, name_from_email, slugify


class TestDates:
    def test_start_of_month_in_business_timezone(self):
        # 03:00 UTC on June 1st is still May 31st in Chicago
        now = datetime(2024, 6, 1, 3, 0)
        assert start_of_month('America/Chicago', now) == datetime(2024, 5, 1, 5, 0)
        assert start_of_month('UTC', now) == datetime(2024, 6, 1)

    def test_start_of_year_in_business_timezone(self):
        now = datetime(2025, 1, 1, 2, 0)
        assert start_of_year('America/New_York', now) == datetime(2024, 1, 1, 5, 0)
        assert start_of_year('Europe/Madrid', now) == datetime(2024, 12, 31, 23, 0)

    def test_days_ago(self):
        assert days_ago(7, datetime(2024, 3, 10, 12)) == datetime(2024, 3, 3, 12)

    def test_parse_datetime_normalises_to_naive_utc(self):
        assert parse_datetime('2024-05-01T10:00:00Z') == datetime(2024, 5, 1, 10)
        assert parse_datetime('2024-05-01T10:00:00+02:00') == datetime(2024, 5, 1, 8)
        assert parse_datetime('') is None
        with pytest.raises(ValueError):
            parse_datetime('tomorrow')


class TestText:
    def test_slugify(self):
        assert slugify('Winter HVAC Tips!') == 'winter-hvac-tips'
        assert slugify('  --Already-a-slug-- ') == 'already-a-slug'
        assert slugify('!!!') == ''

    def test_mask_email(self):
        assert mask_email('jane@example.com') == 'j**e@example.com'
        assert mask_email('jo@example.com') == '***@example.com'
        assert mask_email(None) == '***'

    def test_name_from_email(self):
        assert name_from_email('jane.doe@example.com') == 'Jane Doe'

    @pytest.mark.parametrize('value,expected', [
        ('on', True), ('true', True), ('1', True), (True, True),
        (None, False), ('', False), ('off', False), (False, False),
    ])
    def test_is_checked(self, value, expected):
        assert is_checked(value) is expected


class TestPagination:
    def test_defaults_and_bounds(self):
        assert parse_page_args({}) == (1, 20)
        assert parse_page_args({'page': '0', 'limit': '500'}) == (1, 100)
        assert parse_page_args({'page': '3', 'limit': '-4'}) == (3, 1)

    def test_non_numeric(self):
        with pytest.raises(ValidationError):
            parse_page_args({'limit': 'ten'})

    def test_page_beyond_max_offset(self):
        assert parse_page_args({'page': '10001', 'limit': '100'}) == (10001, 100)
        with pytest.raises(ValidationError):
            parse_page_args({'page': '10002', 'limit': '100'})
        with pytest.raises(ValidationError):
            parse_page_args({'page': str(10 ** 20)})

    def test_flag_and_list_args(self):
        assert parse_bool_arg({}, 'isVisible') is None
        assert parse_bool_arg({'isVisible': 'TRUE'}, 'isVisible') is True
        assert parse_bool_arg({'isVisible': 'no'}, 'isVisible') is False
        assert parse_list_arg({'status': 'NEW, IN_PROGRESS,'}, 'status') == ['NEW', 'IN_PROGRESS']
