"""
Unit tests for SizeReport.

Tests decoding of Berkeley-format size tool output.
"""

import pytest
from cloudflash.build.size_report import SizeReport


class TestSizeReportParse:
    """Test suite for SizeReport.parse."""

    def test_parse_server_size_info(self):
        """Test parsing size info as returned by the compile service."""
        output = "   text\t   data\t    bss\t    dec\t    hex\tfilename\n 101312\t   2152\t   9880\t 113344\t  1bac0\t"

        size = SizeReport.parse(output)

        assert size == SizeReport(text=101312, data=2152, bss=9880, size=113344)

    def test_parse_wrapped_filename_header(self):
        """Test a header whose filename label sits on its own line."""
        output = "text\tdata\tbss\tdec\thex\nfilename\n 101312\t2152\t9880\t113344\t1bac0\t"

        size = SizeReport.parse(output)

        assert size is not None
        assert size.text == 101312
        assert size.data == 2152
        assert size.bss == 9880
        assert size.size == 113344

    def test_parse_with_trailing_filename(self):
        """Test a value row that ends with the ELF file name."""
        output = "   text\t   data\t    bss\t    dec\t    hex\tfilename\n   1030\t      9\t    150\t   1189\t    4a5\tfirmware.elf\n"

        size = SizeReport.parse(output)

        assert size == SizeReport(text=1030, data=9, bss=150, size=1189)

    def test_size_is_reported_not_derived(self):
        """Test that size is taken from the dec column, not summed."""
        size = SizeReport.parse("header\n1 2 3 4\n")

        assert size == SizeReport(text=1, data=2, bss=3, size=4)
        assert size.size != size.text + size.data + size.bss

    def test_parse_single_line(self):
        """Test that a single line yields no report."""
        assert SizeReport.parse("   text\t   data\t    bss\t    dec\t    hex") is None

    def test_parse_empty(self):
        """Test that empty output yields no report."""
        assert SizeReport.parse("") is None

    def test_parse_too_few_values(self):
        """Test that fewer than four values yields no report."""
        assert SizeReport.parse("text data bss dec hex\n1 2 3\n") is None

    def test_parse_non_numeric_values(self):
        """Test that non-integer values yield no report."""
        assert SizeReport.parse("text data bss dec hex\n1 2 three 4\n") is None

    def test_parse_hex_in_decimal_column(self):
        """Test that hexadecimal values are not accepted as integers."""
        assert SizeReport.parse("text data bss dec hex\n1 2 3 1bac0\n") is None

    def test_parse_underscore_separated_value(self):
        """Test that digit separators are not accepted."""
        assert SizeReport.parse("h\n1_0 2 3 4") is None

    def test_parse_plus_sign(self):
        """Test that an explicit plus sign is not accepted."""
        assert SizeReport.parse("text data bss dec hex\n+5 2 3 4\n") is None

    def test_parse_non_ascii_digits(self):
        """Test that non-ASCII digits are not accepted."""
        assert SizeReport.parse("text data bss dec hex\n١٢ 2 3 4\n") is None

    def test_parse_negative_value(self):
        """Test that a leading minus sign is accepted."""
        report = SizeReport.parse("text data bss dec hex\n-1 2 3 4\n")

        assert report == SizeReport(text=-1, data=2, bss=3, size=4)

    def test_parse_non_string(self):
        """Test that a non-string value yields no report."""
        assert SizeReport.parse(None) is None


class TestSizeReportOrdering:
    """Test suite for SizeReport comparison."""

    def test_ordered_by_size(self):
        """Test that reports order by total size."""
        small = SizeReport(text=100, data=0, bss=0, size=100)
        large = SizeReport(text=0, data=0, bss=0, size=200)

        assert small < large
        assert large > small
        assert small <= large
        assert large >= small
        assert sorted([large, small]) == [small, large]

    def test_equality_compares_all_fields(self):
        """Test that equal sizes with different segments are not equal."""
        a = SizeReport(text=1, data=2, bss=3, size=10)
        b = SizeReport(text=3, data=2, bss=1, size=10)

        assert a != b
        assert a <= b
        assert a >= b
        assert not a < b

    def test_frozen(self):
        """Test that reports are immutable."""
        size = SizeReport(text=1, data=2, bss=3, size=4)

        with pytest.raises(AttributeError):
            size.text = 5  # type: ignore[misc]
