"""
Firmware size report decoding.

The compile service returns the output of the linker's size tool in
Berkeley format as an opaque string:

       text	   data	    bss	    dec	    hex	filename
     101312	   2152	   9880	 113344	  1bac0	firmware.elf

This module turns that table into a SizeReport.
"""

import re
from dataclasses import dataclass
from typing import Optional

_DECIMAL_PATTERN = re.compile(r"-?[0-9]+")


@dataclass(frozen=True)
class SizeReport:
    """Firmware size information, in bytes."""

    text: int  # Compiled code
    data: int  # Initialized variables
    bss: int   # Uninitialized variables
    size: int  # Total reported by the size tool ("dec" column)

    # Ordering compares the reported total only; equality compares every field.
    def __lt__(self, other: "SizeReport") -> bool:
        if not isinstance(other, SizeReport):
            return NotImplemented
        return self.size < other.size

    def __le__(self, other: "SizeReport") -> bool:
        if not isinstance(other, SizeReport):
            return NotImplemented
        return self.size <= other.size

    def __gt__(self, other: "SizeReport") -> bool:
        if not isinstance(other, SizeReport):
            return NotImplemented
        return self.size > other.size

    def __ge__(self, other: "SizeReport") -> bool:
        if not isinstance(other, SizeReport):
            return NotImplemented
        return self.size >= other.size

    @staticmethod
    def parse(size_output: str) -> Optional["SizeReport"]:
        """
        Parse Berkeley-format size tool output.

        Only the header and the first value row are considered. The value
        row's first four columns are text, data, bss and dec; dec is used
        as the total size as-is.

        Args:
            size_output: Output of the size tool as returned by the server

        Returns:
            SizeReport, or None if the text does not have the expected shape
        """
        if not isinstance(size_output, str):
            return None

        lines = size_output.splitlines()
        if len(lines) < 2:
            return None

        # A header whose "filename" label wrapped onto its own line carries
        # no digits; the value row is the first row after it that does.
        row = next(
            (line for line in lines[1:] if any(ch.isdigit() for ch in line)),
            lines[1],
        )

        values = row.split()
        if len(values) < 4:
            return None

        # int() alone would also take "1_0", "+5" and non-ASCII digits
        if not all(_DECIMAL_PATTERN.fullmatch(value) for value in values[:4]):
            return None

        text, data, bss, size = (int(value) for value in values[:4])

        return SizeReport(text=text, data=data, bss=bss, size=size)
