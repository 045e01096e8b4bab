"""Device platforms that firmware can be built for."""

from enum import Enum
from typing import Union


class Product(Enum):
    """Device platform, valued by its numeric product id."""

    CORE = 0
    PHOTON = 6
    ELECTRON = 10

    @property
    def display_name(self) -> str:
        return self.name.capitalize()

    @classmethod
    def from_value(cls, value: Union["Product", str, int]) -> "Product":
        """Look up a product by enum, name or numeric id.

        Raises:
            ValueError: If no product matches
        """
        if isinstance(value, Product):
            return value
        if isinstance(value, int):
            return cls(value)

        text = str(value).strip()
        if text.isdigit():
            return cls(int(text))
        try:
            return cls[text.upper()]
        except KeyError:
            valid = ", ".join(p.name.lower() for p in cls)
            raise ValueError(f"Unknown product '{value}' (valid: {valid})") from None
