"""CoffeePOS point-of-sale terminal"""

__version__ = "1.0.0"
