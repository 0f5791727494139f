"""GRO Locator: survey point lookup with MSK / SK-42 / WGS-84 transforms."""

__version__ = "0.1.0"
