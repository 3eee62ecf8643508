"""Urban garden weather log: forecast summary, local weather records and a console front end."""

__version__ = "1.0.1"
__all__ = ["__version__"]