__version__ = "0.3.0"
__url__ = "https://pypi.org/project/urlvalues/"
