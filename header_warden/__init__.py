"""Find C++ include directives that do not document the standard library names they provide."""

__version__ = "1.0.0"
