"""Surefire report rollup package.

This package aggregates JUnit/Surefire XML test reports into one summary per
test class, folds nested classes (``Outer$Inner``) into the class that owns
the source file, and publishes derived measures (executed tests, errors,
failures, execution time and success density) to a pluggable metric sink.
"""

__all__ = ["cli"]
__version__ = "0.2.0"
