"""Entry point for the surefire rollup.

Executing ``python -m surefire_rollup`` forwards to the CLI defined in
``surefire_rollup.cli``.
"""
from .cli import main


if __name__ == "__main__":
    main()
