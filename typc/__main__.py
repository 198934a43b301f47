"""Package entry point for ``python -m typc``.

WHY: Lets the trainer run without installing the console script.

HOW: Delegates straight to the CLI's main().
"""

from typc.cli import main

if __name__ == "__main__":
    main()
