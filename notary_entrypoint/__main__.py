"""Entry point for ``python -m notary_entrypoint``."""

from notary_entrypoint.cli import main

if __name__ == "__main__":
    main()
