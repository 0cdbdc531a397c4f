"""Allow running the server with ``python -m tubemeta``."""

from tubemeta.main import main

if __name__ == "__main__":
    main()
